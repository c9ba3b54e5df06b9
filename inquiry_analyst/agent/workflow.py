"""Orchestration of analysis requests.

``AnalysisWorkflow`` owns the conversation session, the in-flight request
guard and the visible transcript. It is created by the application and
passed to whoever handles user actions; there is no module-level session.

Each action validates its input, takes the guard and dispatches eagerly,
then hands back an async generator of ``StreamChunk`` updates. Errors that
happen before dispatch are raised to the caller. Model and stream failures
become an error entry in the transcript and a final error chunk. The guard
is released when the updates finish, fail or are closed, including when
they are closed before the first update is read, so callers must always
iterate or close the returned ``ResponseUpdates``.
"""

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from inquiry_analyst.agent.chat_agent import ChatBackend
from inquiry_analyst.agent.session import ConversationSession
from inquiry_analyst.errors import (
    InvalidMessageError,
    ModelRequestError,
    RequestInFlightError,
    SessionAlreadyStartedError,
    SessionNotStartedError,
    StreamInterruptedError,
)
from inquiry_analyst.models.schemas import StreamChunk, StreamStatus
from inquiry_analyst.parsing.pdf_extractor import Document, extract_text
from inquiry_analyst.prompts.composer import (
    compose_follow_up,
    compose_initial,
    describe_user_turn,
)
from inquiry_analyst.prompts.templates import ANALYSIS_TEMPLATE
from inquiry_analyst.streaming.assembler import StreamAssembler, StreamingTurn, TurnStatus
from inquiry_analyst.streaming.chunks import ChunkSequence

logger = logging.getLogger(__name__)

ABANDONED_STREAM_MESSAGE = "Transmissão encerrada antes da conclusão da resposta."


class RequestGuard:
    """Allows at most one request in flight."""

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def acquire(self) -> None:
        """Mark a request as in flight.

        Raises:
            RequestInFlightError: If another request is still running.
        """
        if self._busy:
            raise RequestInFlightError()
        self._busy = True

    def release(self) -> None:
        self._busy = False


class Role(str, Enum):
    USER = "user"
    MODEL = "model"


@dataclass
class TranscriptEntry:
    """One visible turn.

    Model turns reference the ``StreamingTurn`` being filled by the
    assembler, so the transcript shows partial output while it streams.
    """

    role: Role
    content: str = ""
    attachment: str | None = None
    turn: StreamingTurn | None = None
    error: str | None = None

    @property
    def text(self) -> str:
        return self.turn.text if self.turn is not None else self.content

    @property
    def status(self) -> str:
        if self.turn is not None:
            return self.turn.status.value
        if self.error:
            return "error"
        return TurnStatus.COMPLETE.value

    @property
    def copyable(self) -> bool:
        return self.turn is not None and self.turn.copyable


class Transcript:
    """Ordered, append-only log of turns."""

    def __init__(self) -> None:
        self._entries: list[TranscriptEntry] = []

    def append(self, entry: TranscriptEntry) -> TranscriptEntry:
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[TranscriptEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._entries)


async def _single(chunk: StreamChunk) -> AsyncGenerator[StreamChunk]:
    yield chunk


class ResponseUpdates:
    """Async iterator over the updates of one dispatched request.

    ``aclose`` runs the settle callback even when iteration never started,
    so an abandoned response always frees the request guard.
    """

    def __init__(
        self,
        updates: AsyncGenerator[StreamChunk],
        settle: Callable[[], None] | None = None,
    ) -> None:
        self._updates = updates
        self._settle = settle

    def __aiter__(self) -> "ResponseUpdates":
        return self

    async def __anext__(self) -> StreamChunk:
        return await anext(self._updates)

    async def aclose(self) -> None:
        try:
            await self._updates.aclose()
        finally:
            if self._settle is not None:
                self._settle()


class AnalysisWorkflow:
    """Runs the initial analysis and follow-ups of one conversation."""

    def __init__(
        self,
        backend: ChatBackend | None = None,
        template: str = ANALYSIS_TEMPLATE,
    ) -> None:
        """Initialize the workflow.

        Args:
            backend: Model backend. The global Agno backend is used when omitted.
            template: Instruction template for the initial request.
        """
        self._backend = backend
        self._template = template
        self.guard = RequestGuard()
        self.session = ConversationSession(backend)
        self.transcript = Transcript()

    @property
    def busy(self) -> bool:
        return self.guard.busy

    async def start_analysis(self, subject_text: str) -> ResponseUpdates:
        """Dispatch the initial analysis request.

        Args:
            subject_text: Procedure text to analyze.

        Returns:
            Stream updates for this request.

        Raises:
            SessionAlreadyStartedError: If an analysis was already started.
            InvalidMessageError: If the subject text is empty.
            RequestInFlightError: If another request is running.
        """
        if self.session.is_active:
            raise SessionAlreadyStartedError()
        message = compose_initial(subject_text, self._template)
        self.guard.acquire()

        logger.info(f"Dispatching initial analysis ({len(subject_text)} characters)")
        user_entry = TranscriptEntry(role=Role.USER, content=subject_text)
        return await self._dispatch(lambda: self.session.start(message), user_entry)

    async def send_follow_up(
        self,
        instruction: str | None,
        attachment: Document | None = None,
    ) -> ResponseUpdates:
        """Dispatch a follow-up, extracting and inlining an optional attachment.

        Args:
            instruction: Free-text request. May be empty with an attachment.
            attachment: PDF attached to this message.

        Returns:
            Stream updates for this request.

        Raises:
            SessionNotStartedError: If no initial analysis was started.
            InvalidMessageError: If there is neither instruction nor attachment.
            RequestInFlightError: If another request is running.
            ExtractionError: If the attachment cannot be read. Nothing is sent.
        """
        if not self.session.is_active:
            raise SessionNotStartedError()
        if attachment is None and not (instruction or "").strip():
            raise InvalidMessageError(
                "Insira uma mensagem ou anexe um arquivo para continuar."
            )
        self.guard.acquire()

        try:
            extracted = await extract_text(attachment) if attachment is not None else None
            message = compose_follow_up(instruction, extracted)
        except BaseException:
            self.guard.release()
            raise

        attachment_name = attachment.filename if attachment is not None else None
        logger.info(
            f"Dispatching follow-up ({len(message)} characters, attachment={attachment_name})"
        )
        user_entry = TranscriptEntry(
            role=Role.USER,
            content=describe_user_turn(instruction, attachment_name),
            attachment=attachment_name,
        )
        return await self._dispatch(
            lambda: self.session.continue_conversation(message), user_entry
        )

    def reset(self) -> None:
        """Discard the conversation and transcript, as when leaving the page.

        Raises:
            RequestInFlightError: If a request is still running.
        """
        if self.guard.busy:
            raise RequestInFlightError()
        self.session = ConversationSession(self._backend)
        self.transcript = Transcript()
        logger.info("Workflow reset")

    async def _dispatch(
        self,
        send: Callable[[], Awaitable[ChunkSequence]],
        user_entry: TranscriptEntry,
    ) -> ResponseUpdates:
        self.transcript.append(user_entry)
        try:
            chunks = await send()
        except ModelRequestError as e:
            logger.error(f"Model request failed: {e}")
            self.transcript.append(TranscriptEntry(role=Role.MODEL, error=str(e)))
            self.guard.release()
            return ResponseUpdates(
                _single(
                    StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e))
                )
            )
        except BaseException:
            self.guard.release()
            raise

        entry = self.transcript.append(TranscriptEntry(role=Role.MODEL, turn=StreamingTurn()))
        settle = self._settler(entry)
        return ResponseUpdates(
            self._stream(StreamAssembler(chunks, entry.turn), entry, settle), settle
        )

    def _settler(self, entry: TranscriptEntry) -> Callable[[], None]:
        """Build the callback that ends one response's hold on the guard.

        Only the first call has an effect, so a late close never releases
        the guard of a later request.
        """
        settled = False

        def settle() -> None:
            nonlocal settled
            if settled:
                return
            settled = True
            if entry.turn is not None and entry.turn.status is TurnStatus.STREAMING:
                entry.turn.interrupt()
                entry.error = ABANDONED_STREAM_MESSAGE
                logger.warning("Response stream abandoned before completion")
            self.guard.release()

        return settle

    async def _stream(
        self,
        assembler: StreamAssembler,
        entry: TranscriptEntry,
        settle: Callable[[], None],
    ) -> AsyncGenerator[StreamChunk]:
        try:
            async for fragment in assembler.updates():
                yield StreamChunk(content=fragment, done=False, status=StreamStatus.GENERATING)
        except StreamInterruptedError as e:
            entry.error = str(e)
            yield StreamChunk(
                content="", done=True, status=StreamStatus.INTERRUPTED, error=str(e)
            )
            return
        finally:
            settle()

        logger.info(f"Response complete ({len(assembler.turn.text)} characters)")
        yield StreamChunk(content="", done=True, status=StreamStatus.COMPLETE)
