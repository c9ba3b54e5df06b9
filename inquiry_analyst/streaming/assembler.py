"""Incremental assembly of a streamed model response.

A ``StreamAssembler`` drains one ``ChunkSequence`` into a ``StreamingTurn``,
calling the render callback with the full text after every fragment.
Partial output is never rolled back: an interrupted turn keeps what it
received and is marked incomplete.
"""

import logging
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from enum import Enum

from inquiry_analyst.errors import StreamInterruptedError
from inquiry_analyst.streaming.chunks import ChunkSequence

logger = logging.getLogger(__name__)


class TurnStatus(str, Enum):
    """Lifecycle of a streamed model turn."""

    STREAMING = "streaming"
    COMPLETE = "complete"
    INTERRUPTED = "interrupted"


@dataclass
class StreamingTurn:
    """Append-only text buffer for one model turn.

    Attributes:
        text: Full text received so far.
        fragments: Number of fragments appended.
        status: Current lifecycle status.
        copyable: Whether the "copy full text" action is available.
    """

    text: str = ""
    fragments: int = 0
    status: TurnStatus = TurnStatus.STREAMING
    copyable: bool = False

    def append(self, fragment: str) -> None:
        if self.status is not TurnStatus.STREAMING:
            raise RuntimeError(f"Cannot append to a {self.status.value} turn")
        self.text += fragment
        self.fragments += 1

    def finalize(self) -> None:
        self.status = TurnStatus.COMPLETE
        self.copyable = True

    def interrupt(self) -> None:
        self.status = TurnStatus.INTERRUPTED

    @property
    def is_complete(self) -> bool:
        return self.status is TurnStatus.COMPLETE


class StreamAssembler:
    """Consumes a ChunkSequence into a StreamingTurn.

    One append and one render call per fragment, in arrival order. On
    exhaustion the turn is finalized and ``on_finalize`` runs once.
    """

    def __init__(
        self,
        chunks: ChunkSequence,
        turn: StreamingTurn | None = None,
        render: Callable[[str], None] | None = None,
        on_finalize: Callable[[StreamingTurn], None] | None = None,
    ) -> None:
        self._chunks = chunks
        self.turn = turn or StreamingTurn()
        self._render = render
        self._on_finalize = on_finalize
        self._started = False

    async def updates(self) -> AsyncGenerator[str]:
        """Yield each fragment after it has been appended and rendered.

        Raises:
            StreamInterruptedError: If the sequence fails mid-stream. The
                turn keeps its partial text and is marked interrupted.
        """
        if self._started:
            raise RuntimeError("StreamAssembler can only be consumed once")
        self._started = True

        try:
            async for fragment in self._chunks:
                self.turn.append(fragment)
                if self._render is not None:
                    self._render(self.turn.text)
                yield fragment
        except StreamInterruptedError as e:
            self.turn.interrupt()
            logger.warning(f"Stream interrupted after {self.turn.fragments} fragments: {e}")
            raise

        self.turn.finalize()
        if self._on_finalize is not None:
            self._on_finalize(self.turn)

    async def run(self) -> StreamingTurn:
        """Drain the sequence and return the finished turn."""
        async for _ in self.updates():
            pass
        return self.turn
