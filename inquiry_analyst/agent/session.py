"""The single multi-turn conversation with the model.

A ``ConversationSession`` goes from ``UNSTARTED`` to ``ACTIVE`` on the first
successful ``start`` and stays active until its owner drops it. It never
re-initializes itself, since that would silently discard prior turns.

Dispatch is eager: ``start`` and ``continue_conversation`` wait for the first
response fragment, so a failed request raises ``ModelRequestError`` from the
call and leaves the state untouched. The session does not queue requests;
its owner must make sure only one is in flight.
"""

import logging
from enum import Enum

from inquiry_analyst.agent.chat_agent import ChatBackend, Conversation, get_chat_backend
from inquiry_analyst.errors import (
    ModelRequestError,
    SessionAlreadyStartedError,
    SessionNotStartedError,
)
from inquiry_analyst.streaming.chunks import ChunkSequence

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNSTARTED = "unstarted"
    ACTIVE = "active"


class ConversationSession:
    """Owns the conversation handle for one analysis."""

    def __init__(self, backend: ChatBackend | None = None) -> None:
        """Initialize an unstarted session.

        Args:
            backend: Model backend. The global Agno backend is used when omitted.
        """
        self._backend = backend
        self._conversation: Conversation | None = None
        self.state = SessionState.UNSTARTED

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def _create_conversation(self) -> Conversation:
        try:
            backend = self._backend or get_chat_backend()
            return backend.create_conversation()
        except Exception as e:
            raise ModelRequestError(f"Could not create model conversation: {e}", cause=e) from e

    async def start(self, message: str) -> ChunkSequence:
        """Create the conversation and dispatch the initial message.

        Args:
            message: The composed initial analysis request.

        Returns:
            The response fragments for this request.

        Raises:
            SessionAlreadyStartedError: If the session is already active.
            ModelRequestError: If the conversation cannot be created or the
                request fails. The session stays unstarted.
        """
        if self.is_active:
            raise SessionAlreadyStartedError()

        conversation = self._create_conversation()
        chunks = await ChunkSequence.open(conversation.send(message))

        self._conversation = conversation
        self.state = SessionState.ACTIVE
        logger.info("Conversation session started")
        return chunks

    async def continue_conversation(self, message: str) -> ChunkSequence:
        """Dispatch a follow-up message on the existing conversation.

        Args:
            message: The composed follow-up message.

        Returns:
            The response fragments for this request.

        Raises:
            SessionNotStartedError: If ``start`` has not succeeded yet. Nothing
                is dispatched.
            ModelRequestError: If the request fails. The session stays active.
        """
        if self._conversation is None:
            raise SessionNotStartedError()

        return await ChunkSequence.open(self._conversation.send(message))
