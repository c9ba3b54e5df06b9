"""Agno model backend with streaming support.

Wraps an Agno ``Agent`` behind a small interface: a backend creates
conversations, and a conversation sends one message and yields the response
as text fragments.

Architecture Decisions:

1. **In-memory storage** - Agno's Agent ignores session_id without a db, so
   every request would be stateless. ``InMemoryDb`` keeps multi-turn context
   for the life of the process and nothing survives a restart.

2. **One agent, many conversations** - Building the agent (model client,
   storage) is done once. A conversation is just a fresh session id on that
   agent, so the remote context never mixes between analyses.

3. **Content-only streaming** - Agno emits run events with metadata. Only
   content events are forwarded; a run error event is raised as
   ``ModelRequestError`` instead of being printed into the response text.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Protocol

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.models.google import Gemini
from agno.models.openai import OpenAIChat

from inquiry_analyst.agent.config import AgentConfig, get_agent_config
from inquiry_analyst.errors import ModelRequestError

logger = logging.getLogger(__name__)

RUN_CONTENT_EVENT = "RunContent"
RUN_ERROR_EVENT = "RunError"


class Conversation(Protocol):
    """A multi-turn dialogue whose context is kept by the model service."""

    def send(self, message: str) -> AsyncIterator[str]:
        """Send one message and stream the response fragments."""
        ...


class ChatBackend(Protocol):
    """Factory for conversations with the remote model."""

    def create_conversation(self) -> Conversation:
        ...


class AgnoConversation:
    """One Agno session on a shared agent."""

    def __init__(self, agent: Agent, session_id: str) -> None:
        self._agent = agent
        self.session_id = session_id

    async def send(self, message: str) -> AsyncGenerator[str]:
        """Stream response chunks for a message.

        Agno keeps the conversation history for this session id, so prior
        turns are never resent by the caller.

        Args:
            message: The composed outgoing message.

        Yields:
            Response text chunks as they arrive.

        Raises:
            ModelRequestError: If the run reports an error event.
        """
        response_stream = self._agent.arun(
            message,
            session_id=self.session_id,
            stream=True,
        )

        async for chunk in response_stream:
            event = getattr(chunk, "event", RUN_CONTENT_EVENT)
            if event == RUN_ERROR_EVENT:
                raise ModelRequestError(f"Model run failed: {getattr(chunk, 'content', '')}")
            if event != RUN_CONTENT_EVENT:
                continue
            content = getattr(chunk, "content", None)
            if isinstance(content, str) and content:
                yield content


class AgnoChatBackend:
    """Creates conversations on a single Agno agent."""

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the backend.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._storage = InMemoryDb()
        self._agent = self._create_agent()

    def _create_model(self) -> Gemini | OpenAIChat:
        if self._config.provider == "openai":
            return OpenAIChat(
                id=self._config.model_name,
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        return Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_tokens,
        )

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent with the configured model and in-memory session storage.
        """
        return Agent(
            model=self._create_model(),
            db=self._storage,
            # The whole dialogue is context: the first turn carries the
            # instructions and the procedure text.
            add_history_to_context=True,
            num_history_runs=self._config.history_runs,
            markdown=True,
        )

    def create_conversation(self) -> AgnoConversation:
        session_id = str(uuid.uuid4())
        logger.info(
            f"Created conversation {session_id} with {self._config.provider}:{self._config.model_name}"
        )
        return AgnoConversation(self._agent, session_id)


# Module-level singleton instance
_chat_backend: AgnoChatBackend | None = None


def get_chat_backend() -> AgnoChatBackend:
    """Get or create the global model backend.

    Only the backend (model client and storage) is shared. Conversations
    are owned by whoever creates them.

    Returns:
        The AgnoChatBackend instance.
    """
    global _chat_backend
    if _chat_backend is None:
        _chat_backend = AgnoChatBackend()
    return _chat_backend
