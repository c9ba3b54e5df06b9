"""Model conversation logic.

Responsibilities:
    - Agno backend configuration (Gemini or OpenAI models)
    - The single multi-turn conversation session and its states
    - Orchestration of analysis and follow-up requests with an in-flight guard
    - The visible transcript of user and model turns

Maintains clean separation from the HTTP and UI layers.
"""

from inquiry_analyst.agent.chat_agent import AgnoChatBackend, ChatBackend, get_chat_backend
from inquiry_analyst.agent.config import AgentConfig, get_agent_config
from inquiry_analyst.agent.session import ConversationSession, SessionState
from inquiry_analyst.agent.workflow import AnalysisWorkflow, RequestGuard, Transcript

__all__ = [
    "AgentConfig",
    "AgnoChatBackend",
    "AnalysisWorkflow",
    "ChatBackend",
    "ConversationSession",
    "RequestGuard",
    "SessionState",
    "Transcript",
    "get_agent_config",
    "get_chat_backend",
]
