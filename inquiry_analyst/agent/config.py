"""Agent configuration with environment variable loading.

Pydantic-based configuration for the Agno model backend.
Supports Google Gemini and OpenAI (or OpenAI-compatible APIs via a custom base URL).
"""

import os
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

Provider = Literal["gemini", "openai"]

DEFAULT_MODELS: dict[str, str] = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}

_API_KEY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "gemini": ("LLM_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "openai": ("LLM_API_KEY", "OPENAI_API_KEY"),
}


class AgentConfig(BaseModel):
    """Configuration for the model backend.

    Attributes:
        provider: Model provider, ``gemini`` or ``openai``.
        api_key: API key for model access.
        base_url: API base URL (OpenAI-compatible providers only).
        model_name: Model identifier. Defaults per provider.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        history_runs: Previous turns kept in the conversation context.
    """

    provider: Provider = Field(
        default_factory=lambda: os.getenv("LLM_PROVIDER", "gemini").strip().lower(),
        description="Model provider",
    )
    api_key: str = Field(
        default="",
        validate_default=True,
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for provider default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", ""),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=8192,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    history_runs: int = Field(
        default=100,
        ge=1,
        le=200,
        description="Number of previous turns sent back as context",
    )

    @model_validator(mode="before")
    @classmethod
    def api_key_from_environment(cls, data: Any) -> Any:
        """Fill the API key from the provider's environment variables."""
        if isinstance(data, dict) and "api_key" not in data:
            provider = str(data.get("provider") or os.getenv("LLM_PROVIDER", "gemini"))
            for name in _API_KEY_ENV_VARS.get(provider.strip().lower(), ("LLM_API_KEY",)):
                if value := os.getenv(name):
                    return {**data, "api_key": value}
        return data

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY (or GEMINI_API_KEY / OPENAI_API_KEY) in .env"
            )
        return v.strip()

    @model_validator(mode="after")
    def default_model_name(self) -> "AgentConfig":
        if not self.model_name.strip():
            self.model_name = DEFAULT_MODELS[self.provider]
        return self


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
