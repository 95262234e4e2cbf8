"""Environment configuration for the MCP chat client."""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from mcp_chat.llm_core import ConfigurationError

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant with access to tools. You must follow the schema of the tools."


class Settings(BaseModel):
    """
    Runtime settings, read from environment variables (and a ``.env`` file).

    Attributes:
        api_key: OPENAI_API_KEY, the key for the chat completions API.
        base_url: OPENAI_BASE_URL, an optional OpenAI-compatible endpoint.
        model: OPENAI_MODEL, the model identifier.
        system_prompt: MCP_CHAT_SYSTEM_PROMPT, the session's system message.
        max_rounds: MCP_CHAT_MAX_ROUNDS, tool-calling rounds allowed per query. 0 disables the limit.
        max_retries: MCP_CHAT_MAX_RETRIES, retries for transient API errors.
        tool_timeout: MCP_CHAT_TOOL_TIMEOUT, seconds to wait for one tool call. Unset waits indefinitely.
        log_level: MCP_CHAT_LOG_LEVEL, level for the client's log output.
    """

    api_key: str = Field(min_length=1)
    base_url: Optional[str] = None
    model: str = Field(min_length=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_rounds: int = Field(default=10, ge=0)
    max_retries: int = Field(default=2, ge=0)
    tool_timeout: Optional[float] = Field(default=None, gt=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{value}'")
        return level

    @property
    def round_limit(self) -> Optional[int]:
        return self.max_rounds or None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> "Settings":
        """
        Build settings from the environment.

        Args:
            environ: Variables to read; defaults to ``os.environ``.
            load_env_file: Whether to load a ``.env`` file first. Existing variables win.

        Raises:
            ConfigurationError: If a required variable is missing or a value is invalid.
        """
        if load_env_file:
            load_dotenv()
        env = os.environ if environ is None else environ

        values = {
            "api_key": env.get("OPENAI_API_KEY"),
            "base_url": env.get("OPENAI_BASE_URL") or None,
            "model": env.get("OPENAI_MODEL"),
            "system_prompt": env.get("MCP_CHAT_SYSTEM_PROMPT"),
            "max_rounds": env.get("MCP_CHAT_MAX_ROUNDS"),
            "max_retries": env.get("MCP_CHAT_MAX_RETRIES"),
            "tool_timeout": env.get("MCP_CHAT_TOOL_TIMEOUT") or None,
            "log_level": env.get("MCP_CHAT_LOG_LEVEL"),
        }

        missing = [name for name, key in (("OPENAI_API_KEY", "api_key"), ("OPENAI_MODEL", "model")) if not values[key]]
        if missing:
            raise ConfigurationError(f"Missing required environment variable(s): {', '.join(missing)}")

        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc
