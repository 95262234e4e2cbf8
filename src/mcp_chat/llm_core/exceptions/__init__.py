"""Export the client exception hierarchy used across startup, model and tool paths."""

from .exceptions import (
    ChatClientError,
    StartupError,
    ConfigurationError,
    ProviderError,
    LoopBudgetExceeded,
    LLMToolError,
    ToolValidationError,
    MalformedArguments,
    ToolExecutionFailed,
)

__all__ = [
    "ChatClientError",
    "StartupError",
    "ConfigurationError",
    "ProviderError",
    "LoopBudgetExceeded",
    "LLMToolError",
    "ToolValidationError",
    "MalformedArguments",
    "ToolExecutionFailed",
]
