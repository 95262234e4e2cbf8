"""Public exports for the core chat-client abstractions and utilities."""

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
from .logger import get_logger, setup_logging
from .messages import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ConversationState,
)
from .tools import (
    ToolDescriptor,
    FunctionSpec,
    ToolCallRequest,
    ToolCallResult,
    ToolCatalog,
    adapt,
    ToolInvocationBridge,
    ToolServer,
    SchemaValidator,
)
from .base import ModelProvider, Completion
from .tools.tool_loop import ResolutionLoop, LoopState

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
    "get_logger",
    "setup_logging",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ConversationState",
    "ToolDescriptor",
    "FunctionSpec",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolCatalog",
    "adapt",
    "ToolInvocationBridge",
    "ToolServer",
    "SchemaValidator",
    "ModelProvider",
    "Completion",
    "ResolutionLoop",
    "LoopState",
]
