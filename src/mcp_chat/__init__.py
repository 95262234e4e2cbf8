"""MCP Chat Client - an interactive agent bridging a chat model and an MCP tool server."""

from .llm_core import (
    ConversationState,
    ResolutionLoop,
    ToolCatalog,
    ToolInvocationBridge,
    ToolDescriptor,
    ModelProvider,
    Completion,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    adapt,
)
from .llm_impl import OpenAIProvider
from .mcp_wrapper import MCPClientWrapper

__all__ = [
    "ConversationState",
    "ResolutionLoop",
    "ToolCatalog",
    "ToolInvocationBridge",
    "ToolDescriptor",
    "ModelProvider",
    "Completion",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "adapt",
    "OpenAIProvider",
    "MCPClientWrapper",
]
