"""Expose provider-agnostic message models and the session conversation log."""

from .models import BaseMessage, UserMessage, AssistantMessage, SystemMessage, ToolMessage
from .conversation import ConversationState

__all__ = [
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ConversationState",
]
