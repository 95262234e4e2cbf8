"""Provider-agnostic message models for the conversation history."""

from abc import ABC
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from ..tools.call_protocol import ToolCallRequest

Role = Literal["system", "user", "assistant", "tool"]


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with an LLM.

    Attributes:
        role: Role associated with the message.
        content: Text payload of the message. Only assistant messages that carry
            nothing but tool calls leave it as None.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: Optional[str]


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseMessage):
    """Message authored by the assistant, optionally containing tool calls."""

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallRequest]] = None

    @property
    def requests_tools(self) -> bool:
        return bool(self.tool_calls)


class ToolMessage(BaseMessage):
    """Message carrying the result of one tool call back to the model."""

    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str
    name: str
