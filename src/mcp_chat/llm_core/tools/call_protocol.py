"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a tool call issued by the model.

    ``arguments`` is the raw JSON text produced by the model and may be malformed.
    """

    call_id: str
    name: str
    arguments: str = ""


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call."""

    call_id: str
    name: str
    content: str
    is_error: bool = False
