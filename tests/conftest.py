import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp.types import CallToolResult, TextContent
from openai import AsyncOpenAI

from mcp_chat.llm_core import (
    AssistantMessage,
    BaseMessage,
    Completion,
    ConversationState,
    FunctionSpec,
    ModelProvider,
    ResolutionLoop,
    ToolCallRequest,
    ToolCatalog,
    ToolDescriptor,
    ToolInvocationBridge,
)

SYSTEM_PROMPT = "You are a helpful assistant with access to tools."


@pytest.fixture(autouse=True)
def client_logger() -> Iterator[logging.Logger]:
    """The package logger, with handlers and level restored after each test."""
    logger = logging.getLogger("mcp_chat")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    logger.handlers = [h for h in logger.handlers if isinstance(h, logging.NullHandler)]
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


class ScriptedProvider(ModelProvider[str]):
    """Model stub that replays a fixed list of assistant messages (or raises exceptions)."""

    def __init__(self, replies: List[Any]):
        super().__init__(max_retries=0, base_retry_delay=0.0)
        self.replies = list(replies)
        self.requests: List[List[BaseMessage]] = []
        self.tool_specs: List[List[FunctionSpec]] = []

    async def _create_completion_impl(
        self, messages: Sequence[BaseMessage], tools: Sequence[FunctionSpec]
    ) -> Completion[str]:
        self.requests.append(list(messages))
        self.tool_specs.append(list(tools))
        if not self.replies:
            raise AssertionError("Model stub ran out of replies.")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return Completion(message=reply, raw="raw")


def tool_call_reply(*calls: ToolCallRequest, content: Optional[str] = None) -> AssistantMessage:
    return AssistantMessage(content=content, tool_calls=list(calls))


def text_reply(text: str) -> AssistantMessage:
    return AssistantMessage(content=text)


def call(name: str, arguments: Dict[str, Any] | str, call_id: str = "call_1") -> ToolCallRequest:
    raw = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return ToolCallRequest(call_id=call_id, name=name, arguments=raw)


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


@pytest.fixture
def add_descriptor() -> ToolDescriptor:
    return ToolDescriptor(
        name="add",
        description="Add two numbers",
        input_schema={
            "type": "object",
            "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
            "required": ["a", "b"],
        },
    )


@pytest.fixture
def catalog(add_descriptor: ToolDescriptor) -> ToolCatalog:
    return ToolCatalog.from_descriptors([add_descriptor])


@pytest.fixture
def tool_server() -> Any:
    server = MagicMock()
    server.call_tool = AsyncMock(return_value=text_result("4"))
    return server


@pytest.fixture
def conversation() -> ConversationState:
    return ConversationState(SYSTEM_PROMPT)


@pytest.fixture
def make_loop(tool_server: Any, catalog: ToolCatalog) -> Any:
    def _make(provider: ModelProvider[Any], max_rounds: Optional[int] = 10, **kwargs: Any) -> ResolutionLoop:
        bridge = ToolInvocationBridge(tool_server, catalog=kwargs.pop("bridge_catalog", catalog))
        return ResolutionLoop(
            provider=provider,
            bridge=bridge,
            catalog=kwargs.pop("catalog", catalog),
            max_rounds=max_rounds,
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client
