"""Dispatch of model-issued tool calls to the tool server."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional, Protocol

from mcp.types import CallToolResult, TextContent

from ..exceptions import LLMToolError, MalformedArguments, ToolExecutionFailed
from ..logger import get_logger
from .call_protocol import ToolCallRequest, ToolCallResult
from .catalog import ToolCatalog

logger = get_logger(__name__)


class ToolServer(Protocol):
    """The part of a tool-server session the bridge needs."""

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        """Call a tool by name and return the server's result."""
        ...


class ToolInvocationBridge:
    """Runs one tool call on the tool server and serializes its result for the model.

    Each invocation contacts the server at most once. Retrying is left to the caller,
    since tools may have side effects.
    """

    def __init__(
        self,
        server: ToolServer,
        *,
        catalog: Optional[ToolCatalog] = None,
        tool_timeout: Optional[float] = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            server: Connected tool-server session.
            catalog: When given, calls to tools outside the catalog are rejected
                without contacting the server.
            tool_timeout: Optional timeout in seconds for a single call. None waits indefinitely.
        """
        self._server = server
        self._catalog = catalog
        self._tool_timeout = tool_timeout

    async def invoke(self, request: ToolCallRequest) -> ToolCallResult:
        """Execute a tool call.

        Args:
            request: The tool call issued by the model.

        Returns:
            The result whose content is the server's content blocks as JSON text.

        Raises:
            MalformedArguments: If the arguments are not a JSON object. The server is not contacted.
            ToolExecutionFailed: If the tool is unknown, the call fails, times out, or the
                server reports a tool-side error.
        """
        arguments = self.parse_arguments(request.name, request.arguments)

        if self._catalog is not None and request.name not in self._catalog:
            raise ToolExecutionFailed(request.name, "tool is not in the catalog")

        logger.info(f"Executing tool '{request.name}'...")
        logger.debug(f"Tool arguments: {arguments}")

        try:
            result = await self._call(request.name, arguments)
        except asyncio.TimeoutError as exc:
            raise ToolExecutionFailed(request.name, f"timed out after {self._tool_timeout} seconds") from exc
        except Exception as exc:
            raise ToolExecutionFailed(request.name, exc) from exc

        if result.isError:
            raise ToolExecutionFailed(request.name, self._error_text(result))

        content = json.dumps([block.model_dump(mode="json", exclude_none=True) for block in result.content])
        logger.info(f"Tool '{request.name}' executed successfully.")
        preview = content[:200] + "..." if len(content) > 200 else content
        logger.debug(f"Tool '{request.name}' result: {preview}")

        return ToolCallResult(call_id=request.call_id, name=request.name, content=content)

    async def safe_invoke(self, request: ToolCallRequest) -> ToolCallResult:
        """Execute a tool call, turning any failure into an error result.

        The model receives ``{"error": "..."}`` as the tool output and may react to it
        in its next turn. Cancellation is not caught.
        """
        try:
            return await self.invoke(request)
        except LLMToolError as exc:
            logger.warning(f"Tool call '{request.name}' failed: {exc} ({type(exc).__name__})")
            return self.error_result(request, str(exc))
        except Exception as exc:
            logger.error(f"Unexpected error while executing tool '{request.name}': {exc}", exc_info=True)
            return self.error_result(request, str(ToolExecutionFailed(request.name, exc)))

    @staticmethod
    def error_result(request: ToolCallRequest, message: str) -> ToolCallResult:
        """Build the error result recorded when a tool call does not produce output."""
        return ToolCallResult(
            call_id=request.call_id,
            name=request.name,
            content=json.dumps({"error": message}),
            is_error=True,
        )

    @staticmethod
    def parse_arguments(tool_name: str, raw_args: str) -> Dict[str, Any]:
        """Decode the model's raw argument text into a dictionary.

        Empty text and JSON ``null`` both mean "no arguments".

        Raises:
            MalformedArguments: If the text is not JSON or does not decode to an object.
        """
        if raw_args is None or raw_args.strip() == "":
            return {}

        try:
            parsed = json.loads(raw_args)
        except json.JSONDecodeError as exc:
            raise MalformedArguments(tool_name, str(exc)) from exc

        if parsed is None:
            return {}

        if not isinstance(parsed, dict):
            raise MalformedArguments(tool_name, "arguments must decode to a JSON object")

        return parsed

    async def _call(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        if self._tool_timeout is None:
            return await self._server.call_tool(name, arguments)
        return await asyncio.wait_for(self._server.call_tool(name, arguments), timeout=self._tool_timeout)

    @staticmethod
    def _error_text(result: CallToolResult) -> str:
        texts = [block.text for block in result.content if isinstance(block, TextContent)]
        return "\n".join(texts) or "tool reported an error"
