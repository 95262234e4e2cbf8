"""Interactive session: read a query, resolve it, print the answer, repeat."""

import asyncio
import json
from typing import Awaitable, Callable, Optional

from mcp_chat.llm_core import ChatClientError, ConversationState, ResolutionLoop, ToolCallRequest, ToolCallResult
from mcp_chat.llm_core.logger import get_logger

logger = get_logger(__name__)

EXIT_KEYWORD = "quit"


async def read_console_line(prompt: str) -> str:
    """Read one line from stdin without blocking the event loop."""
    return await asyncio.to_thread(input, prompt)


def echo_tool_call(tool_call: ToolCallRequest, write: Callable[[str], None] = print) -> None:
    """Print a tool call as it is dispatched."""
    write(f"Calling tool {tool_call.name} with args {_display_args(tool_call.arguments)}")


def echo_tool_result(result: ToolCallResult, write: Callable[[str], None] = print) -> None:
    """Print the outcome of a dispatched tool call."""
    if result.is_error:
        write(f"Tool {result.name} failed")
    else:
        write(f"Tool {result.name} called successfully")


class SessionDriver:
    """Runs the query loop of one chat session.

    A failed query is reported and the session moves on to the next one; only
    the exit keyword or end of input ends the session.
    """

    def __init__(
        self,
        loop: ResolutionLoop,
        conversation: ConversationState,
        *,
        read_line: Callable[[str], Awaitable[str]] = read_console_line,
        write: Callable[[str], None] = print,
        exit_keyword: str = EXIT_KEYWORD,
    ) -> None:
        self._loop = loop
        self._conversation = conversation
        self._read_line = read_line
        self._write = write
        self._exit_keyword = exit_keyword.lower()

    @property
    def conversation(self) -> ConversationState:
        return self._conversation

    async def chat_loop(self) -> None:
        self._write("\nMCP Client Started!")
        self._write(f"Type your queries or '{self._exit_keyword}' to exit.")

        while True:
            query = await self._next_query()
            if query is None:
                break
            if not query.strip():
                continue

            response = await self.handle_query(query)
            if response is not None:
                self._write("\n" + response)

        logger.info(f"Session ended after {len(self._conversation)} message(s).")

    async def handle_query(self, query: str) -> Optional[str]:
        """Resolve one query, reporting errors instead of raising them.

        Returns:
            The model's final text, or None if the query failed.
        """
        try:
            return await self._loop.process_query(self._conversation, query)
        except ChatClientError as e:
            logger.warning(f"Query failed: {e}")
            self._write(f"\nError: {e}")
        except Exception as e:
            logger.exception("Unexpected error while processing query")
            self._write(f"\nError: {e}")
        return None

    async def _next_query(self) -> Optional[str]:
        try:
            line = await self._read_line("\nQuery: ")
        except EOFError:
            return None

        if line.lower() == self._exit_keyword:
            return None
        return line


def _display_args(raw_args: str) -> str:
    try:
        return json.dumps(json.loads(raw_args)) if raw_args else "{}"
    except json.JSONDecodeError:
        return raw_args
