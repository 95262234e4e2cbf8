"""Command-line entry point: ``mcp-chat <path_to_server_script>``."""

import asyncio
import sys
from typing import Awaitable, Callable, List, Optional

from mcp.client.stdio import StdioServerParameters
from openai import AsyncOpenAI

from mcp_chat.config import Settings
from mcp_chat.llm_core import (
    ConversationState,
    ResolutionLoop,
    StartupError,
    ToolCatalog,
    ToolInvocationBridge,
    ToolValidationError,
)
from mcp_chat.llm_core.logger import get_logger, setup_logging
from mcp_chat.llm_impl import OpenAIProvider
from mcp_chat.mcp_wrapper import MCPClientWrapper, resolve_server_parameters
from mcp_chat.session import SessionDriver, echo_tool_call, echo_tool_result, read_console_line

logger = get_logger(__name__)

USAGE = "Usage: mcp-chat <path_to_server_script>"


async def run_client(
    server_params: StdioServerParameters,
    settings: Settings,
    *,
    read_line: Callable[[str], Awaitable[str]] = read_console_line,
    write: Callable[[str], None] = print,
) -> None:
    """Connect to the tool server and run one interactive session.

    The server connection is released on every exit path.

    Raises:
        StartupError: If the server cannot be reached or advertises invalid tools.
    """
    async with AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url) as client:
        provider = OpenAIProvider(client, settings.model, max_retries=settings.max_retries)

        async with MCPClientWrapper(server_params) as server:
            try:
                catalog = ToolCatalog.from_descriptors(await server.list_tools())
            except ToolValidationError as exc:
                raise StartupError(f"Server advertised an invalid tool: {exc}") from exc
            write(f"\nConnected to server with tools: {catalog.names}")

            bridge = ToolInvocationBridge(server, catalog=catalog, tool_timeout=settings.tool_timeout)
            loop = ResolutionLoop(
                provider=provider,
                bridge=bridge,
                catalog=catalog,
                max_rounds=settings.round_limit,
                on_tool_call=lambda call: echo_tool_call(call, write),
                on_tool_result=lambda result: echo_tool_result(result, write),
            )
            driver = SessionDriver(loop, ConversationState(settings.system_prompt), read_line=read_line, write=write)
            await driver.chat_loop()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the client and return the process exit code."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 1:
        print(USAGE)
        return 1

    try:
        server_params = resolve_server_parameters(args[0])
        settings = Settings.from_env()
    except StartupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level)

    try:
        asyncio.run(run_client(server_params, settings))
    except StartupError as e:
        logger.error(f"Startup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1
    except Exception as e:
        logger.exception("Unhandled error")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
