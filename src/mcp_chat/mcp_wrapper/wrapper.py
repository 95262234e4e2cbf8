"""Connect to an MCP tool server over stdio and expose its tools to the client."""

import logging
from contextlib import AsyncExitStack
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

from mcp import ClientSession
from mcp.client.stdio import stdio_client, StdioServerParameters
from mcp.types import CallToolResult

from mcp_chat.llm_core import StartupError, ToolDescriptor

logger = logging.getLogger(__name__)

__all__ = ["MCPClientWrapper", "resolve_server_parameters", "SERVER_RUNTIMES"]

# Script extension -> command that runs it.
SERVER_RUNTIMES: Dict[str, str] = {
    ".py": "python",
    ".js": "node",
}


def resolve_server_parameters(script_path: str, env: Optional[Dict[str, str]] = None) -> StdioServerParameters:
    """Choose the runtime for a server script from its file extension.

    Args:
        script_path: Path to the MCP server script.
        env: Optional environment variables for the server process.

    Returns:
        Parameters to spawn the server as a subprocess.

    Raises:
        StartupError: If the extension is not one of the supported runtimes.
    """
    suffix = Path(script_path).suffix.lower()
    command = SERVER_RUNTIMES.get(suffix)
    if command is None:
        supported = " or ".join(SERVER_RUNTIMES)
        raise StartupError(f"Server script must be a {supported} file, got '{script_path}'.")

    return StdioServerParameters(command=command, args=[script_path], env=env)


class MCPClientWrapper:
    """Wrapper for the Model Context Protocol (MCP) client session.

    Use as an async context manager: the server subprocess is spawned on enter
    and shut down exactly once on exit, whatever the exit path.
    """

    def __init__(self, server_params: StdioServerParameters):
        """Initializes the wrapper with parameters for the MCP server process.

        Args:
            server_params: How to spawn the server, see ``resolve_server_parameters``.
        """
        self._server_params = server_params
        self._session: Optional[ClientSession] = None
        self._exit_stack = AsyncExitStack()

    async def __aenter__(self) -> "MCPClientWrapper":
        """Opens the connection (transport) and initializes the session.

        Returns:
            The initialized MCPClientWrapper instance.

        Raises:
            StartupError: If the server cannot be spawned or the handshake fails.
        """
        logger.debug("Initializing MCP client session...")
        try:
            read, write = await self._exit_stack.enter_async_context(stdio_client(self._server_params))
            self._session = await self._exit_stack.enter_async_context(ClientSession(read, write))
            await self._session.initialize()
        except Exception as exc:
            await self._close()
            raise StartupError(f"Failed to connect to MCP server '{self._server_params.command}': {exc}") from exc

        logger.info("MCP client session initialized successfully.")
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        """Cleanly closes all connections."""
        await self._close()

    async def _close(self) -> None:
        logger.debug("Closing MCP client session...")
        await self._exit_stack.aclose()
        self._session = None
        logger.info("MCP client session closed.")

    @property
    def session(self) -> ClientSession:
        if not self._session:
            raise RuntimeError("MCP Client is not connected. Use 'async with'.")
        return self._session

    async def list_tools(self) -> List[ToolDescriptor]:
        """Fetch the tools the server advertises.

        Returns:
            One descriptor per tool, in server order.
        """
        logger.debug("Fetching tools from MCP server...")
        result = await self.session.list_tools()
        logger.info(f"Found {len(result.tools)} tools from MCP server.")

        return [
            ToolDescriptor(name=tool.name, description=tool.description, input_schema=dict(tool.inputSchema or {}))
            for tool in result.tools
        ]

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        """Call a tool on the server by name.

        Args:
            name: The tool name.
            arguments: Decoded keyword arguments for the tool.

        Returns:
            The raw MCP result.
        """
        logger.info(f"Delegating tool '{name}' to MCP Server...")
        return await self.session.call_tool(name, arguments=arguments)
