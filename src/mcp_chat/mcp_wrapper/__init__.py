"""MCP stdio client used as the tool server collaborator."""

from .wrapper import MCPClientWrapper, resolve_server_parameters, SERVER_RUNTIMES

__all__ = ["MCPClientWrapper", "resolve_server_parameters", "SERVER_RUNTIMES"]
