"""
Custom exception classes for the MCP chat client.

Errors local to a single tool call (``MalformedArguments``, ``ToolExecutionFailed``)
are absorbed into the conversation so the model can react to them. Provider and
budget errors abort the current query and surface to the session driver.
``StartupError`` is fatal and aborts before the session starts.
"""


class ChatClientError(Exception):
    """Base exception for all client errors."""

    pass


class StartupError(ChatClientError):
    """Raised when the client cannot start: bad server script or failed connection."""

    pass


class ConfigurationError(StartupError):
    """Raised when required configuration is missing or invalid."""

    pass


class ProviderError(ChatClientError):
    """Raised when the language-model API call itself fails."""

    pass


class LoopBudgetExceeded(ChatClientError):
    """Raised when the model keeps requesting tools past the allowed number of rounds."""

    def __init__(self, max_rounds: int):
        self.max_rounds = max_rounds
        super().__init__(f"Tool-call budget exceeded: model still requested tools after {max_rounds} round(s).")


class LLMToolError(ChatClientError):
    """Base exception for all tool-related errors."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when a tool definition or its input schema is invalid."""

    pass


class MalformedArguments(LLMToolError):
    """Raised when a tool call's argument payload is not a valid JSON object."""

    def __init__(self, tool_name: str, detail: str):
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Failed to parse arguments for tool '{tool_name}': {detail}")


class ToolExecutionFailed(LLMToolError):
    """Raised when the tool server returns an error or the call transport fails."""

    def __init__(self, tool_name: str, cause: object):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"Tool '{tool_name}' failed: {cause}")
