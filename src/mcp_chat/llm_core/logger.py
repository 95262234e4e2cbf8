"""Logging utilities for the MCP chat client."""

import logging
import sys

_LOGGER_NAME = "mcp_chat"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the client.

    Args:
        name: Optional sub-logger name. If None, returns the root client logger.

    Returns:
        The requested logger.
    """
    if name:
        if name.startswith(f"{_LOGGER_NAME}."):
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def setup_logging(
    level: int | str = logging.WARNING,
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Setup default logging configuration for the client.

    This adds a StreamHandler to the client's root logger. Only the CLI entry
    point calls it; library use leaves handler configuration to the application.

    Args:
        level: Logging level, as an int or a level name such as ``"INFO"``.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    # Avoid adding multiple handlers if called multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
