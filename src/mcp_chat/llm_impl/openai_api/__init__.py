"""Expose the OpenAI chat-completion provider and its message adapter."""

from .core import OpenAIProvider
from .adapter import OpenAIMessageAdapter

__all__ = ["OpenAIProvider", "OpenAIMessageAdapter"]
