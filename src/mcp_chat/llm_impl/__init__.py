"""Collect concrete model provider implementations."""

from .openai_api import OpenAIProvider

__all__ = [
    "OpenAIProvider",
]
