"""Re-export the provider interface and the normalized completion model."""

from .base import ModelProvider, Completion

__all__ = [
    "ModelProvider",
    "Completion",
]
