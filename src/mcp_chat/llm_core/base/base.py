"""Core abstractions for language-model provider implementations."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

from ..exceptions import ProviderError
from ..logger import get_logger
from ..messages import AssistantMessage, BaseMessage
from ..tools.models import FunctionSpec

logger = get_logger(__name__)


ProviderResT = TypeVar("ProviderResT")


class Completion(BaseModel, Generic[ProviderResT]):
    """Normalized model output returned by provider implementations.

    Attributes:
        message: The assistant message, with its tool calls in the order the model emitted them.
        raw: Provider-specific response payload for advanced use cases.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: AssistantMessage
    raw: ProviderResT


class ModelProvider(ABC, Generic[ProviderResT]):
    """Abstract base class for chat-completion providers.

    The provider is stateless across requests: every call receives the whole
    conversation, system message first.
    """

    def __init__(self, max_retries: int = 2, base_retry_delay: float = 1.0):
        self.max_retries = max_retries
        self.base_retry_delay = base_retry_delay

    async def create_completion(
        self, messages: Sequence[BaseMessage], tools: Sequence[FunctionSpec]
    ) -> Completion[ProviderResT]:
        """
        Ask the model for the next step of the conversation.

        Args:
            messages: The full conversation history.
            tools: Function specs the model may call.

        Returns:
            The model's completion.

        Raises:
            ProviderError: If the request still fails after all retries.
        """
        delay = self.base_retry_delay
        for attempt in range(self.max_retries + 1):
            try:
                return await self._create_completion_impl(messages, tools)
            except ProviderError:
                # Already classified as non-transient by the implementation.
                raise
            except Exception as e:
                if attempt == self.max_retries:
                    raise ProviderError(f"Model request failed: {e}") from e

                logger.warning(f"API Error (Retry: {attempt + 1}/{self.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)
                delay *= 2  # Exponential backoff

        msg = f"Failed to get response after {self.max_retries} retries."
        logger.error(msg)
        raise ProviderError(msg)

    @abstractmethod
    async def _create_completion_impl(
        self, messages: Sequence[BaseMessage], tools: Sequence[FunctionSpec]
    ) -> Completion[ProviderResT]:
        pass
