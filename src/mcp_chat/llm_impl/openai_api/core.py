from typing import Any, Dict, Sequence

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from mcp_chat.llm_core import ModelProvider, Completion, ProviderError
from mcp_chat.llm_core.logger import get_logger
from mcp_chat.llm_core.messages.models import BaseMessage
from mcp_chat.llm_core.tools.models import FunctionSpec
from .adapter import OpenAIMessageAdapter

logger = get_logger(__name__)

# Errors that retrying cannot fix.
NON_RETRYABLE_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.BadRequestError,
    openai.NotFoundError,
)


class OpenAIProvider(ModelProvider[ChatCompletion]):
    """
    Implementation of ModelProvider for OpenAI-compatible chat completion APIs.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        max_retries: int = 2,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the OpenAI provider.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier for the model to use (e.g., 'gpt-4o').
            max_retries: Retries for transient API errors.
            base_retry_delay: Initial delay in seconds between retries; doubles each attempt.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.model: str = model_name
        self.client: AsyncOpenAI = client

    async def _create_completion_impl(
        self, messages: Sequence[BaseMessage], tools: Sequence[FunctionSpec]
    ) -> Completion[ChatCompletion]:
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": OpenAIMessageAdapter.to_openai_messages(messages),
        }
        # The API rejects an empty tools list.
        if tools:
            request["tools"] = OpenAIMessageAdapter.to_openai_tools(tools)

        logger.debug(f"Sending request to model {self.model} with {len(messages)} message(s).")
        try:
            response: ChatCompletion = await self.client.chat.completions.create(**request)
        except NON_RETRYABLE_ERRORS as exc:
            raise ProviderError(f"Model request rejected: {exc}") from exc

        if not response.choices:
            raise ProviderError("Model returned a completion without choices.")

        choice = response.choices[0]
        logger.debug(f"Response received. Finish reason: {choice.finish_reason}")

        return Completion(message=OpenAIMessageAdapter.from_openai_message(choice.message), raw=response)
