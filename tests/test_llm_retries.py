import pytest
from unittest.mock import AsyncMock, patch
from typing import Sequence

from mcp_chat.llm_core import AssistantMessage, BaseMessage, Completion, FunctionSpec, ModelProvider, ProviderError, UserMessage


# Mock implementation for testing ModelProvider base logic
class MockProvider(ModelProvider[str]):
    def __init__(self, max_retries: int = 3, base_retry_delay: float = 0.01):
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.impl_mock = AsyncMock()

    async def _create_completion_impl(
        self, messages: Sequence[BaseMessage], tools: Sequence[FunctionSpec]
    ) -> Completion[str]:
        return await self.impl_mock(messages, tools)


MESSAGES = [UserMessage(content="hello")]


def _ok() -> Completion[str]:
    return Completion(message=AssistantMessage(content="Success"), raw="raw")


@pytest.mark.asyncio
async def test_initialization():
    """Test initialization of ModelProvider."""
    provider = MockProvider(max_retries=5, base_retry_delay=2.0)
    assert provider.max_retries == 5
    assert provider.base_retry_delay == 2.0


@pytest.mark.asyncio
async def test_happy_path():
    """Test that the request works on the first attempt."""
    provider = MockProvider()
    provider.impl_mock.return_value = _ok()

    result = await provider.create_completion(MESSAGES, [])
    assert result.message.content == "Success"
    assert provider.impl_mock.call_count == 1


@pytest.mark.asyncio
async def test_retry_success():
    """Test that the request retries and eventually succeeds."""
    provider = MockProvider(max_retries=3)

    # Fail twice, then succeed
    provider.impl_mock.side_effect = [Exception("Fail 1"), Exception("Fail 2"), _ok()]

    result = await provider.create_completion(MESSAGES, [])
    assert result.message.content == "Success"
    assert provider.impl_mock.call_count == 3


@pytest.mark.asyncio
async def test_failure_after_retries_is_provider_error():
    """Test that the last exception is wrapped after max retries."""
    provider = MockProvider(max_retries=2)

    provider.impl_mock.side_effect = Exception("Persistent Failure")

    with pytest.raises(ProviderError) as excinfo:
        await provider.create_completion(MESSAGES, [])

    assert "Persistent Failure" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, Exception)
    # Initial call + 2 retries = 3 calls
    assert provider.impl_mock.call_count == 3


@pytest.mark.asyncio
async def test_zero_retries():
    """Edge Case: Test behavior when max_retries is 0."""
    provider = MockProvider(max_retries=0)

    provider.impl_mock.side_effect = Exception("Fail immediately")

    with pytest.raises(ProviderError, match="Fail immediately"):
        await provider.create_completion(MESSAGES, [])

    assert provider.impl_mock.call_count == 1


@pytest.mark.asyncio
async def test_provider_error_is_not_retried():
    """A ProviderError raised by the implementation is final."""
    provider = MockProvider(max_retries=3)
    provider.impl_mock.side_effect = ProviderError("rejected")

    with pytest.raises(ProviderError, match="rejected"):
        await provider.create_completion(MESSAGES, [])

    assert provider.impl_mock.call_count == 1


@pytest.mark.asyncio
async def test_backoff_doubles_delay():
    provider = MockProvider(max_retries=2, base_retry_delay=1.0)
    provider.impl_mock.side_effect = [Exception("1"), Exception("2"), _ok()]

    with patch("mcp_chat.llm_core.base.base.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await provider.create_completion(MESSAGES, [])

    assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]
