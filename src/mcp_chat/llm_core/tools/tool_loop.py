"""The tool-call resolution loop driving the model and the tool server."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Any, Callable, List, Optional, Set

from ..base import ModelProvider
from ..exceptions import LoopBudgetExceeded
from ..logger import get_logger
from ..messages import AssistantMessage, ConversationState, ToolMessage, UserMessage
from .bridge import ToolInvocationBridge
from .call_protocol import ToolCallRequest, ToolCallResult
from .catalog import ToolCatalog

logger = get_logger(__name__)


class LoopState(Enum):
    AWAITING_MODEL = "awaiting_model"
    DISPATCHING_TOOLS = "dispatching_tools"
    DONE = "done"


class ResolutionLoop:
    """Alternates between asking the model for the next step and running the tools it requests.

    The loop ends when the model answers without tool calls. Tool failures are
    recorded as tool results so the model can react to them; provider failures
    abort the query.
    """

    def __init__(
        self,
        *,
        provider: ModelProvider[Any],
        bridge: ToolInvocationBridge,
        catalog: ToolCatalog,
        max_rounds: Optional[int] = 10,
        on_tool_call: Optional[Callable[[ToolCallRequest], None]] = None,
        on_tool_result: Optional[Callable[[ToolCallResult], None]] = None,
    ) -> None:
        """Initialize the resolution loop.

        Args:
            provider: The chat-completion provider.
            bridge: Dispatches tool calls to the tool server.
            catalog: Tools offered to the model on every request.
            max_rounds: Maximum number of tool-calling rounds per query. None means unbounded.
            on_tool_call: Optional callback invoked before each tool call is dispatched.
            on_tool_result: Optional callback invoked with each recorded tool result.
        """
        if max_rounds is not None and max_rounds < 1:
            raise ValueError("max_rounds must be at least 1, or None for no limit.")

        self._provider = provider
        self._bridge = bridge
        self._catalog = catalog
        self._max_rounds = max_rounds
        self._on_tool_call = on_tool_call
        self._on_tool_result = on_tool_result
        self.state = LoopState.DONE

    async def process_query(self, conversation: ConversationState, query: str) -> str:
        """Append the user's query and resolve it to the model's final text."""
        conversation.append(UserMessage(content=query))
        final = await self.run(conversation)
        return final.content or ""

    async def run(self, conversation: ConversationState) -> AssistantMessage:
        """Run the loop until the model stops requesting tools.

        Args:
            conversation: The session history, ending with the new user message.
                Every assistant and tool message is appended to it.

        Returns:
            The final assistant message.

        Raises:
            ProviderError: If a model request fails.
            LoopBudgetExceeded: If the model still requests tools after ``max_rounds`` rounds.
        """
        rounds = 0
        self.state = LoopState.AWAITING_MODEL

        try:
            while True:
                completion = await self._provider.create_completion(conversation.messages, self._catalog.specs)
                message = completion.message

                if not message.requests_tools:
                    logger.debug("No tool calls found in response. Loop finished.")
                    conversation.append(message)
                    self.state = LoopState.DONE
                    return message

                if self._max_rounds is not None and rounds >= self._max_rounds:
                    logger.warning(f"Max tool rounds ({self._max_rounds}) reached. Stopping execution.")
                    raise LoopBudgetExceeded(self._max_rounds)

                rounds += 1
                limit = self._max_rounds if self._max_rounds is not None else "inf"
                logger.info(f"Round {rounds}/{limit}: Processing {len(message.tool_calls or [])} tool call(s).")

                message = with_unique_call_ids(message, rounds)
                conversation.append(message)
                self.state = LoopState.DISPATCHING_TOOLS
                await self._dispatch(conversation, message)
                self.state = LoopState.AWAITING_MODEL
        except BaseException:
            self.state = LoopState.DONE
            raise

    async def _dispatch(self, conversation: ConversationState, message: AssistantMessage) -> None:
        # Sequential: each result is recorded before the next call runs.
        pending = list(message.tool_calls or [])
        try:
            while pending:
                tool_call = pending[0]
                logger.debug(f"Handling tool call: {tool_call.name} (ID: {tool_call.call_id})")
                self._notify(self._on_tool_call, tool_call)

                result = await self._bridge.safe_invoke(tool_call)
                conversation.append(ToolMessage(content=result.content, tool_call_id=result.call_id, name=result.name))
                pending.pop(0)
                self._notify(self._on_tool_result, result)
        finally:
            # An aborted batch still answers every call it announced, so later requests stay valid.
            for tool_call in pending:
                result = ToolInvocationBridge.error_result(tool_call, "Tool call was not executed.")
                conversation.append(ToolMessage(content=result.content, tool_call_id=result.call_id, name=result.name))

    @staticmethod
    def _notify(callback: Optional[Callable[[Any], None]], item: Any) -> None:
        if callback is None:
            return
        try:
            callback(item)
        except Exception as e:
            logger.error(f"Tool callback failed: {e}", exc_info=True)


def with_unique_call_ids(message: AssistantMessage, round_index: int) -> AssistantMessage:
    """Return ``message`` with every tool call carrying a distinct, non-empty id.

    Some OpenAI-compatible backends repeat or omit call ids. Tool messages answer
    calls by id, so offending ids are replaced by generated ones.
    """
    calls = message.tool_calls or []
    seen: Set[str] = set()
    taken = {tool_call.call_id for tool_call in calls}
    fixed: List[ToolCallRequest] = []

    for index, tool_call in enumerate(calls):
        call_id = tool_call.call_id
        if not call_id or call_id in seen:
            call_id = f"call_{round_index}_{index}"
            while call_id in taken:
                call_id += "_"
            logger.warning(f"Tool call '{tool_call.name}' has a missing or repeated id; using '{call_id}'.")
            taken.add(call_id)
            tool_call = replace(tool_call, call_id=call_id)
        seen.add(call_id)
        fixed.append(tool_call)

    if fixed == calls:
        return message
    return message.model_copy(update={"tool_calls": fixed})
