"""Append-only conversation log owned by one chat session."""

from typing import Iterator, Sequence

from ..exceptions import ChatClientError
from ..logger import get_logger
from .models import AssistantMessage, BaseMessage, SystemMessage, ToolMessage

logger = get_logger(__name__)


class ConversationState:
    """Ordered message history forming the model's working memory for a session.

    The state is created with a single system message and only ever grows.
    Tool messages are checked against the assistant message they answer, since
    the chat API rejects orphaned tool results.
    """

    def __init__(self, system_prompt: str) -> None:
        self._messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]

    @property
    def messages(self) -> Sequence[BaseMessage]:
        """A read-only view of the history, system message first."""
        return tuple(self._messages)

    def append(self, message: BaseMessage) -> None:
        """Append a message to the end of the history.

        Raises:
            ChatClientError: If a tool message does not answer a call of the
                preceding assistant message, or an assistant message carries
                missing or repeated call ids.
        """
        if isinstance(message, SystemMessage):
            raise ChatClientError("The system message is fixed at session start.")
        if isinstance(message, AssistantMessage) and message.tool_calls:
            call_ids = [call.call_id for call in message.tool_calls]
            if not all(call_ids) or len(set(call_ids)) != len(call_ids):
                raise ChatClientError(f"Tool call ids must be unique and non-empty, got {call_ids}.")
        if isinstance(message, ToolMessage):
            self._check_tool_message(message)

        self._messages.append(message)
        logger.debug(f"Appended {message.role} message (history length {len(self._messages)}).")

    def _check_tool_message(self, message: ToolMessage) -> None:
        # Walk back over the run of tool messages to the assistant message they answer.
        answered: set[str] = set()
        for previous in reversed(self._messages):
            if isinstance(previous, ToolMessage):
                answered.add(previous.tool_call_id)
                continue
            if isinstance(previous, AssistantMessage) and previous.tool_calls:
                call_ids = {call.call_id for call in previous.tool_calls}
                if message.tool_call_id in call_ids and message.tool_call_id not in answered:
                    return
            break

        raise ChatClientError(
            f"Tool message '{message.tool_call_id}' does not answer a pending call of the preceding assistant message."
        )

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[BaseMessage]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> BaseMessage:
        return self._messages[index]
