"""Conversion between the client's message models and the OpenAI chat format."""

from typing import Any, Dict, List, Sequence

from openai.types.chat import ChatCompletionMessage

from mcp_chat.llm_core.messages.models import (
    AssistantMessage,
    BaseMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from mcp_chat.llm_core.tools.call_protocol import ToolCallRequest
from mcp_chat.llm_core.tools.models import FunctionSpec


class OpenAIMessageAdapter:
    """Adapter for OpenAI message and tool formats."""

    @staticmethod
    def to_openai_messages(history: Sequence[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts the conversation history to OpenAI message dictionaries.

        Args:
            history: Messages in conversation order.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, (SystemMessage, UserMessage)):
                openai_history.append({"role": msg.role, "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = [
                        {
                            "id": call.call_id,
                            "type": "function",
                            "function": {"name": call.name, "arguments": call.arguments},
                        }
                        for call in msg.tool_calls
                    ]
                openai_history.append(openai_msg)
            elif isinstance(msg, ToolMessage):
                openai_history.append({"role": "tool", "tool_call_id": msg.tool_call_id, "content": msg.content})
        return openai_history

    @staticmethod
    def to_openai_tools(specs: Sequence[FunctionSpec]) -> List[Dict[str, Any]]:
        return [spec.to_openai() for spec in specs]

    @staticmethod
    def from_openai_message(message: ChatCompletionMessage) -> AssistantMessage:
        """
        Converts an OpenAI assistant message to an ``AssistantMessage``.

        Only function tool calls are kept, in the order the model emitted them.

        Args:
            message: The message of the first choice of a chat completion.

        Returns:
            The normalized assistant message.
        """
        requests: List[ToolCallRequest] = []
        for tool_call in message.tool_calls or []:
            if tool_call.type == "function":
                requests.append(
                    ToolCallRequest(
                        call_id=tool_call.id,
                        name=tool_call.function.name,
                        arguments=tool_call.function.arguments or "",
                    )
                )

        return AssistantMessage(content=message.content, tool_calls=requests or None)
