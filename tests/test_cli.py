from typing import Any, List
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mcp_chat.cli import main, run_client
from mcp_chat.config import Settings
from mcp_chat.llm_core import AssistantMessage, Completion, StartupError, ToolDescriptor
from mcp_chat.mcp_wrapper import resolve_server_parameters

from conftest import call, text_result


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="sk-test", model="gpt-4o", max_retries=0)


@pytest.fixture
def fake_server() -> Any:
    server = MagicMock()
    server.__aenter__ = AsyncMock(return_value=server)
    server.__aexit__ = AsyncMock(return_value=None)
    server.list_tools = AsyncMock(
        return_value=[
            ToolDescriptor(
                name="add",
                description="Add two numbers",
                input_schema={"type": "object", "properties": {"a": {"type": "number"}, "b": {"type": "number"}}},
            )
        ]
    )
    server.call_tool = AsyncMock(return_value=text_result("4"))
    return server


def scripted_input(*lines: str) -> Any:
    queue = list(lines)

    async def read_line(prompt: str) -> str:
        return queue.pop(0)

    return read_line


def test_missing_argument_prints_usage(capsys: Any) -> None:
    assert main([]) == 1
    assert "Usage: mcp-chat <path_to_server_script>" in capsys.readouterr().out


def test_unsupported_extension_exits_before_any_query(capsys: Any) -> None:
    with patch("mcp_chat.cli.run_client") as mock_run:
        assert main(["server.ts"]) == 1

    mock_run.assert_not_called()
    assert "Error: Server script must be a .py or .js file" in capsys.readouterr().err


def test_missing_configuration_exits_nonzero(monkeypatch: Any, capsys: Any) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.setattr("mcp_chat.config.load_dotenv", lambda: False)

    assert main(["server.py"]) == 1
    assert "OPENAI_API_KEY" in capsys.readouterr().err


def test_startup_failure_exits_nonzero(monkeypatch: Any, settings: Settings) -> None:
    monkeypatch.setattr("mcp_chat.cli.Settings", MagicMock(**{"from_env.return_value": settings}))
    with patch("mcp_chat.cli.run_client", new=AsyncMock(side_effect=StartupError("connection refused"))):
        assert main(["server.py"]) == 1


def test_clean_quit_exits_zero(monkeypatch: Any, settings: Settings) -> None:
    monkeypatch.setattr("mcp_chat.cli.Settings", MagicMock(**{"from_env.return_value": settings}))
    with patch("mcp_chat.cli.run_client", new=AsyncMock(return_value=None)):
        assert main(["server.py"]) == 0


@pytest.mark.asyncio
async def test_run_client_end_to_end(settings: Settings, fake_server: Any) -> None:
    output: List[str] = []
    replies = [
        Completion(message=AssistantMessage(tool_calls=[call("add", {"a": 2, "b": 2})]), raw=None),
        Completion(message=AssistantMessage(content="The answer is 4"), raw=None),
    ]

    with (
        patch("mcp_chat.cli.MCPClientWrapper", return_value=fake_server),
        patch("mcp_chat.cli.OpenAIProvider") as provider_cls,
    ):
        provider_cls.return_value.create_completion = AsyncMock(side_effect=replies)
        await run_client(
            resolve_server_parameters("server.py"),
            settings,
            read_line=scripted_input("what is 2+2", "quit"),
            write=output.append,
        )

    assert "\nConnected to server with tools: ['add']" in output
    assert 'Calling tool add with args {"a": 2, "b": 2}' in output
    assert "Tool add called successfully" in output
    assert "\nThe answer is 4" in output
    fake_server.call_tool.assert_awaited_once_with("add", {"a": 2, "b": 2})
    fake_server.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_run_client_releases_server_on_invalid_catalog(settings: Settings, fake_server: Any) -> None:
    fake_server.list_tools.return_value = [ToolDescriptor(name="dup"), ToolDescriptor(name="dup")]

    with patch("mcp_chat.cli.MCPClientWrapper", return_value=fake_server), patch("mcp_chat.cli.OpenAIProvider"):
        with pytest.raises(StartupError, match="invalid tool"):
            await run_client(resolve_server_parameters("server.py"), settings, read_line=scripted_input())

    fake_server.__aexit__.assert_awaited_once()
