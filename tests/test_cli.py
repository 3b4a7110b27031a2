from __future__ import annotations

from typer.testing import CliRunner

from conftest import ScriptedGateway
from toolloop import __version__
from toolloop.adapters.cli import main as cli
from toolloop.factory import AgentFactory
from toolloop.infrastructure.config import CLI_PROFILE, Settings

runner = CliRunner()


def _scripted_agent(*replies):
    return AgentFactory(Settings()).create_agent(CLI_PROFILE, gateway=ScriptedGateway(*replies))


def test_version():
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_tools_lists_builtins(clean_env):
    result = runner.invoke(cli.app, ["tools"])
    assert result.exit_code == 0
    assert "calculator" in result.stdout
    assert "json_parser" in result.stdout


def test_ask_prints_answer(monkeypatch):
    monkeypatch.setattr(cli, "_make_agent", lambda: _scripted_agent("Paris is the capital."))
    result = runner.invoke(cli.app, ["ask", "Capital of France?"])
    assert result.exit_code == 0
    assert "Paris is the capital." in result.stdout
    assert "rounds: 1" in result.stdout


def test_ask_exits_nonzero_on_failure(monkeypatch):
    monkeypatch.setattr(cli, "_make_agent", lambda: _scripted_agent("**USE_TOOL: calculator()**"))
    result = runner.invoke(cli.app, ["ask", "loop"])
    assert result.exit_code == 1
    assert "maximum of 3" in result.stdout


def test_chat_session_commands(monkeypatch):
    monkeypatch.setattr(cli, "_make_agent", lambda: _scripted_agent("Hello there!"))
    result = runner.invoke(cli.app, ["chat"], input="hi\n/session\n/tools\n/reset\nexit\n")
    assert result.exit_code == 0
    assert "Hello there!" in result.stdout
    assert "Tool calls: 0" in result.stdout
    assert "calculator" in result.stdout
    assert "Session reset." in result.stdout
    assert "Goodbye!" in result.stdout


def test_missing_credentials_exit_cleanly(clean_env, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    result = runner.invoke(cli.app, ["ask", "hi"])
    assert result.exit_code == 1
    assert "OPENAI_API_KEY" in result.stdout
