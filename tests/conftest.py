"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

import pytest

# Ensure src/ is on the import path (for local imports without installing as package)
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from toolloop.agent.executor import AgentExecutor  # noqa: E402
from toolloop.agent.memory import ConversationMemory  # noqa: E402
from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters  # noqa: E402
from toolloop.agent.tools.registry import ToolRegistry  # noqa: E402
from toolloop.domain.models import AgentConfig, GenerationConfig, Message  # noqa: E402
from toolloop.domain.results import Err, Ok  # noqa: E402


class ScriptedGateway:
    """Model gateway that replays scripted replies and records every call.

    Each script entry is returned in order: a str or ModelReply becomes
    Ok(entry), an Err is returned as-is, an Exception instance is raised.
    The last entry repeats once the script runs out.
    """

    def __init__(self, *replies: Any):
        self.replies = list(replies) or [""]
        self.calls: list[tuple[list[Message], GenerationConfig]] = []

    async def generate(self, messages: Sequence[Message], config: GenerationConfig):
        self.calls.append((list(messages), config))
        index = min(len(self.calls) - 1, len(self.replies) - 1)
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, Err):
            return reply
        return Ok(reply)


class EchoTool(BaseTool):
    name = "echo"
    description = "Echo the text back"
    category = "test"
    parameters = ToolParameters(
        properties={"text": ParameterSpec(type="string", description="Text to echo")},
        required=["text"],
    )

    async def execute(self, args: Mapping[str, Any]):
        return self._ok(args["text"])


class AddTool(BaseTool):
    name = "add"
    description = "Add two numbers"
    category = "math"
    parameters = ToolParameters(
        properties={
            "a": ParameterSpec(type="number"),
            "b": ParameterSpec(type="number"),
        },
        required=["a", "b"],
    )

    async def execute(self, args: Mapping[str, Any]):
        return self._ok(args["a"] + args["b"])


class BoomTool(BaseTool):
    name = "boom"
    description = "Always raises"
    parameters = ToolParameters()

    async def execute(self, args: Mapping[str, Any]):
        raise RuntimeError("kaboom")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the root directory of the project."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def registry() -> ToolRegistry:
    reg = ToolRegistry()
    reg.register_multiple([EchoTool(), AddTool(), BoomTool()])
    return reg


@pytest.fixture
def memory() -> ConversationMemory:
    return ConversationMemory(max_messages=50, max_tool_calls=20)


@pytest.fixture
def make_agent(registry: ToolRegistry, memory: ConversationMemory):
    """Build an AgentExecutor around a ScriptedGateway with the given replies."""
    def _make(*replies: Any, max_rounds: int = 10) -> tuple[AgentExecutor, ScriptedGateway]:
        gateway = ScriptedGateway(*replies)
        agent = AgentExecutor(
            gateway=gateway,
            memory=memory,
            tools=registry,
            config=AgentConfig(max_rounds=max_rounds),
        )
        return agent, gateway
    return _make


@pytest.fixture(scope="function")
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Ensure tests run with a clean environment (no leftover vars)."""
    for var in [
        "LLM_PROVIDER", "OPENAI_API_KEY", "OPENAI_BASE_URL", "GROQ_API_KEY",
        "AGENT_MAX_ROUNDS", "NATIVE_TOOL_CALLING", "LOG_LEVEL",
    ]:
        monkeypatch.delenv(var, raising=False)
    yield
