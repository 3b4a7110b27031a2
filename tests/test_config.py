from __future__ import annotations

import pytest

from conftest import ScriptedGateway
from toolloop.domain.exceptions import ConfigurationError
from toolloop.factory import AgentFactory
from toolloop.infrastructure.config import CLI_PROFILE, SERVER_PROFILE, Settings
from toolloop.infrastructure.llm.llm_builder import build_llm


def test_defaults_from_empty_env():
    settings = Settings.from_env({})
    assert settings.llm_provider == "openai"
    assert settings.agent_max_rounds == 10
    assert settings.agent_temperature == 0.7
    assert settings.agent_max_tokens == 2000
    assert settings.memory_max_messages == 50
    assert settings.memory_max_tool_calls == 20
    assert settings.native_tool_calling is False
    assert settings.log_level == "INFO"


def test_env_overrides():
    settings = Settings.from_env({
        "LLM_PROVIDER": "Groq",
        "LLM_MODEL_GROQ": "mixtral",
        "AGENT_MAX_ROUNDS": "4",
        "AGENT_TEMPERATURE": "0.2",
        "NATIVE_TOOL_CALLING": "yes",
        "AGENT_ENABLE_LOGGING": "false",
        "LOG_LEVEL": "debug",
    })
    assert settings.llm_provider == "groq"
    assert settings.active_llm_model == "mixtral"
    assert settings.agent_max_rounds == 4
    assert settings.agent_temperature == 0.2
    assert settings.native_tool_calling is True
    assert settings.agent_enable_logging is False
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [{"AGENT_MAX_ROUNDS": "ten"}, {"AGENT_TEMPERATURE": "hot"}, {"NATIVE_TOOL_CALLING": "maybe"}],
)
def test_invalid_values_raise(env):
    with pytest.raises(ConfigurationError):
        Settings.from_env(env)


def test_from_env_reads_process_environment(clean_env, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AGENT_MAX_ROUNDS", "6")
    assert Settings.from_env().agent_max_rounds == 6


def test_profiles():
    assert (CLI_PROFILE.max_rounds, CLI_PROFILE.max_tokens) == (3, 1000)
    assert (CLI_PROFILE.max_messages, CLI_PROFILE.max_tool_calls) == (15, 5)
    assert (SERVER_PROFILE.max_rounds, SERVER_PROFILE.max_tokens) == (8, 2000)
    assert (SERVER_PROFILE.max_messages, SERVER_PROFILE.max_tool_calls) == (20, 10)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"provider": "openai", "model": "gpt"},
        {"provider": "groq", "model": "llama"},
        {"provider": "unknown", "model": "x"},
    ],
)
def test_build_llm_configuration_errors(kwargs):
    with pytest.raises(ConfigurationError):
        build_llm(**kwargs)


def test_factory_applies_profile():
    factory = AgentFactory(Settings())
    agent = factory.create_agent(CLI_PROFILE, gateway=ScriptedGateway("ok"))
    assert agent.config.max_rounds == 3
    assert agent.config.max_tokens == 1000
    assert agent.memory.max_messages == 15
    assert agent.memory.max_tool_calls == 5
    assert "calculator" in agent.tools.names()


def test_factory_default_uses_settings():
    factory = AgentFactory(Settings(agent_max_rounds=7, memory_max_messages=30))
    agent = factory.create_agent(gateway=ScriptedGateway("ok"))
    assert agent.config.max_rounds == 7
    assert agent.memory.max_messages == 30


def test_factory_returns_independent_instances():
    factory = AgentFactory(Settings())
    first = factory.create_agent(gateway=ScriptedGateway("ok"))
    second = factory.create_agent(gateway=ScriptedGateway("ok"))
    assert first is not second
    assert first.memory is not second.memory
    assert first.tools is not second.tools


def test_factory_gateway_requires_credentials():
    with pytest.raises(ConfigurationError):
        AgentFactory(Settings(llm_provider="openai", openai_api_key="")).create_gateway()


def test_factory_builds_openai_gateway():
    settings = Settings(openai_api_key="sk-test", openai_base_url="https://example.invalid/v1", native_tool_calling=True)
    factory = AgentFactory(settings)
    registry = factory.create_tool_registry()
    gateway = factory.create_gateway(registry)
    info = gateway.get_info()
    assert info["provider"] == "openai"
    assert info["native_tool_calling"] is True
    assert info["cached_models"] == 1
