"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from the environment (and a
.env file) or passed explicitly in tests. Adapter presets live here too.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from toolloop.domain.exceptions import ConfigurationError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class AgentProfile:
    """Per-adapter limits: rounds, tokens and memory bounds."""
    name: str
    max_rounds: int
    max_tokens: int
    max_messages: int
    max_tool_calls: int


# Interactive terminal: short loops, small memory.
CLI_PROFILE = AgentProfile("cli", max_rounds=3, max_tokens=1000, max_messages=15, max_tool_calls=5)
SERVER_PROFILE = AgentProfile("server", max_rounds=8, max_tokens=2000, max_messages=20, max_tool_calls=10)


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the agent.

    No module-level globals: construct via from_env() or pass explicitly
    in tests.
    """

    # ── LLM provider ────────────────────────────────────────────
    # Allowed: "openai" (including OpenAI-compatible endpoints), "groq", "ollama"
    llm_provider: str = "openai"

    # Model names; only the one matching llm_provider is used.
    llm_model_openai: str = "gpt-4.1-mini"
    llm_model_groq: str = "llama-3.3-70b-versatile"
    llm_model_ollama: str = "llama3.2"

    # Connection details
    openai_api_key: str = ""
    openai_base_url: str = ""
    groq_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434/"

    # Agent loop
    agent_max_rounds: int = 10
    agent_temperature: float = 0.7
    agent_max_tokens: int = 2000
    agent_enable_logging: bool = True

    # Model calls
    model_timeout: float = 30.0
    model_max_retries: int = 3
    native_tool_calling: bool = False

    # Memory
    memory_max_messages: int = 50
    memory_max_tool_calls: int = 20

    log_level: str = "INFO"

    @property
    def active_llm_model(self) -> str:
        """Return the model name for the currently active LLM provider."""
        if self.llm_provider == "groq":
            return self.llm_model_groq
        elif self.llm_provider == "ollama":
            return self.llm_model_ollama
        return self.llm_model_openai

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        """Build Settings from the process environment.

        ``env`` replaces os.environ (and skips .env loading), for tests.
        """
        if env is None:
            from dotenv import load_dotenv
            load_dotenv()
            env = os.environ

        def get(key: str, default: str) -> str:
            return env.get(key, default)

        return cls(
            llm_provider=get("LLM_PROVIDER", "openai").lower().strip(),
            llm_model_openai=get("LLM_MODEL_OPENAI", "gpt-4.1-mini"),
            llm_model_groq=get("LLM_MODEL_GROQ", "llama-3.3-70b-versatile"),
            llm_model_ollama=get("LLM_MODEL_OLLAMA", "llama3.2"),
            openai_api_key=get("OPENAI_API_KEY", ""),
            openai_base_url=get("OPENAI_BASE_URL", ""),
            groq_api_key=get("GROQ_API_KEY", ""),
            ollama_base_url=get("OLLAMA_BASE_URL", "http://localhost:11434/"),

            agent_max_rounds=_int(env, "AGENT_MAX_ROUNDS", 10),
            agent_temperature=_float(env, "AGENT_TEMPERATURE", 0.7),
            agent_max_tokens=_int(env, "AGENT_MAX_TOKENS", 2000),
            agent_enable_logging=_bool(env, "AGENT_ENABLE_LOGGING", True),
            model_timeout=_float(env, "MODEL_TIMEOUT", 30.0),
            model_max_retries=_int(env, "MODEL_MAX_RETRIES", 3),
            native_tool_calling=_bool(env, "NATIVE_TOOL_CALLING", False),
            memory_max_messages=_int(env, "MEMORY_MAX_MESSAGES", 50),
            memory_max_tool_calls=_int(env, "MEMORY_MAX_TOOL_CALLS", 20),
            log_level=get("LOG_LEVEL", "INFO").upper(),
        )


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None


def _bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{key} must be true or false, got {raw!r}")
