"""
infrastructure.llm.llm_builder - Centralized LLM construction.

Single source of truth for building chat models. The provider is
controlled by the LLM_PROVIDER environment variable.

Supported providers:
    - "openai"  → langchain_openai.ChatOpenAI (also any OpenAI-compatible
                  endpoint via openai_base_url)
    - "groq"    → langchain_groq.ChatGroq
    - "ollama"  → langchain_ollama.ChatOllama
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from langchain_core.language_models import BaseChatModel

from toolloop.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "groq", "ollama")

# (temperature, max_tokens) -> chat model
LLMFactory = Callable[[float, int], BaseChatModel]


def build_llm(
    *,
    provider: str,
    model: str,
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    timeout: Optional[float] = None,
    max_retries: int = 3,
    openai_api_key: str = "",
    openai_base_url: str = "",
    groq_api_key: str = "",
    ollama_base_url: str = "http://localhost:11434/",
) -> BaseChatModel:
    """Build a chat model for the given provider.

    Args:
        provider: One of "openai", "groq", "ollama".
        model: Model name for the selected provider.
        temperature: Sampling temperature.
        max_tokens: Maximum tokens in the completion.
        timeout: Request timeout in seconds (openai / groq).
        max_retries: Client-side retries (openai / groq).
        openai_api_key: API key for OpenAI or the compatible endpoint.
        openai_base_url: Base URL of an OpenAI-compatible endpoint.
        groq_api_key: API key for Groq.
        ollama_base_url: Ollama server URL.

    Returns:
        A configured LangChain chat model.

    Raises:
        ConfigurationError: If the provider is unknown or required credentials are missing.
    """
    provider = provider.lower().strip()

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        if not openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is required when LLM_PROVIDER='openai'")

        kwargs: Dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "api_key": openai_api_key,
            "max_retries": max_retries,
        }
        if openai_base_url:
            kwargs["base_url"] = openai_base_url
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.info("Building OpenAI chat model (model=%s, base_url=%s)", model, openai_base_url or "default")
        return ChatOpenAI(**kwargs)

    elif provider == "groq":
        from langchain_groq import ChatGroq

        if not groq_api_key:
            raise ConfigurationError("GROQ_API_KEY is required when LLM_PROVIDER='groq'")

        kwargs = {
            "model": model,
            "temperature": temperature,
            "api_key": groq_api_key,
            "max_tokens": max_tokens if max_tokens is not None else 512,
            "max_retries": max_retries,
        }
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.info("Building Groq chat model (model=%s)", model)
        return ChatGroq(**kwargs)

    elif provider == "ollama":
        from langchain_ollama import ChatOllama

        kwargs = {
            "model": model,
            "temperature": temperature,
            "base_url": ollama_base_url,
        }
        if max_tokens is not None:
            kwargs["num_predict"] = max_tokens

        logger.info("Building ChatOllama (model=%s)", model)
        return ChatOllama(**kwargs)

    else:
        raise ConfigurationError(
            f"Unsupported LLM_PROVIDER: '{provider}'. "
            "Must be 'openai', 'groq', or 'ollama'."
        )
