"""
factory - Composition root for the tool-using agent.

ALL dependency wiring happens here. No other module constructs its own
dependencies, and nothing here is a process-wide singleton: every
create_* call returns a new instance owned by the caller.

Usage:
    from toolloop.factory import AgentFactory
    from toolloop.infrastructure.config import Settings, CLI_PROFILE

    factory = AgentFactory(Settings.from_env())
    agent = factory.create_agent(CLI_PROFILE)
    response = await agent.process("What is 2+3*4?")
"""

from __future__ import annotations

import logging
from typing import Optional

from toolloop.agent.executor import AgentExecutor
from toolloop.agent.memory import ConversationMemory
from toolloop.agent.tools import ToolRegistry, create_builtin_tools
from toolloop.domain.models import AgentConfig, GenerationConfig
from toolloop.domain.ports import ModelGateway
from toolloop.infrastructure.config import AgentProfile, Settings
from toolloop.infrastructure.llm.gateway import LangChainGateway
from toolloop.infrastructure.llm.llm_builder import build_llm

logger = logging.getLogger(__name__)


class AgentFactory:
    """Composition root: wires settings, tools, memory and the model gateway."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def create_tool_registry(self) -> ToolRegistry:
        registry = ToolRegistry()
        registry.register_multiple(create_builtin_tools())
        logger.info("Tool registry ready: %s", ", ".join(registry.names()))
        return registry

    def create_memory(self, profile: Optional[AgentProfile] = None) -> ConversationMemory:
        if profile is None:
            return ConversationMemory(
                max_messages=self._settings.memory_max_messages,
                max_tool_calls=self._settings.memory_max_tool_calls,
            )
        return ConversationMemory(
            max_messages=profile.max_messages,
            max_tool_calls=profile.max_tool_calls,
        )

    def create_agent_config(self, profile: Optional[AgentProfile] = None) -> AgentConfig:
        s = self._settings
        return AgentConfig(
            max_rounds=profile.max_rounds if profile else s.agent_max_rounds,
            temperature=s.agent_temperature,
            max_tokens=profile.max_tokens if profile else s.agent_max_tokens,
            timeout=s.model_timeout,
            enable_logging=s.agent_enable_logging,
        )

    def create_gateway(
        self,
        registry: Optional[ToolRegistry] = None,
        profile: Optional[AgentProfile] = None,
    ) -> LangChainGateway:
        """Build the LangChain gateway for the configured provider.

        The default chat model is built eagerly so missing credentials
        raise ConfigurationError here rather than on the first message.
        """
        s = self._settings

        def llm_factory(temperature: float, max_tokens: int):
            return build_llm(
                provider=s.llm_provider,
                model=s.active_llm_model,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=s.model_timeout,
                max_retries=s.model_max_retries,
                openai_api_key=s.openai_api_key,
                openai_base_url=s.openai_base_url,
                groq_api_key=s.groq_api_key,
                ollama_base_url=s.ollama_base_url,
            )

        tool_specs = None
        if s.native_tool_calling and registry is not None:
            tool_specs = registry.to_function_specs

        gateway = LangChainGateway(
            llm_factory,
            provider=s.llm_provider,
            model=s.active_llm_model,
            tool_specs=tool_specs,
        )
        config = self.create_agent_config(profile)
        gateway.get_llm(GenerationConfig(temperature=config.temperature, max_tokens=config.max_tokens))
        return gateway

    # ------------------------------------------------------------------
    # Agent creation
    # ------------------------------------------------------------------

    def create_agent(
        self,
        profile: Optional[AgentProfile] = None,
        gateway: Optional[ModelGateway] = None,
        registry: Optional[ToolRegistry] = None,
    ) -> AgentExecutor:
        """Create a fully configured AgentExecutor for one session.

        Args:
            profile:  Adapter preset (CLI_PROFILE / SERVER_PROFILE); None uses Settings.
            gateway:  Model gateway to use instead of the LangChain one (tests).
            registry: Tool registry to use instead of the built-in tools.
        """
        registry = registry if registry is not None else self.create_tool_registry()
        gateway = gateway if gateway is not None else self.create_gateway(registry, profile)

        agent = AgentExecutor(
            gateway=gateway,
            memory=self.create_memory(profile),
            tools=registry,
            config=self.create_agent_config(profile),
        )
        logger.info(
            "Agent created (profile=%s, provider=%s, max_rounds=%d)",
            profile.name if profile else "default",
            self._settings.llm_provider,
            agent.config.max_rounds,
        )
        return agent
