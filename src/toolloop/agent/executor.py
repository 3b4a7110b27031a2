"""
agent.executor - Agent execution engine.

The single class that runs the model + tool selection loop.
No component construction, no global state: the gateway, memory and
tool registry are injected by factory.py (or by tests).

One process() call:
    1. install the system prompt (once per session)
    2. append the user message
    3. up to max_rounds times: call the model, and either return its
       reply as the final answer or run the requested tool and feed
       the outcome back as a new message
    4. if the budget runs out, make one extra un-counted call asking
       the model to conclude

Whatever happens, process() returns an AgentResponse; it never raises.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Any, Optional, Sequence

from toolloop.agent.directive import extract_tool_call
from toolloop.agent.prompt import (
    build_final_answer_prompt,
    build_system_prompt,
    format_tool_failure,
    format_tool_success,
)
from toolloop.domain.exceptions import AgentNotReadyError, GatewayError
from toolloop.domain.models import (
    AgentConfig,
    AgentResponse,
    Message,
    ModelReply,
    Role,
    SessionSnapshot,
)
from toolloop.domain.ports import ConversationStore, ModelGateway, ToolCatalog

logger = logging.getLogger(__name__)

FAULT_MESSAGE = "Sorry, something went wrong while processing your request."


class AgentExecutor:
    """Runs the reasoning / acting loop for one conversation session.

    Calls to process() on the same instance are serialised with an
    asyncio.Lock, so a shared executor never interleaves two turns.
    """

    def __init__(
        self,
        gateway: Optional[ModelGateway],
        memory: Optional[ConversationStore],
        tools: Optional[ToolCatalog],
        config: Optional[AgentConfig] = None,
    ):
        self._gateway = gateway
        self._memory = memory
        self._tools = tools
        self._config = config or AgentConfig()
        self._initialized = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Configuration / state
    # ------------------------------------------------------------------

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def memory(self) -> Optional[ConversationStore]:
        return self._memory

    @property
    def tools(self) -> Optional[ToolCatalog]:
        return self._tools

    @property
    def gateway(self) -> Optional[ModelGateway]:
        return self._gateway

    @property
    def initialized(self) -> bool:
        return self._initialized

    def update_config(self, **changes: Any) -> AgentConfig:
        """Replace fields of the config; unknown field names raise TypeError."""
        self._config = dataclasses.replace(self._config, **changes)
        logger.info("Agent config updated: %s", changes)
        return self._config

    def missing_dependencies(self) -> list[str]:
        missing = []
        if self._gateway is None:
            missing.append("model gateway")
        if self._memory is None:
            missing.append("memory")
        if self._tools is None:
            missing.append("tool registry")
        return missing

    def is_ready(self) -> bool:
        return not self.missing_dependencies()

    def ensure_ready(self) -> None:
        """Raise AgentNotReadyError naming every unbound dependency."""
        missing = self.missing_dependencies()
        if missing:
            raise AgentNotReadyError(f"Agent is not ready: missing {', '.join(missing)}")

    def reset(self) -> None:
        """Clear the conversation and rebuild the system prompt on the next turn."""
        if self._memory is not None:
            self._memory.clear()
        self._initialized = False
        logger.info("Agent session reset")

    async def areset(self) -> None:
        """Reset once any in-flight turn has finished."""
        async with self._lock:
            self.reset()

    def get_session(self) -> Optional[SessionSnapshot]:
        if self._memory is None:
            return None
        return self._memory.get_context()

    def session_info(self) -> dict[str, Any]:
        """Compact view of the session for adapters."""
        snapshot = self.get_session()
        if snapshot is None:
            return {"session_id": None, "message_count": 0, "duration": 0.0, "tool_calls": 0}
        return {
            "session_id": snapshot.session_id,
            "message_count": sum(1 for m in snapshot.messages if m.role is not Role.SYSTEM),
            "duration": max(0.0, snapshot.updated_at - snapshot.created_at),
            "tool_calls": len(snapshot.tool_calls),
        }

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def process(self, user_input: str) -> AgentResponse:
        """Handle one user turn and return the final structured response."""
        try:
            self.ensure_ready()
        except AgentNotReadyError as exc:
            logger.warning("process() called before dependencies were bound: %s", exc)
            return AgentResponse(content="", success=False, rounds=0, error=str(exc))

        async with self._lock:
            return await self._run(user_input)

    async def _run(self, user_input: str) -> AgentResponse:
        config = self._config
        rounds = 0
        tools_used: list[str] = []

        try:
            self._ensure_initialized()
            self._memory.add_message(Role.USER, user_input)
            self._trace("Processing input: %s", user_input[:80])

            while rounds < config.max_rounds:
                rounds += 1
                self._trace("Round %d/%d", rounds, config.max_rounds)

                reply = await self._generate(self._memory.get_messages())
                call = extract_tool_call(reply)

                if call is None:
                    self._memory.add_message(Role.ASSISTANT, reply.content)
                    self._trace("Final answer after %d round(s)", rounds)
                    return AgentResponse(
                        content=reply.content,
                        success=True,
                        rounds=rounds,
                        tools_used=tuple(tools_used),
                    )

                self._trace("Calling tool %s (%s) with %s", call.name, call.source, dict(call.args))
                result = await self._tools.execute(call.name, call.args)
                self._memory.add_tool_call(call.name, call.args, result)

                if result.success:
                    tools_used.append(call.name)
                    self._memory.add_message(Role.USER, format_tool_success(call.name, result.value))
                else:
                    self._trace("Tool %s failed: %s", call.name, result.error)
                    self._memory.add_message(Role.USER, format_tool_failure(call.name, result.error))

            return await self._conclude(rounds, tools_used)

        except GatewayError as exc:
            logger.error("Model call failed in round %d: %s", rounds, exc)
            return AgentResponse(
                content=f"Model call failed: {exc}",
                success=False,
                rounds=rounds,
                tools_used=tuple(tools_used),
                error=str(exc),
            )
        except Exception as exc:
            logger.exception("Agent execution failed in round %d", rounds)
            return AgentResponse(
                content=FAULT_MESSAGE,
                success=False,
                rounds=rounds,
                tools_used=tuple(tools_used),
                error=str(exc) or type(exc).__name__,
            )

    async def _conclude(self, rounds: int, tools_used: list[str]) -> AgentResponse:
        """Forced, un-counted final call once the round budget is spent."""
        max_rounds = self._config.max_rounds
        error = f"Reached the maximum of {max_rounds} reasoning rounds"
        logger.warning("%s; asking the model to conclude", error)

        # The conclude prompt goes to the model only; it is not stored.
        history = self._memory.get_messages()
        history.append(Message(role=Role.USER, content=build_final_answer_prompt(max_rounds)))

        result = await self._gateway.generate(history, self._config.generation)
        content = ""
        if result.success:
            content = ModelReply.coerce(result.value).content
            self._memory.add_message(Role.ASSISTANT, content)
        else:
            logger.error("Final answer call failed: %s", result.error)
            error = f"{error}; final answer call failed: {result.error}"

        return AgentResponse(
            content=content,
            success=False,
            rounds=rounds,
            tools_used=tuple(tools_used),
            error=error,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        prompt = build_system_prompt(self._tools.descriptions(), self._config.max_rounds)
        self._memory.set_system_message(prompt)
        self._initialized = True
        logger.info("Agent initialized with %d tool(s)", len(self._tools.names()))

    async def _generate(self, messages: Sequence[Message]) -> ModelReply:
        result = await self._gateway.generate(messages, self._config.generation)
        if not result.success:
            raise GatewayError(result.error)
        return ModelReply.coerce(result.value)

    def _trace(self, msg: str, *args: Any) -> None:
        if self._config.enable_logging:
            logger.info(msg, *args)
