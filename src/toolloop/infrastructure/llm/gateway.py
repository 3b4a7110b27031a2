"""
infrastructure.llm.gateway - LangChain-backed model gateway.

Implements the ModelGateway port: converts domain Messages to LangChain
messages, awaits the chat model and wraps the outcome in Ok / Err. A
failed call never raises out of generate().

LangChain chat models fix temperature and max_tokens at construction,
so one model is built (and cached) per (temperature, max_tokens) pair.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from toolloop.domain.models import GenerationConfig, Message, ModelReply, Role, ToolCallRequest
from toolloop.domain.results import Err, Ok, Result
from toolloop.infrastructure.llm.llm_builder import LLMFactory

logger = logging.getLogger(__name__)

_MESSAGE_TYPES = {
    Role.SYSTEM: SystemMessage,
    Role.USER: HumanMessage,
    Role.ASSISTANT: AIMessage,
}


def to_langchain_messages(messages: Sequence[Message]) -> list[BaseMessage]:
    return [_MESSAGE_TYPES[m.role](content=m.content) for m in messages]


def reply_from_message(message: Any) -> ModelReply:
    """Build a ModelReply from an AIMessage (or anything with .content)."""
    content = getattr(message, "content", message)
    if isinstance(content, list):
        # Content blocks: keep the text parts.
        content = "".join(
            block if isinstance(block, str) else str(block.get("text", ""))
            for block in content
            if isinstance(block, (str, dict))
        )

    tool_call = None
    tool_calls = getattr(message, "tool_calls", None) or []
    if tool_calls:
        first = tool_calls[0]
        args = first.get("args") or {}
        tool_call = ToolCallRequest(
            name=first["name"],
            args=args if isinstance(args, dict) else {},
            source="structured",
        )
    return ModelReply(content=str(content or ""), tool_call=tool_call)


class LangChainGateway:
    """ModelGateway over any LangChain chat model."""

    def __init__(
        self,
        llm_factory: LLMFactory,
        *,
        provider: str = "",
        model: str = "",
        tool_specs: Optional[Callable[[], list[dict[str, Any]]]] = None,
    ):
        self._llm_factory = llm_factory
        self._provider = provider
        self._model = model
        self._tool_specs = tool_specs
        self._llms: dict[tuple[float, int], BaseChatModel] = {}

    @property
    def native_tool_calling(self) -> bool:
        return self._tool_specs is not None

    def get_llm(self, config: GenerationConfig) -> BaseChatModel:
        key = (config.temperature, config.max_tokens)
        llm = self._llms.get(key)
        if llm is None:
            logger.debug("Building chat model for temperature=%s max_tokens=%s", *key)
            llm = self._llm_factory(config.temperature, config.max_tokens)
            self._llms[key] = llm
        return llm

    async def generate(self, messages: Sequence[Message], config: GenerationConfig) -> Result:
        """Call the model. Failures come back as Err."""
        metadata = {"provider": self._provider, "model": self._model}
        try:
            runnable: Any = self.get_llm(config)
            if self._tool_specs is not None:
                specs = self._tool_specs()
                if specs:
                    runnable = runnable.bind_tools(specs)
            response = await runnable.ainvoke(to_langchain_messages(messages))
        except Exception as exc:
            logger.error("Model call failed (%s/%s): %s", self._provider, self._model, exc)
            return Err(str(exc) or type(exc).__name__, metadata=metadata)

        reply = reply_from_message(response)
        usage = getattr(response, "usage_metadata", None)
        if usage:
            metadata["usage"] = dict(usage)
        return Ok(reply, metadata=metadata)

    async def is_available(self) -> bool:
        """One-token health check against the backend."""
        ping = [Message(role=Role.USER, content="ping")]
        result = await self.generate(ping, GenerationConfig(temperature=0.0, max_tokens=1))
        return result.success

    def get_info(self) -> dict[str, Any]:
        return {
            "provider": self._provider,
            "model": self._model,
            "native_tool_calling": self.native_tool_calling,
            "cached_models": len(self._llms),
        }
