"""
domain.ports - Abstract interfaces (Protocols) for the agent's collaborators.

These define WHAT the loop needs without specifying HOW. The agent
executor depends only on these protocols; the concrete memory, registry
and LangChain gateway satisfy them structurally.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

from toolloop.domain.models import (
    GenerationConfig,
    Message,
    Role,
    SessionSnapshot,
    ToolCallRecord,
)
from toolloop.domain.results import Result


@runtime_checkable
class ModelGateway(Protocol):
    """Opaque text-generation backend.

    Failures are reported as Err, not raised. The value of an Ok is a
    ModelReply or plain text.
    """

    async def generate(
        self, messages: Sequence[Message], config: GenerationConfig,
    ) -> Result: ...


@runtime_checkable
class ToolCatalog(Protocol):
    """Name-indexed tool lookup and dispatch."""

    def names(self) -> list[str]: ...
    def descriptions(self) -> list[str]: ...
    async def execute(self, name: str, args: Mapping[str, Any]) -> Result: ...


@runtime_checkable
class ConversationStore(Protocol):
    """Session-scoped message and tool-call log."""

    def add_message(
        self, role: Role, content: str, metadata: Optional[Mapping[str, Any]] = None,
    ) -> Message: ...
    def add_tool_call(
        self, name: str, args: Mapping[str, Any], result: Optional[Result] = None,
    ) -> ToolCallRecord: ...
    def get_messages(self, limit: Optional[int] = None) -> list[Message]: ...
    def set_system_message(self, content: str) -> Message: ...
    def clear(self) -> None: ...
    def get_context(self) -> SessionSnapshot: ...
