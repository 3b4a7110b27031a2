"""
domain.models - Value objects for the agent core.

These are immutable data containers with no dependencies on
infrastructure (no LangChain, no HTTP clients). Conversation memory
owns the Message and ToolCallRecord sequences; the agent loop only
produces AgentResponse objects.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence
from uuid import uuid4

from toolloop.domain.results import Result


def new_id() -> str:
    return uuid4().hex


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------

class Role(str, Enum):
    """Author of a message in the conversation log."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single entry in the conversation log.

    Immutable once created. Memory assigns ``id`` and ``timestamp`` when the
    message is appended.
    """
    role: Role
    content: str
    id: str = field(default_factory=new_id)
    timestamp: float = field(default_factory=time.time)
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCallRecord:
    """One dispatched tool call and its final outcome.

    ``result`` is absent only for records created before execution
    finished; a failed call stores its Err as the final result.
    """
    name: str
    args: Mapping[str, Any]
    result: Optional[Result] = None
    id: str = field(default_factory=new_id)
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class SessionSnapshot:
    """Copy of the session state owned by one ConversationMemory."""
    session_id: str
    messages: tuple[Message, ...]
    tool_calls: tuple[ToolCallRecord, ...]
    metadata: Mapping[str, Any]
    created_at: float
    updated_at: float


# ---------------------------------------------------------------------------
# Model gateway
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters forwarded to the model gateway on every call."""
    temperature: float = 0.7
    max_tokens: int = 2000


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool invocation requested by the model.

    source is "structured" when the backend emitted a native function call,
    "text" when it was parsed from the USE_TOOL directive in the reply.
    """
    name: str
    args: Mapping[str, Any] = field(default_factory=dict)
    source: str = "text"


@dataclass(frozen=True)
class ModelReply:
    """What the gateway returns on success: reply text plus an optional structured call."""
    content: str
    tool_call: Optional[ToolCallRequest] = None

    @classmethod
    def coerce(cls, value: Any) -> ModelReply:
        """Accept either a ModelReply or plain text from a gateway."""
        if isinstance(value, ModelReply):
            return value
        if value is None:
            return cls(content="")
        return cls(content=str(value))


# ---------------------------------------------------------------------------
# Agent loop
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AgentConfig:
    """Loop-level settings.

    max_rounds:      Counted model calls before the forced conclusion call.
    timeout:         Seconds, forwarded to the gateway builder. The loop
                     itself enforces no timeout.
    enable_logging:  Emit the per-round INFO trace.
    """
    max_rounds: int = 10
    temperature: float = 0.7
    max_tokens: int = 2000
    timeout: float = 30.0
    enable_logging: bool = True

    def __post_init__(self) -> None:
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")

    @property
    def generation(self) -> GenerationConfig:
        return GenerationConfig(temperature=self.temperature, max_tokens=self.max_tokens)


@dataclass(frozen=True)
class AgentResponse:
    """Terminal output of one AgentExecutor.process() call."""
    content: str
    success: bool
    rounds: int
    tools_used: Sequence[str] = field(default_factory=tuple)
    error: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tools_used"] = list(self.tools_used)
        data["metadata"] = dict(self.metadata)
        return data
