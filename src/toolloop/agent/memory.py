"""
agent.memory - Per-session conversation memory.

Holds the ordered message log and a separate tool-call log for one
session. NOT global: every agent instance gets its own memory.

Trimming rules:
    - messages: system messages are always kept, the oldest
      non-system messages are evicted first.
    - tool calls: plain FIFO eviction.

Everything is in-process and ephemeral; nothing is persisted.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Mapping, Optional

from toolloop.domain.models import Message, Role, SessionSnapshot, ToolCallRecord, new_id
from toolloop.domain.results import Result

logger = logging.getLogger(__name__)


class ConversationMemory:
    """Session-scoped message and tool-call history with bounded size."""

    def __init__(self, max_messages: int = 50, max_tool_calls: int = 20):
        if max_messages < 1:
            raise ValueError("max_messages must be at least 1")
        if max_tool_calls < 1:
            raise ValueError("max_tool_calls must be at least 1")

        self._max_messages = max_messages
        self._max_tool_calls = max_tool_calls
        self._session_id = f"session_{new_id()}"
        self._messages: list[Message] = []
        self._tool_calls: list[ToolCallRecord] = []
        self._metadata: dict[str, Any] = {}
        self._created_at = time.time()
        self._updated_at = self._created_at

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def max_messages(self) -> int:
        return self._max_messages

    @property
    def max_tool_calls(self) -> int:
        return self._max_tool_calls

    @property
    def created_at(self) -> float:
        return self._created_at

    @property
    def updated_at(self) -> float:
        return self._updated_at

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_message(
        self,
        role: Role,
        content: str,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Message:
        """Append a message, assigning its id and timestamp, then trim."""
        message = Message(role=Role(role), content=content, metadata=dict(metadata or {}))
        self._messages.append(message)
        self._trim_messages()
        self._touch()
        return message

    def add_tool_call(
        self,
        name: str,
        args: Mapping[str, Any],
        result: Optional[Result] = None,
    ) -> ToolCallRecord:
        record = ToolCallRecord(name=name, args=dict(args), result=result)
        self._tool_calls.append(record)
        self._trim_tool_calls()
        self._touch()
        return record

    def set_system_message(self, content: str) -> Message:
        """Replace any existing system message; the new one goes first."""
        self._messages = [m for m in self._messages if m.role is not Role.SYSTEM]
        message = Message(role=Role.SYSTEM, content=content)
        self._messages.insert(0, message)
        self._trim_messages()
        self._touch()
        return message

    def set_metadata(self, key: str, value: Any) -> None:
        self._metadata[key] = value
        self._touch()

    def clear(self) -> None:
        """Drop conversation history and tool calls, keeping the system message."""
        self._messages = [m for m in self._messages if m.role is Role.SYSTEM]
        self._tool_calls.clear()
        self._metadata.clear()
        self._touch()
        logger.debug("Cleared memory for %s", self._session_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_messages(self, limit: Optional[int] = None) -> list[Message]:
        """Most recent ``limit`` messages (or all), oldest first. Returns a copy."""
        return _tail(self._messages, limit)

    def get_tool_calls(self, limit: Optional[int] = None) -> list[ToolCallRecord]:
        return _tail(self._tool_calls, limit)

    def recent_tool_calls(self, limit: int = 5) -> list[ToolCallRecord]:
        return _tail(self._tool_calls, limit)

    def get_system_message(self) -> Optional[Message]:
        if self._messages and self._messages[0].role is Role.SYSTEM:
            return self._messages[0]
        return None

    def get_context(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self._session_id,
            messages=tuple(self._messages),
            tool_calls=tuple(self._tool_calls),
            metadata=dict(self._metadata),
            created_at=self._created_at,
            updated_at=self._updated_at,
        )

    def messages_for_model(self, limit: Optional[int] = None) -> list[dict[str, str]]:
        """Plain role/content dicts, the shape chat completion APIs expect."""
        return [{"role": m.role.value, "content": m.content} for m in self.get_messages(limit)]

    def summary(self) -> str:
        minutes = round(self.duration() / 60)
        conversation = sum(1 for m in self._messages if m.role is not Role.SYSTEM)
        return (
            f"Session {self._session_id}: {minutes} min, "
            f"{conversation} messages, {len(self._tool_calls)} tool calls"
        )

    def stats(self) -> dict[str, Any]:
        by_role = {role.value: 0 for role in Role}
        for message in self._messages:
            by_role[message.role.value] += 1
        return {
            "session_id": self._session_id,
            "total_messages": len(self._messages),
            "messages_by_role": by_role,
            "tool_calls": len(self._tool_calls),
            "session_duration": self.duration(),
            "last_activity": datetime.fromtimestamp(self._updated_at).isoformat(),
        }

    def duration(self) -> float:
        """Seconds since the session was created."""
        return time.time() - self._created_at

    def is_active(self, timeout_seconds: float = 1800) -> bool:
        return time.time() - self._updated_at < timeout_seconds

    def __len__(self) -> int:
        return len(self._messages)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _trim_messages(self) -> None:
        overflow = len(self._messages) - self._max_messages
        if overflow <= 0:
            return

        system = [m for m in self._messages if m.role is Role.SYSTEM]
        others = [m for m in self._messages if m.role is not Role.SYSTEM]
        keep = self._max_messages - len(system)
        # [-0:] would keep everything
        others = others[-keep:] if keep > 0 else []
        self._messages = system + others

    def _trim_tool_calls(self) -> None:
        if len(self._tool_calls) > self._max_tool_calls:
            self._tool_calls = self._tool_calls[-self._max_tool_calls:]

    def _touch(self) -> None:
        self._updated_at = time.time()


def _tail(items: list, limit: Optional[int]) -> list:
    if limit is None:
        return list(items)
    if limit <= 0:
        return []
    return items[-limit:]
