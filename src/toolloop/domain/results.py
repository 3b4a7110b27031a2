"""
domain.results - Tagged union returned by every fallible boundary.

A tool execution, an argument validation or a model call either succeeds
with a value (Ok) or fails with a reason (Err). The two cases are separate
types, so a result that is both successful and failed cannot be built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, Mapping, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T
    metadata: Mapping[str, Any] = field(default_factory=dict)

    success: ClassVar[bool] = True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a human-readable reason."""

    error: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    success: ClassVar[bool] = False


Result = Union[Ok[Any], Err]


def is_result(obj: object) -> bool:
    return isinstance(obj, (Ok, Err))
