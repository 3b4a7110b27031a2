"""
agent.tools.base - Base tool interface and parameter schema.

All agent tools inherit from BaseTool and return a Result (Ok / Err).
The parameter schema is a pydantic model, so a malformed schema is
rejected when the tool class is built, before it ever reaches the
registry. Arguments are checked again at dispatch time by validate_args().
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping as MappingABC
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from toolloop.domain.results import Err, Ok, Result

ParameterType = Literal["string", "number", "integer", "boolean", "array", "object"]


class ParameterSpec(BaseModel):
    """Declaration of one tool argument."""

    model_config = ConfigDict(frozen=True)

    type: Optional[ParameterType] = None
    description: str = ""
    enum: Optional[list[Any]] = None


class ToolParameters(BaseModel):
    """JSON-schema-like object describing a tool's arguments."""

    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: dict[str, ParameterSpec] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _required_are_declared(self) -> ToolParameters:
        undeclared = [name for name in self.required if name not in self.properties]
        if undeclared:
            raise ValueError(
                f"Required parameters not declared in properties: {', '.join(undeclared)}"
            )
        return self

    def to_json_schema(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _matches_type(value: Any, expected: str) -> bool:
    if expected == "string":
        return isinstance(value, str)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "array":
        return isinstance(value, (list, tuple))
    if expected == "object":
        return isinstance(value, MappingABC)
    return True


class BaseTool(ABC):
    """Abstract base for all agent tools.

    Subclasses set the class attributes and implement execute().
    """

    name: str
    description: str
    category: Optional[str] = None
    version: str = "1.0.0"
    parameters: ToolParameters = ToolParameters()

    @abstractmethod
    async def execute(self, args: Mapping[str, Any]) -> Result:
        """Run the tool with already-validated arguments."""
        ...

    def validate_args(self, args: Mapping[str, Any]) -> Result:
        """Check required presence, unknown names and primitive types."""
        for name in self.parameters.required:
            if name not in args:
                return self._err(f"Missing required parameter: {name}")

        for key, value in args.items():
            spec = self.parameters.properties.get(key)
            if spec is None:
                return self._err(f"Unknown parameter: {key}")
            if spec.type and not _matches_type(value, spec.type):
                return self._err(f"Parameter {key} has the wrong type, expected: {spec.type}")

        return self._ok(True)

    def describe(self) -> str:
        return f"{self.name}: {self.description}"

    def get_help(self) -> str:
        required = set(self.parameters.required)
        lines = []
        for key, spec in self.parameters.properties.items():
            marker = "*" if key in required else ""
            type_info = f"({spec.type})" if spec.type else ""
            lines.append(f"  {key}{marker} {type_info}: {spec.description}")
        body = "\n".join(lines) if lines else "  (none)"
        return f"{self.name} - {self.description}\n\nParameters:\n{body}\n\n* marks required parameters"

    def to_function_spec(self) -> dict[str, Any]:
        """OpenAI-style function schema for native tool calling."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.to_json_schema(),
            },
        }

    # ------------------------------------------------------------------
    # Result helpers
    # ------------------------------------------------------------------

    def _ok(self, value: Any) -> Ok:
        return Ok(value, metadata={"tool": self.name, "timestamp": time.time()})

    def _err(self, error: str) -> Err:
        return Err(error, metadata={"tool": self.name, "timestamp": time.time()})
