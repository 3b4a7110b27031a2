"""
agent.tools.json_parser - Parse JSON and extract values by dotted path.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.domain.results import Result


def resolve_path(data: Any, path: str) -> Any:
    """Follow a dotted path like ``items.0.name``. Raises KeyError on a miss."""
    current = data
    for part in path.split("."):
        if isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                raise KeyError(part) from None
        elif isinstance(current, dict):
            if part not in current:
                raise KeyError(part)
            current = current[part]
        else:
            raise KeyError(part)
    return current


class JsonParserTool(BaseTool):
    """Validate, pretty-print and query JSON documents."""

    name = "json_parser"
    description = "Parse a JSON string, optionally extract a value by dotted path (e.g. items.0.name), and pretty-print it"
    category = "data"
    parameters = ToolParameters(
        properties={
            "json_string": ParameterSpec(type="string", description="The JSON document"),
            "path": ParameterSpec(type="string", description="Optional dotted path to extract"),
        },
        required=["json_string"],
    )

    async def execute(self, args: Mapping[str, Any]) -> Result:
        try:
            data = json.loads(args["json_string"])
        except json.JSONDecodeError as exc:
            return self._err(f"Invalid JSON: {exc.msg} at line {exc.lineno} column {exc.colno}")

        path = args.get("path")
        if path:
            try:
                data = resolve_path(data, path)
            except KeyError as exc:
                return self._err(f"Path '{path}' not found (missing segment {exc.args[0]!r})")

        return self._ok(json.dumps(data, indent=2, ensure_ascii=False))
