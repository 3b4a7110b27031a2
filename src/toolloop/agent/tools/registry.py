"""
agent.tools.registry - Tool registration, discovery, and invocation.

Central registry that indexes tools by name and category, validates
arguments, and converts every tool fault into an Err so nothing a tool
does can escape into the agent loop.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from toolloop.agent.tools.base import BaseTool, ToolParameters
from toolloop.domain.exceptions import DuplicateToolError, ToolRegistrationError
from toolloop.domain.results import Err, Ok, Result, is_result

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Manages tool registration and invocation."""

    def __init__(self):
        self._tools: dict[str, BaseTool] = {}
        self._categories: dict[str, list[str]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, tool: BaseTool, *, replace: bool = True) -> None:
        """Register a tool by its name.

        A second registration under the same name replaces the first unless
        replace=False, in which case DuplicateToolError is raised.
        """
        name = getattr(tool, "name", "")
        if not name:
            raise ToolRegistrationError(f"Tool {tool!r} has no name")
        if not isinstance(getattr(tool, "parameters", None), ToolParameters):
            raise ToolRegistrationError(f"Tool '{name}' does not declare ToolParameters")

        existing = self._tools.get(name)
        if existing is not None:
            if not replace:
                raise DuplicateToolError(f"Tool '{name}' is already registered")
            logger.warning("Replacing previously registered tool: %s", name)
            self._drop_from_category(existing)

        self._tools[name] = tool
        if tool.category:
            members = self._categories.setdefault(tool.category, [])
            if name not in members:
                members.append(name)
        logger.debug("Registered tool: %s (category=%s)", name, tool.category)

    def register_multiple(self, tools: Iterable[BaseTool], *, replace: bool = True) -> None:
        for tool in tools:
            self.register(tool, replace=replace)

    def unregister(self, name: str) -> bool:
        """Remove a tool; return whether it existed."""
        tool = self._tools.pop(name, None)
        if tool is None:
            return False
        self._drop_from_category(tool)
        logger.debug("Unregistered tool: %s", name)
        return True

    def clear(self) -> None:
        self._tools.clear()
        self._categories.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> Optional[BaseTool]:
        """Get a tool by name, or None."""
        return self._tools.get(name)

    def all(self) -> list[BaseTool]:
        """Return all registered tools."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        """Return all registered tool names."""
        return list(self._tools.keys())

    def get_by_category(self, category: str) -> list[BaseTool]:
        return [self._tools[name] for name in self._categories.get(category, []) if name in self._tools]

    def categories(self) -> list[str]:
        return list(self._categories.keys())

    def descriptions(self) -> list[str]:
        """One "name: description" line per tool, for the system prompt."""
        return [tool.describe() for tool in self._tools.values()]

    def to_function_specs(self) -> list[dict[str, Any]]:
        return [tool.to_function_spec() for tool in self._tools.values()]

    def stats(self) -> dict[str, Any]:
        return {
            "total_tools": len(self._tools),
            "categories": len(self._categories),
            "tools_by_category": {cat: len(names) for cat, names in self._categories.items()},
        }

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def execute(self, name: str, args: Mapping[str, Any]) -> Result:
        """Validate and invoke a tool. Never raises."""
        tool = self._tools.get(name)
        if tool is None:
            return Err(
                f'Tool "{name}" not found',
                metadata={"available_tools": self.names()},
            )

        call_args = dict(args)
        try:
            validation = tool.validate_args(call_args)
        except Exception as exc:
            validation = Err(str(exc))
        if not validation.success:
            return Err(
                f"Argument validation failed: {validation.error}",
                metadata={"tool": name, "args": call_args},
            )

        try:
            result = await tool.execute(call_args)
        except Exception as exc:
            logger.exception("Tool '%s' raised during execution", name)
            return Err(
                f"Tool execution failed: {exc}",
                metadata={"tool": name, "args": call_args},
            )

        if not is_result(result):
            result = Ok(result, metadata={"tool": name})
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _drop_from_category(self, tool: BaseTool) -> None:
        if not tool.category:
            return
        members = self._categories.get(tool.category)
        if members is None:
            return
        if tool.name in members:
            members.remove(tool.name)
        if not members:
            del self._categories[tool.category]
