from __future__ import annotations

import asyncio
from typing import Any, Mapping

import pytest

from conftest import AddTool, BoomTool, EchoTool
from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.agent.tools.registry import ToolRegistry
from toolloop.domain.exceptions import DuplicateToolError, ToolRegistrationError


class CalcV1(BaseTool):
    name = "calc"
    description = "first"
    category = "math"

    async def execute(self, args: Mapping[str, Any]):
        return self._ok("v1")


class CalcV2(BaseTool):
    name = "calc"
    description = "second"
    category = "numbers"

    async def execute(self, args: Mapping[str, Any]):
        return self._ok("v2")


class BareValueTool(BaseTool):
    name = "bare"
    description = "Returns a plain value"

    async def execute(self, args: Mapping[str, Any]):
        return 42


def test_register_then_get_returns_same_tool():
    reg = ToolRegistry()
    tool = EchoTool()
    reg.register(tool)
    assert reg.get("echo") is tool
    assert "echo" in reg
    assert len(reg) == 1


def test_duplicate_registration_keeps_latest(caplog):
    reg = ToolRegistry()
    reg.register(CalcV1())
    with caplog.at_level("WARNING"):
        reg.register(CalcV2())

    assert reg.names().count("calc") == 1
    assert reg.get("calc").description == "second"
    assert "Replacing" in caplog.text
    # Category index follows the replacement
    assert reg.get_by_category("math") == []
    assert [t.name for t in reg.get_by_category("numbers")] == ["calc"]


def test_duplicate_registration_without_replace_raises():
    reg = ToolRegistry()
    reg.register(CalcV1())
    with pytest.raises(DuplicateToolError):
        reg.register(CalcV2(), replace=False)
    assert reg.get("calc").description == "first"


def test_register_rejects_nameless_tool():
    class Nameless(EchoTool):
        name = ""

    with pytest.raises(ToolRegistrationError):
        ToolRegistry().register(Nameless())


def test_schema_with_undeclared_required_is_rejected():
    with pytest.raises(ValueError):
        ToolParameters(properties={}, required=["missing"])


def test_lookups_never_fail_on_empty_registry():
    reg = ToolRegistry()
    assert reg.get("nothing") is None
    assert reg.all() == []
    assert reg.names() == []
    assert reg.get_by_category("nothing") == []


def test_unregister_removes_from_category():
    reg = ToolRegistry()
    reg.register_multiple([EchoTool(), AddTool()])
    assert reg.unregister("add") is True
    assert reg.unregister("add") is False
    assert reg.get_by_category("math") == []
    assert "math" not in reg.categories()
    assert reg.names() == ["echo"]


def test_descriptions_and_stats(registry):
    assert "echo: Echo the text back" in registry.descriptions()
    stats = registry.stats()
    assert stats["total_tools"] == 3
    assert stats["tools_by_category"] == {"test": 1, "math": 1}
    specs = registry.to_function_specs()
    assert specs[0]["function"]["name"] == "echo"
    assert specs[0]["function"]["parameters"]["required"] == ["text"]


def test_execute_missing_tool_on_empty_registry():
    result = asyncio.run(ToolRegistry().execute("missing", {}))
    assert result.success is False
    assert "not found" in result.error
    assert result.metadata["available_tools"] == []


def test_execute_success(registry):
    result = asyncio.run(registry.execute("add", {"a": 2, "b": 3}))
    assert result.success is True
    assert result.value == 5


@pytest.mark.parametrize(
    "args, fragment",
    [
        ({}, "Missing required parameter: text"),
        ({"text": "x", "extra": 1}, "Unknown parameter: extra"),
        ({"text": 5}, "expected: string"),
    ],
)
def test_execute_validation_failures(registry, args, fragment):
    result = asyncio.run(registry.execute("echo", args))
    assert result.success is False
    assert result.error.startswith("Argument validation failed")
    assert fragment in result.error


def test_bool_is_not_a_number(registry):
    result = asyncio.run(registry.execute("add", {"a": True, "b": 1}))
    assert result.success is False
    assert "expected: number" in result.error


def test_execute_converts_exceptions_to_err():
    reg = ToolRegistry()
    reg.register(BoomTool())
    result = asyncio.run(reg.execute("boom", {}))
    assert result.success is False
    assert result.error == "Tool execution failed: kaboom"
    assert result.metadata["tool"] == "boom"


def test_bare_return_value_is_wrapped():
    reg = ToolRegistry()
    reg.register(BareValueTool())
    result = asyncio.run(reg.execute("bare", {}))
    assert result.success is True
    assert result.value == 42


def test_get_help_marks_required():
    text = AddTool().get_help()
    assert "a*" in text and "b*" in text


def test_parameter_spec_type_is_checked_on_declaration():
    with pytest.raises(ValueError):
        ParameterSpec(type="float")
