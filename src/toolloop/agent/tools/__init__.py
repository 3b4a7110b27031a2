"""
agent.tools - Tool base class, registry and built-in tools.
"""

from __future__ import annotations

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.agent.tools.calculator import CalculatorTool
from toolloop.agent.tools.datetime_tool import DateTimeTool
from toolloop.agent.tools.json_parser import JsonParserTool
from toolloop.agent.tools.registry import ToolRegistry
from toolloop.agent.tools.statistics import StatisticsTool
from toolloop.agent.tools.system_info import SystemInfoTool
from toolloop.agent.tools.text_analyzer import TextAnalyzerTool


def create_builtin_tools() -> list[BaseTool]:
    """Fresh instances of every built-in tool."""
    return [
        DateTimeTool(),
        CalculatorTool(),
        SystemInfoTool(),
        StatisticsTool(),
        TextAnalyzerTool(),
        JsonParserTool(),
    ]


__all__ = [
    "BaseTool",
    "CalculatorTool",
    "DateTimeTool",
    "JsonParserTool",
    "ParameterSpec",
    "StatisticsTool",
    "SystemInfoTool",
    "TextAnalyzerTool",
    "ToolParameters",
    "ToolRegistry",
    "create_builtin_tools",
]
