"""
agent.tools.datetime_tool - Current local date and time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.domain.results import Result

_FORMATS = {
    "date": "%Y-%m-%d %A",
    "time": "%H:%M:%S",
    "full": "%Y-%m-%d %A %H:%M:%S",
}


class DateTimeTool(BaseTool):
    """Report the current date, time and weekday."""

    name = "get_current_datetime"
    description = "Get the current date, time and weekday"
    category = "system"
    parameters = ToolParameters(
        properties={
            "format": ParameterSpec(
                type="string",
                description="full (date and time), date (date only), time (time only)",
                enum=["full", "date", "time"],
            ),
        },
    )

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock

    async def execute(self, args: Mapping[str, Any]) -> Result:
        fmt = _FORMATS.get(args.get("format") or "full", _FORMATS["full"])
        return self._ok(self._clock().strftime(fmt))
