"""
agent.tools.system_info - Runtime environment details.
"""

from __future__ import annotations

import json
import os
import platform
import sys
from typing import Any, Mapping

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.domain.results import Result

INFO_TYPES = ("platform", "python", "process", "all")


def _platform_info() -> dict[str, Any]:
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
    }


def _python_info() -> dict[str, Any]:
    return {
        "version": platform.python_version(),
        "implementation": platform.python_implementation(),
        "executable": sys.executable,
        "cwd": os.getcwd(),
    }


def _process_info() -> dict[str, Any]:
    return {
        "pid": os.getpid(),
        "cpu_count": os.cpu_count(),
        "allocated_blocks": sys.getallocatedblocks(),
    }


_COLLECTORS = {
    "platform": _platform_info,
    "python": _python_info,
    "process": _process_info,
}


class SystemInfoTool(BaseTool):
    """Describe the platform, interpreter and current process."""

    name = "get_system_info"
    description = "Get information about the runtime environment"
    category = "system"
    parameters = ToolParameters(
        properties={
            "info_type": ParameterSpec(
                type="string",
                description="platform, python, process, or all",
                enum=list(INFO_TYPES),
            ),
        },
    )

    async def execute(self, args: Mapping[str, Any]) -> Result:
        info_type = args.get("info_type") or "all"
        if info_type not in INFO_TYPES:
            return self._err(f"Unknown info_type '{info_type}', expected one of {', '.join(INFO_TYPES)}")

        if info_type == "all":
            info = {key: collect() for key, collect in _COLLECTORS.items()}
        else:
            info = _COLLECTORS[info_type]()
        return self._ok(json.dumps(info, indent=2))
