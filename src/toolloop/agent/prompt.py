"""
agent.prompt - Prompt templates for the tool-using agent.

The system prompt lists the registered tools at the time it is built, so
the executor rebuilds it after every reset().
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from toolloop.agent.directive import format_tool_call


def build_system_prompt(tool_descriptions: Sequence[str], max_rounds: int) -> str:
    """Build the system prompt with the current tool catalogue.

    Args:
        tool_descriptions: "<name>: <description>" lines from the registry.
        max_rounds:        Reasoning round budget, stated to the model.

    Returns:
        The system prompt string.
    """
    tool_list = ""
    if tool_descriptions:
        tool_list = "\n\nAvailable tools:\n" + "\n".join(f"- {d}" for d in tool_descriptions)

    datetime_example = format_tool_call("get_current_datetime", {"format": "full"})
    calculator_example = format_tool_call("calculator", {"expression": "2+3*4"})

    return f"""You are a helpful assistant that completes user tasks by calling tools when needed.

## Principles
1. **Keep it simple**: pick the simplest approach that works.
2. **Tools first**: use a tool whenever you need live information or a calculation.
3. **Be concise**: answers should be short and useful.
4. **Round limit**: you have at most {max_rounds} reasoning rounds.

## Tool call format
To use a tool, include exactly one line like this in your reply:
**USE_TOOL: tool_name({{json arguments}})**

Examples:
- Asking for the time: {datetime_example}
- A calculation: {calculator_example}{tool_list}

Choose a tool when it helps, otherwise answer directly."""


def build_final_answer_prompt(max_rounds: int) -> str:
    return (
        f"The maximum of {max_rounds} reasoning rounds has been reached. "
        "Give your final answer now based on the information you have, without calling any tool."
    )


def format_tool_success(name: str, output: Any) -> str:
    return f'Tool "{name}" result:\n{render_output(output)}'


def format_tool_failure(name: str, error: str) -> str:
    return f'Tool "{name}" failed: {error}'


def render_output(output: Any) -> str:
    if isinstance(output, str):
        return output
    try:
        return json.dumps(output, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(output)
