"""
agent.directive - The textual tool-call protocol.

Models that cannot emit native function calls request a tool by writing

    **USE_TOOL: calculator({"expression": "2+3*4"})**

somewhere in their reply. Only the first directive in a reply is honored.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Optional

from toolloop.domain.models import ModelReply, ToolCallRequest

logger = logging.getLogger(__name__)

MARKER = "USE_TOOL"

# One line only. The blob may contain parentheses; it ends at the first ")**"
# and never runs past the start of another directive.
TOOL_CALL_PATTERN = re.compile(r"\*\*USE_TOOL:\s*(\w+)\s*\(((?:(?!\*\*USE_TOOL)[^\n])*?)\)\*\*")


def parse_tool_call(text: str) -> Optional[ToolCallRequest]:
    """Find the first USE_TOOL directive in ``text``.

    An argument blob that is not a JSON object still yields a request,
    with empty args.
    """
    if not text:
        return None
    match = TOOL_CALL_PATTERN.search(text)
    if match is None:
        return None

    name, blob = match.group(1), match.group(2).strip()
    return ToolCallRequest(name=name, args=_parse_args(name, blob), source="text")


def extract_tool_call(reply: ModelReply) -> Optional[ToolCallRequest]:
    """Structured call on the reply first, textual directive second."""
    if reply.tool_call is not None:
        return reply.tool_call
    return parse_tool_call(reply.content)


def format_tool_call(name: str, args: Optional[Mapping[str, Any]] = None) -> str:
    """Render a directive, e.g. for prompt examples or scripted test models."""
    blob = json.dumps(dict(args), ensure_ascii=False) if args else ""
    return f"**{MARKER}: {name}({blob})**"


def _parse_args(name: str, blob: str) -> dict[str, Any]:
    if not blob:
        return {}
    try:
        parsed = json.loads(blob)
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse arguments for tool '%s': %s (%s)", name, blob[:200], exc.msg)
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Arguments for tool '%s' are not a JSON object: %s", name, blob[:200])
        return {}
    return parsed
