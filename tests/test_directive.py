from __future__ import annotations

import logging

from toolloop.agent.directive import extract_tool_call, format_tool_call, parse_tool_call
from toolloop.domain.models import ModelReply, ToolCallRequest


def test_parses_name_and_json_args():
    call = parse_tool_call('Let me compute. **USE_TOOL: calculator({"expression":"2+3*4"})**')
    assert call.name == "calculator"
    assert call.args == {"expression": "2+3*4"}
    assert call.source == "text"


def test_empty_argument_blob():
    call = parse_tool_call("**USE_TOOL: get_current_datetime()**")
    assert call.name == "get_current_datetime"
    assert call.args == {}


def test_arguments_may_contain_parentheses():
    call = parse_tool_call('**USE_TOOL: calculator({"expression": "(1+2)*sqrt(16)"})**')
    assert call.args == {"expression": "(1+2)*sqrt(16)"}


def test_only_first_directive_is_honored():
    text = '**USE_TOOL: echo({"text": "a"})** and **USE_TOOL: add({"a": 1, "b": 2})**'
    call = parse_tool_call(text)
    assert call.name == "echo"


def test_unterminated_directive_does_not_swallow_the_next():
    text = 'I could **USE_TOOL: calculator(maybe) later, but now **USE_TOOL: echo({"text": "hi"})**'
    call = parse_tool_call(text)
    assert call.name == "echo"
    assert call.args == {"text": "hi"}


def test_directive_does_not_span_lines():
    assert parse_tool_call('**USE_TOOL: echo({"text":\n"hi"})**') is None


def test_invalid_json_yields_empty_args_and_warns(caplog):
    with caplog.at_level(logging.WARNING):
        call = parse_tool_call("**USE_TOOL: echo({not json})**")
    assert call.name == "echo"
    assert call.args == {}
    assert "echo" in caplog.text


def test_non_object_json_yields_empty_args():
    call = parse_tool_call("**USE_TOOL: echo([1, 2])**")
    assert call.args == {}


def test_no_directive():
    assert parse_tool_call("The answer is 14.") is None
    assert parse_tool_call("") is None
    assert parse_tool_call("USE_TOOL: echo()") is None


def test_structured_call_wins_over_text():
    reply = ModelReply(
        content='**USE_TOOL: echo({"text": "text"})**',
        tool_call=ToolCallRequest(name="add", args={"a": 1, "b": 2}, source="structured"),
    )
    call = extract_tool_call(reply)
    assert call.name == "add"
    assert call.source == "structured"


def test_text_fallback_when_no_structured_call():
    reply = ModelReply(content='**USE_TOOL: echo({"text": "hi"})**')
    assert extract_tool_call(reply).args == {"text": "hi"}


def test_format_round_trips_through_parser():
    text = format_tool_call("calculator", {"expression": "sqrt(2)"})
    assert text == '**USE_TOOL: calculator({"expression": "sqrt(2)"})**'
    assert parse_tool_call(text).args == {"expression": "sqrt(2)"}
    assert format_tool_call("get_current_datetime") == "**USE_TOOL: get_current_datetime()**"
