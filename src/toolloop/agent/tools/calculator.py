"""
agent.tools.calculator - Safe arithmetic evaluation.

Expressions are parsed with ``ast`` and only a whitelist of node types,
functions and constants is evaluated; nothing is ever passed to eval().
"""

from __future__ import annotations

import ast
import math
import operator
from typing import Any, Callable, Mapping

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.domain.results import Result

_BINARY_OPS: dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: dict[type, Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log,
    "log10": math.log10,
    "exp": math.exp,
    "abs": abs,
    "pow": pow,
    "min": min,
    "max": max,
    "round": round,
    "floor": math.floor,
    "ceil": math.ceil,
}

_CONSTANTS = {"pi": math.pi, "e": math.e, "PI": math.pi, "E": math.e}

# Powers are size-checked before evaluation so 9**9**9 or (9**9999)**9999
# cannot stall the event loop.
_MAX_EXPONENT = 10_000
_MAX_RESULT_BITS = 100_000


def _check_power(base: Any, exponent: Any) -> None:
    if abs(exponent) > _MAX_EXPONENT:
        raise ValueError("exponent too large")
    if isinstance(base, int) and isinstance(exponent, int) and exponent > 0:
        if exponent * math.log2(abs(base) or 1) > _MAX_RESULT_BITS:
            raise ValueError("result too large")


class _Evaluator:
    def visit(self, node: ast.AST) -> Any:
        if isinstance(node, ast.Expression):
            return self.visit(node.body)
        if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) \
                and not isinstance(node.value, bool):
            return node.value
        if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
            left, right = self.visit(node.left), self.visit(node.right)
            if isinstance(node.op, ast.Pow):
                _check_power(left, right)
            return _BINARY_OPS[type(node.op)](left, right)
        if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
            return _UNARY_OPS[type(node.op)](self.visit(node.operand))
        if isinstance(node, ast.Name) and node.id in _CONSTANTS:
            return _CONSTANTS[node.id]
        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) \
                and node.func.id in _FUNCTIONS and not node.keywords:
            args = [self.visit(arg) for arg in node.args]
            if node.func.id == "pow" and len(args) >= 2:
                _check_power(args[0], args[1])
            return _FUNCTIONS[node.func.id](*args)
        raise ValueError(f"unsupported syntax: {ast.dump(node)[:60]}")


def evaluate(expression: str) -> float | int:
    """Evaluate an arithmetic expression. Raises ValueError / ArithmeticError."""
    # JavaScript-style Math.sqrt(16) is common in model output.
    cleaned = expression.replace("Math.", "").strip()
    try:
        tree = ast.parse(cleaned, mode="eval")
    except SyntaxError as exc:
        raise ValueError(f"invalid expression: {exc.msg}") from exc
    return _Evaluator().visit(tree)


class CalculatorTool(BaseTool):
    """Evaluate arithmetic and common math functions."""

    name = "calculator"
    description = (
        "Evaluate a math expression: + - * / // % **, parentheses, "
        "sqrt, sin, cos, tan, log, log10, exp, abs, pow, min, max, round, floor, ceil, pi, e"
    )
    category = "math"
    parameters = ToolParameters(
        properties={
            "expression": ParameterSpec(
                type="string",
                description="Math expression, e.g. 2+3*4, sqrt(16), sin(pi/2)",
            ),
        },
        required=["expression"],
    )

    async def execute(self, args: Mapping[str, Any]) -> Result:
        expression = args["expression"].strip()
        if not expression:
            return self._err("Expression is empty")
        try:
            value = evaluate(expression)
        except (ValueError, TypeError, ArithmeticError) as exc:
            return self._err(f"Calculation failed: {exc}")
        return self._ok(f"{expression} = {value}")
