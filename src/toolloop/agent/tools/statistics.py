"""
agent.tools.statistics - Descriptive statistics over a numeric series.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Mapping

import numpy as np

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.domain.results import Result

OPERATIONS = ("mean", "median", "mode", "variance", "stddev", "min", "max", "range", "percentile")


def _mode(values: np.ndarray) -> float:
    # Smallest of the most frequent values, so the answer is deterministic.
    counts = Counter(values.tolist())
    top = max(counts.values())
    return min(value for value, count in counts.items() if count == top)


class StatisticsTool(BaseTool):
    """Compute mean, median, spread and percentiles."""

    name = "statistics"
    description = "Compute statistics (mean, median, mode, variance, stddev, min, max, range, percentile) for a list of numbers"
    category = "math"
    parameters = ToolParameters(
        properties={
            "data": ParameterSpec(type="array", description="Numbers to analyse"),
            "operations": ParameterSpec(
                type="array",
                description=f"Operations to run: {', '.join(OPERATIONS)}",
            ),
            "percentile": ParameterSpec(type="number", description="Percentile 0-100 (default 50)"),
        },
        required=["data", "operations"],
    )

    async def execute(self, args: Mapping[str, Any]) -> Result:
        data = args["data"]
        if not data:
            return self._err("data must contain at least one number")
        if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in data):
            return self._err("data must contain only numbers")

        operations = list(args["operations"])
        unknown = [op for op in operations if op not in OPERATIONS]
        if unknown:
            return self._err(f"Unknown operations: {', '.join(map(str, unknown))}")

        q = args.get("percentile", 50)
        if not 0 <= q <= 100:
            return self._err("percentile must be between 0 and 100")

        values = np.asarray(data, dtype=float)
        output: dict[str, float] = {}
        for op in operations:
            if op == "mean":
                output["mean"] = float(values.mean())
            elif op == "median":
                output["median"] = float(np.median(values))
            elif op == "mode":
                output["mode"] = float(_mode(values))
            elif op == "variance":
                output["variance"] = float(values.var())
            elif op == "stddev":
                output["stddev"] = float(values.std())
            elif op == "min":
                output["min"] = float(values.min())
            elif op == "max":
                output["max"] = float(values.max())
            elif op == "range":
                output["range"] = float(values.max() - values.min())
            elif op == "percentile":
                output[f"percentile{q:g}"] = float(np.percentile(values, q))
        return self._ok(output)
