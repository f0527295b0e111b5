"""JSON-friendly payloads for simulation results."""

from __future__ import annotations

import math
from dataclasses import asdict
from enum import Enum
from typing import Any

from edge_sim.simulator.insights import AnalysisInsights
from edge_sim.simulator.models import MonteCarloResult, SimulationRun


def _clean(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return None
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, dict):
        return {key: _clean(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_clean(item) for item in value]
    return value


def serialize_run(run: SimulationRun, include_trades: bool = True) -> dict[str, Any]:
    payload = asdict(run)
    if not include_trades:
        payload.pop("trades")
    return _clean(payload)


def serialize_result(result: MonteCarloResult, include_trades: bool = True) -> dict[str, Any]:
    return {
        "seed": result.seed,
        "params": _clean(asdict(result.params)),
        "statistics": _clean(asdict(result.statistics)),
        "distribution_buckets": [_clean(asdict(bucket)) for bucket in result.distribution_buckets],
        "sample_run": serialize_run(result.sample_run, include_trades=include_trades),
    }


def serialize_insights(insights: AnalysisInsights) -> dict[str, Any]:
    return _clean(asdict(insights))
