"""Shared numeric helpers for cross-run aggregation."""

from __future__ import annotations

import math
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N)."""
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(math.fsum((value - avg) ** 2 for value in values) / len(values))


def downside_deviation(values: Sequence[float], target: float = 0.0) -> float:
    """Root mean square of the shortfall below ``target``.

    Every value counts in the denominator, including those at or above the
    target, so ``downside_deviation([1, -1]) == sqrt(0.5)``.
    """
    if not values:
        return 0.0
    shortfall = math.fsum(min(0.0, value - target) ** 2 for value in values)
    return math.sqrt(shortfall / len(values))


def median(sorted_values: Sequence[float]) -> float:
    """Median of an ascending sequence; even lengths average the middle pair."""
    n = len(sorted_values)
    if n == 0:
        return 0.0
    mid = n // 2
    if n % 2:
        return sorted_values[mid]
    return (sorted_values[mid - 1] + sorted_values[mid]) / 2


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile of an ascending sequence."""
    n = len(sorted_values)
    if n == 0:
        return 0.0
    index = math.ceil(p / 100 * n) - 1
    return sorted_values[max(0, min(index, n - 1))]


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator
