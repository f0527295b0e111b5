"""Outcome histogram and representative-run selection."""

from __future__ import annotations

from typing import Sequence

from edge_sim.simulator.models import DistributionBucket, SimulationRun

BUCKET_COUNT = 20


def bucketize(
    values: Sequence[float],
    total_runs: int | None = None,
    bucket_count: int = BUCKET_COUNT,
) -> list[DistributionBucket]:
    """Equal-width buckets spanning [min, max] of ``values``.

    Buckets are half-open except the last one, which also takes the maximum.
    """
    if not values:
        return []
    total = total_runs if total_runs is not None else len(values)
    low = min(values)
    high = max(values)
    width = (high - low) / bucket_count or 1.0

    buckets: list[DistributionBucket] = []
    for index in range(bucket_count):
        start = low + index * width
        end = low + (index + 1) * width
        if index == bucket_count - 1:
            # the closed edge must reach the maximum despite rounding
            end = max(end, high)
            count = sum(1 for value in values if start <= value <= end)
        else:
            count = sum(1 for value in values if start <= value < end)
        buckets.append(
            DistributionBucket(
                range_start=start,
                range_end=end,
                count=count,
                percentage=count / total * 100,
            )
        )
    return buckets


def select_sample_run(runs: Sequence[SimulationRun]) -> SimulationRun:
    """The run at index n // 2 of the runs ordered by final outcome.

    This picks something typical to display; it is not a statistic.
    """
    assert runs, "select_sample_run needs at least one run"
    ordered = sorted(runs, key=lambda run: run.final_outcome)
    return ordered[len(ordered) // 2]
