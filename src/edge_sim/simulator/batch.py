"""Batch driver: runs many independent simulations, inline or on a process pool."""

from __future__ import annotations

import logging
import os
import random
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from typing import Callable, Optional, Protocol, Sequence

from edge_sim.simulator.models import SimulationParams, SimulationRun
from edge_sim.simulator.risk_model import build_risk_model
from edge_sim.simulator.runner import RandomSource, simulate_run

logger = logging.getLogger(__name__)

RandomFactory = Callable[[int], RandomSource]


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


class SimulationCancelled(RuntimeError):
    def __init__(self, completed: int, requested: int) -> None:
        self.completed = completed
        self.requested = requested
        super().__init__(f"Simulation cancelled after {completed} of {requested} runs")


def derive_run_seeds(seed: int, count: int) -> list[int]:
    """One independent 64-bit seed per run, fixed by the master seed."""
    master = random.Random(seed)
    return [master.getrandbits(64) for _ in range(count)]


def resolve_workers(workers: int) -> int:
    if workers == -1:
        return max(1, (os.cpu_count() or 1) - 1)
    return max(1, workers)


def _simulate_chunk(
    params: SimulationParams,
    rng_factory: RandomFactory,
    first_run_id: int,
    seeds: Sequence[int],
) -> list[SimulationRun]:
    model = build_risk_model(params)
    return [
        simulate_run(params, model, rng_factory(seed), run_id=first_run_id + offset)
        for offset, seed in enumerate(seeds)
    ]


def run_batch(
    params: SimulationParams,
    seed: int,
    workers: int = 1,
    cancel: Optional[CancelToken] = None,
    rng_factory: RandomFactory = random.Random,
    chunk_size: Optional[int] = None,
) -> list[SimulationRun]:
    seeds = derive_run_seeds(seed, params.simulation_count)
    workers = resolve_workers(workers)
    if workers == 1:
        return _run_inline(params, seeds, cancel, rng_factory)
    return _run_pooled(params, seeds, workers, cancel, rng_factory, chunk_size)


def _run_inline(
    params: SimulationParams,
    seeds: Sequence[int],
    cancel: Optional[CancelToken],
    rng_factory: RandomFactory,
) -> list[SimulationRun]:
    model = build_risk_model(params)
    runs: list[SimulationRun] = []
    for run_id, run_seed in enumerate(seeds):
        if cancel is not None and cancel.is_set():
            raise SimulationCancelled(len(runs), len(seeds))
        runs.append(simulate_run(params, model, rng_factory(run_seed), run_id=run_id))
    return runs


def _run_pooled(
    params: SimulationParams,
    seeds: Sequence[int],
    workers: int,
    cancel: Optional[CancelToken],
    rng_factory: RandomFactory,
    chunk_size: Optional[int],
) -> list[SimulationRun]:
    if chunk_size is None:
        chunk_size = max(1, -(-len(seeds) // (workers * 4)))
    starts = list(range(0, len(seeds), chunk_size))
    logger.debug("Dispatching %d chunks of up to %d runs to %d workers", len(starts), chunk_size, workers)

    chunks: dict[int, list[SimulationRun]] = {}
    executor = ProcessPoolExecutor(max_workers=workers)
    try:
        pending: dict[Future, int] = {
            executor.submit(_simulate_chunk, params, rng_factory, start, seeds[start : start + chunk_size]): start
            for start in starts
        }
        while pending:
            if cancel is not None and cancel.is_set():
                completed = sum(len(runs) for runs in chunks.values())
                raise SimulationCancelled(completed, len(seeds))
            done, _ = wait(pending, timeout=0.1, return_when=FIRST_COMPLETED)
            for future in done:
                start = pending.pop(future)
                chunks[start] = future.result()
    finally:
        executor.shutdown(wait=True, cancel_futures=True)

    runs: list[SimulationRun] = []
    for start in starts:
        runs.extend(chunks[start])
    return runs
