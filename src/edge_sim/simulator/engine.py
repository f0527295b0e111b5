"""Monte Carlo engine entry point."""

from __future__ import annotations

import logging
import random
import secrets
import time
from typing import Optional

from edge_sim.simulator.aggregate import aggregate_statistics
from edge_sim.simulator.batch import CancelToken, RandomFactory, SimulationCancelled, run_batch
from edge_sim.simulator.distribution import bucketize, select_sample_run
from edge_sim.simulator.models import MonteCarloResult, SimulationParams
from edge_sim.simulator.validation import SIMULATION_BUDGET_CAP, validate_params

logger = logging.getLogger(__name__)


def new_seed() -> int:
    return secrets.randbits(63)


def run_simulation(
    params: SimulationParams,
    *,
    seed: Optional[int] = None,
    workers: int = 1,
    cancel: Optional[CancelToken] = None,
    rng_factory: RandomFactory = random.Random,
    budget_cap: Optional[int] = SIMULATION_BUDGET_CAP,
    audit_log: Optional[object] = None,
) -> MonteCarloResult:
    validate_params(params, budget_cap)
    if seed is None:
        seed = new_seed()

    _log(
        audit_log,
        "simulation_started",
        {
            "seed": seed,
            "workers": workers,
            "risk_model": params.risk_model.value,
            "number_of_trades": params.number_of_trades,
            "simulation_count": params.simulation_count,
        },
    )
    logger.info(
        "Running %d simulations of %d trades (model=%s, seed=%d, workers=%d)",
        params.simulation_count,
        params.number_of_trades,
        params.risk_model.value,
        seed,
        workers,
    )
    started = time.perf_counter()
    try:
        runs = run_batch(params, seed, workers=workers, cancel=cancel, rng_factory=rng_factory)
    except SimulationCancelled as exc:
        logger.warning("%s (seed=%d)", exc, seed)
        _log(audit_log, "simulation_cancelled", {"seed": seed, "completed": exc.completed})
        raise

    statistics = aggregate_statistics(params, runs)
    buckets = bucketize([run.final_outcome for run in runs], total_runs=len(runs))
    sample_run = select_sample_run(runs)
    elapsed = time.perf_counter() - started

    logger.info(
        "Simulation finished in %.2fs: median=%.4f profitable=%.1f%%",
        elapsed,
        statistics.median_final_outcome,
        statistics.profitable_pct,
    )
    _log(
        audit_log,
        "simulation_completed",
        {
            "seed": seed,
            "elapsed_seconds": round(elapsed, 4),
            "median_final_outcome": statistics.median_final_outcome,
            "profitable_pct": statistics.profitable_pct,
        },
    )

    return MonteCarloResult(
        params=params,
        statistics=statistics,
        distribution_buckets=buckets,
        sample_run=sample_run,
        seed=seed,
    )


def _log(audit_log: Optional[object], event: str, payload: dict) -> None:
    if audit_log is None:
        return
    audit_log.log(event, payload)
