"""Side-by-side simulation of several strategies with allocation hints."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from edge_sim.simulator.engine import run_simulation
from edge_sim.simulator.models import MonteCarloResult, SimulationParams

TOP_PERFORMER_PCT = 70.0
NEEDS_IMPROVEMENT_PCT = 50.0
ALLOCATION_FLOOR_PCT = 30.0


@dataclass(frozen=True)
class StrategyProfile:
    strategy_id: str
    name: str
    win_rate: float
    reward_risk_ratio: float
    trades_count: int = 0


@dataclass(frozen=True)
class StrategyComparison:
    strategy_id: str
    strategy_name: str
    trades_count: int
    win_rate: float
    reward_risk_ratio: float
    median_final_outcome: float
    profitable_pct: float
    median_max_drawdown: float
    sharpe_ratio: float
    rank: int
    result: MonteCarloResult


@dataclass(frozen=True)
class AllocationSuggestion:
    strategy_name: str
    allocation_pct: int
    reason: str


@dataclass(frozen=True)
class ComparisonReport:
    results: list[StrategyComparison]
    top_performers: list[str]
    needs_improvement: list[str]
    suggested_allocations: list[AllocationSuggestion]


def compare_strategies(
    profiles: Iterable[StrategyProfile],
    base_params: SimulationParams,
    seed: Optional[int] = None,
    workers: int = 1,
) -> ComparisonReport:
    """Simulate each profile under shared base params and rank by profitable runs.

    With a seed, every strategy is simulated from that same seed so the
    comparison is reproducible.
    """
    unranked: list[StrategyComparison] = []
    for profile in profiles:
        params = replace(
            base_params,
            win_rate=profile.win_rate,
            reward_risk_ratio=profile.reward_risk_ratio,
        )
        result = run_simulation(params, seed=seed, workers=workers)
        stats = result.statistics
        unranked.append(
            StrategyComparison(
                strategy_id=profile.strategy_id,
                strategy_name=profile.name,
                trades_count=profile.trades_count,
                win_rate=profile.win_rate,
                reward_risk_ratio=profile.reward_risk_ratio,
                median_final_outcome=stats.median_final_outcome,
                profitable_pct=stats.profitable_pct,
                median_max_drawdown=stats.median_max_drawdown,
                sharpe_ratio=stats.sharpe_ratio,
                rank=0,
                result=result,
            )
        )

    ordered = sorted(unranked, key=lambda item: item.profitable_pct, reverse=True)
    results = [replace(item, rank=index + 1) for index, item in enumerate(ordered)]
    return ComparisonReport(
        results=results,
        top_performers=[r.strategy_name for r in results if r.profitable_pct >= TOP_PERFORMER_PCT],
        needs_improvement=[r.strategy_name for r in results if r.profitable_pct < NEEDS_IMPROVEMENT_PCT],
        suggested_allocations=suggest_allocations(results),
    )


def suggest_allocations(results: list[StrategyComparison]) -> list[AllocationSuggestion]:
    total_score = sum(max(0.0, r.profitable_pct - ALLOCATION_FLOOR_PCT) for r in results)

    suggestions: list[AllocationSuggestion] = []
    for r in results:
        if r.profitable_pct < NEEDS_IMPROVEMENT_PCT:
            continue
        score = max(0.0, r.profitable_pct - ALLOCATION_FLOOR_PCT)
        allocation = round(score / total_score * 100) if total_score > 0 else 0
        suggestions.append(AllocationSuggestion(r.strategy_name, allocation, _allocation_reason(r.profitable_pct)))

    for r in results:
        if r.profitable_pct < NEEDS_IMPROVEMENT_PCT:
            suggestions.append(AllocationSuggestion(r.strategy_name, 0, "Pause until improved"))
    return suggestions


def _allocation_reason(profitable_pct: float) -> str:
    if profitable_pct >= 80:
        return "Excellent statistical robustness"
    if profitable_pct >= TOP_PERFORMER_PCT:
        return "Good statistical performance"
    return "Moderate reliability"
