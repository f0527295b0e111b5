"""Cross-run statistics for a batch of simulated runs."""

from __future__ import annotations

import math
from typing import Sequence

from edge_sim.simulator.kelly import kelly_criterion
from edge_sim.simulator.models import SimulationParams, SimulationRun, SimulationStatistics
from edge_sim.simulator.stats import downside_deviation, mean, median, percentile, safe_ratio, std_dev

# A run that gave back half the account or more counts as ruined.
RUIN_RETURN_PCT = -50.0


def aggregate_statistics(params: SimulationParams, runs: Sequence[SimulationRun]) -> SimulationStatistics:
    assert runs, "aggregate_statistics needs at least one run"
    total = len(runs)

    finals = sorted(run.final_outcome for run in runs)
    drawdowns = sorted(run.max_drawdown for run in runs)
    profitable = sum(1 for run in runs if run.final_outcome > 0)

    pooled = [trade.result for run in runs for trade in run.trades]
    expected = mean(pooled)
    deviation = std_dev(pooled)
    downside = downside_deviation(pooled, 0.0)

    gross_win = math.fsum(value for value in pooled if value > 0)
    gross_loss = abs(math.fsum(value for value in pooled if value < 0))
    if gross_loss > 0:
        profit_factor = gross_win / gross_loss
    else:
        profit_factor = math.inf if gross_win > 0 else 0.0

    win_streaks, loss_streaks = completed_streaks(runs)
    kelly = kelly_criterion(params.win_rate, params.reward_risk_ratio)

    extra: dict[str, float] = {}
    if params.tracks_balance:
        returns = sorted(run.return_pct or 0.0 for run in runs)
        balances = sorted(run.final_balance or 0.0 for run in runs)
        mean_return_pct = mean(returns)
        mean_max_drawdown_pct = mean([run.max_drawdown_pct or 0.0 for run in runs])
        ruined = sum(1 for value in returns if value <= RUIN_RETURN_PCT)
        extra = {
            "ruin_pct": ruined / total * 100,
            "calmar_ratio": safe_ratio(mean_return_pct, mean_max_drawdown_pct),
            "median_final_balance": median(balances),
            "mean_final_balance": mean(balances),
            "median_return_pct": median(returns),
            "mean_return_pct": mean_return_pct,
            "mean_max_drawdown_pct": mean_max_drawdown_pct,
            "avg_underwater_trades": mean([run.underwater_trade_count for run in runs]),
            "mean_total_commission": mean([run.total_commission for run in runs]),
        }

    return SimulationStatistics(
        median_final_outcome=median(finals),
        mean_final_outcome=mean(finals),
        best_case_final_outcome=percentile(finals, 95),
        worst_case_final_outcome=percentile(finals, 5),
        median_max_drawdown=median(drawdowns),
        mean_max_drawdown=mean(drawdowns),
        worst_max_drawdown=percentile(drawdowns, 95),
        profitable_pct=profitable / total * 100,
        sharpe_ratio=safe_ratio(expected, deviation),
        sortino_ratio=safe_ratio(expected, downside),
        expected_per_trade=expected,
        std_dev_per_trade=deviation,
        profit_factor=profit_factor,
        expected_max_win_streak=mean([run.max_win_streak for run in runs]),
        expected_max_loss_streak=mean([run.max_loss_streak for run in runs]),
        avg_win_streak=mean(win_streaks),
        avg_loss_streak=mean(loss_streaks),
        avg_recovery_trades=mean(recovery_lengths(runs)),
        kelly=kelly,
        **extra,
    )


def completed_streaks(runs: Sequence[SimulationRun]) -> tuple[list[int], list[int]]:
    """Every win and loss streak length across all runs, not just the maxima."""
    wins: list[int] = []
    losses: list[int] = []
    for run in runs:
        current_win = 0
        current_loss = 0
        for trade in run.trades:
            if trade.is_win:
                current_win += 1
                if current_loss:
                    losses.append(current_loss)
                    current_loss = 0
            else:
                current_loss += 1
                if current_win:
                    wins.append(current_win)
                    current_win = 0
        if current_win:
            wins.append(current_win)
        if current_loss:
            losses.append(current_loss)
    return wins, losses


def recovery_lengths(runs: Sequence[SimulationRun]) -> list[int]:
    """Trades from leaving a peak to regaining it, per recovered drawdown."""
    lengths: list[int] = []
    for run in runs:
        underwater = 0
        for trade in run.trades:
            if trade.drawdown_from_peak > 0:
                underwater += 1
            elif underwater:
                lengths.append(underwater + 1)
                underwater = 0
    return lengths
