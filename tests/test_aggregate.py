import math

import pytest

from edge_sim.simulator import (
    FixedRModel,
    KellyLevel,
    RiskModelKind,
    RiskType,
    SimulationParams,
    SimulationRun,
    aggregate_statistics,
    build_risk_model,
    simulate_run,
)
from edge_sim.simulator.aggregate import completed_streaks, recovery_lengths


class ScriptedRandom:
    def __init__(self, values):
        self._values = iter(values)

    def random(self):
        return next(self._values)


def _params(trades=2, win_rate=50.0, rrr=2.0, commission=0.0):
    return SimulationParams(
        number_of_trades=trades,
        simulation_count=3,
        win_rate=win_rate,
        reward_risk_ratio=rrr,
        commission_impact=commission,
    )


def _run(params, pattern, run_id=0):
    draws = [0.0 if outcome == "W" else 0.99 for outcome in pattern]
    return simulate_run(params, FixedRModel(), ScriptedRandom(draws), run_id=run_id)


def test_pooled_statistics_over_three_runs():
    params = _params()
    runs = [_run(params, "WL", 0), _run(params, "LL", 1), _run(params, "WW", 2)]
    stats = aggregate_statistics(params, runs)

    assert stats.median_final_outcome == 1.0
    assert stats.mean_final_outcome == pytest.approx(1.0)
    assert stats.best_case_final_outcome == 4.0
    assert stats.worst_case_final_outcome == -2.0
    assert stats.profitable_pct == pytest.approx(200 / 3)

    assert stats.expected_per_trade == pytest.approx(0.5)
    assert stats.std_dev_per_trade == pytest.approx(1.5)
    assert stats.sharpe_ratio == pytest.approx(1 / 3)
    assert stats.sortino_ratio == pytest.approx(0.5 / math.sqrt(0.5))
    assert stats.profit_factor == pytest.approx(2.0)

    assert stats.median_max_drawdown == 1.0
    assert stats.mean_max_drawdown == pytest.approx(1.0)
    assert stats.worst_max_drawdown == 2.0

    assert stats.expected_max_win_streak == pytest.approx(1.0)
    assert stats.expected_max_loss_streak == pytest.approx(1.0)
    assert stats.avg_win_streak == pytest.approx(1.5)
    assert stats.avg_loss_streak == pytest.approx(1.5)

    assert stats.kelly.full == pytest.approx(25.0)
    assert stats.kelly.level == KellyLevel.BALANCED
    assert stats.ruin_pct is None
    assert stats.calmar_ratio is None


def test_profit_factor_infinite_without_losses():
    params = _params(win_rate=100.0)
    stats = aggregate_statistics(params, [_run(params, "WW"), _run(params, "WW", 1)])
    assert stats.profit_factor == math.inf
    assert stats.sortino_ratio == 0.0
    assert stats.profitable_pct == 100.0


def test_zero_results_give_zero_ratios():
    params = _params(win_rate=100.0, rrr=1.0, commission=1.0)
    stats = aggregate_statistics(params, [_run(params, "WW")])
    assert stats.expected_per_trade == 0.0
    assert stats.profit_factor == 0.0
    assert stats.sharpe_ratio == 0.0
    assert stats.sortino_ratio == 0.0
    assert stats.profitable_pct == 0.0


def test_completed_streaks_include_non_maximal_streaks():
    params = _params(trades=7)
    run = _run(params, "WWLWLLW")
    wins, losses = completed_streaks([run])
    assert wins == [2, 1, 1]
    assert losses == [1, 2]


def test_recovery_counts_only_recovered_drawdowns():
    params = _params(trades=3)
    recovered = _run(params, "LWL")
    assert recovery_lengths([recovered]) == [2]
    assert recovery_lengths([_run(params, "WLL")]) == []


def test_balance_statistics_and_ruin():
    params = SimulationParams(
        number_of_trades=10,
        simulation_count=4,
        win_rate=50.0,
        reward_risk_ratio=2.0,
        risk_model=RiskModelKind.FIXED_FRACTION,
        initial_balance=1000.0,
        risk_per_trade=1.0,
        risk_type=RiskType.PERCENTAGE,
    )

    def run(final, drawdown_pct):
        return SimulationRun(
            run_id=0,
            trades=(),
            final_outcome=final,
            max_drawdown=0.0,
            peak_outcome=0.0,
            win_count=0,
            loss_count=0,
            max_win_streak=0,
            max_loss_streak=0,
            final_balance=1000.0 + final,
            total_commission=2.0,
            underwater_trade_count=3,
            max_drawdown_pct=drawdown_pct,
            return_pct=final / 10.0,
        )

    runs = [run(-600.0, 60.0), run(-500.0, 50.0), run(100.0, 5.0), run(200.0, 5.0)]
    stats = aggregate_statistics(params, runs)

    assert stats.ruin_pct == pytest.approx(50.0)
    assert stats.mean_return_pct == pytest.approx(-20.0)
    assert stats.median_return_pct == pytest.approx(-20.0)
    assert stats.mean_max_drawdown_pct == pytest.approx(30.0)
    assert stats.calmar_ratio == pytest.approx(-20.0 / 30.0)
    assert stats.median_final_balance == pytest.approx(800.0)
    assert stats.mean_final_balance == pytest.approx(800.0)
    assert stats.avg_underwater_trades == pytest.approx(3.0)
    assert stats.mean_total_commission == pytest.approx(2.0)


def test_calmar_is_zero_without_drawdown():
    params = SimulationParams(
        number_of_trades=3,
        simulation_count=1,
        win_rate=100.0,
        reward_risk_ratio=1.0,
        risk_model=RiskModelKind.FIXED_FRACTION,
        initial_balance=100.0,
        risk_per_trade=10.0,
        risk_type=RiskType.FIXED,
    )
    run = simulate_run(params, build_risk_model(params), ScriptedRandom([0.0, 0.0, 0.0]))
    stats = aggregate_statistics(params, [run])
    assert stats.mean_max_drawdown_pct == 0.0
    assert stats.calmar_ratio == 0.0
    assert stats.ruin_pct == 0.0
