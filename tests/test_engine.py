import threading

import pytest

from edge_sim.monitoring import AuditLog
from edge_sim.simulator import (
    RiskModelKind,
    RiskType,
    SimulationCancelled,
    SimulationParams,
    SimulationParamsError,
    derive_run_seeds,
    run_batch,
    run_simulation,
)
from edge_sim.simulator.batch import resolve_workers


def _params(**overrides):
    values = dict(number_of_trades=50, simulation_count=200, win_rate=50.0, reward_risk_ratio=2.0)
    values.update(overrides)
    return SimulationParams(**values)


class AlwaysWin:
    def __init__(self, seed):
        self.seed = seed

    def random(self):
        return 0.0


class CancelAfter:
    def __init__(self, checks):
        self.remaining = checks

    def is_set(self):
        if self.remaining <= 0:
            return True
        self.remaining -= 1
        return False


def test_same_seed_reproduces_result():
    first = run_simulation(_params(), seed=42)
    second = run_simulation(_params(), seed=42)
    assert first == second
    assert first.seed == 42


def test_different_seeds_diverge():
    first = [run.final_outcome for run in run_batch(_params(), 1)]
    second = [run.final_outcome for run in run_batch(_params(), 2)]
    assert first != second


def test_seed_is_generated_when_missing():
    result = run_simulation(_params(simulation_count=5), seed=None)
    assert isinstance(result.seed, int)
    assert result.seed >= 0


def test_run_seeds_derive_from_master_seed():
    assert derive_run_seeds(9, 5) == derive_run_seeds(9, 5)
    assert derive_run_seeds(9, 3) == derive_run_seeds(9, 5)[:3]
    assert len(set(derive_run_seeds(9, 100))) == 100


def test_worker_count_does_not_change_results():
    params = _params(simulation_count=60)
    inline = run_batch(params, 123, workers=1)
    pooled = run_batch(params, 123, workers=2, chunk_size=7)
    assert [run.run_id for run in pooled] == list(range(60))
    assert inline == pooled


def test_resolve_workers():
    assert resolve_workers(1) == 1
    assert resolve_workers(0) == 1
    assert resolve_workers(4) == 4
    assert resolve_workers(-1) >= 1


def test_strong_edge_scenario():
    params = _params(number_of_trades=100, simulation_count=1000)
    result = run_simulation(params, seed=2024)
    stats = result.statistics

    assert stats.profitable_pct > 90
    assert stats.kelly.full == pytest.approx(25.0)
    assert stats.worst_case_final_outcome <= stats.median_final_outcome <= stats.best_case_final_outcome
    assert stats.median_max_drawdown <= stats.worst_max_drawdown
    assert 0.3 < stats.expected_per_trade < 0.7
    assert stats.profit_factor > 1


def test_result_shape():
    params = _params(simulation_count=300)
    result = run_simulation(params, seed=5)
    assert len(result.distribution_buckets) == 20
    assert sum(bucket.count for bucket in result.distribution_buckets) == 300
    assert len(result.sample_run.trades) == params.number_of_trades
    finals = sorted(run.final_outcome for run in run_batch(params, 5))
    assert result.sample_run.final_outcome == finals[150]


def test_negative_edge_scenario():
    result = run_simulation(_params(win_rate=30.0, reward_risk_ratio=1.0), seed=8)
    assert result.statistics.kelly.full == 0
    assert "Negative edge" in result.statistics.kelly.recommendation
    assert result.statistics.profitable_pct < 10


def test_all_win_runs_are_identical():
    params = _params(win_rate=100.0, reward_risk_ratio=1.5, simulation_count=20)
    result = run_simulation(params, seed=1)
    stats = result.statistics
    assert stats.median_final_outcome == pytest.approx(75.0)
    assert stats.best_case_final_outcome == stats.worst_case_final_outcome
    assert stats.median_max_drawdown == 0
    assert stats.profitable_pct == 100.0


def test_injected_random_source():
    result = run_simulation(_params(win_rate=10.0, simulation_count=10), seed=3, rng_factory=AlwaysWin)
    assert result.statistics.profitable_pct == 100.0
    assert result.sample_run.loss_count == 0


def test_fixed_fraction_run():
    params = _params(
        risk_model=RiskModelKind.FIXED_FRACTION,
        initial_balance=10000.0,
        risk_per_trade=1.0,
        risk_type=RiskType.PERCENTAGE,
        commission_impact=2.0,
    )
    result = run_simulation(params, seed=11)
    stats = result.statistics
    assert stats.median_final_balance is not None
    assert stats.ruin_pct == 0.0
    assert stats.mean_total_commission == pytest.approx(100.0)
    assert result.sample_run.final_balance == pytest.approx(10000.0 + result.sample_run.final_outcome)


def test_invalid_params_raise_before_running():
    with pytest.raises(SimulationParamsError):
        run_simulation(_params(win_rate=101.0), seed=1)
    with pytest.raises(SimulationParamsError):
        run_simulation(_params(number_of_trades=10, simulation_count=11), seed=1, budget_cap=100)


def test_cancel_before_start():
    event = threading.Event()
    event.set()
    with pytest.raises(SimulationCancelled) as excinfo:
        run_simulation(_params(), seed=1, cancel=event)
    assert excinfo.value.completed == 0
    assert excinfo.value.requested == 200


def test_cancel_midway_reports_progress():
    with pytest.raises(SimulationCancelled) as excinfo:
        run_batch(_params(), 1, cancel=CancelAfter(25))
    assert excinfo.value.completed == 25


def test_unset_cancel_token_runs_to_completion():
    result = run_simulation(_params(simulation_count=10), seed=1, cancel=threading.Event())
    assert sum(bucket.count for bucket in result.distribution_buckets) == 10


def test_audit_log_records_lifecycle(tmp_path):
    audit = AuditLog(tmp_path / "audit.log", run_id="test-run", config_hash="abc")
    run_simulation(_params(simulation_count=10), seed=77, audit_log=audit)
    events = audit.events()
    assert [event["event"] for event in events] == ["simulation_started", "simulation_completed"]
    assert events[0]["payload"]["seed"] == 77
    assert events[0]["run_id"] == "test-run"

    cancelled = threading.Event()
    cancelled.set()
    with pytest.raises(SimulationCancelled):
        run_simulation(_params(simulation_count=10), seed=78, cancel=cancelled, audit_log=audit)
    assert audit.events()[-1]["event"] == "simulation_cancelled"


def test_cancel_on_process_pool():
    event = threading.Event()
    event.set()
    with pytest.raises(SimulationCancelled) as excinfo:
        run_batch(_params(simulation_count=40), 1, workers=2, cancel=event, chunk_size=5)
    assert excinfo.value.completed == 0
    assert excinfo.value.requested == 40


def test_all_win_fixed_dollar_risk():
    params = _params(
        number_of_trades=20,
        simulation_count=15,
        win_rate=100.0,
        reward_risk_ratio=2.0,
        commission_impact=3.0,
        risk_model=RiskModelKind.FIXED_FRACTION,
        initial_balance=1000.0,
        risk_per_trade=50.0,
        risk_type=RiskType.FIXED,
    )
    for run in run_batch(params, 6):
        assert run.win_count == 20
        assert run.loss_count == 0
        assert run.max_loss_streak == 0
        assert run.final_outcome == pytest.approx(20 * (2.0 * 50.0 - 3.0))
        assert run.final_balance == pytest.approx(1000.0 + 1940.0)
    stats = run_simulation(params, seed=6).statistics
    assert stats.median_final_outcome == pytest.approx(1940.0)
    assert stats.ruin_pct == 0.0
