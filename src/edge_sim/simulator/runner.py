"""Single-run trade sequence simulator."""

from __future__ import annotations

from typing import Protocol

from edge_sim.simulator.models import SimulatedTrade, SimulationParams, SimulationRun
from edge_sim.simulator.risk_model import RiskModel


class RandomSource(Protocol):
    def random(self) -> float: ...


def simulate_run(
    params: SimulationParams,
    model: RiskModel,
    rng: RandomSource,
    run_id: int = 0,
) -> SimulationRun:
    tracks_balance = model.tracks_balance
    initial_balance = model.starting_balance
    balance = initial_balance
    commission = params.commission_impact

    cumulative = 0.0
    peak = 0.0
    max_drawdown = 0.0
    max_drawdown_pct = 0.0
    win_count = 0
    loss_count = 0
    win_streak = 0
    loss_streak = 0
    max_win_streak = 0
    max_loss_streak = 0
    total_commission = 0.0
    underwater = 0
    ruined = False
    trades: list[SimulatedTrade] = []

    for index in range(params.number_of_trades):
        is_win = rng.random() * 100 < params.win_rate
        unit = model.risk_amount(balance)
        if is_win:
            result = params.reward_risk_ratio * unit - commission
            win_count += 1
            win_streak += 1
            loss_streak = 0
            max_win_streak = max(max_win_streak, win_streak)
        else:
            result = -unit - commission
            loss_count += 1
            loss_streak += 1
            win_streak = 0
            max_loss_streak = max(max_loss_streak, loss_streak)

        balance_after = None
        if tracks_balance:
            new_balance = max(0.0, balance + result)
            result = new_balance - balance
            balance = new_balance
            balance_after = balance

        total_commission += commission
        cumulative += result
        peak = max(peak, cumulative)
        drawdown = peak - cumulative
        max_drawdown = max(max_drawdown, drawdown)
        if drawdown > 0:
            underwater += 1
        if tracks_balance:
            peak_balance = initial_balance + peak
            if peak_balance > 0:
                max_drawdown_pct = max(max_drawdown_pct, drawdown / peak_balance * 100)

        trades.append(
            SimulatedTrade(
                trade_number=index + 1,
                is_win=is_win,
                result=result,
                commission=commission,
                cumulative_outcome=cumulative,
                drawdown_from_peak=drawdown,
                risk_amount=unit,
                balance_after=balance_after,
            )
        )

        if tracks_balance and balance <= 0:
            ruined = True
            break

    if not tracks_balance:
        return SimulationRun(
            run_id=run_id,
            trades=tuple(trades),
            final_outcome=cumulative,
            max_drawdown=max_drawdown,
            peak_outcome=peak,
            win_count=win_count,
            loss_count=loss_count,
            max_win_streak=max_win_streak,
            max_loss_streak=max_loss_streak,
            total_commission=total_commission,
            underwater_trade_count=underwater,
        )

    return SimulationRun(
        run_id=run_id,
        trades=tuple(trades),
        final_outcome=cumulative,
        max_drawdown=max_drawdown,
        peak_outcome=peak,
        win_count=win_count,
        loss_count=loss_count,
        max_win_streak=max_win_streak,
        max_loss_streak=max_loss_streak,
        final_balance=balance,
        total_commission=total_commission,
        underwater_trade_count=underwater,
        max_drawdown_pct=max_drawdown_pct,
        return_pct=cumulative / initial_balance * 100,
        ruined=ruined,
    )
