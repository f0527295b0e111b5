"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RiskModelKind(str, Enum):
    FIXED_R = "fixed_r"
    FIXED_FRACTION = "fixed_fraction"


class RiskType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class KellyLevel(str, Enum):
    AGGRESSIVE = "aggressive"
    BALANCED = "balanced"
    CONSERVATIVE = "conservative"


@dataclass(frozen=True)
class SimulationParams:
    number_of_trades: int
    simulation_count: int
    win_rate: float  # percent, 0-100
    reward_risk_ratio: float
    commission_impact: float = 0.0  # per trade, in the risk unit (R or currency)
    risk_model: RiskModelKind = RiskModelKind.FIXED_R
    initial_balance: Optional[float] = None
    risk_per_trade: Optional[float] = None
    risk_type: RiskType = RiskType.PERCENTAGE

    @property
    def tracks_balance(self) -> bool:
        return self.risk_model == RiskModelKind.FIXED_FRACTION

    @property
    def total_iterations(self) -> int:
        return self.number_of_trades * self.simulation_count


@dataclass(frozen=True)
class SimulatedTrade:
    trade_number: int
    is_win: bool
    result: float
    commission: float
    cumulative_outcome: float
    drawdown_from_peak: float
    risk_amount: float = 1.0
    balance_after: Optional[float] = None


@dataclass(frozen=True)
class SimulationRun:
    """One simulated trade sequence.

    ``total_commission`` and ``underwater_trade_count`` are filled for both
    risk models. The remaining optional fields are set only when a balance is
    tracked.
    """

    run_id: int
    trades: tuple[SimulatedTrade, ...]
    final_outcome: float
    max_drawdown: float
    peak_outcome: float
    win_count: int
    loss_count: int
    max_win_streak: int
    max_loss_streak: int
    final_balance: Optional[float] = None
    total_commission: float = 0.0
    underwater_trade_count: int = 0
    max_drawdown_pct: Optional[float] = None
    return_pct: Optional[float] = None
    ruined: bool = False


@dataclass(frozen=True)
class KellyResult:
    full: float
    half: float
    quarter: float
    level: KellyLevel
    recommendation: str


@dataclass(frozen=True)
class SimulationStatistics:
    median_final_outcome: float
    mean_final_outcome: float
    best_case_final_outcome: float
    worst_case_final_outcome: float
    median_max_drawdown: float
    mean_max_drawdown: float
    worst_max_drawdown: float
    profitable_pct: float
    sharpe_ratio: float
    sortino_ratio: float
    expected_per_trade: float
    std_dev_per_trade: float
    profit_factor: float
    expected_max_win_streak: float
    expected_max_loss_streak: float
    avg_win_streak: float
    avg_loss_streak: float
    avg_recovery_trades: float
    kelly: KellyResult
    ruin_pct: Optional[float] = None
    calmar_ratio: Optional[float] = None
    median_final_balance: Optional[float] = None
    mean_final_balance: Optional[float] = None
    median_return_pct: Optional[float] = None
    mean_return_pct: Optional[float] = None
    mean_max_drawdown_pct: Optional[float] = None
    avg_underwater_trades: Optional[float] = None
    mean_total_commission: Optional[float] = None


@dataclass(frozen=True)
class DistributionBucket:
    range_start: float
    range_end: float
    count: int
    percentage: float


@dataclass(frozen=True)
class MonteCarloResult:
    params: SimulationParams
    statistics: SimulationStatistics
    distribution_buckets: list[DistributionBucket]
    sample_run: SimulationRun
    seed: int
