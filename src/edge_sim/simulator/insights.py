"""Qualitative guidance derived from a finished simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from edge_sim.simulator.models import MonteCarloResult, RiskType, SimulationParams


class ProfitabilityQuality(str, Enum):
    ROBUST = "robust"
    MODERATE = "moderate"
    RISKY = "risky"


class RiskAssessment(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    CONCERNING = "concerning"


class CommissionAssessment(str, Enum):
    NEGLIGIBLE = "negligible"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class InsightThresholds:
    robust_profitable_pct: float = 70.0
    moderate_profitable_pct: float = 50.0
    # (min sharpe, max median drawdown) per risk tier
    excellent: tuple[float, float] = (0.5, 3.0)
    good: tuple[float, float] = (0.3, 5.0)
    moderate: tuple[float, float] = (0.1, 8.0)
    severe_loss_streak: float = 7.0
    notable_loss_streak: float = 5.0
    negligible_commission: float = 1.0
    moderate_commission: float = 5.0
    low_reward_risk: float = 1.5
    low_win_rate: float = 50.0
    high_drawdown: float = 5.0


@dataclass(frozen=True)
class AnalysisInsights:
    profitability_quality: ProfitabilityQuality
    risk_assessment: RiskAssessment
    psychology_warning: Optional[str]
    commission_assessment: CommissionAssessment
    improvement_suggestions: list[str] = field(default_factory=list)


def commission_pct_of_risk(params: SimulationParams) -> float:
    """Per-trade commission as a percentage of the amount risked on the first trade."""
    if not params.tracks_balance:
        return params.commission_impact * 100
    assert params.initial_balance is not None and params.risk_per_trade is not None
    if params.risk_type == RiskType.PERCENTAGE:
        risk = params.initial_balance * params.risk_per_trade / 100
    else:
        risk = params.risk_per_trade
    return params.commission_impact / risk * 100


def generate_insights(
    result: MonteCarloResult,
    thresholds: InsightThresholds = InsightThresholds(),
) -> AnalysisInsights:
    stats = result.statistics
    params = result.params

    # Drawdown tiers are in R; balance runs are judged on drawdown percent.
    if params.tracks_balance and stats.mean_max_drawdown_pct is not None:
        drawdown = stats.mean_max_drawdown_pct
    else:
        drawdown = stats.median_max_drawdown

    if stats.profitable_pct >= thresholds.robust_profitable_pct:
        quality = ProfitabilityQuality.ROBUST
    elif stats.profitable_pct >= thresholds.moderate_profitable_pct:
        quality = ProfitabilityQuality.MODERATE
    else:
        quality = ProfitabilityQuality.RISKY

    risk = RiskAssessment.CONCERNING
    for tier, (min_sharpe, max_drawdown) in (
        (RiskAssessment.EXCELLENT, thresholds.excellent),
        (RiskAssessment.GOOD, thresholds.good),
        (RiskAssessment.MODERATE, thresholds.moderate),
    ):
        if stats.sharpe_ratio >= min_sharpe and drawdown <= max_drawdown:
            risk = tier
            break

    warning = None
    streak = round(stats.expected_max_loss_streak)
    if stats.expected_max_loss_streak >= thresholds.severe_loss_streak:
        warning = (
            f"Can you maintain discipline during a {streak}-trade losing streak? "
            "This is crucial for success."
        )
    elif stats.expected_max_loss_streak >= thresholds.notable_loss_streak:
        warning = f"Prepare for potential {streak}-trade losing streaks. Have a plan to stay disciplined."

    commission_pct = commission_pct_of_risk(params)
    if commission_pct <= thresholds.negligible_commission:
        commission = CommissionAssessment.NEGLIGIBLE
    elif commission_pct <= thresholds.moderate_commission:
        commission = CommissionAssessment.MODERATE
    else:
        commission = CommissionAssessment.HIGH

    suggestions: list[str] = []
    if params.reward_risk_ratio < thresholds.low_reward_risk:
        suggestions.append("Improve Reward/Risk: Focus on letting winners run longer")
    if params.win_rate < thresholds.low_win_rate:
        suggestions.append("Improve Win Rate: Review entry criteria and market selection")
    if drawdown > thresholds.high_drawdown:
        suggestions.append("High Drawdown: The strategy may test psychological limits during losing streaks")

    return AnalysisInsights(
        profitability_quality=quality,
        risk_assessment=risk,
        psychology_warning=warning,
        commission_assessment=commission,
        improvement_suggestions=suggestions,
    )
