"""Boundary validation for simulation parameters."""

from __future__ import annotations

import math
from dataclasses import dataclass

from edge_sim.simulator.models import RiskModelKind, RiskType, SimulationParams

# Maximum trades x simulations evaluated in one request.
SIMULATION_BUDGET_CAP = 3_000_000


@dataclass(frozen=True)
class FieldIssue:
    field: str
    code: str
    message: str


class SimulationParamsError(ValueError):
    def __init__(self, issues: list[FieldIssue]) -> None:
        self.issues = issues
        detail = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
        super().__init__(f"Invalid simulation parameters: {detail}")

    def fields(self) -> set[str]:
        return {issue.field for issue in self.issues}


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_finite(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _not_finite(field: str, label: str) -> FieldIssue:
    return FieldIssue(field, "NOT_FINITE", f"{label} must be a finite number")


def check_params(
    params: SimulationParams,
    budget_cap: int | None = SIMULATION_BUDGET_CAP,
) -> list[FieldIssue]:
    issues: list[FieldIssue] = []

    counts_ok = True
    for name, label in (("number_of_trades", "Number of trades"), ("simulation_count", "Simulation count")):
        value = getattr(params, name)
        if not _is_count(value):
            issues.append(FieldIssue(name, "NOT_INTEGER", f"{label} must be a whole number"))
            counts_ok = False
        elif value <= 0:
            issues.append(FieldIssue(name, "NOT_POSITIVE", f"{label} must be positive"))
            counts_ok = False

    if not _is_finite(params.win_rate):
        issues.append(_not_finite("win_rate", "Win rate"))
    elif not 0 <= params.win_rate <= 100:
        issues.append(FieldIssue("win_rate", "OUT_OF_RANGE", "Win rate must be between 0 and 100"))
    if not _is_finite(params.reward_risk_ratio):
        issues.append(_not_finite("reward_risk_ratio", "Reward/Risk ratio"))
    elif params.reward_risk_ratio <= 0:
        issues.append(FieldIssue("reward_risk_ratio", "NOT_POSITIVE", "Reward/Risk ratio must be positive"))
    if not _is_finite(params.commission_impact):
        issues.append(_not_finite("commission_impact", "Commission"))
    elif params.commission_impact < 0:
        issues.append(FieldIssue("commission_impact", "NEGATIVE", "Commission cannot be negative"))

    if params.risk_model == RiskModelKind.FIXED_FRACTION:
        if params.initial_balance is None:
            issues.append(
                FieldIssue("initial_balance", "NOT_POSITIVE", "Initial balance is required and must be positive")
            )
        elif not _is_finite(params.initial_balance):
            issues.append(_not_finite("initial_balance", "Initial balance"))
        elif params.initial_balance <= 0:
            issues.append(
                FieldIssue("initial_balance", "NOT_POSITIVE", "Initial balance is required and must be positive")
            )
        if params.risk_per_trade is None:
            issues.append(
                FieldIssue("risk_per_trade", "NOT_POSITIVE", "Risk per trade is required and must be positive")
            )
        elif not _is_finite(params.risk_per_trade):
            issues.append(_not_finite("risk_per_trade", "Risk per trade"))
        elif params.risk_per_trade <= 0:
            issues.append(
                FieldIssue("risk_per_trade", "NOT_POSITIVE", "Risk per trade is required and must be positive")
            )
        elif params.risk_type == RiskType.PERCENTAGE and params.risk_per_trade > 100:
            issues.append(FieldIssue("risk_per_trade", "OUT_OF_RANGE", "Percentage risk cannot exceed 100"))

    if budget_cap is not None and counts_ok and params.total_iterations > budget_cap:
        max_trades = budget_cap // params.simulation_count
        max_simulations = budget_cap // params.number_of_trades
        issues.append(
            FieldIssue(
                "simulation_count",
                "BUDGET_EXCEEDED",
                f"Total iterations ({params.total_iterations:,}) exceeds the maximum of {budget_cap:,}. "
                f"Reduce trades to {max_trades:,} or simulations to {max_simulations:,}.",
            )
        )

    return issues


def validate_params(
    params: SimulationParams,
    budget_cap: int | None = SIMULATION_BUDGET_CAP,
) -> SimulationParams:
    issues = check_params(params, budget_cap)
    if issues:
        raise SimulationParamsError(issues)
    return params
