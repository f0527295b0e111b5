"""Per-trade risk models: normalized R units or a tracked account balance."""

from __future__ import annotations

from dataclasses import dataclass

from edge_sim.simulator.models import RiskModelKind, RiskType, SimulationParams


class RiskModel:
    kind: RiskModelKind

    @property
    def tracks_balance(self) -> bool:
        return self.kind == RiskModelKind.FIXED_FRACTION

    @property
    def starting_balance(self) -> float:
        return 0.0

    def risk_amount(self, balance: float) -> float:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass(frozen=True)
class FixedRModel(RiskModel):
    """Every trade risks exactly 1R; there is no balance and no ruin."""

    kind: RiskModelKind = RiskModelKind.FIXED_R

    def risk_amount(self, balance: float) -> float:
        return 1.0


@dataclass(frozen=True)
class FixedFractionModel(RiskModel):
    initial_balance: float
    risk_per_trade: float
    risk_type: RiskType = RiskType.PERCENTAGE
    kind: RiskModelKind = RiskModelKind.FIXED_FRACTION

    @property
    def starting_balance(self) -> float:
        return self.initial_balance

    def risk_amount(self, balance: float) -> float:
        if self.risk_type == RiskType.PERCENTAGE:
            return balance * self.risk_per_trade / 100.0
        return self.risk_per_trade


def build_risk_model(params: SimulationParams) -> RiskModel:
    if params.risk_model == RiskModelKind.FIXED_R:
        return FixedRModel()
    assert params.initial_balance is not None and params.risk_per_trade is not None
    return FixedFractionModel(
        initial_balance=float(params.initial_balance),
        risk_per_trade=float(params.risk_per_trade),
        risk_type=params.risk_type,
    )
