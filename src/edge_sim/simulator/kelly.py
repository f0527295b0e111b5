"""Kelly criterion sizing for a win rate and reward/risk ratio."""

from __future__ import annotations

from edge_sim.simulator.models import KellyLevel, KellyResult

# Policy thresholds on full Kelly, in percent of bankroll.
AGGRESSIVE_ABOVE = 25.0
BALANCED_ABOVE = 15.0

NEGATIVE_EDGE_MESSAGE = "Negative edge - do not trade this strategy"
AGGRESSIVE_MESSAGE = "High potential but risky - Use Quarter Kelly"
BALANCED_MESSAGE = "Reasonable Kelly - Consider Half Kelly for growth"
CONSERVATIVE_MESSAGE = "Conservative Kelly - Quarter Kelly recommended for stability"


def kelly_criterion(win_rate: float, reward_risk_ratio: float) -> KellyResult:
    """Kelly % = W - (1 - W) / R, floored at zero and expressed in percent."""
    w = win_rate / 100
    raw = w - (1 - w) / reward_risk_ratio
    full = max(0.0, raw) * 100

    if full <= 0:
        level, recommendation = KellyLevel.CONSERVATIVE, NEGATIVE_EDGE_MESSAGE
    elif full > AGGRESSIVE_ABOVE:
        level, recommendation = KellyLevel.AGGRESSIVE, AGGRESSIVE_MESSAGE
    elif full > BALANCED_ABOVE:
        level, recommendation = KellyLevel.BALANCED, BALANCED_MESSAGE
    else:
        level, recommendation = KellyLevel.CONSERVATIVE, CONSERVATIVE_MESSAGE

    return KellyResult(
        full=full,
        half=full / 2,
        quarter=full / 4,
        level=level,
        recommendation=recommendation,
    )
