"""Monte Carlo strategy simulator."""

from edge_sim.simulator.aggregate import RUIN_RETURN_PCT, aggregate_statistics
from edge_sim.simulator.batch import SimulationCancelled, derive_run_seeds, run_batch
from edge_sim.simulator.comparison import ComparisonReport, StrategyProfile, compare_strategies
from edge_sim.simulator.distribution import bucketize, select_sample_run
from edge_sim.simulator.engine import run_simulation
from edge_sim.simulator.insights import AnalysisInsights, InsightThresholds, generate_insights
from edge_sim.simulator.kelly import kelly_criterion
from edge_sim.simulator.models import (
    DistributionBucket,
    KellyLevel,
    KellyResult,
    MonteCarloResult,
    RiskModelKind,
    RiskType,
    SimulatedTrade,
    SimulationParams,
    SimulationRun,
    SimulationStatistics,
)
from edge_sim.simulator.risk_model import FixedFractionModel, FixedRModel, RiskModel, build_risk_model
from edge_sim.simulator.runner import RandomSource, simulate_run
from edge_sim.simulator.serialize import serialize_insights, serialize_result
from edge_sim.simulator.validation import (
    SIMULATION_BUDGET_CAP,
    FieldIssue,
    SimulationParamsError,
    validate_params,
)

__all__ = [
    "AnalysisInsights",
    "ComparisonReport",
    "DistributionBucket",
    "FieldIssue",
    "FixedFractionModel",
    "FixedRModel",
    "InsightThresholds",
    "KellyLevel",
    "KellyResult",
    "MonteCarloResult",
    "RUIN_RETURN_PCT",
    "RandomSource",
    "RiskModel",
    "RiskModelKind",
    "RiskType",
    "SIMULATION_BUDGET_CAP",
    "SimulatedTrade",
    "SimulationCancelled",
    "SimulationParams",
    "SimulationParamsError",
    "SimulationRun",
    "SimulationStatistics",
    "StrategyProfile",
    "aggregate_statistics",
    "bucketize",
    "build_risk_model",
    "compare_strategies",
    "derive_run_seeds",
    "generate_insights",
    "kelly_criterion",
    "run_batch",
    "run_simulation",
    "select_sample_run",
    "serialize_insights",
    "serialize_result",
    "simulate_run",
    "validate_params",
]
