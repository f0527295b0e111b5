"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from edge_sim.simulator.insights import InsightThresholds
from edge_sim.simulator.models import SimulationParams
from edge_sim.simulator.validation import SIMULATION_BUDGET_CAP


@dataclass(frozen=True)
class EngineConfig:
    seed: Optional[int] = None
    workers: int = 1
    budget_cap: Optional[int] = SIMULATION_BUDGET_CAP


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class SimulatorConfig:
    name: str
    version: str
    run_id_prefix: str
    params: SimulationParams
    engine: EngineConfig = EngineConfig()
    monitoring: MonitoringConfig = MonitoringConfig()
    insights: InsightThresholds = InsightThresholds()
