"""Config loading and freezing."""

from edge_sim.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from edge_sim.config.models import EngineConfig, MonitoringConfig, SimulatorConfig

__all__ = [
    "EngineConfig",
    "MonitoringConfig",
    "SimulatorConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
