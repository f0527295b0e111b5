"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from edge_sim.config.models import EngineConfig, MonitoringConfig, SimulatorConfig
from edge_sim.simulator.insights import InsightThresholds
from edge_sim.simulator.models import RiskModelKind, RiskType, SimulationParams
from edge_sim.simulator.validation import SIMULATION_BUDGET_CAP


def load_config(path: str | Path) -> SimulatorConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    return SimulatorConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        params=_parse_params(_require(data, "params")),
        engine=_parse_engine(data.get("engine") or {}),
        monitoring=_parse_monitoring(data.get("monitoring") or {}),
        insights=_parse_insights(data.get("insights") or {}),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except Exception as exc:
        raise ValueError(f"Invalid {key}: {value}") from exc


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _parse_params(data: dict[str, Any]) -> SimulationParams:
    return SimulationParams(
        number_of_trades=int(_require(data, "number_of_trades")),
        simulation_count=int(_require(data, "simulation_count")),
        win_rate=float(_require(data, "win_rate")),
        reward_risk_ratio=float(_require(data, "reward_risk_ratio")),
        commission_impact=float(data.get("commission_impact", 0.0)),
        risk_model=_parse_enum(RiskModelKind, data.get("risk_model", "fixed_r"), "risk_model"),
        initial_balance=_optional_float(data.get("initial_balance")),
        risk_per_trade=_optional_float(data.get("risk_per_trade")),
        risk_type=_parse_enum(RiskType, data.get("risk_type", "percentage"), "risk_type"),
    )


def _parse_engine(data: dict[str, Any]) -> EngineConfig:
    seed = data.get("seed")
    budget_cap = data.get("budget_cap", SIMULATION_BUDGET_CAP)
    return EngineConfig(
        seed=None if seed is None else int(seed),
        workers=int(data.get("workers", 1)),
        budget_cap=None if budget_cap is None else int(budget_cap),
    )


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
    )


def _parse_insights(data: dict[str, Any]) -> InsightThresholds:
    defaults = InsightThresholds()
    known = {item.name for item in fields(InsightThresholds)}
    overrides: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            raise ValueError(f"Unknown insights threshold: {key}")
        if isinstance(getattr(defaults, key), tuple):
            overrides[key] = tuple(float(item) for item in value)
        else:
            overrides[key] = float(value)
    return InsightThresholds(**overrides)


def serialize_config(config: SimulatorConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["params"]["risk_model"] = config.params.risk_model.value
    payload["params"]["risk_type"] = config.params.risk_type.value
    return payload
