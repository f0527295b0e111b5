from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from edge_sim.config import load_config, serialize_config
from edge_sim.monitoring import AuditLog
from edge_sim.runtime import create_run_context
from edge_sim.simulator import (
    SimulationParamsError,
    generate_insights,
    run_simulation,
    serialize_insights,
    serialize_result,
)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--output", required=True)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--no-trades", action="store_true", help="Omit the sample run's trade list")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config_path = Path(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path)
    seed = args.seed if args.seed is not None else config.engine.seed
    workers = args.workers if args.workers is not None else config.engine.workers
    context = create_run_context(config_path, config.run_id_prefix, seed=seed)
    audit = AuditLog(config.monitoring.audit_log_path, run_id=context.run_id, config_hash=context.config_hash)

    try:
        result = run_simulation(
            config.params,
            seed=context.seed,
            workers=workers,
            budget_cap=config.engine.budget_cap,
            audit_log=audit,
        )
    except SimulationParamsError as exc:
        for issue in exc.issues:
            print(f"{issue.code} {issue.field}: {issue.message}")
        raise SystemExit(2) from exc

    insights = generate_insights(result, config.insights)
    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path),
        "config_hash": context.config_hash,
        "config": serialize_config(config),
        "result": serialize_result(result, include_trades=not args.no_trades),
        "insights": serialize_insights(insights),
    }

    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
