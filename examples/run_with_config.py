from pathlib import Path

from edge_sim.config import freeze_config, load_config, verify_config_lock
from edge_sim.monitoring import AuditLog
from edge_sim.runtime import create_run_context
from edge_sim.simulator import generate_insights, run_simulation


config_path = Path("configs") / "default.yaml"
config = load_config(config_path)
lock_path = freeze_config(config_path)
assert verify_config_lock(config_path, lock_path)

context = create_run_context(config_path, config.run_id_prefix, seed=config.engine.seed)

audit = AuditLog(
    Path(config.monitoring.audit_log_path),
    run_id=context.run_id,
    config_hash=context.config_hash,
)
audit.log("run_start", {"config": str(config_path), "lock": str(lock_path)})

result = run_simulation(
    config.params,
    seed=context.seed,
    workers=config.engine.workers,
    budget_cap=config.engine.budget_cap,
    audit_log=audit,
)
insights = generate_insights(result, config.insights)

print("Run:", context.run_id, "seed:", result.seed)
print("Median final outcome:", result.statistics.median_final_outcome)
print("Profitability:", insights.profitability_quality.value)
