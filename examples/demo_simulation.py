from edge_sim.simulator import (
    RiskModelKind,
    RiskType,
    SimulationParams,
    StrategyProfile,
    compare_strategies,
    generate_insights,
    kelly_criterion,
    run_simulation,
)


def main() -> None:
    edge = SimulationParams(
        number_of_trades=100,
        simulation_count=1000,
        win_rate=50,
        reward_risk_ratio=2.0,
        commission_impact=0.02,
    )
    result = run_simulation(edge, seed=42)
    stats = result.statistics
    print("Median final R:", round(stats.median_final_outcome, 2))
    print("5th / 95th percentile:", round(stats.worst_case_final_outcome, 2), round(stats.best_case_final_outcome, 2))
    print("Profitable runs %:", round(stats.profitable_pct, 1))
    print("Sharpe / Sortino:", round(stats.sharpe_ratio, 3), round(stats.sortino_ratio, 3))
    print("Kelly:", stats.kelly.full, stats.kelly.level.value, "-", stats.kelly.recommendation)

    insights = generate_insights(result)
    print("Quality:", insights.profitability_quality.value, "Risk:", insights.risk_assessment.value)
    if insights.psychology_warning:
        print("Warning:", insights.psychology_warning)

    account = SimulationParams(
        number_of_trades=250,
        simulation_count=2000,
        win_rate=40,
        reward_risk_ratio=1.8,
        commission_impact=5.0,
        risk_model=RiskModelKind.FIXED_FRACTION,
        initial_balance=25000,
        risk_per_trade=2.0,
        risk_type=RiskType.PERCENTAGE,
    )
    balance_result = run_simulation(account, seed=42, workers=-1)
    balance_stats = balance_result.statistics
    print("Median final balance:", round(balance_stats.median_final_balance or 0.0, 2))
    print("Ruin %:", balance_stats.ruin_pct, "Calmar:", round(balance_stats.calmar_ratio or 0.0, 3))

    print("Negative edge check:", kelly_criterion(30, 1.0).recommendation)

    report = compare_strategies(
        [
            StrategyProfile("breakout", "Breakout", win_rate=42, reward_risk_ratio=2.5, trades_count=180),
            StrategyProfile("fade", "Mean reversion fade", win_rate=61, reward_risk_ratio=0.9, trades_count=240),
            StrategyProfile("news", "News scalp", win_rate=35, reward_risk_ratio=1.2, trades_count=60),
        ],
        base_params=edge,
        seed=42,
    )
    for row in report.results:
        print(row.rank, row.strategy_name, round(row.profitable_pct, 1))
    for allocation in report.suggested_allocations:
        print(allocation.strategy_name, allocation.allocation_pct, allocation.reason)


if __name__ == "__main__":
    main()
