from __future__ import annotations

import json
import os
from pathlib import Path

import streamlit as st


def _load_json(path: Path) -> dict | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def _format_number(value, suffix: str = "") -> str:
    if value is None:
        return "n/a"
    if isinstance(value, str):
        return value
    return f"{value:,.2f}{suffix}"


def main() -> None:
    st.set_page_config(page_title="Edge Simulator", layout="wide")
    st.title("Monte Carlo Strategy Simulator")

    default_report_path = os.getenv("EDGE_SIM_REPORT_PATH", "reports/monte_carlo.json")
    report_path = Path(st.sidebar.text_input("Report path", value=default_report_path))

    report = _load_json(report_path)
    if report is None:
        st.warning(f"No report found at {report_path}")
        return

    result = report.get("result", {})
    stats = result.get("statistics", {})
    params = result.get("params", {})
    insights = report.get("insights", {})
    balance_mode = params.get("risk_model") == "fixed_fraction"
    unit = "" if balance_mode else " R"

    st.caption(f"Run {report.get('run_id', 'n/a')} - seed {result.get('seed', 'n/a')}")

    col_a, col_b, col_c, col_d = st.columns(4)
    col_a.metric("Median Outcome", _format_number(stats.get("median_final_outcome"), unit))
    col_b.metric("Worst Case (P5)", _format_number(stats.get("worst_case_final_outcome"), unit))
    col_c.metric("Best Case (P95)", _format_number(stats.get("best_case_final_outcome"), unit))
    col_d.metric("Profitable Runs", _format_number(stats.get("profitable_pct"), "%"))

    col_e, col_f, col_g, col_h = st.columns(4)
    col_e.metric("Sharpe", _format_number(stats.get("sharpe_ratio")))
    col_f.metric("Sortino", _format_number(stats.get("sortino_ratio")))
    col_g.metric("Profit Factor", _format_number(stats.get("profit_factor")))
    col_h.metric("Median Max Drawdown", _format_number(stats.get("median_max_drawdown"), unit))

    if balance_mode:
        col_i, col_j, col_k, col_l = st.columns(4)
        col_i.metric("Median Balance", _format_number(stats.get("median_final_balance")))
        col_j.metric("Ruin Risk", _format_number(stats.get("ruin_pct"), "%"))
        col_k.metric("Calmar", _format_number(stats.get("calmar_ratio")))
        col_l.metric("Mean Max DD", _format_number(stats.get("mean_max_drawdown_pct"), "%"))

    kelly = stats.get("kelly", {})
    st.subheader("Kelly Criterion")
    st.write(
        f"Full {_format_number(kelly.get('full'), '%')} | Half {_format_number(kelly.get('half'), '%')} | "
        f"Quarter {_format_number(kelly.get('quarter'), '%')}"
    )
    if kelly.get("full", 0) <= 0:
        st.error(kelly.get("recommendation", ""))
    else:
        st.info(f"{kelly.get('level', '')}: {kelly.get('recommendation', '')}")

    st.subheader("Outcome Distribution")
    buckets = result.get("distribution_buckets", [])
    if buckets:
        st.bar_chart(
            {f"{bucket['range_start']:.1f}": bucket["count"] for bucket in buckets},
        )

    sample = result.get("sample_run", {})
    trades = sample.get("trades", [])
    if trades:
        st.subheader("Sample Run (median outcome)")
        st.line_chart([trade["cumulative_outcome"] for trade in trades])

    st.subheader("Insights")
    if insights.get("psychology_warning"):
        st.warning(insights["psychology_warning"])
    st.json(
        {
            "profitability_quality": insights.get("profitability_quality"),
            "risk_assessment": insights.get("risk_assessment"),
            "commission_assessment": insights.get("commission_assessment"),
            "improvement_suggestions": insights.get("improvement_suggestions", []),
            "expected_max_loss_streak": stats.get("expected_max_loss_streak"),
            "avg_loss_streak": stats.get("avg_loss_streak"),
        }
    )


if __name__ == "__main__":
    main()
