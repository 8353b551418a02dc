"""
Analytics service — portfolio insights.

Sections:
  - key metrics (totals and per-workload means)
  - status / priority / risk / complexity distributions
  - 6 Rs strategy analysis with estimated savings
  - risk recommendations
  - data-center utilisation
"""

import logging

from migration_tool.services import aggregation as agg
from migration_tool.services import data_store
from migration_tool.services.data_store import ListQuery

logger = logging.getLogger(__name__)


def get_strategy_analysis(workloads):
    rows = agg.strategy_breakdown(workloads)
    for row in rows:
        row["estimated_savings"] = agg.strategy_savings(row)
    return rows


def get_analytics(ctx):
    page = data_store.load_page(
        ctx.user_id,
        ListQuery("workloads"),
        ListQuery("data_centers", order_by="created_at", descending=False),
    )
    workloads = page["workloads"]
    data_centers = page["data_centers"]

    strategies = get_strategy_analysis(workloads)
    payload = {
        "state": page.state,
        "summary": agg.portfolio_summary(workloads),
        "status_distribution": agg.status_distribution(workloads),
        "priority_distribution": agg.priority_distribution(workloads),
        "risk_distribution": agg.risk_distribution(workloads),
        "complexity_distribution": agg.complexity_distribution(workloads),
        "strategy_analysis": strategies,
        "potential_savings": agg.potential_savings(strategies),
        "risk_recommendations": agg.risk_recommendations(workloads),
        "data_center_utilization": agg.data_center_utilization(data_centers, workloads),
        "empty_states": {},
    }
    if not data_centers:
        payload["empty_states"]["data_centers"] = {
            "message": "Add data centers to see utilization analytics",
            "action": "Add Data Center",
        }
    if not workloads:
        payload["empty_states"]["workloads"] = {
            "message": "No workloads to analyze yet",
            "action": "Add Your First Workload",
        }
    logger.debug("Analytics for user=%s: %d workloads, %d data centers",
                 ctx.user_id, len(workloads), len(data_centers))
    return payload
