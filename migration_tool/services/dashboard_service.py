"""
Dashboard service — the landing page.

Aggregates for the overview screen:
  - headline stats (total, in progress, completed, total cost)
  - workload distribution across the 6 Rs
  - recent migration plans and recent workloads
"""

import logging

from migration_tool.services import aggregation as agg
from migration_tool.services import data_store
from migration_tool.services.data_store import ListQuery

logger = logging.getLogger(__name__)

RECENT_WORKLOADS_FETCH = 10
RECENT_WORKLOADS_SHOWN = 5
RECENT_PLANS_FETCH = 5


def get_stats(workloads):
    summary = agg.portfolio_summary(workloads)
    return {
        "total_workloads": summary["total_workloads"],
        "in_progress": summary["in_progress"],
        "completed": summary["completed"],
        "total_cost": summary["total_cost"],
    }


def get_strategy_distribution(workloads):
    return [
        {
            "strategy": row["strategy"],
            "name": row["name"],
            "icon": row["icon"],
            "count": row["count"],
        }
        for row in agg.strategy_breakdown(workloads)
    ]


def get_dashboard(ctx):
    """Full dashboard payload for ``ctx.user_id``."""
    page = data_store.load_page(
        ctx.user_id,
        ListQuery("workloads", order_by="created_at", limit=RECENT_WORKLOADS_FETCH),
        ListQuery("plans", order_by="created_at", limit=RECENT_PLANS_FETCH),
    )
    workloads = page["workloads"]
    plans = page["plans"]

    empty_states = {}
    if not plans:
        empty_states["plans"] = {
            "message": "No migration plans yet",
            "action": "Create Your First Plan",
        }
    if not workloads:
        empty_states["workloads"] = {
            "message": "No workloads yet",
            "action": "Add Your First Workload",
        }

    logger.debug("Dashboard for user=%s: %d workloads, %d plans (%s)",
                 ctx.user_id, len(workloads), len(plans), page.state)
    return {
        "state": page.state,
        "stats": get_stats(workloads),
        "strategy_distribution": get_strategy_distribution(workloads),
        "recent_plans": [p.to_dict() for p in plans],
        "recent_workloads": [w.to_dict() for w in workloads[:RECENT_WORKLOADS_SHOWN]],
        "empty_states": empty_states,
    }
