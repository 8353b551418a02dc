"""
Planning and Assessment services.

Both pages work from the same newest-first workload list:
  - Planning: per-strategy stats, search/strategy filtering
  - Assessment: readiness metrics, risk/complexity breakdowns,
    per-strategy recommendations and the risk watch lists
"""

import logging

from migration_tool.core.exceptions import ValidationError
from migration_tool.models.migration import STRATEGY_KEYS
from migration_tool.services import aggregation as agg
from migration_tool.services import data_store
from migration_tool.services.data_store import ListQuery

logger = logging.getLogger(__name__)

QUICK_WIN_LIMIT = 3
ATTENTION_LIMIT = 3


def _load_workloads(ctx):
    return data_store.load_page(ctx.user_id, ListQuery("workloads", order_by="created_at"))


# ── Planning ─────────────────────────────────────────────────────────────


def get_planning(ctx, search="", strategy="all"):
    """Migration Planning page, optionally filtered."""
    strategy = strategy or "all"
    if strategy != "all" and strategy not in STRATEGY_KEYS:
        raise ValidationError(f"Unknown strategy filter: {strategy!r}", details={"strategy": "unknown"})

    page = _load_workloads(ctx)
    workloads = page["workloads"]
    filtered = agg.filter_workloads(workloads, search, strategy)
    logger.debug("Planning filter search=%r strategy=%s: %d of %d workloads",
                 search, strategy, len(filtered), len(workloads))

    payload = {
        "state": page.state,
        "strategy_stats": agg.strategy_breakdown(workloads),
        "workloads": [w.to_dict() for w in filtered],
        "total": len(workloads),
        "filters": {"search": search or "", "strategy": strategy},
    }
    if not filtered:
        if search or strategy != "all":
            payload["empty_state"] = {"message": "Try adjusting your search or filters"}
        else:
            payload["empty_state"] = {
                "message": "Start by adding your first workload to begin migration planning",
                "action": "Add Your First Workload",
            }
    return payload


# ── Assessment ───────────────────────────────────────────────────────────


def _brief(w):
    return {
        "id": w.id,
        "name": w.name,
        "strategy": w.strategy,
        "risk_level": w.risk_level,
        "complexity": w.complexity,
        "estimated_cost": w.estimated_cost,
    }


def get_assessment(ctx):
    """Workload Assessment page."""
    page = _load_workloads(ctx)
    workloads = page["workloads"]

    recommendations = [
        {
            "strategy": row["strategy"],
            "name": row["name"],
            "icon": row["icon"],
            "description": row["description"],
            "complexity": row["complexity"],
            "timeframe": row["timeframe"],
            "cost_saving": row["cost_saving"],
            "count": row["count"],
            "avg_cost": row["avg_cost"],
            "avg_duration": row["avg_duration"],
        }
        for row in agg.strategy_breakdown(workloads)
    ]

    payload = {
        "state": page.state,
        "metrics": agg.assessment_metrics(workloads),
        "risk_distribution": agg.risk_distribution(workloads),
        "complexity_distribution": agg.complexity_distribution(workloads),
        "strategy_recommendations": recommendations,
        "high_risk_workloads": [_brief(w) for w in agg.high_risk_workloads(workloads)],
        "high_complexity_workloads": [_brief(w) for w in agg.high_complexity_workloads(workloads)],
        "quick_wins": [_brief(w) for w in agg.quick_wins(workloads, QUICK_WIN_LIMIT)],
        "cost_optimization": agg.cost_optimization_candidates(workloads),
        "needs_attention": [_brief(w) for w in agg.high_risk_workloads(workloads, ATTENTION_LIMIT)],
    }
    if not workloads:
        payload["empty_state"] = {
            "message": "No workloads to assess yet",
            "action": "Add Your First Workload",
        }
    return payload
