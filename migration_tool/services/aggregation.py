"""
Aggregation routines — counts, sums, averages and percentages over the
in-memory workload and data-center lists a page has fetched.

Every function here is pure and total: it never touches the session and an
empty input yields zeros, never a ZeroDivisionError.

Usage:
    from migration_tool.services import aggregation as agg
    summary = agg.portfolio_summary(workloads)
    savings = agg.potential_savings(agg.strategy_breakdown(workloads))
"""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Iterable, Sequence

from migration_tool.models.migration import (
    LEVELS,
    MIGRATION_STRATEGIES,
    STRATEGY_KEYS,
    WORKLOAD_STATUSES,
)

logger = logging.getLogger(__name__)

# Savings multiplier keyed by a strategy's qualitative cost-saving tag.
SAVINGS_MULTIPLIERS = {
    "very high": 0.4,
    "high": 0.3,
    "medium": 0.2,
    "none": 0.0,
}

# Utilisation thresholds (percent) for the bar colour band.
UTILIZATION_CRITICAL_PCT = 80
UTILIZATION_WARNING_PCT = 60

STATUS_LABELS = {
    "planning": "Planning",
    "in-progress": "In Progress",
    "completed": "Completed",
    "on-hold": "On Hold",
}


# ═════════════════════════════════════════════════════════════════════════════
# Primitives
# ═════════════════════════════════════════════════════════════════════════════

def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0


def percentage(count: int | float, total: int | float) -> float:
    """``count / total * 100``; 0 when total is 0."""
    return (count / total) * 100 if total else 0


def round_half_up(value: float) -> int:
    """Round .5 upwards, the way the dashboards display percentages."""
    return int(math.floor(value + 0.5))


def display_percentage(count: int | float, total: int | float) -> int:
    """Whole-number percentage for labels."""
    return round_half_up(percentage(count, total))


def count_by(items: Iterable, attr: str, categories: Sequence[str]) -> dict[str, int]:
    """Count items per category, keeping category order. Unknown values are ignored."""
    counts = {key: 0 for key in categories}
    for item in items:
        value = getattr(item, attr, None)
        if value in counts:
            counts[value] += 1
    return counts


def distribution(items, attr: str, categories: Sequence[str], labels: dict | None = None) -> list[dict]:
    """Per-category count plus share of the whole list.

    ``share`` is the exact percentage; ``percentage`` is rounded for display.
    """
    items = list(items)
    total = len(items)
    counts = count_by(items, attr, categories)
    labels = labels or {}
    return [
        {
            "key": key,
            "label": labels.get(key, key),
            "count": count,
            "share": percentage(count, total),
            "percentage": display_percentage(count, total),
        }
        for key, count in counts.items()
    ]


def status_distribution(workloads) -> list[dict]:
    return distribution(workloads, "status", WORKLOAD_STATUSES, STATUS_LABELS)


def priority_distribution(workloads) -> list[dict]:
    return distribution(workloads, "priority", LEVELS)


def risk_distribution(workloads) -> list[dict]:
    return distribution(workloads, "risk_level", LEVELS)


def complexity_distribution(workloads) -> list[dict]:
    return distribution(workloads, "complexity", LEVELS)


# ═════════════════════════════════════════════════════════════════════════════
# Portfolio totals
# ═════════════════════════════════════════════════════════════════════════════

def portfolio_summary(workloads) -> dict:
    """Headline totals and per-workload means."""
    workloads = list(workloads)
    costs = [w.estimated_cost or 0 for w in workloads]
    durations = [w.estimated_duration or 0 for w in workloads]
    statuses = count_by(workloads, "status", WORKLOAD_STATUSES)
    return {
        "total_workloads": len(workloads),
        "in_progress": statuses["in-progress"],
        "completed": statuses["completed"],
        "total_cost": sum(costs),
        "total_duration": sum(durations),
        "avg_cost_per_workload": _mean(costs),
        "avg_duration_per_workload": _mean(durations),
    }


def strategy_breakdown(workloads) -> list[dict]:
    """One row per strategy in 6 Rs order, with cost and duration aggregates."""
    workloads = list(workloads)
    total = len(workloads)
    rows = []
    for key in STRATEGY_KEYS:
        members = [w for w in workloads if w.strategy == key]
        costs = [w.estimated_cost or 0 for w in members]
        durations = [w.estimated_duration or 0 for w in members]
        rows.append({
            "strategy": key,
            **MIGRATION_STRATEGIES[key],
            "count": len(members),
            "total_cost": sum(costs),
            "avg_cost": _mean(costs),
            "avg_duration": _mean(durations),
            "share": percentage(len(members), total),
            "percentage": display_percentage(len(members), total),
        })
    return rows


# ═════════════════════════════════════════════════════════════════════════════
# Cost savings
# ═════════════════════════════════════════════════════════════════════════════

def savings_multiplier(cost_saving: str | None) -> float:
    return SAVINGS_MULTIPLIERS.get(cost_saving or "none", 0.0)


def strategy_savings(row: dict) -> float:
    """Estimated savings for one ``strategy_breakdown`` row."""
    return row["total_cost"] * savings_multiplier(row.get("cost_saving"))


def potential_savings(breakdown: Iterable[dict]) -> float:
    """Sum of per-strategy total cost × cost-saving multiplier."""
    return sum(strategy_savings(row) for row in breakdown)


# ═════════════════════════════════════════════════════════════════════════════
# Data-center utilisation
# ═════════════════════════════════════════════════════════════════════════════

def utilization_percent(dc) -> float:
    """Utilisation over capacity; not clamped (150 stays 150)."""
    return percentage(dc.current_utilization or 0, dc.capacity or 0)


def utilization_bar_width(dc) -> float:
    return min(utilization_percent(dc), 100)


def utilization_label(dc) -> str:
    return f"{utilization_percent(dc):.1f}%"


def utilization_band(pct: float) -> str:
    if pct > UTILIZATION_CRITICAL_PCT:
        return "critical"
    if pct > UTILIZATION_WARNING_PCT:
        return "warning"
    return "healthy"


def workloads_for_data_center(dc, workloads) -> list:
    """Workloads leaving a source center or landing on a target center (name match)."""
    if dc.type == "source":
        return [w for w in workloads if w.current_location == dc.name]
    return [w for w in workloads if w.target_location == dc.name]


def utilization_row(dc, workloads) -> dict:
    pct = utilization_percent(dc)
    return {
        **dc.to_dict(),
        "utilization_percent": pct,
        "utilization_label": utilization_label(dc),
        "bar_width": utilization_bar_width(dc),
        "band": utilization_band(pct),
        "workload_count": len(workloads_for_data_center(dc, workloads)),
    }


def data_center_utilization(data_centers, workloads) -> list[dict]:
    workloads = list(workloads)
    return [utilization_row(dc, workloads) for dc in data_centers]


# ═════════════════════════════════════════════════════════════════════════════
# Timeline
# ═════════════════════════════════════════════════════════════════════════════

def _start_of(workload):
    # Unsaved rows have no timestamp yet; they sort last.
    return (workload.created_at is None, workload.created_at or 0)


def _end_of(start, duration):
    if start is None:
        return None
    try:
        return start + timedelta(days=duration or 0)
    except OverflowError:
        # Beyond the datetime range there is no end date.
        logger.warning("Duration %s days overflows the calendar; end date omitted", duration)
        return None


def timeline_entries(workloads) -> list[dict]:
    """Workloads ordered by implied start (``created_at``) with implied end dates."""
    ordered = sorted(workloads, key=_start_of)
    entries = []
    for w in ordered:
        start = w.created_at
        end = _end_of(start, w.estimated_duration)
        entries.append({
            **w.to_dict(),
            "start_date": start.isoformat() if start else None,
            "end_date": end.isoformat() if end else None,
        })
    return entries


def completion_progress(workloads) -> float:
    workloads = list(workloads)
    completed = sum(1 for w in workloads if w.status == "completed")
    return percentage(completed, len(workloads))


def upcoming_milestones(entries: Sequence[dict], limit: int = 5) -> list[dict]:
    """First ``limit`` timeline entries that are not yet completed."""
    return [e for e in entries if e["status"] != "completed"][:limit]


# ═════════════════════════════════════════════════════════════════════════════
# Assessment
# ═════════════════════════════════════════════════════════════════════════════

def is_assessed(workload) -> bool:
    return bool(workload.strategy and workload.complexity and workload.risk_level)


def assessment_metrics(workloads) -> dict:
    workloads = list(workloads)
    total = len(workloads)
    assessed = sum(1 for w in workloads if is_assessed(w))
    return {
        "total_workloads": total,
        "assessed": assessed,
        "assessed_percentage": display_percentage(assessed, total),
        "high_risk": sum(1 for w in workloads if w.risk_level == "high"),
        "high_complexity": sum(1 for w in workloads if w.complexity == "high"),
        "total_cost": sum(w.estimated_cost or 0 for w in workloads),
        "avg_duration": _mean([w.estimated_duration or 0 for w in workloads]),
    }


def high_risk_workloads(workloads, limit: int | None = None) -> list:
    found = [w for w in workloads if w.risk_level == "high"]
    return found[:limit] if limit is not None else found


def high_complexity_workloads(workloads, limit: int | None = None) -> list:
    found = [w for w in workloads if w.complexity == "high"]
    return found[:limit] if limit is not None else found


def quick_wins(workloads, limit: int = 3) -> list:
    """Low-risk, low-complexity workloads to migrate first."""
    return [w for w in workloads if w.risk_level == "low" and w.complexity == "low"][:limit]


def cost_optimization_candidates(workloads) -> dict[str, int]:
    counts = count_by(workloads, "strategy", STRATEGY_KEYS)
    return {"retire": counts["retire"], "repurchase": counts["repurchase"]}


def risk_recommendations(workloads) -> list[dict]:
    """Advice cards shown next to the risk analysis."""
    workloads = list(workloads)
    risk = count_by(workloads, "risk_level", LEVELS)
    complexity = count_by(workloads, "complexity", LEVELS)
    recs = []
    if risk["high"] > 0:
        recs.append({
            "kind": "high_risk",
            "count": risk["high"],
            "message": (
                "Consider additional planning, proof of concepts, and phased "
                "approaches for high-risk workloads."
            ),
        })
    if complexity["high"] > 0:
        recs.append({
            "kind": "high_complexity",
            "count": complexity["high"],
            "message": (
                "Allocate additional resources and consider breaking down complex "
                "workloads into smaller components."
            ),
        })
    recs.append({
        "kind": "quick_wins",
        "count": risk["low"],
        "message": f"{risk['low']} low-risk workloads can be prioritized for early migration success.",
    })
    return recs


# ═════════════════════════════════════════════════════════════════════════════
# Filtering
# ═════════════════════════════════════════════════════════════════════════════

def filter_workloads(workloads, search: str = "", strategy: str = "all") -> list:
    """Case-insensitive name/description search plus an optional strategy filter."""
    term = (search or "").lower()
    strategy = strategy or "all"
    result = []
    for w in workloads:
        matches_search = term in (w.name or "").lower() or term in (w.description or "").lower()
        matches_strategy = strategy == "all" or w.strategy == strategy
        if matches_search and matches_strategy:
            result.append(w)
    return result
