"""Migration Timeline service.

Each workload is drawn from its ``created_at`` (implied start) to
``created_at + estimated_duration`` days (implied end), oldest first.
"""
from migration_tool.models.migration import WORKLOAD_STATUSES
from migration_tool.services import aggregation as agg
from migration_tool.services import data_store
from migration_tool.services.data_store import ListQuery

MILESTONE_LIMIT = 5


def get_timeline(ctx):
    page = data_store.load_page(
        ctx.user_id,
        ListQuery("workloads", order_by="created_at"),
        ListQuery("plans", order_by="created_at"),
    )
    workloads = page["workloads"]
    plans = page["plans"]

    entries = agg.timeline_entries(workloads)
    status_stats = agg.count_by(workloads, "status", WORKLOAD_STATUSES)

    empty_states = {}
    if not entries:
        empty_states["timeline"] = {
            "message": "Start by adding workloads to see your migration timeline",
            "action": "Add Workloads",
        }
    if not plans:
        empty_states["plans"] = {
            "message": "No migration plans yet",
            "action": "Create Plan",
        }

    return {
        "state": page.state,
        "progress": {
            "percent": agg.completion_progress(workloads),
            "label": f"{agg.completion_progress(workloads):.1f}% Complete",
            "completed": status_stats["completed"],
            "total": len(workloads),
        },
        "status_stats": status_stats,
        "timeline": entries,
        "upcoming_milestones": agg.upcoming_milestones(entries, MILESTONE_LIMIT),
        "plans": [p.to_dict() for p in plans],
        "empty_states": empty_states,
    }
