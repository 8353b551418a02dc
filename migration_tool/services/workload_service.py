"""Workload service — create and list workloads for the current user.

The create path mirrors the "Add Workload" dialog: enumerated fields fall
back to the dialog's defaults, status always starts at ``planning`` and the
dependency list defaults to empty.
"""
from migration_tool.core.exceptions import NotFoundError, ValidationError
from migration_tool.models.base import new_id, utcnow
from migration_tool.models.migration import LEVELS, MAX_DURATION_DAYS, STRATEGY_KEYS, Workload
from migration_tool.services import data_store
from migration_tool.utils.helpers import parse_choice, parse_number, parse_text


def build_workload(user_id, data):
    """Validate a draft and return an unsaved Workload."""
    name = parse_text(data, "name").strip()
    if not name:
        raise ValidationError("name is required", details={"name": "required"})

    dependencies = data.get("dependencies") or []
    if not isinstance(dependencies, list):
        raise ValidationError("dependencies must be a list", details={"dependencies": "not a list"})

    now = utcnow()
    return Workload(
        id=new_id(),
        user_id=user_id,
        name=name,
        description=parse_text(data, "description"),
        current_location=parse_text(data, "current_location"),
        target_location=parse_text(data, "target_location"),
        strategy=parse_choice(data, "strategy", STRATEGY_KEYS, "rehost"),
        complexity=parse_choice(data, "complexity", LEVELS, "medium"),
        priority=parse_choice(data, "priority", LEVELS, "medium"),
        risk_level=parse_choice(data, "risk_level", LEVELS, "medium"),
        estimated_cost=parse_number(data, "estimated_cost"),
        estimated_duration=parse_number(
            data, "estimated_duration", integer=True, maximum=MAX_DURATION_DAYS,
        ),
        dependencies=[str(d) for d in dependencies],
        status="planning",
        created_at=now,
        updated_at=now,
    )


def create_workload(ctx, data):
    """Create a workload owned by ``ctx.user_id``.

    Returns:
        The persisted Workload.

    Raises:
        ValidationError: a field failed its rule.
        PersistenceError: the write failed; nothing was stored.
    """
    workload = build_workload(ctx.user_id, data)
    return data_store.create_record(workload, label="workload", draft=data)


def list_workloads(ctx, limit=None):
    """Newest-first workloads; raises StoreUnavailableError on read failure."""
    return data_store.list_records(
        Workload, ctx.user_id, order_by="created_at", descending=True, limit=limit,
    )


def get_workload(ctx, workload_id):
    workload = data_store.get_record(Workload, ctx.user_id, workload_id)
    if workload is None:
        raise NotFoundError("Workload", workload_id)
    return workload
