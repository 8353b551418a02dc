"""Migration plan service — create and list plans for the current user.

``workload_ids`` is stored as given; the ids are not checked against the
workloads table.
"""
from migration_tool.core.exceptions import NotFoundError, StoreUnavailableError, ValidationError
from migration_tool.models.base import new_id, utcnow
from migration_tool.models.migration import PLAN_STATUSES, MigrationPlan, Workload
from migration_tool.services import data_store
from migration_tool.utils.helpers import parse_choice, parse_date, parse_number, parse_text


def _date_field(data, field):
    raw = data.get(field)
    if not raw:
        return ""
    parsed = parse_date(raw)
    if parsed is None:
        raise ValidationError(
            f"Invalid {field}: {raw!r}", details={field: "use YYYY-MM-DD or DD.MM.YYYY"},
        )
    return parsed.isoformat()


def build_plan(user_id, data):
    name = parse_text(data, "name").strip()
    if not name:
        raise ValidationError("name is required", details={"name": "required"})

    workload_ids = data.get("workload_ids") or []
    if not isinstance(workload_ids, list):
        raise ValidationError("workload_ids must be a list", details={"workload_ids": "not a list"})

    start_date = _date_field(data, "start_date")
    end_date = _date_field(data, "end_date")
    if start_date and end_date and end_date < start_date:
        raise ValidationError(
            "end_date is before start_date", details={"end_date": "before start_date"},
        )

    now = utcnow()
    return MigrationPlan(
        id=new_id(),
        user_id=user_id,
        name=name,
        description=parse_text(data, "description"),
        workload_ids=[str(w) for w in workload_ids],
        start_date=start_date,
        end_date=end_date,
        total_cost=parse_number(data, "total_cost"),
        status=parse_choice(data, "status", PLAN_STATUSES, "draft"),
        created_at=now,
        updated_at=now,
    )


def create_plan(ctx, data):
    plan = build_plan(ctx.user_id, data)
    return data_store.create_record(plan, label="migration plan", draft=data)


def list_plans(ctx, limit=None):
    return data_store.list_records(
        MigrationPlan, ctx.user_id, order_by="created_at", descending=True, limit=limit,
    )


def get_plan(ctx, plan_id):
    plan = data_store.get_record(MigrationPlan, ctx.user_id, plan_id)
    if plan is None:
        raise NotFoundError("MigrationPlan", plan_id)
    return plan


def resolve_workloads(ctx, plan):
    """Workloads a plan references, in plan order; ids that no longer resolve are skipped."""
    ids = list(plan.workload_ids or [])
    if not ids:
        return []
    try:
        owned = data_store.list_records(Workload, ctx.user_id)
    except StoreUnavailableError:
        return []
    by_id = {w.id: w for w in owned}
    return [by_id[i] for i in ids if i in by_id]
