"""
Migration Planner
Timeline blueprint — migration plans and the Migration Timeline page.

Endpoints:
    GET  /api/v1/timeline   — timeline page
    GET  /api/v1/plans      — newest-first plan list (?limit=)
    POST /api/v1/plans      — create a migration plan
    GET  /api/v1/plans/<id> — one plan with its resolved workloads
"""

import logging

from flask import Blueprint, jsonify

from migration_tool.auth import user_required
from migration_tool.blueprints import (
    empty_list_response,
    json_object,
    list_response,
    parse_limit,
    register_error_handlers,
    require_name,
)
from migration_tool.core.exceptions import StoreUnavailableError
from migration_tool.services import plan_service, timeline_service

logger = logging.getLogger(__name__)

timeline_bp = Blueprint("timeline", __name__, url_prefix="/api/v1")
register_error_handlers(timeline_bp)


@timeline_bp.route("/timeline", methods=["GET"])
@user_required
def timeline_page(ctx):
    return jsonify(timeline_service.get_timeline(ctx))


@timeline_bp.route("/plans", methods=["GET"])
@user_required
def list_plans(ctx):
    try:
        plans = plan_service.list_plans(ctx, limit=parse_limit())
    except StoreUnavailableError as exc:
        logger.warning("Error fetching plans: %s", exc)
        return empty_list_response()
    return list_response(plans)


@timeline_bp.route("/plans", methods=["POST"])
@user_required
def create_plan(ctx):
    data = json_object()
    err = require_name(data)
    if err:
        return err
    plan = plan_service.create_plan(ctx, data)
    return jsonify(plan.to_dict()), 201


@timeline_bp.route("/plans/<plan_id>", methods=["GET"])
@user_required
def get_plan(ctx, plan_id):
    plan = plan_service.get_plan(ctx, plan_id)
    return jsonify({
        **plan.to_dict(),
        "workloads": [w.to_dict() for w in plan_service.resolve_workloads(ctx, plan)],
    })
