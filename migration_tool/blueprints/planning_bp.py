"""
Migration Planner
Planning blueprint — workloads and the 6 Rs strategy table.

Endpoints:
    GET  /api/v1/planning       — Migration Planning page (?search=, ?strategy=)
    GET  /api/v1/workloads      — newest-first workload list (?limit=)
    POST /api/v1/workloads      — create a workload
    GET  /api/v1/workloads/<id> — one workload
    GET  /api/v1/strategies     — strategy metadata
"""

import logging

from flask import Blueprint, jsonify, request

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
from migration_tool.models.migration import MIGRATION_STRATEGIES, STRATEGY_KEYS
from migration_tool.services import planning_service, workload_service

logger = logging.getLogger(__name__)

planning_bp = Blueprint("planning", __name__, url_prefix="/api/v1")
register_error_handlers(planning_bp)


@planning_bp.route("/planning", methods=["GET"])
@user_required
def planning_page(ctx):
    search = request.args.get("search", "")
    strategy = request.args.get("strategy", "all")
    return jsonify(planning_service.get_planning(ctx, search, strategy))


@planning_bp.route("/workloads", methods=["GET"])
@user_required
def list_workloads(ctx):
    try:
        workloads = workload_service.list_workloads(ctx, limit=parse_limit())
    except StoreUnavailableError as exc:
        logger.warning("Error fetching workloads: %s", exc)
        return empty_list_response()
    return list_response(workloads)


@planning_bp.route("/workloads", methods=["POST"])
@user_required
def create_workload(ctx):
    data = json_object()
    err = require_name(data)
    if err:
        return err
    workload = workload_service.create_workload(ctx, data)
    return jsonify(workload.to_dict()), 201


@planning_bp.route("/strategies", methods=["GET"])
def list_strategies():
    return jsonify([
        {"key": key, **MIGRATION_STRATEGIES[key]} for key in STRATEGY_KEYS
    ])


@planning_bp.route("/workloads/<workload_id>", methods=["GET"])
@user_required
def get_workload(ctx, workload_id):
    return jsonify(workload_service.get_workload(ctx, workload_id).to_dict())
