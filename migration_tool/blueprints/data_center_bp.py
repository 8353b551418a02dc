"""
Migration Planner
Data center blueprint — records and the Data Center Map page.

Endpoints:
    GET  /api/v1/map                — map page (?selected=<data center id>)
    POST /api/v1/map/viewport       — apply a pan/zoom action to a viewport state
    GET  /api/v1/data-centers       — data centers in creation order
    POST /api/v1/data-centers       — create a data center
    GET  /api/v1/data-centers/<id>  — one data center
"""

import logging

from flask import Blueprint, jsonify, request

from migration_tool.auth import user_required
from migration_tool.blueprints import (
    empty_list_response,
    json_object,
    list_response,
    register_error_handlers,
    require_name,
)
from migration_tool.core.exceptions import StoreUnavailableError, ValidationError
from migration_tool.services import data_center_service, map_service

logger = logging.getLogger(__name__)

data_center_bp = Blueprint("data_center", __name__, url_prefix="/api/v1")
register_error_handlers(data_center_bp)


@data_center_bp.route("/map", methods=["GET"])
@user_required
def map_page(ctx):
    return jsonify(map_service.get_map(ctx, request.args.get("selected")))


@data_center_bp.route("/map/viewport", methods=["POST"])
@user_required
def update_viewport(ctx):
    """
    Body: { "viewport": {...current state...}, "action": "zoom_in", "x": 10, "y": 20 }
    Returns the new viewport state.
    """
    data = json_object() or {}
    action = data.get("action")
    if not action:
        raise ValidationError("action is required", details={"action": "required"})
    viewport = map_service.MapViewport.from_dict(data.get("viewport"))
    viewport.apply(action, data.get("x"), data.get("y"))
    return jsonify(viewport.to_dict())


@data_center_bp.route("/data-centers", methods=["GET"])
@user_required
def list_data_centers(ctx):
    try:
        data_centers = data_center_service.list_data_centers(ctx)
    except StoreUnavailableError as exc:
        logger.warning("Error fetching data centers: %s", exc)
        return empty_list_response()
    return list_response(data_centers)


@data_center_bp.route("/data-centers", methods=["POST"])
@user_required
def create_data_center(ctx):
    data = json_object()
    err = require_name(data)
    if err:
        return err
    dc = data_center_service.create_data_center(ctx, data)
    return jsonify(dc.to_dict()), 201


@data_center_bp.route("/data-centers/<data_center_id>", methods=["GET"])
@user_required
def get_data_center(ctx, data_center_id):
    return jsonify(data_center_service.get_data_center(ctx, data_center_id).to_dict())
