"""
Assessment Blueprint — workload readiness and risk overview.
"""

from flask import Blueprint, jsonify

from migration_tool.auth import user_required
from migration_tool.blueprints import register_error_handlers
from migration_tool.services import planning_service

assessment_bp = Blueprint("assessment", __name__, url_prefix="/api/v1/assessment")
register_error_handlers(assessment_bp)


@assessment_bp.route("", methods=["GET"])
@user_required
def assessment_page(ctx):
    return jsonify(planning_service.get_assessment(ctx)), 200
