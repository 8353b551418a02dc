"""
Dashboard Blueprint — the landing page view model.
"""

from flask import Blueprint, jsonify

from migration_tool.auth import user_required
from migration_tool.blueprints import register_error_handlers
from migration_tool.services import dashboard_service as svc

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/v1/dashboard")
register_error_handlers(dashboard_bp)


@dashboard_bp.route("", methods=["GET"])
@user_required
def full_dashboard(ctx):
    """Stats, strategy distribution, recent plans and workloads."""
    return jsonify(svc.get_dashboard(ctx)), 200
