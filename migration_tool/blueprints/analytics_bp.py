"""
Analytics Blueprint — portfolio insights, distributions and savings.
"""

from flask import Blueprint, jsonify

from migration_tool.auth import user_required
from migration_tool.blueprints import register_error_handlers
from migration_tool.services import analytics_service as svc

analytics_bp = Blueprint("analytics", __name__, url_prefix="/api/v1/analytics")
register_error_handlers(analytics_bp)


@analytics_bp.route("", methods=["GET"])
@user_required
def analytics_page(ctx):
    return jsonify(svc.get_analytics(ctx)), 200
