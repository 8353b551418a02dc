"""
Health check blueprint.

Endpoints:
    GET /api/v1/health        — liveness plus database ping
    GET /api/v1/health/ready  — are the planner tables provisioned?
"""

import logging
import time

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from migration_tool.models import db
from migration_tool.services import data_store

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/api/v1/health")


@health_bp.route("", methods=["GET"])
def live():
    """Liveness check with database latency."""
    checks = {}
    overall = True
    try:
        t0 = time.perf_counter()
        db.session.execute(db.text("SELECT 1"))
        db_ms = (time.perf_counter() - t0) * 1000
        checks["database"] = {"status": "ok", "latency_ms": round(db_ms, 1)}
    except SQLAlchemyError as exc:
        db.session.rollback()
        checks["database"] = {"status": "error", "detail": str(exc)}
        overall = False
        logger.error("Health check — database failed: %s", exc)

    status_code = 200 if overall else 503
    return jsonify({
        "status": "healthy" if overall else "degraded",
        "app": "Migration Planner",
        "checks": checks,
    }), status_code


@health_bp.route("/ready", methods=["GET"])
def ready():
    """503 until every planner table exists."""
    provisioned = data_store.is_provisioned()
    body = {"database_ready": provisioned}
    if not provisioned:
        body["message"] = "Database not initialized. Run 'flask db upgrade' or enable AUTO_CREATE_TABLES."
    return jsonify(body), 200 if provisioned else 503
