"""
Migration Planner
Flask Application Factory.

Usage:
    from migration_tool import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError

from migration_tool.config import config
from migration_tool.models import db
from migration_tool.middleware.logging_config import configure_logging
from migration_tool.middleware.timing import init_request_timing
from migration_tool.middleware.diagnostics import run_startup_diagnostics
from migration_tool.middleware.security_headers import init_security_headers
from migration_tool.middleware.rate_limiter import init_rate_limits
from migration_tool.middleware.jwt_auth import init_jwt_middleware
from migration_tool.utils.errors import E, api_error

logger = logging.getLogger(__name__)

migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # per-blueprint limits only
    storage_uri=os.getenv("REDIS_URL", "memory://"),
)


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        CORS(app)

    # ── Middleware ───────────────────────────────────────────────────────
    init_security_headers(app)
    init_request_timing(app)
    init_jwt_middleware(app)

    # ── Import models so Alembic can detect them ─────────────────────────
    from migration_tool.models import migration as _migration_models  # noqa: F401

    # ── Auto-create tables (CREATE IF NOT EXISTS) ────────────────────────
    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            try:
                db.create_all()
                app.logger.info("db.create_all() completed successfully")
            except SQLAlchemyError as e:
                app.logger.warning("db.create_all() failed: %s", e)

    # ── Blueprints ───────────────────────────────────────────────────────
    from migration_tool.blueprints.auth_bp import auth_bp
    from migration_tool.blueprints.health_bp import health_bp
    from migration_tool.blueprints.dashboard_bp import dashboard_bp
    from migration_tool.blueprints.planning_bp import planning_bp
    from migration_tool.blueprints.data_center_bp import data_center_bp
    from migration_tool.blueprints.assessment_bp import assessment_bp
    from migration_tool.blueprints.timeline_bp import timeline_bp
    from migration_tool.blueprints.analytics_bp import analytics_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(planning_bp)
    app.register_blueprint(data_center_bp)
    app.register_blueprint(assessment_bp)
    app.register_blueprint(timeline_bp)
    app.register_blueprint(analytics_bp)

    # ── CLI commands ─────────────────────────────────────────────────────
    from migration_tool.cli import register_cli
    register_cli(app)

    # ── Error handlers ───────────────────────────────────────────────────
    @app.errorhandler(404)
    def not_found(e):
        return api_error(E.NOT_FOUND, "Not found", details={"path": request.path})

    @app.errorhandler(405)
    def method_not_allowed(e):
        return {"error": "Method not allowed"}, 405

    @app.errorhandler(429)
    def rate_limited(e):
        return {"error": "Too many requests", "retry_after": e.description}, 429

    @app.errorhandler(500)
    def server_error(e):
        logger.error("500 error: %s", e, exc_info=True)
        return api_error(E.INTERNAL, "Internal server error")

    # ── Startup diagnostics ──────────────────────────────────────────────
    run_startup_diagnostics(app)

    # ── Rate limiting (after blueprints registered) ──────────────────────
    init_rate_limits(app, limiter)

    return app
