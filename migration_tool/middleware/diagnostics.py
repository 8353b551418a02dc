"""
Startup diagnostics — runs once when the Flask app starts.

Checks the database and logs a summary banner.
"""

import logging
import sys

from flask import Flask
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError

from migration_tool.auth import is_auth_enabled
from migration_tool.models import db
from migration_tool.services.data_store import COLLECTIONS

logger = logging.getLogger(__name__)


def run_startup_diagnostics(app: Flask):
    """Run diagnostic checks during app startup (inside app context)."""
    if app.config.get("TESTING"):
        return

    issues: list[str] = []

    with app.app_context():
        py = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

        # ── Database connectivity ────────────────────────────────────
        db_status = "ok"
        db_uri = str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
        db_type = "PostgreSQL" if "postgresql" in db_uri else "SQLite" if "sqlite" in db_uri else "unknown"
        try:
            db.session.execute(db.text("SELECT 1"))
        except SQLAlchemyError as exc:
            db_status = "FAILED"
            issues.append(f"Database unreachable: {exc}")

        # ── Planner tables ───────────────────────────────────────────
        table_status = "?"
        try:
            existing = set(sa_inspect(db.engine).get_table_names())
            expected = [m.__tablename__ for m in COLLECTIONS.values()]
            missing = [t for t in expected if t not in existing]
            table_status = f"{len(expected) - len(missing)}/{len(expected)}"
            if missing:
                issues.append(
                    f"Missing tables: {', '.join(missing)} — run 'flask db upgrade' "
                    "or set AUTO_CREATE_TABLES"
                )
        except SQLAlchemyError:
            table_status = "check failed"

        auth_enabled = is_auth_enabled()

        banner = f"""
╔══════════════════════════════════════════════════════════════╗
║  Migration Planner — Startup Diagnostics                     ║
╠══════════════════════════════════════════════════════════════╣
║  Python      : {py:<46s}║
║  Debug       : {str(app.debug):<46s}║
║  Database    : {f'{db_type} ({db_status})':<46s}║
║  Tables      : {table_status:<46s}║
║  Auth        : {'ENABLED' if auth_enabled else 'DISABLED':<46s}║
╚══════════════════════════════════════════════════════════════╝"""
        logger.info(banner)

        if issues:
            logger.warning("Startup issues detected:")
            for issue in issues:
                logger.warning("  ⚠ %s", issue)
        else:
            logger.info("All startup checks passed")
