"""
Shared pytest fixtures for the Migration Planner test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - user_headers / other_user_headers: identity headers (auth disabled in testing)
    - make_workload / make_data_center: transient model builders for pure tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from migration_tool import create_app
from migration_tool.models import db as _db
from migration_tool.models.migration import DataCenter, Workload

TEST_USER = "user-alice"
OTHER_USER = "user-bob"


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def user_headers():
    return {"X-User-Id": TEST_USER}


@pytest.fixture()
def other_user_headers():
    return {"X-User-Id": OTHER_USER}


# ── Transient model builders (no session) ────────────────────────────────

_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def make_workload():
    """Build an unsaved Workload; ``day`` offsets created_at from 2024-01-01."""
    counter = iter(range(10_000))

    def _make(day=None, **kw):
        n = next(counter)
        fields = {
            "id": f"w-{n}",
            "user_id": TEST_USER,
            "name": f"Workload {n}",
            "description": "",
            "current_location": "",
            "target_location": "",
            "strategy": "rehost",
            "complexity": "medium",
            "priority": "medium",
            "risk_level": "medium",
            "estimated_cost": 0.0,
            "estimated_duration": 0,
            "dependencies": [],
            "status": "planning",
            "created_at": _BASE_TIME + timedelta(days=n if day is None else day),
        }
        fields.update(kw)
        return Workload(**fields)

    return _make


@pytest.fixture()
def make_data_center():
    counter = iter(range(10_000))

    def _make(**kw):
        n = next(counter)
        fields = {
            "id": f"dc-{n}",
            "user_id": TEST_USER,
            "name": f"DC {n}",
            "location": "",
            "capacity": 100.0,
            "current_utilization": 0.0,
            "type": "source",
            "x": 100.0,
            "y": 100.0,
            "created_at": _BASE_TIME + timedelta(days=n),
        }
        fields.update(kw)
        return DataCenter(**fields)

    return _make
