"""
Tests — Workload API and the Migration Planning page.

Covers:
    - create + list round trip, defaults, owner scoping
    - validation: missing name (400), bad enum / negative cost (422)
    - write failure → 503 with the draft echoed back
    - planning page filters and empty states
"""

import pytest
from sqlalchemy.exc import OperationalError

from migration_tool.models import db as _db
from migration_tool.models.migration import Workload


def _create(client, headers, **kw):
    payload = {"name": "DB1", "strategy": "rehost", "estimated_cost": 5000, "estimated_duration": 10}
    payload.update(kw)
    return client.post("/api/v1/workloads", json=payload, headers=headers)


class TestCreateWorkload:
    def test_create_then_list_yields_one_entry(self, client, user_headers):
        res = _create(client, user_headers)
        assert res.status_code == 201

        res = client.get("/api/v1/workloads", headers=user_headers)
        assert res.status_code == 200
        body = res.get_json()
        assert body["total"] == 1
        item = body["items"][0]
        assert item["name"] == "DB1"
        assert item["strategy"] == "rehost"
        assert item["estimated_cost"] == 5000
        assert item["estimated_duration"] == 10
        assert item["status"] == "planning"
        assert item["id"]

    def test_defaults(self, client, user_headers):
        res = client.post("/api/v1/workloads", json={"name": "Only a name"}, headers=user_headers)
        data = res.get_json()
        assert data["strategy"] == "rehost"
        assert data["complexity"] == "medium"
        assert data["priority"] == "medium"
        assert data["risk_level"] == "medium"
        assert data["estimated_cost"] == 0
        assert data["dependencies"] == []
        assert data["strategy_name"] == "Rehost (Lift & Shift)"

    def test_ids_are_unique(self, client, user_headers):
        a = _create(client, user_headers).get_json()["id"]
        b = _create(client, user_headers).get_json()["id"]
        assert a != b

    def test_status_cannot_be_set_on_create(self, client, user_headers):
        res = _create(client, user_headers, status="completed")
        assert res.get_json()["status"] == "planning"

    def test_missing_name_is_400(self, client, user_headers):
        res = client.post("/api/v1/workloads", json={"strategy": "rehost"}, headers=user_headers)
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_REQUIRED"

    @pytest.mark.parametrize("field, value", [
        ("strategy", "teleport"),
        ("risk_level", "extreme"),
        ("estimated_cost", -1),
        ("estimated_duration", "soon"),
        ("dependencies", "not-a-list"),
    ])
    def test_invalid_fields_are_422(self, client, user_headers, field, value):
        res = _create(client, user_headers, **{field: value})
        assert res.status_code == 422
        body = res.get_json()
        assert body["code"] == "ERR_VALIDATION_INVALID"
        assert field in body["details"]

    @pytest.mark.parametrize("field, value", [
        ("estimated_cost", "nan"),
        ("estimated_cost", "inf"),
        ("estimated_duration", "inf"),
        ("estimated_duration", "-inf"),
        ("estimated_duration", 10 ** 20),
        ("estimated_duration", "1e400"),
    ])
    def test_non_finite_or_huge_numbers_are_422(self, client, user_headers, field, value):
        res = _create(client, user_headers, **{field: value})
        assert res.status_code == 422
        assert field in res.get_json()["details"]
        assert Workload.query.count() == 0

    def test_duration_upper_bound(self, client, user_headers):
        assert _create(client, user_headers, estimated_duration=36500).status_code == 201
        res = _create(client, user_headers, estimated_duration=36501)
        assert res.status_code == 422
        assert res.get_json()["details"]["estimated_duration"] == "must be <= 36500"

    def test_long_duration_keeps_timeline_renderable(self, client, user_headers):
        _create(client, user_headers, name="Long", estimated_duration=36500)
        res = client.get("/api/v1/timeline", headers=user_headers)
        assert res.status_code == 200
        assert res.get_json()["timeline"][0]["end_date"]

    @pytest.mark.parametrize("field", ["name", "description", "current_location"])
    def test_non_string_text_fields_are_422(self, client, user_headers, field):
        payload = {"name": "DB1", field: 123}
        res = client.post("/api/v1/workloads", json=payload, headers=user_headers)
        assert res.status_code == 422
        assert field in res.get_json()["details"]

    @pytest.mark.parametrize("body", [[{"name": "DB1"}], "DB1", 5])
    def test_non_object_body_is_400(self, client, user_headers, body):
        res = client.post("/api/v1/workloads", json=body, headers=user_headers)
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_INVALID"

    def test_write_failure_returns_503_with_draft(self, client, user_headers, monkeypatch):
        def _boom():
            raise OperationalError("INSERT", {}, Exception("no such table: workloads"))

        monkeypatch.setattr(_db.session, "commit", _boom)
        res = _create(client, user_headers, name="Lost")
        assert res.status_code == 503
        body = res.get_json()
        assert body["error"].startswith("Unable to save workload.")
        assert body["details"]["draft"]["name"] == "Lost"
        monkeypatch.undo()
        assert Workload.query.count() == 0


class TestListWorkloads:
    def test_scoped_to_owner(self, client, user_headers, other_user_headers):
        _create(client, user_headers)
        _create(client, other_user_headers, name="Bob's")
        res = client.get("/api/v1/workloads", headers=other_user_headers)
        assert [w["name"] for w in res.get_json()["items"]] == ["Bob's"]

    def test_limit(self, client, user_headers):
        for i in range(3):
            _create(client, user_headers, name=f"W{i}")
        res = client.get("/api/v1/workloads?limit=2", headers=user_headers)
        assert len(res.get_json()["items"]) == 2

    def test_read_failure_degrades_to_empty(self, client, user_headers):
        _create(client, user_headers)
        Workload.__table__.drop(_db.engine)
        res = client.get("/api/v1/workloads", headers=user_headers)
        assert res.status_code == 200
        body = res.get_json()
        assert body == {"items": [], "total": 0, "state": "ready-with-empty-data"}

    def test_requires_identity(self, client):
        res = client.get("/api/v1/workloads")
        assert res.status_code == 401
        assert res.get_json()["code"] == "ERR_UNAUTHENTICATED"


class TestPlanningPage:
    def test_empty_state_without_filters(self, client, user_headers):
        res = client.get("/api/v1/planning", headers=user_headers)
        body = res.get_json()
        assert body["state"] == "ready"
        assert body["empty_state"]["action"] == "Add Your First Workload"

    def test_empty_state_with_filters(self, client, user_headers):
        _create(client, user_headers)
        res = client.get("/api/v1/planning?search=zzz", headers=user_headers)
        body = res.get_json()
        assert body["workloads"] == []
        assert body["empty_state"] == {"message": "Try adjusting your search or filters"}

    def test_filters_and_stats(self, client, user_headers):
        _create(client, user_headers, name="Payroll", strategy="repurchase")
        _create(client, user_headers, name="Intranet", strategy="retire")
        res = client.get("/api/v1/planning?strategy=retire", headers=user_headers)
        body = res.get_json()
        assert [w["name"] for w in body["workloads"]] == ["Intranet"]
        assert body["total"] == 2
        stats = {s["strategy"]: s["count"] for s in body["strategy_stats"]}
        assert stats["repurchase"] == 1
        assert stats["retire"] == 1
        assert "empty_state" not in body

    def test_unknown_strategy_filter_is_422(self, client, user_headers):
        res = client.get("/api/v1/planning?strategy=teleport", headers=user_headers)
        assert res.status_code == 422

    def test_strategies_table(self, client):
        res = client.get("/api/v1/strategies")
        keys = [s["key"] for s in res.get_json()]
        assert keys == ["rehost", "replatform", "refactor", "repurchase", "retire", "retain"]


class TestWorkloadDetail:
    def test_get_by_id(self, client, user_headers):
        created = _create(client, user_headers).get_json()
        res = client.get(f"/api/v1/workloads/{created['id']}", headers=user_headers)
        assert res.status_code == 200
        assert res.get_json()["name"] == "DB1"

    def test_unknown_id_is_404(self, client, user_headers):
        res = client.get("/api/v1/workloads/does-not-exist", headers=user_headers)
        assert res.status_code == 404
