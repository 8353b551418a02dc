"""
Tests — token issue, JWT middleware and user context resolution.
"""

import pytest

from migration_tool.auth import resolve_user_id

LOGIN_SECRET = "front-end-shared-secret"


@pytest.fixture()
def auth_enabled(app):
    app.config["AUTH_ENABLED"] = True
    app.config["LOGIN_SHARED_SECRET"] = LOGIN_SECRET
    yield
    app.config["AUTH_ENABLED"] = False
    app.config["LOGIN_SHARED_SECRET"] = None


def _token(client, user_id="user-alice"):
    res = client.post("/api/v1/auth/login", json={"user_id": user_id},
                      headers={"X-Login-Secret": LOGIN_SECRET})
    assert res.status_code == 200
    return res.get_json()["access_token"]


class TestLogin:
    def test_issues_bearer_token(self, client):
        body = client.post("/api/v1/auth/login", json={"user_id": "user-alice"}).get_json()
        assert body["token_type"] == "Bearer"
        assert body["user"] == {"id": "user-alice"}
        assert body["expires_in"] > 0

    def test_user_id_required(self, client):
        res = client.post("/api/v1/auth/login", json={})
        assert res.status_code == 400

    def test_non_string_user_id_is_400(self, client):
        res = client.post("/api/v1/auth/login", json={"user_id": ["user-alice"]})
        assert res.status_code == 400

    def test_refused_without_configured_secret(self, client, app):
        app.config["AUTH_ENABLED"] = True
        try:
            res = client.post("/api/v1/auth/login", json={"user_id": "user-alice"})
        finally:
            app.config["AUTH_ENABLED"] = False
        assert res.status_code == 403
        assert res.get_json()["code"] == "ERR_FORBIDDEN"

    def test_refused_with_wrong_secret(self, client, auth_enabled):
        res = client.post("/api/v1/auth/login", json={"user_id": "user-bob"},
                          headers={"X-Login-Secret": "guess"})
        assert res.status_code == 401
        assert "access_token" not in res.get_json()

    def test_refused_without_secret_header(self, client, auth_enabled):
        res = client.post("/api/v1/auth/login", json={"user_id": "user-bob"})
        assert res.status_code == 401


class TestMe:
    def test_me_with_token(self, client, auth_enabled):
        token = _token(client)
        res = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 200
        assert res.get_json() == {"id": "user-alice", "is_loading": False}

    def test_header_ignored_when_auth_enabled(self, client, auth_enabled):
        res = client.get("/api/v1/auth/me", headers={"X-User-Id": "user-alice"})
        assert res.status_code == 401

    def test_invalid_token_is_401(self, client, auth_enabled):
        res = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert res.status_code == 401

    def test_header_accepted_when_auth_disabled(self, client, user_headers):
        res = client.get("/api/v1/auth/me", headers=user_headers)
        assert res.get_json()["id"] == "user-alice"


class TestScopingWithTokens:
    def test_records_follow_the_token_subject(self, client, auth_enabled):
        alice = {"Authorization": f"Bearer {_token(client, 'user-alice')}"}
        bob = {"Authorization": f"Bearer {_token(client, 'user-bob')}"}
        client.post("/api/v1/workloads", json={"name": "Alice's"}, headers=alice)

        assert client.get("/api/v1/workloads", headers=alice).get_json()["total"] == 1
        assert client.get("/api/v1/workloads", headers=bob).get_json()["total"] == 0


def test_default_user_id_fallback(app):
    app.config["DEFAULT_USER_ID"] = "dev-user"
    try:
        with app.test_request_context("/api/v1/dashboard"):
            assert resolve_user_id() == "dev-user"
    finally:
        app.config["DEFAULT_USER_ID"] = None
