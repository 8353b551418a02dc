"""
Auth Blueprint — token issue and the current-user probe.

  POST /api/v1/auth/login   — { "user_id": "..." } → access token
  GET  /api/v1/auth/me      — current user context

With AUTH_ENABLED the login call must carry ``X-Login-Secret`` matching
LOGIN_SHARED_SECRET; with no secret configured, login is refused.
"""

import hmac
import logging

from flask import Blueprint, current_app, jsonify, request

from migration_tool.auth import is_auth_enabled, user_required
from migration_tool.blueprints import json_object
from migration_tool.services.jwt_service import issue_token
from migration_tool.utils.errors import E, api_error

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


def _check_login_secret():
    """Error response when the caller may not mint tokens, else None."""
    if not is_auth_enabled():
        return None
    expected = current_app.config.get("LOGIN_SHARED_SECRET")
    if not expected:
        logger.warning("Login refused: LOGIN_SHARED_SECRET is not configured")
        return api_error(E.FORBIDDEN, "Login is disabled on this server")
    supplied = request.headers.get("X-Login-Secret", "")
    if not hmac.compare_digest(supplied.encode(), expected.encode()):
        logger.warning("Login refused: bad shared secret from %s", request.remote_addr)
        return api_error(E.UNAUTHENTICATED, "Invalid login secret")
    return None


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Issue an access token for a user identifier handed over by the hosted
    sign-in flow.

    Body: { "user_id": "..." }
    """
    err = _check_login_secret()
    if err:
        return err

    data = json_object() or {}
    user_id = data.get("user_id")
    if not isinstance(user_id, str) or not user_id.strip():
        return api_error(E.VALIDATION_REQUIRED, "user_id is required", details={"user_id": "required"})
    user_id = user_id.strip()

    logger.info("Issued access token for user=%s", user_id)
    return jsonify({"user": {"id": user_id}, **issue_token(user_id)}), 200


@auth_bp.route("/me", methods=["GET"])
@user_required
def me(ctx):
    return jsonify(ctx.to_dict()), 200
