"""
Migration Planner
User context for request handlers.

Provides:
    - UserContext: the signed-in user, passed explicitly to every view
    - resolve_user_id(): identity for the current request
    - user_required: decorator that injects ``ctx`` or answers 401

Identity sources, in order:
    1. JWT subject set by middleware.jwt_auth (Authorization: Bearer ...)
    2. Only when AUTH_ENABLED is false: X-User-Id header, then DEFAULT_USER_ID
"""

import functools
import logging
from dataclasses import dataclass
from typing import Optional

from flask import current_app, g, request

from migration_tool.utils.errors import E, api_error

logger = logging.getLogger(__name__)

_FALSY = ("false", "0", "no", "off")


@dataclass(frozen=True)
class UserContext:
    """Who the current request acts for. Every read and write is scoped to it."""

    user_id: str
    is_loading: bool = False

    def to_dict(self):
        return {"id": self.user_id, "is_loading": self.is_loading}


def is_auth_enabled() -> bool:
    value = current_app.config.get("AUTH_ENABLED", True)
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY
    return bool(value)


def resolve_user_id() -> Optional[str]:
    user_id = getattr(g, "jwt_user_id", None)
    if user_id:
        return str(user_id)
    if is_auth_enabled():
        return None
    header = request.headers.get("X-User-Id", "").strip()
    if header:
        return header
    return current_app.config.get("DEFAULT_USER_ID") or None


def user_required(f):
    """Pass ``ctx=UserContext(...)`` to the view; 401 without an identity."""

    @functools.wraps(f)
    def decorated(*args, **kwargs):
        user_id = resolve_user_id()
        if not user_id:
            logger.info("Unauthenticated request to %s", request.path)
            return api_error(E.UNAUTHENTICATED, "Sign in to continue")
        g.user_id = user_id
        return f(*args, ctx=UserContext(user_id), **kwargs)

    return decorated
