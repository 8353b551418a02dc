"""
Migration Planner
Blueprint registry and shared request helpers.
"""

from flask import jsonify, request

from migration_tool.core.exceptions import NotFoundError, PersistenceError, ValidationError
from migration_tool.services.data_store import STATE_EMPTY, STATE_READY
from migration_tool.utils.errors import E, api_error


def parse_limit(default=None, max_limit=1000):
    """``?limit=`` as a positive int capped at ``max_limit``; ``default`` if absent or bad."""
    try:
        limit = int(request.args.get("limit", default or 0))
    except (ValueError, TypeError):
        return default
    if limit <= 0:
        return default
    return min(limit, max_limit)


def json_object():
    """Request JSON as a dict; None when the body is JSON but not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def require_name(data):
    """400 response when the body is not an object or the draft has no name, else None."""
    if data is None:
        return api_error(E.VALIDATION_INVALID, "request body must be a JSON object", status=400)
    name = data.get("name")
    if name is not None and not isinstance(name, str):
        return api_error(E.VALIDATION_INVALID, "name must be a string", details={"name": "not a string"})
    if not (name or "").strip():
        return api_error(E.VALIDATION_REQUIRED, "name is required", details={"name": "required"})
    return None


def list_response(items, state=STATE_READY):
    return jsonify({
        "items": [i.to_dict() for i in items],
        "total": len(items),
        "state": state,
    })


def empty_list_response():
    return list_response([], STATE_EMPTY)


def register_error_handlers(bp):
    """Attach the planner's exception → HTTP mapping to ``bp``."""

    @bp.errorhandler(NotFoundError)
    def _handle_not_found(error: NotFoundError):
        return api_error(E.NOT_FOUND, str(error))

    @bp.errorhandler(ValidationError)
    def _handle_validation(error: ValidationError):
        return api_error(E.VALIDATION_INVALID, str(error), details=error.details)

    @bp.errorhandler(PersistenceError)
    def _handle_persistence(error: PersistenceError):
        return api_error(
            E.STORE_UNAVAILABLE,
            error.user_message,
            details={"draft": error.draft},
        )
