"""
Planner-wide exception hierarchy.

Services raise these; blueprints register handlers against them once and
get consistent HTTP status codes everywhere.

Usage:
    from migration_tool.core.exceptions import ValidationError, PersistenceError

    raise ValidationError("Invalid strategy", details={"strategy": "..."})
    raise PersistenceError("workload", draft=data)
"""


class NotFoundError(Exception):
    """Raised when a requested record does not exist for the current user.

    Used for both missing records and records owned by someone else, so a
    caller cannot probe for other users' identifiers.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when well-formed input violates a field rule (bad enum, negative cost).

    Maps to HTTP 422 in blueprint error handlers.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown. Keys are field names.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class StoreUnavailableError(Exception):
    """Raised by the data-access shim when a read against the store fails.

    Page loaders catch it and substitute empty collections; a missing table
    and an unreachable database are indistinguishable.
    """

    def __init__(self, collection: str, cause: Exception | None = None) -> None:
        self.collection = collection
        self.cause = cause
        super().__init__(f"Could not read {collection}: {cause}")


class PersistenceError(Exception):
    """Raised when a create fails to commit. Maps to HTTP 503.

    Carries the submitted draft so the client can retry without re-entering it.

    Args:
        resource: Human-readable record label ("workload", "data center", ...).
        draft: The request payload that failed to persist.
    """

    def __init__(self, resource: str, draft: dict | None = None) -> None:
        self.resource = resource
        self.draft = draft or {}
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        return (
            f"Unable to save {self.resource}. Database may not be initialized yet. "
            "Please try again later."
        )
