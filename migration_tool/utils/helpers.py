"""Shared input-coercion helpers used by the create services.

parse_date:      returns None on bad input
parse_number:    float/int coercion that raises ValidationError
parse_choice:    enumerated value check that raises ValidationError
parse_text:      string check that raises ValidationError
"""
import math
from datetime import date, datetime

from migration_tool.core.exceptions import ValidationError


def parse_date(value):
    """Parse a date string (ISO or DD.MM.YYYY) to a date object.

    Returns None for empty/invalid input. Supports:
    - YYYY-MM-DD (ISO format)
    - YYYY-MM-DDTHH:MM:SS (datetime ISO → .date())
    - DD.MM.YYYY (European format)
    """
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except (ValueError, TypeError):
        pass
    try:
        return datetime.fromisoformat(str(value)).date()
    except (ValueError, TypeError):
        pass
    try:
        return datetime.strptime(str(value), "%d.%m.%Y").date()
    except (ValueError, TypeError):
        return None


def parse_number(data, field, default=0, *, integer=False, minimum=0, maximum=None):
    """Read a numeric form field, enforcing finite bounds.

    Empty strings and None fall back to ``default`` (the form's initial value).
    NaN and infinity are rejected.
    """
    raw = data.get(field, default)
    if raw is None or raw == "":
        raw = default
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a number", details={field: "not a number"})
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be a number", details={field: "not a number"})
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", details={field: "not finite"})
    if minimum is not None and value < minimum:
        raise ValidationError(
            f"{field} must be >= {minimum}", details={field: f"must be >= {minimum}"},
        )
    if maximum is not None and value > maximum:
        raise ValidationError(
            f"{field} must be <= {maximum}", details={field: f"must be <= {maximum}"},
        )
    return int(value) if integer else value


def parse_choice(data, field, choices, default):
    """Read an enumerated form field; unknown values are rejected."""
    value = data.get(field) or default
    if value not in choices:
        raise ValidationError(
            f"Invalid {field}: {value!r}",
            details={field: f"must be one of {', '.join(choices)}"},
        )
    return value


def parse_text(data, field, default=""):
    """Read a string form field; numbers, lists and objects are rejected."""
    value = data.get(field)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", details={field: "not a string"})
    return value
