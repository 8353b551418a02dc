"""
OwnedModel — Abstract base class for user-scoped records.

Every record in the planner belongs to exactly one signed-in user. Models
inherit from OwnedModel instead of db.Model directly. This adds:
  - string primary key generated as a UUID4
  - user_id column with index
  - created_at timestamp
  - query_for_user(user_id) classmethod
"""

import uuid
from datetime import datetime, timezone

from migration_tool.models import db


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso(value):
    """ISO-8601 string for a datetime/date, None passthrough."""
    return value.isoformat() if value else None


class OwnedModel(db.Model):
    """Abstract base for owner-scoped tables."""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(128), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    @classmethod
    def query_for_user(cls, user_id):
        """Return a query filtered by owner."""
        return cls.query.filter_by(user_id=user_id)
