"""
Data-access shim — the only module that talks to the session on behalf of
the page services.

Read policy: every read is scoped to the owner. A failed read is logged and
surfaced as StoreUnavailableError; ``load_page`` turns that into empty
collections and the ``ready-with-empty-data`` state. A missing table and an
unreachable database take the same path.

Write policy: ``create_record`` commits immediately. On failure the session
is rolled back and PersistenceError is raised, so nothing is half-written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError

from migration_tool.core.exceptions import PersistenceError, StoreUnavailableError
from migration_tool.models import db
from migration_tool.models.migration import DataCenter, MigrationPlan, Workload

logger = logging.getLogger(__name__)

STATE_READY = "ready"
STATE_EMPTY = "ready-with-empty-data"

# Collection name → model, resolved by load_page().
COLLECTIONS = {
    "workloads": Workload,
    "data_centers": DataCenter,
    "plans": MigrationPlan,
}


@dataclass
class ListQuery:
    """What to fetch for one collection: ``list({where, orderBy, limit})``."""

    collection: str
    order_by: str | None = None
    descending: bool = True
    limit: int | None = None


@dataclass
class PageData:
    """Fetched collections for one page render."""

    state: str = STATE_READY
    collections: dict[str, list] = field(default_factory=dict)

    def __getitem__(self, name: str) -> list:
        return self.collections.get(name, [])


def list_records(model, user_id, *, order_by=None, descending=True, limit=None) -> list:
    """List the owner's rows of ``model``.

    Raises:
        StoreUnavailableError: the query failed for any database reason.
    """
    q = model.query_for_user(user_id)
    if order_by:
        column = getattr(model, order_by)
        q = q.order_by(column.desc() if descending else column.asc(), model.id)
    if limit:
        q = q.limit(limit)
    try:
        return q.all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning("Read failed for %s (user=%s): %s", model.__tablename__, user_id, exc)
        raise StoreUnavailableError(model.__tablename__, exc) from exc


def get_record(model, user_id, record_id):
    """Fetch one owned row or None. Read failures also yield None."""
    try:
        return model.query_for_user(user_id).filter_by(id=record_id).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning("Lookup failed for %s id=%s: %s", model.__tablename__, record_id, exc)
        return None


def create_record(record, *, label: str, draft: dict | None = None):
    """Persist a new row and commit.

    Raises:
        PersistenceError: the write failed; the session has been rolled back.
    """
    db.session.add(record)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error adding %s", label)
        raise PersistenceError(label, draft=draft)
    logger.info("Created %s id=%s user=%s", label, record.id, record.user_id)
    return record


def load_page(user_id, *queries: ListQuery) -> PageData:
    """Fetch every collection a page needs.

    If any fetch fails, every collection becomes ``[]`` and the page is
    marked ``ready-with-empty-data``; the failure is never raised.
    """
    page = PageData()
    try:
        for query in queries:
            model = COLLECTIONS[query.collection]
            page.collections[query.collection] = list_records(
                model, user_id,
                order_by=query.order_by,
                descending=query.descending,
                limit=query.limit,
            )
    except StoreUnavailableError as exc:
        logger.warning("Page data unavailable, rendering empty state: %s", exc)
        return PageData(
            state=STATE_EMPTY,
            collections={q.collection: [] for q in queries},
        )
    return page


def is_provisioned() -> bool:
    """True when every planner table exists in the bound database."""
    try:
        existing = set(sa_inspect(db.engine).get_table_names())
    except SQLAlchemyError as exc:
        logger.error("Database readiness check failed: %s", exc)
        return False
    missing = [m.__tablename__ for m in COLLECTIONS.values() if m.__tablename__ not in existing]
    if missing:
        logger.warning("Database not ready, missing tables: %s", ", ".join(missing))
        return False
    return True
