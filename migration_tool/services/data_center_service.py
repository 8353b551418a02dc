"""Data-center service — create and list data centers for the current user.

New data centers get a random position on the map canvas; nothing else
ever moves them.
"""
import logging
import random

from migration_tool.core.exceptions import NotFoundError, ValidationError
from migration_tool.models.base import new_id, utcnow
from migration_tool.models.migration import DATA_CENTER_TYPES, DataCenter, random_coordinates
from migration_tool.services import data_store
from migration_tool.utils.helpers import parse_choice, parse_number, parse_text

logger = logging.getLogger(__name__)


def build_data_center(user_id, data, rng=random):
    name = parse_text(data, "name").strip()
    if not name:
        raise ValidationError("name is required", details={"name": "required"})

    coords = random_coordinates(rng)
    return DataCenter(
        id=new_id(),
        user_id=user_id,
        name=name,
        location=parse_text(data, "location"),
        capacity=parse_number(data, "capacity", 100),
        current_utilization=parse_number(data, "current_utilization", 0),
        type=parse_choice(data, "type", DATA_CENTER_TYPES, "source"),
        x=coords["x"],
        y=coords["y"],
        created_at=utcnow(),
    )


def create_data_center(ctx, data, rng=random):
    """Create a data center owned by ``ctx.user_id``.

    Utilisation above capacity is accepted; the map shows it as over 100%.
    """
    dc = build_data_center(ctx.user_id, data, rng=rng)
    if dc.capacity and dc.current_utilization > dc.capacity:
        logger.info("Data center %s utilisation %.1f exceeds capacity %.1f",
                    dc.name, dc.current_utilization, dc.capacity)
    return data_store.create_record(dc, label="data center", draft=data)


def list_data_centers(ctx):
    """Data centers in creation order (new ones append)."""
    return data_store.list_records(
        DataCenter, ctx.user_id, order_by="created_at", descending=False,
    )


def get_data_center(ctx, data_center_id):
    dc = data_store.get_record(DataCenter, ctx.user_id, data_center_id)
    if dc is None:
        raise NotFoundError("DataCenter", data_center_id)
    return dc
