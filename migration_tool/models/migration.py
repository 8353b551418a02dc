"""
Cloud Migration Planner
Migration domain models.

Models:
    - Workload: an application or service targeted for migration
    - DataCenter: a named infrastructure location, tagged source or target
    - MigrationPlan: a named grouping of workloads with schedule and cost

Relationships are loose:
    Workload.current_location / target_location  → DataCenter.name (by string)
    MigrationPlan.workload_ids                   → Workload.id (no FK)
"""

import random

from migration_tool.models import db
from migration_tool.models.base import OwnedModel, iso, utcnow


# ── Constants ────────────────────────────────────────────────────────────────

STRATEGY_KEYS = ("rehost", "replatform", "refactor", "repurchase", "retire", "retain")
LEVELS = ("low", "medium", "high")
WORKLOAD_STATUSES = ("planning", "in-progress", "completed", "on-hold")
DATA_CENTER_TYPES = ("source", "target")
PLAN_STATUSES = ("draft", "approved", "in-progress", "completed")

# Upper bound on estimated_duration; keeps implied end dates inside datetime range.
MAX_DURATION_DAYS = 36500

# The 6 Rs lookup table, in display order.
MIGRATION_STRATEGIES = {
    "rehost": {
        "name": "Rehost (Lift & Shift)",
        "description": "Move applications to cloud without changes",
        "icon": "🚀",
        "complexity": "low",
        "timeframe": "weeks",
        "cost_saving": "medium",
    },
    "replatform": {
        "name": "Replatform (Lift & Reshape)",
        "description": "Make minimal changes to optimize for cloud",
        "icon": "🔧",
        "complexity": "medium",
        "timeframe": "months",
        "cost_saving": "high",
    },
    "refactor": {
        "name": "Refactor (Re-architect)",
        "description": "Redesign applications for cloud-native architecture",
        "icon": "🏗️",
        "complexity": "high",
        "timeframe": "quarters",
        "cost_saving": "very high",
    },
    "repurchase": {
        "name": "Repurchase (Drop & Shop)",
        "description": "Replace with SaaS or cloud-native solutions",
        "icon": "🛒",
        "complexity": "medium",
        "timeframe": "months",
        "cost_saving": "high",
    },
    "retire": {
        "name": "Retire",
        "description": "Decommission applications no longer needed",
        "icon": "🗑️",
        "complexity": "low",
        "timeframe": "weeks",
        "cost_saving": "very high",
    },
    "retain": {
        "name": "Retain (Revisit)",
        "description": "Keep applications on-premises for now",
        "icon": "⏸️",
        "complexity": "low",
        "timeframe": "immediate",
        "cost_saving": "none",
    },
}

# Map canvas area used for random placement of new data centers.
MAP_X_RANGE = (100, 900)
MAP_Y_RANGE = (100, 500)


def random_coordinates(rng=random):
    """Pick a map position for a new data center."""
    x0, x1 = MAP_X_RANGE
    y0, y1 = MAP_Y_RANGE
    return {
        "x": rng.random() * (x1 - x0) + x0,
        "y": rng.random() * (y1 - y0) + y0,
    }


# ═══════════════════════════════════════════════════════════════════════════
#  WORKLOAD
# ═══════════════════════════════════════════════════════════════════════════

class Workload(OwnedModel):
    """
    An application to migrate, classified with one of the 6 Rs.

    ``dependencies`` is persisted and echoed back but no computation reads it.
    """

    __tablename__ = "workloads"

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default="")
    current_location = db.Column(db.String(200), default="", comment="Matched against DataCenter.name")
    target_location = db.Column(db.String(200), default="", comment="Matched against DataCenter.name")
    strategy = db.Column(db.String(20), nullable=False, default="rehost", index=True)
    complexity = db.Column(db.String(10), default="medium")
    priority = db.Column(db.String(10), default="medium")
    risk_level = db.Column(db.String(10), default="medium")
    estimated_cost = db.Column(db.Float, default=0.0)
    estimated_duration = db.Column(db.Integer, default=0, comment="days")
    dependencies = db.Column(db.JSON, default=list)
    status = db.Column(db.String(20), default="planning", index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def strategy_info(self):
        return MIGRATION_STRATEGIES.get(self.strategy, {})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "current_location": self.current_location,
            "target_location": self.target_location,
            "strategy": self.strategy,
            "strategy_name": self.strategy_info.get("name"),
            "strategy_icon": self.strategy_info.get("icon"),
            "complexity": self.complexity,
            "priority": self.priority,
            "risk_level": self.risk_level,
            "estimated_cost": self.estimated_cost,
            "estimated_duration": self.estimated_duration,
            "dependencies": list(self.dependencies or []),
            "status": self.status,
            "user_id": self.user_id,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Workload {self.id}: {(self.name or '')[:40]}>"


# ═══════════════════════════════════════════════════════════════════════════
#  DATA CENTER
# ═══════════════════════════════════════════════════════════════════════════

class DataCenter(OwnedModel):
    """A source or target location plotted on the map."""

    __tablename__ = "data_centers"

    name = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(200), default="")
    capacity = db.Column(db.Float, default=100.0)
    current_utilization = db.Column(db.Float, default=0.0, comment="Not capped at capacity")
    type = db.Column(db.String(10), nullable=False, default="source")
    x = db.Column(db.Float, default=0.0)
    y = db.Column(db.Float, default=0.0)

    @property
    def coordinates(self):
        return {"x": self.x, "y": self.y}

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "capacity": self.capacity,
            "current_utilization": self.current_utilization,
            "type": self.type,
            "coordinates": self.coordinates,
            "user_id": self.user_id,
            "created_at": iso(self.created_at),
        }

    def __repr__(self):
        return f"<DataCenter {self.type}:{self.name}>"


# ═══════════════════════════════════════════════════════════════════════════
#  MIGRATION PLAN
# ═══════════════════════════════════════════════════════════════════════════

class MigrationPlan(OwnedModel):
    """A named grouping of workloads with a schedule and total cost."""

    __tablename__ = "migration_plans"

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default="")
    workload_ids = db.Column(db.JSON, default=list)
    start_date = db.Column(db.String(10), default="", comment="YYYY-MM-DD")
    end_date = db.Column(db.String(10), default="", comment="YYYY-MM-DD")
    total_cost = db.Column(db.Float, default=0.0)
    status = db.Column(db.String(20), default="draft", index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def to_dict(self):
        workload_ids = list(self.workload_ids or [])
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "workload_ids": workload_ids,
            "workload_count": len(workload_ids),
            "start_date": self.start_date,
            "end_date": self.end_date,
            "total_cost": self.total_cost,
            "status": self.status,
            "user_id": self.user_id,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }

    def __repr__(self):
        return f"<MigrationPlan {self.id}: {(self.name or '')[:40]}>"
