"""
Flask CLI commands.

    flask seed-demo --user-id <id>
"""

import logging

import click

from migration_tool.auth import UserContext
from migration_tool.services import data_center_service, plan_service, workload_service

logger = logging.getLogger(__name__)

DEMO_DATA_CENTERS = [
    {"name": "Frankfurt DC1", "location": "Frankfurt, DE", "type": "source",
     "capacity": 500, "current_utilization": 410},
    {"name": "Dallas DC2", "location": "Dallas, US", "type": "source",
     "capacity": 300, "current_utilization": 180},
    {"name": "AWS eu-central-1", "location": "Frankfurt, DE", "type": "target",
     "capacity": 1000, "current_utilization": 120},
    {"name": "Azure East US", "location": "Virginia, US", "type": "target",
     "capacity": 800, "current_utilization": 60},
]

DEMO_WORKLOADS = [
    {"name": "Customer Portal", "description": "Public web front end",
     "current_location": "Frankfurt DC1", "target_location": "AWS eu-central-1",
     "strategy": "rehost", "complexity": "low", "priority": "high", "risk_level": "low",
     "estimated_cost": 12000, "estimated_duration": 14},
    {"name": "Order Database", "description": "Oracle OLTP cluster",
     "current_location": "Frankfurt DC1", "target_location": "AWS eu-central-1",
     "strategy": "replatform", "complexity": "high", "priority": "high", "risk_level": "high",
     "estimated_cost": 85000, "estimated_duration": 90},
    {"name": "Billing Engine", "description": "Batch invoicing jobs",
     "current_location": "Dallas DC2", "target_location": "Azure East US",
     "strategy": "refactor", "complexity": "high", "priority": "medium", "risk_level": "medium",
     "estimated_cost": 140000, "estimated_duration": 180},
    {"name": "Legacy Reporting", "description": "Crystal Reports server",
     "current_location": "Dallas DC2", "target_location": "",
     "strategy": "retire", "complexity": "low", "priority": "low", "risk_level": "low",
     "estimated_cost": 2000, "estimated_duration": 7},
    {"name": "HR Suite", "description": "On-prem HRIS",
     "current_location": "Frankfurt DC1", "target_location": "",
     "strategy": "repurchase", "complexity": "medium", "priority": "medium", "risk_level": "medium",
     "estimated_cost": 30000, "estimated_duration": 60},
    {"name": "Mainframe Ledger", "description": "Regulated general ledger",
     "current_location": "Dallas DC2", "target_location": "",
     "strategy": "retain", "complexity": "high", "priority": "low", "risk_level": "high",
     "estimated_cost": 0, "estimated_duration": 0},
]


def seed_demo(user_id):
    """Insert the demo portfolio for ``user_id``; returns the created counts."""
    ctx = UserContext(user_id)
    for data in DEMO_DATA_CENTERS:
        data_center_service.create_data_center(ctx, data)
    workloads = [workload_service.create_workload(ctx, data) for data in DEMO_WORKLOADS]
    plan_service.create_plan(ctx, {
        "name": "Wave 1: Quick wins",
        "description": "Low-risk rehost and retire candidates",
        "workload_ids": [w.id for w in workloads if w.risk_level == "low"],
        "total_cost": sum(w.estimated_cost for w in workloads if w.risk_level == "low"),
    })
    return {"data_centers": len(DEMO_DATA_CENTERS), "workloads": len(workloads), "plans": 1}


def register_cli(app):

    @app.cli.command("seed-demo")
    @click.option("--user-id", required=True, help="Owner of the demo records.")
    def seed_demo_cmd(user_id):
        """Seed a demo migration portfolio for one user."""
        counts = seed_demo(user_id)
        logger.info("Seeded demo portfolio for user=%s: %s", user_id, counts)
        click.echo(
            f"Seeded {counts['data_centers']} data centers, "
            f"{counts['workloads']} workloads and {counts['plans']} plan for {user_id}."
        )
