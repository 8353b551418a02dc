"""
Cloud Migration Planner
Shared SQLAlchemy handle.

All models import ``db`` from here so the application factory can bind it
with ``db.init_app(app)``.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
