"""
Rate limiting configuration.

Applies per-blueprint rate limits using Flask-Limiter. The Limiter instance
is created in migration_tool/__init__.py with no default limits; this module
applies granular limits per route category.

Usage:
    from migration_tool.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

WRITE_LIMIT = "60/minute"
READ_LIMIT = "200/minute"

# Blueprints that accept creates.
WRITE_BLUEPRINTS = ("planning", "data_center", "timeline", "auth")

# Read-only page blueprints.
READ_BLUEPRINTS = ("dashboard", "assessment", "analytics")


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP):
        - Create / login endpoints:  60/minute
        - Page endpoints:            200/minute
        - Health check:              exempt

    Rate limiting is disabled in testing mode or with RATELIMIT_ENABLED=False.
    """
    if app.config.get("TESTING") or not app.config.get("RATELIMIT_ENABLED", True):
        app.logger.info("Rate limiter disabled")
        return

    for bp_name in WRITE_BLUEPRINTS:
        bp = app.blueprints.get(bp_name)
        if bp:
            limiter.limit(WRITE_LIMIT)(bp)

    for bp_name in READ_BLUEPRINTS:
        bp = app.blueprints.get(bp_name)
        if bp:
            limiter.limit(READ_LIMIT)(bp)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    app.logger.info("Rate limiter configured — write: %s, read: %s", WRITE_LIMIT, READ_LIMIT)
