"""
Data Center Map service.

Two concerns:
  - MapViewport: pan / zoom / drag state of the map canvas. UI state only;
    it is never persisted and the API applies actions to a state the client
    sends back.
  - Map page view model: data-center cards, utilisation, and one straight
    directional route per workload whose source and target both exist.

Route endpoints are resolved through a ``(type, name)`` index built once per
call. Workload locations are plain strings matched against data-center names.
"""

from __future__ import annotations

import logging
import math

from migration_tool.core.exceptions import ValidationError
from migration_tool.services import aggregation as agg
from migration_tool.services import data_store
from migration_tool.services.data_store import ListQuery

logger = logging.getLogger(__name__)

ZOOM_MIN = 0.5
ZOOM_MAX = 3.0
ZOOM_STEP = 1.2


class MapViewport:
    """Translation + scale applied to the map canvas."""

    def __init__(self, zoom=1.0, pan_x=0.0, pan_y=0.0, dragging=False,
                 drag_start_x=0.0, drag_start_y=0.0):
        self.zoom = float(zoom)
        self.pan_x = float(pan_x)
        self.pan_y = float(pan_y)
        self.dragging = bool(dragging)
        self.drag_start_x = float(drag_start_x)
        self.drag_start_y = float(drag_start_y)

    # ── zoom ─────────────────────────────────────────────────────────────

    def zoom_in(self):
        self.zoom = min(self.zoom * ZOOM_STEP, ZOOM_MAX)
        return self

    def zoom_out(self):
        self.zoom = max(self.zoom / ZOOM_STEP, ZOOM_MIN)
        return self

    def reset(self):
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        return self

    # ── pan ──────────────────────────────────────────────────────────────

    def start_drag(self, x, y):
        """Pointer down on the canvas background."""
        self.dragging = True
        self.drag_start_x = x - self.pan_x
        self.drag_start_y = y - self.pan_y
        return self

    def drag_to(self, x, y):
        """Pointer move; ignored unless a drag is active."""
        if self.dragging:
            self.pan_x = x - self.drag_start_x
            self.pan_y = y - self.drag_start_y
        return self

    def end_drag(self):
        """Pointer up or pointer leaving the canvas."""
        self.dragging = False
        return self

    # ── serialisation ────────────────────────────────────────────────────

    def transform(self) -> str:
        return f"translate({self.pan_x:g}px, {self.pan_y:g}px) scale({self.zoom:g})"

    def to_dict(self):
        return {
            "zoom": self.zoom,
            "pan": {"x": self.pan_x, "y": self.pan_y},
            "dragging": self.dragging,
            "drag_start": {"x": self.drag_start_x, "y": self.drag_start_y},
            "transform": self.transform(),
        }

    @classmethod
    def from_dict(cls, data: dict | None):
        data = data or {}
        pan = data.get("pan") or {}
        start = data.get("drag_start") or {}
        try:
            return cls(
                zoom=data.get("zoom", 1.0),
                pan_x=pan.get("x", 0.0),
                pan_y=pan.get("y", 0.0),
                dragging=data.get("dragging", False),
                drag_start_x=start.get("x", 0.0),
                drag_start_y=start.get("y", 0.0),
            )
        except (TypeError, ValueError):
            raise ValidationError("Invalid viewport state", details={"viewport": "numbers expected"})

    def apply(self, action: str, x=None, y=None):
        """Dispatch one named UI action."""
        if action in ("start_drag", "drag_to"):
            if x is None or y is None:
                raise ValidationError(f"{action} needs x and y", details={"x": "required", "y": "required"})
            try:
                x, y = float(x), float(y)
            except (TypeError, ValueError):
                raise ValidationError("x and y must be numbers", details={"x": "number", "y": "number"})
            return getattr(self, action)(x, y)
        handlers = {
            "zoom_in": self.zoom_in,
            "zoom_out": self.zoom_out,
            "reset": self.reset,
            "end_drag": self.end_drag,
        }
        handler = handlers.get(action)
        if handler is None:
            raise ValidationError(f"Unknown viewport action: {action!r}", details={"action": "unknown"})
        return handler()


# ═════════════════════════════════════════════════════════════════════════════
# Routes
# ═════════════════════════════════════════════════════════════════════════════

def index_data_centers(data_centers) -> dict:
    """``(type, name) → data center``; the first one with a key wins."""
    index = {}
    for dc in data_centers:
        index.setdefault((dc.type, dc.name), dc)
    return index


def route_geometry(source, target) -> dict:
    dx = target.x - source.x
    dy = target.y - source.y
    return {
        "origin": {"x": source.x, "y": source.y},
        "length": math.hypot(dx, dy),
        "angle": math.degrees(math.atan2(dy, dx)),
    }


def build_routes(workloads, data_centers) -> list[dict]:
    """One line per workload with both a source and a target data center."""
    index = index_data_centers(data_centers)
    routes = []
    for w in workloads:
        source = index.get(("source", w.current_location))
        target = index.get(("target", w.target_location))
        if source is None or target is None:
            continue
        routes.append({
            "workload_id": w.id,
            "workload_name": w.name,
            "strategy": w.strategy,
            "source_id": source.id,
            "target_id": target.id,
            **route_geometry(source, target),
        })
    return routes


# ═════════════════════════════════════════════════════════════════════════════
# Page
# ═════════════════════════════════════════════════════════════════════════════

def get_map(ctx, selected_id=None):
    """Data Center Map page."""
    page = data_store.load_page(
        ctx.user_id,
        ListQuery("data_centers", order_by="created_at", descending=False),
        ListQuery("workloads"),
    )
    data_centers = page["data_centers"]
    workloads = page["workloads"]

    cards = agg.data_center_utilization(data_centers, workloads)
    routes = build_routes(workloads, data_centers)
    logger.debug("Map for user=%s: %d data centers, %d routes", ctx.user_id, len(cards), len(routes))

    selected = None
    if selected_id:
        dc = next((d for d in data_centers if d.id == selected_id), None)
        if dc is not None:
            selected = {
                **agg.utilization_row(dc, workloads),
                "workloads": [w.to_dict() for w in agg.workloads_for_data_center(dc, workloads)],
            }

    payload = {
        "state": page.state,
        "data_centers": cards,
        "routes": routes,
        "location_count": len(data_centers),
        "selected": selected,
        "viewport": MapViewport().to_dict(),
    }
    if not data_centers:
        payload["empty_state"] = {
            "message": "Add your first data center to start mapping",
            "action": "Add Data Center",
        }
    return payload
