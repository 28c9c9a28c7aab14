"""Command boundary between UI event handlers and the pure warp engine.

Each UI action is one method. A command computes the next point set with
the copy-on-write helpers, swaps it into the state in a single assignment
(last write wins) and publishes WARP_POINTS_CHANGED. Queries read the
current tuple and call straight into the engine.
"""

import logging
from typing import Any, Optional

from inkforge.constants import DEFAULT_FOOTPRINT, DEFAULT_GRID_SIZE, SESSION_DETECT_POINTS
from inkforge.core.events import EventBus, EventType
from inkforge.core.state import StateManager
from inkforge.warp import points as point_ops
from inkforge.warp.detection import DetectionStrategy, auto_detect_warp_points
from inkforge.warp.height_field import interpolate_height
from inkforge.warp.mesh import MeshLine, TerrainMesh, generate_mesh_lines, generate_terrain_mesh
from inkforge.warp.points import PointSet
from inkforge.warp.presets import PresetManager
from inkforge.warp.transform import (
    OverlayTransform, PerspectiveSample, WarpMode, WarpTransform,
    apply_warp_transformation, calculate_terrain_transform, compose_overlay_transform,
)
from inkforge.warp.triangulation import Triangle, triangulate

logger = logging.getLogger(__name__)


class WarpSession:
    """Owns the single source-of-truth point set for one preview session."""

    def __init__(
        self,
        state: Optional[StateManager] = None,
        events: Optional[EventBus] = None,
        presets: Optional[PresetManager] = None,
    ):
        self.state = state or StateManager()
        self.events = events or EventBus()
        self.presets = presets or PresetManager()

    @property
    def points(self) -> PointSet:
        return self.state.points

    # ── Point-set commands ──────────────────────────────────────────

    def _commit(self, points: PointSet, reason: str) -> PointSet:
        point_ops.validate_unique_ids(points)
        self.state.replace_points(points)
        self.events.publish(EventType.WARP_POINTS_CHANGED, points=self.state.points, reason=reason)
        return self.state.points

    def add_point(self, x: float, y: float, z: Optional[float] = None) -> point_ops.WarpPoint:
        """Add a manual point and select it."""
        if z is None:
            points = point_ops.add_point(self.points, x, y)
        else:
            points = point_ops.add_point(self.points, x, y, z)
        self._commit(points, "add")
        new_point = self.points[-1]
        self.select_point(new_point.id)
        return new_point

    def move_point(self, point_id: str, x: float, y: float) -> PointSet:
        if point_ops.get_point(self.points, point_id).locked:
            logger.warning("Ignoring move of locked warp point %s", point_id)
            return self.points
        return self._commit(point_ops.move_point(self.points, point_id, x, y), "move")

    def set_depth(self, point_id: str, z: float) -> PointSet:
        return self._commit(point_ops.set_point_depth(self.points, point_id, z), "depth")

    def apply_quick_depth(self, point_id: str, level: str) -> PointSet:
        return self._commit(point_ops.set_quick_depth(self.points, point_id, level), "depth")

    def toggle_lock(self, point_id: str) -> PointSet:
        locked = point_ops.get_point(self.points, point_id).locked
        return self._commit(point_ops.set_point_locked(self.points, point_id, not locked), "lock")

    def delete_point(self, point_id: str) -> PointSet:
        return self._commit(point_ops.remove_point(self.points, point_id), "delete")

    def clear_points(self) -> PointSet:
        return self._commit(point_ops.clear_points(), "clear")

    def apply_preset(self, preset_id: str) -> PointSet:
        """Replace the whole point set with a body-shape template.

        Raises KeyError for an unknown preset id; the point set is left as is.
        """
        points = self.presets.apply(preset_id)
        logger.info("Applied body shape preset %s (%d points)", preset_id, len(points))
        self._commit(points, "preset")
        self.events.publish(EventType.PRESET_APPLIED, preset_id=preset_id)
        return self.points

    def detect_points(
        self,
        pixels: Any,
        width: int,
        height: int,
        max_points: int = SESSION_DETECT_POINTS,
        strategy: DetectionStrategy = DetectionStrategy.EDGES,
    ) -> PointSet:
        """Replace the point set with auto-detected points for an image."""
        detected = auto_detect_warp_points(pixels, width, height, max_points, strategy)
        logger.info("Auto-detected %d warp points in %dx%d image", len(detected), width, height)
        self._commit(point_ops.points_from_xyz(detected, source="auto"), "detect")
        self.select_point(None)
        self.events.publish(EventType.DETECTION_COMPLETE, count=len(detected),
                            strategy=strategy.value)
        return self.points

    def select_point(self, point_id: Optional[str]) -> None:
        if point_id is not None:
            point_ops.get_point(self.points, point_id)
        self.state.selected_point = point_id
        self.events.publish(EventType.POINT_SELECTED, point_id=point_id)

    # ── Settings and overlay ────────────────────────────────────────

    def _setting_changed(self, field: str, value: Any) -> None:
        self.events.publish(EventType.WARP_SETTINGS_CHANGED, field=field, value=value)

    def set_warp_strength(self, strength: float) -> None:
        self.state.settings.set_strength(strength)
        self._setting_changed("strength", self.state.settings.strength)

    def set_warping_enabled(self, enabled: bool) -> None:
        self.state.settings.enabled = enabled
        self._setting_changed("enabled", enabled)

    def set_mesh_visible(self, visible: bool) -> None:
        self.state.settings.show_mesh = visible
        self._setting_changed("show_mesh", visible)

    def set_points_visible(self, visible: bool) -> None:
        self.state.settings.show_points = visible
        self._setting_changed("show_points", visible)

    def move_overlay(self, x: float, y: float) -> None:
        self.state.overlay.move_to(x, y)
        self.events.publish(EventType.OVERLAY_MOVED, x=self.state.overlay.x, y=self.state.overlay.y)

    # ── Queries ─────────────────────────────────────────────────────

    def height_at(self, x: float, y: float) -> float:
        return interpolate_height(x, y, self.points)

    def triangles(self) -> list[Triangle]:
        return triangulate(self.points)

    def terrain_mesh(self, grid_size: int = DEFAULT_GRID_SIZE) -> TerrainMesh:
        return generate_terrain_mesh(self.points, grid_size)

    def mesh_lines(self) -> list[MeshLine]:
        return generate_mesh_lines(self.points)

    def terrain_transform(self, footprint: Any = DEFAULT_FOOTPRINT) -> WarpTransform:
        overlay = self.state.overlay
        return calculate_terrain_transform(
            (overlay.x, overlay.y), footprint, self.points,
            self.state.settings.effective_strength,
        )

    def perspective_at(self, x: float, y: float) -> PerspectiveSample:
        return apply_warp_transformation((x, y), self.points,
                                         self.state.settings.effective_strength)

    def overlay_transform(
        self,
        canvas_size: tuple[float, float],
        footprint: Any = DEFAULT_FOOTPRINT,
        mode: WarpMode = WarpMode.TERRAIN,
    ) -> OverlayTransform:
        return compose_overlay_transform(
            self.state.overlay, self.state.settings, self.points,
            canvas_size, footprint, mode,
        )
