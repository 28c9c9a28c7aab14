"""Depth-to-transform mapping: turn the inferred surface into overlay warps.

Two independent modes:

- Terrain mode (``calculate_terrain_transform``) samples the IDW height
  field around the overlay anchor and derives a uniform scale, a skew
  from the local gradient and a small positional offset.
- Perspective mode (``apply_warp_transformation``) finds the triangle
  containing a point and scales by its barycentric depth.

Callers pick one with ``WarpMode``; neither is a special case of the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from inkforge.constants import (
    BASE_SCALE_MIN, BASE_SCALE_RANGE, DEFAULT_FOOTPRINT, HEIGHT_SCALE_GAIN,
    OFFSET_GAIN, PROBE_FRACTION, SKEW_DEGREES_PER_GRADIENT,
)
from inkforge.core.state import OverlayState, WarpSettings
from inkforge.warp.height_field import interpolate_height
from inkforge.warp.points import WarpPoint
from inkforge.warp.triangulation import (
    as_xy, find_containing_triangle, interpolate_depth, triangulate,
)


class WarpMode(Enum):
    TERRAIN = "terrain"
    PERSPECTIVE = "perspective"


@dataclass(frozen=True)
class WarpTransform:
    """Delta applied to the overlay's base placement.

    Scales multiply, skews (degrees) and offsets add.
    """
    scale_x: float = 1.0
    scale_y: float = 1.0
    skew_x: float = 0.0
    skew_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def identity(cls) -> "WarpTransform":
        return cls()

    @property
    def is_identity(self) -> bool:
        return self == WarpTransform()

    def to_dict(self) -> dict[str, float]:
        return {
            "scaleX": self.scale_x, "scaleY": self.scale_y,
            "skewX": self.skew_x, "skewY": self.skew_y,
            "offsetX": self.offset_x, "offsetY": self.offset_y,
        }


@dataclass(frozen=True)
class PerspectiveSample:
    x: float
    y: float
    scale: float = 1.0


@dataclass(frozen=True)
class OverlayTransform:
    """Final overlay placement in canvas pixels."""
    x: float
    y: float
    scale_x: float
    scale_y: float
    rotation: float
    skew_x: float
    skew_y: float


def _size(footprint: Any) -> tuple[float, float]:
    if hasattr(footprint, "width"):
        return float(footprint.width), float(footprint.height)
    if isinstance(footprint, dict):
        return float(footprint["width"]), float(footprint["height"])
    return float(footprint[0]), float(footprint[1])


def calculate_terrain_transform(
    anchor: Any,
    footprint: Any,
    points: Sequence[WarpPoint],
    strength: float,
) -> WarpTransform:
    """Drape transform for an overlay centred at ``anchor``.

    ``footprint`` is the approximate overlay (width, height), normalized.
    ``strength`` is the warp-strength percentage (0-100).
    """
    if not points or strength == 0:
        return WarpTransform.identity()

    ax, ay = as_xy(anchor)
    width, height = _size(footprint)
    dx = width * PROBE_FRACTION
    dy = height * PROBE_FRACTION

    center = interpolate_height(ax, ay, points)
    left = interpolate_height(ax - dx, ay, points)
    right = interpolate_height(ax + dx, ay, points)
    top = interpolate_height(ax, ay - dy, points)
    bottom = interpolate_height(ax, ay + dy, points)

    factor = strength / 100.0
    horizontal_gradient = (right - left) * factor
    vertical_gradient = (bottom - top) * factor

    # Raised areas stretch larger, like cloth over a ridge (0.7..1.3)
    base_scale = BASE_SCALE_MIN + center * BASE_SCALE_RANGE
    height_scale = 1.0 + (center - 0.5) * factor * HEIGHT_SCALE_GAIN
    scale = base_scale * height_scale

    offset = (center - 0.5) * factor * OFFSET_GAIN
    return WarpTransform(
        scale_x=scale,
        scale_y=scale,
        skew_x=horizontal_gradient * SKEW_DEGREES_PER_GRADIENT,
        skew_y=vertical_gradient * SKEW_DEGREES_PER_GRADIENT,
        offset_x=offset,
        offset_y=offset,
    )


def get_perspective_scale(depth: float) -> float:
    """Closer points (higher z) appear larger: 0.5 at z=0, 1.0 at z=1."""
    return 0.5 + depth * 0.5


def apply_warp_transformation(
    point: Any, points: Sequence[WarpPoint], strength: float,
) -> PerspectiveSample:
    """Per-triangle perspective scale at ``point``; position passes through."""
    x, y = as_xy(point)
    if len(points) < 3:
        return PerspectiveSample(x, y, 1.0)

    triangle = find_containing_triangle((x, y), triangulate(points))
    if triangle is None:
        return PerspectiveSample(x, y, 1.0)

    depth = interpolate_depth((x, y), triangle)
    perspective = get_perspective_scale(depth)
    return PerspectiveSample(x, y, 1.0 + (perspective - 1.0) * (strength / 100.0))


def compose_overlay_transform(
    overlay: OverlayState,
    settings: WarpSettings,
    points: Sequence[WarpPoint],
    canvas_size: tuple[float, float],
    footprint: Any = DEFAULT_FOOTPRINT,
    mode: WarpMode = WarpMode.TERRAIN,
) -> OverlayTransform:
    """Overlay placement in canvas pixels with the selected warp applied."""
    canvas_w, canvas_h = canvas_size
    x = overlay.x * canvas_w
    y = overlay.y * canvas_h
    scale_x = scale_y = overlay.scale
    skew_x, skew_y = overlay.skew_x, overlay.skew_y

    strength = settings.effective_strength
    if points and strength > 0:
        if mode is WarpMode.TERRAIN:
            t = calculate_terrain_transform((overlay.x, overlay.y), footprint, points, strength)
            scale_x *= t.scale_x
            scale_y *= t.scale_y
            skew_x += t.skew_x
            skew_y += t.skew_y
            x += t.offset_x
            y += t.offset_y
        else:
            sample = apply_warp_transformation((overlay.x, overlay.y), points, strength)
            scale_x *= sample.scale
            scale_y *= sample.scale

    return OverlayTransform(
        x=x, y=y, scale_x=scale_x, scale_y=scale_y,
        rotation=overlay.rotation, skew_x=skew_x, skew_y=skew_y,
    )
