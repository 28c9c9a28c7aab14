"""Warp point data and copy-on-write point-set helpers.

A point set is a plain tuple of frozen ``WarpPoint`` values. Every helper
here returns a new tuple; nothing is modified in place, so the caller can
hand the same tuple to the engine and to the UI without copying.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from inkforge.constants import DEFAULT_DEPTH, QUICK_DEPTHS
from inkforge.core.math_utils import clamp01

SOURCES = ("manual", "auto", "preset")


@dataclass(frozen=True)
class WarpPoint:
    """A control point over the photo.

    x, y: image-normalized position (0..1, origin top-left)
    z: depth proxy (0 = farthest/recessed, 1 = closest/raised)
    """
    id: str
    x: float
    y: float
    z: float = DEFAULT_DEPTH
    locked: bool = False
    source: str = "manual"

    def xyz(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {
            "id": self.id, "x": self.x, "y": self.y, "z": self.z,
            "locked": self.locked, "source": self.source,
        }


PointSet = tuple[WarpPoint, ...]


def new_point_id() -> str:
    return uuid.uuid4().hex


def make_point(
    x: float,
    y: float,
    z: float = DEFAULT_DEPTH,
    locked: bool = False,
    source: str = "manual",
) -> WarpPoint:
    """Create a point with a fresh id, clamping coordinates to [0, 1]."""
    if source not in SOURCES:
        raise ValueError(f"Unknown point source: {source}")
    return WarpPoint(
        id=new_point_id(),
        x=clamp01(x), y=clamp01(y), z=clamp01(z),
        locked=locked, source=source,
    )


def points_from_xyz(
    triples: Iterable[Sequence[float]], source: str = "manual",
) -> PointSet:
    """Build a point set from (x, y, z) triples, each with a fresh id."""
    return tuple(make_point(t[0], t[1], t[2], source=source) for t in triples)


def _index_of(points: Sequence[WarpPoint], point_id: str) -> int:
    for i, p in enumerate(points):
        if p.id == point_id:
            return i
    raise KeyError(point_id)


def get_point(points: Sequence[WarpPoint], point_id: str) -> WarpPoint:
    return points[_index_of(points, point_id)]


def _replace_at(points: Sequence[WarpPoint], index: int, point: WarpPoint) -> PointSet:
    updated = list(points)
    updated[index] = point
    return tuple(updated)


def add_point(
    points: Sequence[WarpPoint],
    x: float,
    y: float,
    z: float = DEFAULT_DEPTH,
    source: str = "manual",
) -> PointSet:
    return tuple(points) + (make_point(x, y, z, source=source),)


def move_point(points: Sequence[WarpPoint], point_id: str, x: float, y: float) -> PointSet:
    """Move a point to (x, y). Locked points keep their position."""
    i = _index_of(points, point_id)
    p = points[i]
    if p.locked:
        return tuple(points)
    return _replace_at(points, i, replace(p, x=clamp01(x), y=clamp01(y)))


def set_point_depth(points: Sequence[WarpPoint], point_id: str, z: float) -> PointSet:
    i = _index_of(points, point_id)
    return _replace_at(points, i, replace(points[i], z=clamp01(z)))


def set_quick_depth(points: Sequence[WarpPoint], point_id: str, level: str) -> PointSet:
    """Snap a point to one of the named depth levels (back/mid/front)."""
    try:
        z = QUICK_DEPTHS[level]
    except KeyError:
        raise ValueError(f"Unknown depth level: {level}") from None
    return set_point_depth(points, point_id, z)


def set_point_locked(points: Sequence[WarpPoint], point_id: str, locked: bool) -> PointSet:
    i = _index_of(points, point_id)
    return _replace_at(points, i, replace(points[i], locked=locked))


def remove_point(points: Sequence[WarpPoint], point_id: str) -> PointSet:
    return tuple(p for p in points if p.id != point_id)


def clear_points() -> PointSet:
    return ()


def validate_unique_ids(points: Iterable[WarpPoint]) -> None:
    seen: set[str] = set()
    for p in points:
        if p.id in seen:
            raise ValueError(f"Duplicate warp point id: {p.id}")
        seen.add(p.id)
