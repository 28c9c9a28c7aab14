"""Exhaustive triangulation of the warp points and barycentric containment.

NAIVE_TRIANGULATION: ``triangulate`` returns every combination of three
points (C(n, 3) triangles), not a Delaunay triangulation. Triangles
overlap once there are more than a handful of points, and
``find_containing_triangle`` resolves overlaps by enumeration order, so
the order produced here is part of the observable behaviour.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Optional, Sequence

import numpy as np

from inkforge.warp.points import WarpPoint


@dataclass(frozen=True)
class Triangle:
    """Three warp points plus their centroid (x, y, z)."""
    points: tuple[WarpPoint, WarpPoint, WarpPoint]
    centroid: tuple[float, float, float]

    @classmethod
    def from_points(cls, a: WarpPoint, b: WarpPoint, c: WarpPoint) -> "Triangle":
        centroid = (
            (a.x + b.x + c.x) / 3.0,
            (a.y + b.y + c.y) / 3.0,
            (a.z + b.z + c.z) / 3.0,
        )
        return cls(points=(a, b, c), centroid=centroid)

    @property
    def ids(self) -> tuple[str, str, str]:
        return tuple(p.id for p in self.points)

    def signed_area(self) -> float:
        a, b, c = self.points
        return 0.5 * ((b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y))

    @property
    def is_degenerate(self) -> bool:
        return self.signed_area() == 0.0


def as_xy(point: Any) -> tuple[float, float]:
    """Accept WarpPoint-like objects, {'x', 'y'} mappings or (x, y) pairs."""
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    if isinstance(point, dict):
        return float(point["x"]), float(point["y"])
    return float(point[0]), float(point[1])


def triangulate(points: Sequence[WarpPoint]) -> list[Triangle]:
    """Every triangle i < j < k over the point set, in lexicographic order."""
    if len(points) < 3:
        return []
    return [Triangle.from_points(a, b, c) for a, b, c in combinations(points, 3)]


def barycentric(point: Any, triangle: Triangle) -> tuple[float, float, float]:
    """Barycentric coordinates (u, v, w) of ``point`` in ``triangle``.

    Collinear triangles have a zero denominator; the result is then
    non-finite (inf/nan) rather than an exception.
    """
    px, py = as_xy(point)
    p1, p2, p3 = triangle.points

    denom = np.float64((p2.y - p3.y) * (p1.x - p3.x) + (p3.x - p2.x) * (p1.y - p3.y))
    with np.errstate(divide="ignore", invalid="ignore"):
        u = ((p2.y - p3.y) * (px - p3.x) + (p3.x - p2.x) * (py - p3.y)) / denom
        v = ((p3.y - p1.y) * (px - p3.x) + (p1.x - p3.x) * (py - p3.y)) / denom
        w = 1.0 - u - v
    return float(u), float(v), float(w)


def contains(point: Any, triangle: Triangle) -> bool:
    coords = barycentric(point, triangle)
    return all(math.isfinite(c) and c >= 0.0 for c in coords)


def find_containing_triangle(
    point: Any, triangles: Sequence[Triangle],
) -> Optional[Triangle]:
    """First triangle in enumeration order that contains ``point``."""
    for triangle in triangles:
        if contains(point, triangle):
            return triangle
    return None


def interpolate_depth(point: Any, triangle: Triangle) -> float:
    """Barycentric blend of the three vertex depths."""
    u, v, w = barycentric(point, triangle)
    p1, p2, p3 = triangle.points
    return u * p1.z + v * p2.z + w * p3.z
