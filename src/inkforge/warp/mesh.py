"""Terrain mesh: a regular lattice colored by the inferred height.

Debug/feedback geometry only. Heights come from the IDW field; colors run
green (low) to red (high) as ``hue = 120 * (1 - height)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from inkforge.constants import (
    DEFAULT_GRID_SIZE, MESH_LIGHTNESS, MESH_LINE_MAX_DISTANCE, MESH_SATURATION,
)
from inkforge.core.math_utils import distance_sq, hsl_to_rgb
from inkforge.warp.height_field import sample_heights
from inkforge.warp.points import WarpPoint


@dataclass(frozen=True)
class HSLColor:
    hue: float          # degrees
    saturation: float   # percent
    lightness: float    # percent

    def to_rgb(self) -> tuple[float, float, float]:
        return hsl_to_rgb(self.hue, self.saturation, self.lightness)

    def to_css(self) -> str:
        return f"hsl({self.hue:g}, {self.saturation:g}%, {self.lightness:g}%)"


def height_to_color(height: float) -> HSLColor:
    return HSLColor(120.0 * (1.0 - height), MESH_SATURATION, MESH_LIGHTNESS)


@dataclass
class TerrainMesh:
    """Row-major lattice samples. Sample (row, col) sits at index row*grid_size+col."""
    grid_size: int
    samples: NDArray[np.float64]   # (N, 2) normalized x, y
    heights: NDArray[np.float64]   # (N,)
    colors: tuple[HSLColor, ...] = field(default_factory=tuple)

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    def flat_points(self) -> list[float]:
        """Interleaved [x0, y0, x1, y1, ...] for polyline-style renderers."""
        return self.samples.ravel().tolist()

    def rows(self) -> list[tuple[NDArray[np.float64], HSLColor]]:
        """Horizontal polylines, each with the color of its first sample."""
        n = self.grid_size
        return [
            (self.samples[r * n:(r + 1) * n], self.colors[r * n])
            for r in range(n)
        ]

    def columns(self) -> list[tuple[NDArray[np.float64], HSLColor]]:
        """Vertical polylines, each with the color of its top sample."""
        n = self.grid_size
        return [(self.samples[c::n], self.colors[c]) for c in range(n)]


def generate_terrain_mesh(
    points: Sequence[WarpPoint], grid_size: int = DEFAULT_GRID_SIZE,
) -> TerrainMesh:
    """Sample the height field on a ``grid_size`` x ``grid_size`` lattice.

    The lattice covers [0, 1] x [0, 1] including both corners. A grid size
    below 2 yields a single sample at the origin.
    """
    n = max(int(grid_size), 1)
    divisions = max(n - 1, 1)
    coords = np.arange(n, dtype=np.float64) / divisions
    gx, gy = np.meshgrid(coords, coords)       # rows vary in y
    samples = np.column_stack([gx.ravel(), gy.ravel()])

    heights = sample_heights(samples[:, 0], samples[:, 1], points)
    colors = tuple(height_to_color(h) for h in heights.tolist())
    return TerrainMesh(grid_size=n, samples=samples, heights=heights, colors=colors)


@dataclass(frozen=True)
class MeshLine:
    start: WarpPoint
    end: WarpPoint


def generate_mesh_lines(
    points: Sequence[WarpPoint], max_distance: float = MESH_LINE_MAX_DISTANCE,
) -> list[MeshLine]:
    """Wireframe edges between control points closer than ``max_distance``."""
    if len(points) < 3:
        return []
    limit = max_distance * max_distance
    return [
        MeshLine(a, b)
        for a, b in combinations(points, 2)
        if distance_sq(a.x, a.y, b.x, b.y) < limit
    ]
