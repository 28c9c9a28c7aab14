"""Height field reconstructed from sparse warp points.

The field is never stored as a grid. ``interpolate_height`` evaluates it
at one position with inverse-distance weighting; ``sample_heights`` does
the same for a batch of positions with NumPy.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from inkforge.constants import IDW_EPSILON, NEUTRAL_HEIGHT, SNAP_EPSILON
from inkforge.core.math_utils import batch_distance_sq, distance_sq
from inkforge.warp.points import WarpPoint


def interpolate_height(x: float, y: float, points: Sequence[WarpPoint]) -> float:
    """Return the interpolated z at (x, y).

    Exact at control points: a query within SNAP_EPSILON of a point
    returns that point's z. Empty point sets give NEUTRAL_HEIGHT.
    """
    if not points:
        return NEUTRAL_HEIGHT

    snap_sq = SNAP_EPSILON * SNAP_EPSILON
    weighted = 0.0
    total = 0.0
    for p in points:
        d2 = distance_sq(x, y, p.x, p.y)
        if d2 < snap_sq:
            return p.z
        w = 1.0 / (d2 + IDW_EPSILON)
        weighted += w * p.z
        total += w
    return weighted / total


def sample_heights(
    xs: NDArray, ys: NDArray, points: Sequence[WarpPoint],
) -> NDArray[np.float64]:
    """Vectorized ``interpolate_height`` over matching arrays of positions."""
    xs = np.asarray(xs, dtype=np.float64).ravel()
    ys = np.asarray(ys, dtype=np.float64).ravel()
    if not points:
        return np.full(xs.shape, NEUTRAL_HEIGHT, dtype=np.float64)

    px = np.array([p.x for p in points], dtype=np.float64)
    py = np.array([p.y for p in points], dtype=np.float64)
    pz = np.array([p.z for p in points], dtype=np.float64)

    d2 = batch_distance_sq(xs, ys, px, py)            # (M, N)
    weights = 1.0 / (d2 + IDW_EPSILON)
    heights = (weights @ pz) / weights.sum(axis=1)

    # Exact pass-through: first point within the snap radius wins
    near = d2 < SNAP_EPSILON * SNAP_EPSILON
    snapped = near.any(axis=1)
    if np.any(snapped):
        first = near[snapped].argmax(axis=1)
        heights[snapped] = pz[first]
    return heights


class HeightField:
    """Callable view of the height field over a fixed point set."""

    def __init__(self, points: Sequence[WarpPoint]):
        self.points = tuple(points)

    def __call__(self, x: float, y: float) -> float:
        return interpolate_height(x, y, self.points)

    def sample(self, xs: NDArray, ys: NDArray) -> NDArray[np.float64]:
        return sample_heights(xs, ys, self.points)
