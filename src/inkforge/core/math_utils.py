"""NumPy-backed math helpers shared by the warp engine.

Points in the image plane are normalized (0..1, origin top-left).
Batched helpers take flat float64 coordinate arrays.
"""

import colorsys

import numpy as np
from numpy.typing import NDArray


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def distance_sq(ax: float, ay: float, bx: float, by: float) -> float:
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy


def batch_distance_sq(px: NDArray, py: NDArray, qx: NDArray, qy: NDArray) -> NDArray:
    """Pairwise squared distances between query points (M,) and points (N,).

    Returns an (M, N) array.
    """
    dx = np.asarray(px, dtype=np.float64)[:, None] - np.asarray(qx, dtype=np.float64)[None, :]
    dy = np.asarray(py, dtype=np.float64)[:, None] - np.asarray(qy, dtype=np.float64)[None, :]
    return dx * dx + dy * dy


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[float, float, float]:
    """Convert HSL (degrees, percent, percent) to RGB floats in 0..1."""
    h = (hue % 360.0) / 360.0
    s = clamp01(saturation / 100.0)
    l = clamp01(lightness / 100.0)
    # colorsys orders the arguments H, L, S
    return colorsys.hls_to_rgb(h, l, s)
