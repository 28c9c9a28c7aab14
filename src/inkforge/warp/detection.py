"""Heuristic warp-point detection from a raw RGBA buffer.

Coarse by design. The edge strategy runs a Sobel operator over the
grayscale image, keeps pixels whose gradient magnitude exceeds
EDGE_THRESHOLD, orders them by strength and subsamples them evenly. Depth
is read from brightness: brighter pixels are assumed closer to the camera.
When no edges are found (flat or tiny images) a regular grid of cell
centres is sampled instead, so a non-empty image always yields points.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from inkforge.constants import DEFAULT_DETECT_POINTS, EDGE_THRESHOLD

logger = logging.getLogger(__name__)


class DetectionStrategy(Enum):
    EDGES = "edges"
    GRID = "grid"


class DetectedPoint(NamedTuple):
    """A warp point without an id: normalized x, y and depth z."""
    x: float
    y: float
    z: float


def _to_rgba(pixels: Any, width: int, height: int) -> NDArray[np.uint8]:
    data = np.asarray(
        np.frombuffer(pixels, dtype=np.uint8)
        if isinstance(pixels, (bytes, bytearray, memoryview))
        else pixels,
        dtype=np.uint8,
    ).ravel()
    expected = width * height * 4
    if data.size != expected:
        raise ValueError(
            f"Pixel buffer size mismatch: expected {expected} bytes for "
            f"{width}x{height} RGBA, got {data.size}"
        )
    return data.reshape(height, width, 4)


def grayscale(rgba: NDArray[np.uint8]) -> NDArray[np.float64]:
    """Mean of the RGB channels, alpha ignored."""
    return rgba[..., :3].astype(np.float64).mean(axis=2)


def sobel_magnitude(gray: NDArray[np.float64]) -> NDArray[np.float64]:
    """Sobel gradient magnitude; the one-pixel border is left at zero."""
    mag = np.zeros_like(gray, dtype=np.float64)
    if gray.shape[0] < 3 or gray.shape[1] < 3:
        return mag

    tl, tc, tr = gray[:-2, :-2], gray[:-2, 1:-1], gray[:-2, 2:]
    ml, mr = gray[1:-1, :-2], gray[1:-1, 2:]
    bl, bc, br = gray[2:, :-2], gray[2:, 1:-1], gray[2:, 2:]

    gx = (tr + 2.0 * mr + br) - (tl + 2.0 * ml + bl)
    gy = (bl + 2.0 * bc + br) - (tl + 2.0 * tc + tr)
    mag[1:-1, 1:-1] = np.sqrt(gx * gx + gy * gy)
    return mag


def _edge_points(
    gray: NDArray[np.float64], max_points: int, threshold: float,
) -> list[DetectedPoint]:
    height, width = gray.shape
    mag = sobel_magnitude(gray)
    ys, xs = np.nonzero(mag > threshold)       # row-major scan order
    logger.debug("Edge scan: %d pixels above threshold %.1f", len(xs), threshold)
    if len(xs) == 0:
        return []

    order = np.argsort(-mag[ys, xs], kind="stable")
    if len(order) > max_points:
        step = len(order) // max_points
        order = order[np.arange(max_points) * step]

    return [
        DetectedPoint(
            float(xs[i]) / width,
            float(ys[i]) / height,
            float(gray[ys[i], xs[i]]) / 255.0,
        )
        for i in order
    ]


def _grid_points(gray: NDArray[np.float64], max_points: int) -> list[DetectedPoint]:
    height, width = gray.shape
    cells = max(math.ceil(math.sqrt(max_points)), 1)
    points: list[DetectedPoint] = []
    for row in range(cells):
        for col in range(cells):
            if len(points) >= max_points:
                return points
            u = (col + 0.5) / cells
            v = (row + 0.5) / cells
            px = min(int(u * width), width - 1)
            py = min(int(v * height), height - 1)
            points.append(DetectedPoint(u, v, float(gray[py, px]) / 255.0))
    return points


def auto_detect_warp_points(
    pixels: Any,
    width: int,
    height: int,
    max_points: int = DEFAULT_DETECT_POINTS,
    strategy: DetectionStrategy = DetectionStrategy.EDGES,
    threshold: float = EDGE_THRESHOLD,
) -> list[DetectedPoint]:
    """Propose up to ``max_points`` warp points for an RGBA image.

    ``pixels`` is a flat RGBA byte buffer (bytes, bytearray, sequence or
    NumPy array) of ``width * height * 4`` bytes, rows top to bottom.
    """
    if max_points <= 0 or width <= 0 or height <= 0:
        return []
    if pixels is None or len(pixels) == 0:
        return []

    gray = grayscale(_to_rgba(pixels, width, height))

    points: list[DetectedPoint] = []
    if strategy is DetectionStrategy.EDGES:
        points = _edge_points(gray, max_points, threshold)
        if not points:
            logger.debug("No edges detected in %dx%d image, using grid sampling",
                         width, height)
    if not points:
        points = _grid_points(gray, max_points)
    return points[:max_points]
