"""Tests for heuristic warp-point detection."""

import numpy as np
import pytest

from inkforge.warp.detection import (
    DetectionStrategy, auto_detect_warp_points, grayscale, sobel_magnitude,
)


def _solid(width, height, value):
    rgba = np.full((height, width, 4), value, dtype=np.uint8)
    rgba[..., 3] = 255
    return rgba


def _vertical_step(width=20, height=20):
    """Left half black, right half white."""
    rgba = _solid(width, height, 0)
    rgba[:, width // 2:, :3] = 255
    return rgba


def test_sobel_border_is_zero():
    mag = sobel_magnitude(grayscale(_vertical_step()))
    assert np.all(mag[0, :] == 0)
    assert np.all(mag[-1, :] == 0)
    assert np.all(mag[:, 0] == 0)
    assert np.all(mag[:, -1] == 0)


def test_sobel_finds_step():
    mag = sobel_magnitude(grayscale(_vertical_step()))
    assert mag[5, 9] == pytest.approx(1020.0)
    assert mag[5, 10] == pytest.approx(1020.0)
    assert mag[5, 4] == 0.0


def test_edge_points_sorted_and_subsampled():
    rgba = _vertical_step()
    points = auto_detect_warp_points(rgba.tobytes(), 20, 20, max_points=6)
    assert len(points) == 6
    # 36 equal-strength edge pixels in scan order, every sixth kept
    assert points[0] == pytest.approx((9 / 20, 1 / 20, 0.0))
    assert points[1] == pytest.approx((9 / 20, 4 / 20, 0.0))


def test_edge_depth_from_brightness():
    points = auto_detect_warp_points(_vertical_step(), 20, 20, max_points=100)
    assert len(points) == 36
    assert {p.z for p in points} == {0.0, 1.0}


def test_uniform_image_falls_back_to_grid():
    points = auto_detect_warp_points(_solid(10, 10, 128), 10, 10, max_points=4)
    assert [(p.x, p.y) for p in points] == [
        (0.25, 0.25), (0.75, 0.25), (0.25, 0.75), (0.75, 0.75),
    ]
    assert all(p.z == pytest.approx(128 / 255) for p in points)


def test_grid_fallback_caps_count():
    points = auto_detect_warp_points(_solid(9, 7, 10), 9, 7, max_points=5)
    assert len(points) == 5


def test_forced_grid_strategy_ignores_edges():
    points = auto_detect_warp_points(
        _vertical_step(), 20, 20, max_points=9, strategy=DetectionStrategy.GRID,
    )
    assert len(points) == 9
    assert points[0].x == pytest.approx(1 / 6)


def test_tiny_image_still_yields_points():
    points = auto_detect_warp_points(bytes([200, 200, 200, 255]), 1, 1, max_points=3)
    assert 1 <= len(points) <= 3
    assert points[0].z == pytest.approx(200 / 255)


@pytest.mark.parametrize("max_points", [1, 2, 7, 12, 50])
def test_never_exceeds_max_and_stays_normalized(max_points):
    rng = np.random.default_rng(7)
    rgba = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
    points = auto_detect_warp_points(rgba, 24, 16, max_points=max_points)
    assert 0 < len(points) <= max_points
    for p in points:
        assert 0.0 <= p.x <= 1.0
        assert 0.0 <= p.y <= 1.0
        assert 0.0 <= p.z <= 1.0


def test_degenerate_inputs_return_empty():
    assert auto_detect_warp_points(b"", 0, 0, max_points=5) == []
    assert auto_detect_warp_points(_solid(4, 4, 0), 4, 4, max_points=0) == []


def test_short_buffer_raises():
    with pytest.raises(ValueError):
        auto_detect_warp_points(bytes(10), 4, 4, max_points=4)


def test_oversized_buffer_raises():
    # A 5x4 image passed with width 4 would otherwise be read with scrambled rows
    with pytest.raises(ValueError, match="mismatch"):
        auto_detect_warp_points(_solid(5, 4, 90), 4, 4, max_points=4)
