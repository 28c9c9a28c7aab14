"""Tests for warp point helpers."""

import dataclasses

import pytest

from inkforge.warp.points import (
    WarpPoint, make_point, points_from_xyz, add_point, move_point,
    set_point_depth, set_quick_depth, set_point_locked, remove_point,
    clear_points, get_point, validate_unique_ids,
)


def test_make_point_clamps():
    p = make_point(1.5, -0.2, 2.0)
    assert (p.x, p.y, p.z) == (1.0, 0.0, 1.0)
    assert p.locked is False
    assert p.source == "manual"


def test_make_point_rejects_unknown_source():
    with pytest.raises(ValueError):
        make_point(0.5, 0.5, source="magic")


def test_points_are_frozen():
    p = make_point(0.5, 0.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 0.1


def test_fresh_ids_are_unique():
    pts = points_from_xyz([(0.1, 0.1, 0.1)] * 50)
    validate_unique_ids(pts)
    assert len({p.id for p in pts}) == 50


def test_add_point_returns_new_collection():
    original = points_from_xyz([(0.1, 0.2, 0.3)])
    updated = add_point(original, 0.5, 0.5, 0.9)
    assert len(original) == 1
    assert len(updated) == 2
    assert updated[0] is original[0]
    assert updated[1].xyz() == (0.5, 0.5, 0.9)


def test_move_point():
    pts = points_from_xyz([(0.1, 0.2, 0.3), (0.4, 0.5, 0.6)])
    moved = move_point(pts, pts[1].id, 0.9, 1.4)
    assert moved[1].x == 0.9
    assert moved[1].y == 1.0
    assert moved[1].z == 0.6
    assert moved[1].id == pts[1].id
    assert pts[1].x == 0.4


def test_move_locked_point_is_noop():
    pts = points_from_xyz([(0.1, 0.2, 0.3)])
    pts = set_point_locked(pts, pts[0].id, True)
    moved = move_point(pts, pts[0].id, 0.9, 0.9)
    assert moved[0].xyz() == (0.1, 0.2, 0.3)
    assert moved[0].locked is True


def test_depth_updates():
    pts = points_from_xyz([(0.1, 0.2, 0.3)])
    assert set_point_depth(pts, pts[0].id, 7.0)[0].z == 1.0
    assert set_quick_depth(pts, pts[0].id, "back")[0].z == 0.2
    assert set_quick_depth(pts, pts[0].id, "front")[0].z == 0.8
    with pytest.raises(ValueError):
        set_quick_depth(pts, pts[0].id, "sideways")


def test_unknown_id_raises():
    pts = points_from_xyz([(0.1, 0.2, 0.3)])
    with pytest.raises(KeyError):
        move_point(pts, "missing", 0.5, 0.5)
    with pytest.raises(KeyError):
        get_point(pts, "missing")


def test_remove_and_clear():
    pts = points_from_xyz([(0.1, 0.2, 0.3), (0.4, 0.5, 0.6)])
    assert remove_point(pts, pts[0].id) == (pts[1],)
    assert remove_point(pts, "missing") == pts
    assert clear_points() == ()


def test_validate_unique_ids_detects_duplicates():
    p = WarpPoint(id="same", x=0.1, y=0.1)
    q = WarpPoint(id="same", x=0.2, y=0.2)
    with pytest.raises(ValueError):
        validate_unique_ids([p, q])


def test_to_dict():
    p = WarpPoint(id="a", x=0.1, y=0.2, z=0.3)
    assert p.to_dict() == {
        "id": "a", "x": 0.1, "y": 0.2, "z": 0.3, "locked": False, "source": "manual",
    }
