"""Surface warp engine: height field, triangulation, transforms, mesh, detection."""

from inkforge.warp.points import WarpPoint, make_point, points_from_xyz
from inkforge.warp.height_field import HeightField, interpolate_height, sample_heights
from inkforge.warp.triangulation import (
    Triangle, barycentric, find_containing_triangle, interpolate_depth, triangulate,
)
from inkforge.warp.transform import (
    WarpMode, WarpTransform, PerspectiveSample,
    apply_warp_transformation, calculate_terrain_transform, get_perspective_scale,
)
from inkforge.warp.mesh import TerrainMesh, HSLColor, generate_terrain_mesh
from inkforge.warp.detection import DetectionStrategy, auto_detect_warp_points
from inkforge.warp.presets import BodyShapePreset, ShapeKind, PresetManager, apply_preset

__all__ = [
    "WarpPoint", "make_point", "points_from_xyz",
    "HeightField", "interpolate_height", "sample_heights",
    "Triangle", "barycentric", "find_containing_triangle", "interpolate_depth",
    "triangulate",
    "WarpMode", "WarpTransform", "PerspectiveSample",
    "apply_warp_transformation", "calculate_terrain_transform",
    "get_perspective_scale",
    "TerrainMesh", "HSLColor", "generate_terrain_mesh",
    "DetectionStrategy", "auto_detect_warp_points",
    "BodyShapePreset", "ShapeKind", "PresetManager", "apply_preset",
]
