"""Body-shape presets: named warp-point templates loaded from JSON config."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping

from inkforge.core.config_loader import load_config
from inkforge.warp.points import PointSet, points_from_xyz

PRESETS_CONFIG = "body_shapes.json"


class ShapeKind(Enum):
    CYLINDRICAL = "cylindrical"
    SPHERICAL = "spherical"
    PLANAR = "planar"
    CUSTOM = "custom"


@dataclass(frozen=True)
class BodyShapePreset:
    id: str
    name: str
    kind: ShapeKind
    points: tuple[tuple[float, float, float], ...]
    description: str = ""


def _parse_preset(preset_id: str, entry: Mapping[str, Any]) -> BodyShapePreset:
    try:
        kind = ShapeKind(entry.get("kind", "custom"))
        points = tuple(
            (float(x), float(y), float(z)) for x, y, z in entry["points"]
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed body shape preset '{preset_id}': {e}") from e

    for x, y, z in points:
        if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0 and 0.0 <= z <= 1.0):
            raise ValueError(
                f"Body shape preset '{preset_id}' has a point outside [0, 1]: "
                f"({x}, {y}, {z})"
            )
    return BodyShapePreset(
        id=preset_id,
        name=entry.get("name", preset_id),
        kind=kind,
        points=points,
        description=entry.get("description", ""),
    )


def parse_presets(data: Mapping[str, Any]) -> Mapping[str, BodyShapePreset]:
    """Build a read-only catalog from the parsed JSON mapping."""
    if not isinstance(data, Mapping):
        raise ValueError("Body shape preset config must be a JSON object")
    return MappingProxyType({pid: _parse_preset(pid, e) for pid, e in data.items()})


@lru_cache(maxsize=1)
def load_presets() -> Mapping[str, BodyShapePreset]:
    """The process-wide catalog, read once from assets/config/."""
    return parse_presets(load_config(PRESETS_CONFIG))


def apply_preset(preset: BodyShapePreset) -> PointSet:
    """Fresh point set for ``preset``: new ids, coordinates unchanged."""
    return points_from_xyz(preset.points, source="preset")


class PresetManager:
    """Lookup over the body-shape catalog."""

    def __init__(self, presets: Mapping[str, BodyShapePreset] | None = None):
        self._presets = presets

    @property
    def presets(self) -> Mapping[str, BodyShapePreset]:
        if self._presets is None:
            self._presets = load_presets()
        return self._presets

    def get_preset_names(self) -> list[str]:
        return list(self.presets.keys())

    def get_preset(self, preset_id: str) -> BodyShapePreset:
        return self.presets[preset_id]

    def apply(self, preset_id: str) -> PointSet:
        return apply_preset(self.get_preset(preset_id))
