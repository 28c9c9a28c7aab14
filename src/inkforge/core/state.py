"""Application state for the warp preview session."""

from dataclasses import dataclass, field
from typing import Optional

from inkforge.constants import DEFAULT_STRENGTH, MAX_STRENGTH, MIN_STRENGTH
from inkforge.core.math_utils import clamp


@dataclass
class WarpSettings:
    """User-facing warp controls."""
    # Warp strength slider (0-100 percent)
    strength: float = DEFAULT_STRENGTH
    enabled: bool = True

    # Feedback overlays
    show_mesh: bool = False
    show_points: bool = True

    def set_strength(self, value: float) -> None:
        self.strength = clamp(value, MIN_STRENGTH, MAX_STRENGTH)

    @property
    def effective_strength(self) -> float:
        """Strength actually applied: 0 when warping is switched off."""
        return self.strength if self.enabled else 0.0


@dataclass
class OverlayState:
    """Base placement of the tattoo overlay.

    Position is normalized (0-1) over the canvas; rotation in degrees;
    skew in degrees.
    """
    x: float = 0.5
    y: float = 0.5
    scale: float = 1.0
    rotation: float = 0.0
    skew_x: float = 0.0
    skew_y: float = 0.0

    def move_to(self, x: float, y: float) -> None:
        self.x = clamp(x, 0.0, 1.0)
        self.y = clamp(y, 0.0, 1.0)


class StateManager:
    """Central state container.

    ``points`` always holds an immutable tuple; commands replace it whole.
    """

    def __init__(self):
        self.points: tuple = ()
        self.settings = WarpSettings()
        self.overlay = OverlayState()
        self.selected_point: Optional[str] = None
        # Incremented on every point-set replacement
        self.revision: int = 0

    def replace_points(self, points: tuple) -> None:
        self.points = tuple(points)
        self.revision += 1
        if self.selected_point is not None and not any(
            p.id == self.selected_point for p in self.points
        ):
            self.selected_point = None
