"""EventBus for decoupled publish/subscribe communication."""

from enum import Enum, auto
from typing import Any, Callable
from collections import defaultdict


class EventType(Enum):
    # Point set replaced
    WARP_POINTS_CHANGED = auto()     # data: points (tuple), reason (str)
    POINT_SELECTED = auto()          # data: point_id (str | None)

    # Warp settings
    WARP_SETTINGS_CHANGED = auto()   # data: field (str), value (any)

    # Overlay placement
    OVERLAY_MOVED = auto()           # data: x (float), y (float)

    # Auto-detection
    DETECTION_COMPLETE = auto()      # data: count (int), strategy (str)

    # Presets
    PRESET_APPLIED = auto()          # data: preset_id (str)


class EventBus:
    """Simple publish/subscribe event system."""

    def __init__(self):
        self._handlers: dict[EventType, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: EventType, **data: Any) -> None:
        for handler in list(self._handlers[event_type]):
            handler(**data)

    def clear(self) -> None:
        self._handlers.clear()
