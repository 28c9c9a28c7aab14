"""Tests for event bus."""

from inkforge.core.events import EventBus, EventType


def test_subscribe_publish():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.WARP_POINTS_CHANGED, lambda **kw: received.append(kw))
    bus.publish(EventType.WARP_POINTS_CHANGED, points=(), reason="clear")
    assert len(received) == 1
    assert received[0] == {"points": (), "reason": "clear"}


def test_unsubscribe():
    bus = EventBus()
    received = []
    handler = lambda **kw: received.append(kw)
    bus.subscribe(EventType.OVERLAY_MOVED, handler)
    bus.unsubscribe(EventType.OVERLAY_MOVED, handler)
    bus.publish(EventType.OVERLAY_MOVED, x=0.5, y=0.5)
    assert len(received) == 0


def test_multiple_subscribers():
    bus = EventBus()
    a, b = [], []
    bus.subscribe(EventType.PRESET_APPLIED, lambda **kw: a.append(1))
    bus.subscribe(EventType.PRESET_APPLIED, lambda **kw: b.append(1))
    bus.publish(EventType.PRESET_APPLIED, preset_id="arm")
    assert len(a) == 1
    assert len(b) == 1


def test_different_events_independent():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.WARP_POINTS_CHANGED, lambda **kw: received.append("points"))
    bus.publish(EventType.WARP_SETTINGS_CHANGED, field="strength", value=10.0)
    assert len(received) == 0


def test_handler_may_unsubscribe_itself():
    bus = EventBus()
    calls = []

    def once(**kw):
        calls.append(kw)
        bus.unsubscribe(EventType.POINT_SELECTED, once)

    bus.subscribe(EventType.POINT_SELECTED, once)
    bus.publish(EventType.POINT_SELECTED, point_id="a")
    bus.publish(EventType.POINT_SELECTED, point_id="b")
    assert calls == [{"point_id": "a"}]


def test_clear():
    bus = EventBus()
    bus.subscribe(EventType.WARP_POINTS_CHANGED, lambda **kw: None)
    bus.clear()
    # Should not raise
    bus.publish(EventType.WARP_POINTS_CHANGED)
