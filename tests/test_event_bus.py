"""Typed event registry."""

from app.packages.catalog.core.enums import TreeEventKind
from app.packages.catalog.utils.events import EventBus


def test_subscribe_emit_and_unsubscribe():
    bus: EventBus[TreeEventKind] = EventBus()
    received = []

    unsubscribe = bus.subscribe(TreeEventKind.NODE_SELECTED, received.append)
    bus.emit(TreeEventKind.NODE_SELECTED, "n1")
    bus.emit(TreeEventKind.NODE_EXPANDED, "ignored")
    assert received == ["n1"]
    assert bus.subscriber_count(TreeEventKind.NODE_SELECTED) == 1

    unsubscribe()
    unsubscribe()
    bus.emit(TreeEventKind.NODE_SELECTED, "n2")
    assert received == ["n1"]
    assert bus.subscriber_count(TreeEventKind.NODE_SELECTED) == 0


def test_callback_may_unsubscribe_while_notified():
    bus: EventBus[TreeEventKind] = EventBus()
    calls = []

    def once(payload):
        calls.append(("once", payload))
        remove_once()

    remove_once = bus.subscribe(TreeEventKind.TREE_UPDATED, once)
    bus.subscribe(TreeEventKind.TREE_UPDATED, lambda payload: calls.append(("always", payload)))

    bus.emit(TreeEventKind.TREE_UPDATED, 1)
    bus.emit(TreeEventKind.TREE_UPDATED, 2)
    assert calls == [("once", 1), ("always", 1), ("always", 2)]


def test_clear_one_kind_or_all():
    bus: EventBus[TreeEventKind] = EventBus()
    bus.subscribe(TreeEventKind.NODE_SELECTED, lambda _: None)
    bus.subscribe(TreeEventKind.ERROR, lambda _: None)

    bus.clear(TreeEventKind.ERROR)
    assert bus.subscriber_count(TreeEventKind.ERROR) == 0
    assert bus.subscriber_count(TreeEventKind.NODE_SELECTED) == 1

    bus.clear()
    assert bus.subscriber_count(TreeEventKind.NODE_SELECTED) == 0
