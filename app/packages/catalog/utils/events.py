"""Typed publish/subscribe registry used by the schema, mapping and tree services.

Callbacks are keyed by an ``Enum`` member rather than a free-form string, so a
subscriber can only listen for kinds the publisher actually declares.
"""

from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

K = TypeVar("K", bound=Enum)

EventCallback = Callable[[Any], None]


class EventBus(Generic[K]):
    """Registry of callbacks per event kind."""

    def __init__(self) -> None:
        self._listeners: Dict[K, List[EventCallback]] = defaultdict(list)

    def subscribe(self, kind: K, callback: EventCallback) -> Callable[[], None]:
        """Register ``callback`` for ``kind`` and return a function that removes it again."""
        self._listeners[kind].append(callback)

        def unsubscribe() -> None:
            listeners = self._listeners.get(kind)
            if listeners and callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, kind: K, payload: Any = None) -> None:
        # Copy so a callback may unsubscribe itself while being notified
        for callback in list(self._listeners.get(kind, ())):
            callback(payload)

    def clear(self, kind: Optional[K] = None) -> None:
        if kind is None:
            self._listeners.clear()
        else:
            self._listeners.pop(kind, None)

    def subscriber_count(self, kind: K) -> int:
        return len(self._listeners.get(kind, ()))
