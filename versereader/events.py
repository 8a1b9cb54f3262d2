"""Minimal typed event emitter used for state-change notifications.

Components publish immutable event records to subscribers instead of
sharing mutable globals. Subscribing returns an unsubscribe callable so
owners can release listeners when a resource is torn down.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar


EventT = TypeVar("EventT")


class EventEmitter(Generic[EventT]):
    """Synchronous fan-out of events to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[EventT], None]] = []

    def subscribe(self, listener: Callable[[EventT], None]) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, event: EventT) -> None:
        """Deliver one event to a snapshot of the current listeners."""

        for listener in list(self._listeners):
            listener(event)

    def clear(self) -> None:
        """Drop every registered listener."""

        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)
