"""
Event Bus

Synchronous, in-process notifications for store mutations. Listeners are
called after the mutation is visible in the store; a failing listener is
logged and never affects the store or the remaining listeners.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


INITIALIZED = "initialized"
TABLE_ADDED = "table-added"
TABLE_UPDATED = "table-updated"
TABLE_REMOVED = "table-removed"
GUEST_ASSIGNED = "guest-assigned"
GUEST_REMOVED = "guest-removed"
MENU_ASSIGNED = "menu-assigned"
SPECIAL_REQUIREMENTS_ADDED = "special-requirements-added"
MENU_OPTION_ADDED = "menu-option-added"
MENU_OPTION_UPDATED = "menu-option-updated"
MENU_OPTION_REMOVED = "menu-option-removed"
ROOM_ADDED = "room-added"
ROOM_UPDATED = "room-updated"
ROOM_REMOVED = "room-removed"
CURRENT_ROOM_CHANGED = "current-room-changed"
OBSTACLE_ADDED = "obstacle-added"
OBSTACLE_UPDATED = "obstacle-updated"
OBSTACLE_REMOVED = "obstacle-removed"
TABLE_LIMIT_CHANGED = "table-limit-changed"


@dataclass(frozen=True)
class ArrangementEvent:
    name: str
    payload: Any


Listener = Callable[[ArrangementEvent], None]


class EventBus:
    """Observer registry owned by a single arrangement store."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}
        self._catch_all: List[Listener] = []

    def subscribe(self, name: str, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for one event name.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.setdefault(name, []).append(listener)
        return lambda: self.unsubscribe(name, listener)

    def subscribe_all(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for every event."""
        self._catch_all.append(listener)
        return lambda: self.unsubscribe(None, listener)

    def unsubscribe(self, name, listener: Listener) -> None:
        bucket = self._catch_all if name is None else self._listeners.get(name, [])
        if listener in bucket:
            bucket.remove(listener)

    def emit(self, name: str, payload: Any) -> None:
        event = ArrangementEvent(name=name, payload=payload)
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners.get(name, [])) + list(self._catch_all):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed while handling '%s'", listener, name)
