"""In-process notification bus.

The bus is an explicit object owned by whoever wires the application
together (the API app, the CLI); there is no module-level listener registry.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    message: str
    icon: str
    id: int


Listener = Callable[[Notification], None]


class NotificationBus:
    """Publish short user-facing notifications to subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._ids = itertools.count()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, message: str, icon: str = "✓") -> Notification:
        note = Notification(message=message, icon=icon, id=next(self._ids))
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            try:
                listener(note)
            except Exception:
                logger.exception("notification listener failed")
        return note

    def __len__(self) -> int:
        return len(self._listeners)
