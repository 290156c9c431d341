"""
Publish/subscribe hub for market data change notifications.

Term structures hold an Observable and forward upstream changes to
whatever registered interest in them. Listeners are plain callables
receiving the notifying object.
"""

import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class Observable:
    """
    Registry of listeners notified when a source object changes.

    Attributes:
        source: Object passed to each listener on notification
    """

    def __init__(self, source: Optional[Any] = None):
        self.source = source
        self._listeners: List[Listener] = []

    @property
    def observer_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Listener:
        """
        Register a listener.

        Registering the same listener twice has no effect. The listener is
        returned so the method can be used as a decorator.
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener).__name__}")
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a registered listener."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            raise ValueError("Listener is not subscribed") from None

    def notify_observers(self) -> None:
        """
        Call every listener with the source, in registration order.

        Iterates over a snapshot so listeners may (un)subscribe while being
        notified. Exceptions raised by a listener propagate to the caller.
        """
        listeners = list(self._listeners)
        logger.debug("Notifying %d observer(s) of %r", len(listeners), self.source)
        for listener in listeners:
            listener(self.source)


__all__ = [
    "Listener",
    "Observable",
]
