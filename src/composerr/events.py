"""Event bus used to announce error creation.

A small publish/subscribe registry. Subscribers are stored per topic in
subscription order. Publishing takes a snapshot of the subscriber list under
the lock and calls handlers outside of it, so handlers may subscribe or
unsubscribe while an event is being delivered.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

CREATE_EVENT = "create"

Handler = Callable[[Any], Any]


class EventBus:
    """Thread-safe publish/subscribe registry."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}
        self._lock = threading.RLock()

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], bool]:
        """Register a handler for a topic.

        Args:
            topic: Event name (e.g. "create")
            handler: Callable receiving the event payload

        Returns:
            Function that removes this subscription
        """
        with self._lock:
            self._handlers.setdefault(topic, []).append(handler)
        logger.debug(f"Subscribed {handler!r} to '{topic}'")
        return lambda: self.unsubscribe(topic, handler)

    def unsubscribe(self, topic: str, handler: Handler) -> bool:
        """Remove the first registration of a handler.

        Returns:
            True if the handler was registered
        """
        with self._lock:
            handlers = self._handlers.get(topic, [])
            try:
                handlers.remove(handler)
            except ValueError:
                return False
            if not handlers:
                self._handlers.pop(topic, None)
        return True

    def publish(self, topic: str, payload: Any) -> int:
        """Deliver a payload to every handler of a topic.

        A handler raising an exception is logged and skipped; delivery
        continues with the remaining handlers.

        Returns:
            Number of handlers that completed without raising
        """
        delivered = 0
        for handler in self.handlers(topic):
            try:
                handler(payload)
            except Exception:
                logger.exception(f"Handler {handler!r} failed on '{topic}' event")
            else:
                delivered += 1
        return delivered

    def handlers(self, topic: str) -> List[Handler]:
        """Get a snapshot of the handlers subscribed to a topic."""
        with self._lock:
            return list(self._handlers.get(topic, []))

    def clear(self, topic: Optional[str] = None) -> None:
        """Drop subscribers of one topic, or of every topic."""
        with self._lock:
            if topic is None:
                self._handlers.clear()
            else:
                self._handlers.pop(topic, None)
