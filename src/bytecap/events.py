"""Event broadcasting for scan and threshold notifications."""

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

SCAN_COMPLETE = "bytecap:file-scan-complete"
THRESHOLD_ALERT = "bytecap:threshold-alert"

Listener = Callable[[Any], None]


class EventBus:
    """Delivers named events to subscribed listeners in subscription order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event: str, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for an event.

        Args:
            event: Event name, e.g. THRESHOLD_ALERT
            listener: Called with the event payload

        Returns:
            Function that removes the listener again
        """
        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

        return unsubscribe

    def emit(self, event: str, payload: Any) -> None:
        """Send a payload to every listener of an event."""
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(payload)
            except Exception:
                # One broken listener must not keep the others from hearing
                logger.exception("Listener %r failed handling %s", listener, event)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
