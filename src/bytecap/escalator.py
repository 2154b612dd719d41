"""Repeating, suppressible alert notifications.

Every alert identity (severity + message) runs through a small state
machine: the first delivery is shown at once and re-shown on a timer until
it has been displayed ``max_occurrences`` times. The user can ignore an
identity at any occurrence, which silences it until the next global clear.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from bytecap.models import ThresholdAlert

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60.0
MAX_OCCURRENCES = 3


class Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]

# show(alert, occurrence, max_occurrences); returning False means "ignore"
ShowCallback = Callable[[ThresholdAlert, int, int], Optional[bool]]


def _thread_timer(interval: float, function: Callable[[], None]) -> Timer:
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class EscalationState(str, Enum):
    """Lifecycle of an alert identity."""

    ACTIVE = "active"
    SUPPRESSED = "suppressed"
    COMPLETED = "completed"


@dataclass
class Escalation:
    """Escalation record for one alert identity."""

    alert: ThresholdAlert
    occurrence: int = 1
    state: EscalationState = EscalationState.ACTIVE
    timer: Timer | None = None


class AlertEscalator:
    """Shows alerts and repeats them until seen enough times or ignored."""

    def __init__(
        self,
        show: ShowCallback,
        interval: float = DEFAULT_INTERVAL,
        max_occurrences: int = MAX_OCCURRENCES,
        timer_factory: TimerFactory = _thread_timer,
        on_clear: Callable[[], None] | None = None,
    ):
        self.show = show
        self.interval = interval
        self.max_occurrences = max_occurrences
        self.timer_factory = timer_factory
        self.on_clear = on_clear
        self._lock = threading.Lock()
        self._records: dict[str, Escalation] = {}
        self._ignored: set[str] = set()
        self._current: ThresholdAlert | None = None
        self._closed = False

    # -- public API -----------------------------------------------------------

    def deliver(self, alert: ThresholdAlert) -> bool:
        """
        Start escalating an alert.

        Ignored identities and identities that are already escalating are
        left alone. A completed identity starts over.

        Args:
            alert: Alert to show

        Returns:
            True if the alert was displayed
        """
        identity = alert.identity
        with self._lock:
            if self._closed or identity in self._ignored:
                return False
            record = self._records.get(identity)
            if record is not None and record.state == EscalationState.ACTIVE:
                return False

            record = Escalation(alert=alert)
            self._records[identity] = record
            if self.max_occurrences > 1:
                self._arm(identity, record)
            else:
                record.state = EscalationState.COMPLETED

        return self._display(identity, record, 1)

    def ignore(self, identity: str) -> None:
        """Silence an identity until the next clear_all()."""
        with self._lock:
            self._ignored.add(identity)
            record = self._records.get(identity)
            if record is not None:
                self._cancel(record)
                record.state = EscalationState.SUPPRESSED
            if self._current is not None and self._current.identity == identity:
                self._current = None
        logger.debug("Ignoring alert %s", identity)

    def ignore_current(self) -> ThresholdAlert | None:
        """Ignore whichever alert is currently displayed."""
        with self._lock:
            current = self._current
        if current is not None:
            self.ignore(current.identity)
        return current

    def clear_all(self) -> None:
        """Cancel every timer and forget all identities and suppressions."""
        with self._lock:
            for record in self._records.values():
                self._cancel(record)
            self._records.clear()
            self._ignored.clear()
            self._current = None
        if self.on_clear is not None:
            self.on_clear()

    def close(self) -> None:
        """Tear down: cancel every timer and refuse new deliveries."""
        with self._lock:
            self._closed = True
            for record in self._records.values():
                self._cancel(record)

    def __enter__(self) -> "AlertEscalator":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- introspection --------------------------------------------------------

    @property
    def current(self) -> ThresholdAlert | None:
        """Alert most recently displayed and not yet ignored or cleared."""
        with self._lock:
            return self._current

    @property
    def active_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._records.values() if r.state == EscalationState.ACTIVE)

    def state_of(self, identity: str) -> EscalationState | None:
        with self._lock:
            record = self._records.get(identity)
            return record.state if record else None

    def occurrences_of(self, identity: str) -> int:
        with self._lock:
            record = self._records.get(identity)
            return record.occurrence if record else 0

    def is_suppressed(self, identity: str) -> bool:
        with self._lock:
            return identity in self._ignored

    def is_live(self, alert: ThresholdAlert) -> bool:
        """True while alert is the displayed alert and has not been cleared or ignored."""
        with self._lock:
            return self._current is not None and self._current.identity == alert.identity

    # -- internals ------------------------------------------------------------

    def _arm(self, identity: str, record: Escalation) -> None:
        # Caller holds the lock
        timer = self.timer_factory(self.interval, lambda: self._fire(identity, timer))
        record.timer = timer
        timer.start()

    def _cancel(self, record: Escalation) -> None:
        if record.timer is not None:
            record.timer.cancel()
            record.timer = None

    def _fire(self, identity: str, timer: Timer) -> None:
        with self._lock:
            record = self._records.get(identity)
            # Stale timers (cleared, ignored or replaced) do nothing
            if (
                self._closed
                or record is None
                or record.timer is not timer
                or record.state != EscalationState.ACTIVE
            ):
                return
            record.occurrence += 1
            occurrence = record.occurrence
            if occurrence >= self.max_occurrences:
                record.timer = None
                record.state = EscalationState.COMPLETED
            else:
                self._arm(identity, record)

        self._display(identity, record, occurrence)

    def _display(self, identity: str, record: Escalation, occurrence: int) -> bool:
        with self._lock:
            # A clear, ignore or teardown since the caller released the lock
            # retires the record; it must not be shown again
            if (
                self._closed
                or self._records.get(identity) is not record
                or record.state == EscalationState.SUPPRESSED
            ):
                logger.debug("Dropping display of retired alert %s", identity)
                return False
            self._current = record.alert

        logger.debug("Showing %s (%d/%d)", identity, occurrence, self.max_occurrences)
        if self.show(record.alert, occurrence, self.max_occurrences) is False:
            self.ignore(identity)
        return True
