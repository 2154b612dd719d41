"""Scan, evaluate and escalate in one step."""

import logging
import os
import threading
from dataclasses import dataclass

from bytecap.analyzer import evaluate_thresholds
from bytecap.config import Settings
from bytecap.escalator import AlertEscalator
from bytecap.events import EventBus
from bytecap.models import EvaluationResult, Inventory, Severity, ThresholdAlert
from bytecap.paths import ProjectAccessor, resolve_scan_root
from bytecap.scanner import scan_directory

logger = logging.getLogger(__name__)


@dataclass
class MonitorReport:
    """Outcome of one monitor refresh."""

    inventory: Inventory
    result: EvaluationResult
    project_missing: bool = False


class WorkspaceMonitor:
    """
    Runs the scan pipeline for the current settings.

    Only one scan runs at a time; a refresh requested while another is in
    flight returns None. Alerts and warnings are handed to the escalator
    when one is attached, but only when they were absent from the previous
    refresh: an unchanged tree does not restart a finished escalation.
    """

    def __init__(
        self,
        settings: Settings,
        project_accessor: ProjectAccessor | None = None,
        fallback_path: str | None = None,
        events: EventBus | None = None,
        escalator: AlertEscalator | None = None,
    ):
        self.settings = settings
        self.project_accessor = project_accessor or (lambda: self.settings.project)
        self.fallback_path = fallback_path or os.getcwd()
        self.events = events if events is not None else EventBus()
        self.escalator = escalator
        self._scan_lock = threading.Lock()
        self._last_identities: set[str] = set()

    @property
    def scanning(self) -> bool:
        return self._scan_lock.locked()

    def refresh(self) -> MonitorReport | None:
        """
        Resolve the root, scan it and evaluate the inventory.

        Returns:
            MonitorReport, or None if a scan was already running
        """
        if not self._scan_lock.acquire(blocking=False):
            logger.debug("Scan already in progress, skipping refresh")
            return None
        try:
            settings = self.settings
            root = resolve_scan_root(settings.path, self.project_accessor, self.fallback_path)
            if root is None:
                logger.info("No current project and no path configured")
                self._last_identities = set()
                return MonitorReport(
                    inventory=Inventory.empty(),
                    result=EvaluationResult(),
                    project_missing=True,
                )

            inventory = scan_directory(root, events=self.events)
            result = evaluate_thresholds(inventory, settings.threshold_config(), self.events)
            fresh = self._fresh_alerts(result)
        finally:
            self._scan_lock.release()

        if self.escalator is not None:
            for alert in fresh:
                self.escalator.deliver(alert)

        return MonitorReport(inventory=inventory, result=result)

    def _fresh_alerts(self, result: EvaluationResult) -> list[ThresholdAlert]:
        # Caller holds the scan lock
        alerts = [ThresholdAlert(severity=Severity.ERROR, message=m) for m in result.alerts]
        alerts += [ThresholdAlert(severity=Severity.WARNING, message=m) for m in result.warnings]
        previous = self._last_identities
        self._last_identities = {alert.identity for alert in alerts}
        return [alert for alert in alerts if alert.identity not in previous]

    def apply_settings(self, settings: Settings) -> None:
        """Swap settings, dropping escalations made under the old ones."""
        self._last_identities = set()
        if self.escalator is not None:
            self.escalator.clear_all()
        self.settings = settings

    def clear_alerts(self) -> None:
        self._last_identities = set()
        if self.escalator is not None:
            self.escalator.clear_all()

    def close(self) -> None:
        if self.escalator is not None:
            self.escalator.close()
