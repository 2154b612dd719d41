"""Threshold evaluation for bytecap inventories."""

import logging
from typing import Iterable

from bytecap.events import THRESHOLD_ALERT, EventBus
from bytecap.models import (
    EvaluationResult,
    Inventory,
    Severity,
    ThresholdAlert,
    ThresholdConfig,
)

logger = logging.getLogger(__name__)


def matching_band(size: int, config: ThresholdConfig) -> int | None:
    """
    Find the first warning band a size meets or exceeds.

    Bands are checked in the configured order, so with [90, 75] a size at
    92% of the threshold only matches 90.

    Args:
        size: Size in bytes
        config: Threshold configuration

    Returns:
        Matching percentage, or None
    """
    if not config.enable_warnings:
        return None
    for percentage in config.warning_percentages:
        # size >= threshold * percentage / 100, in exact integers
        if size * 100 >= config.threshold_bytes * percentage:
            return percentage
    return None


def size_severity(size: int, config: ThresholdConfig) -> Severity | None:
    """Severity a size would be reported with, or None if it is within limits."""
    if config.threshold_bytes <= 0:
        return None
    if size >= config.threshold_bytes:
        return Severity.ERROR
    if matching_band(size, config) is not None:
        return Severity.WARNING
    return None


class _Collector:
    """Appends determinations to the result and echoes them as events."""

    def __init__(self, events: EventBus | None):
        self.events = events
        self.result = EvaluationResult()

    def add(self, severity: Severity, message: str) -> None:
        if severity == Severity.ERROR:
            self.result.alerts.append(message)
        else:
            self.result.warnings.append(message)
        logger.debug("Threshold %s: %s", severity.value, message)
        if self.events is not None:
            self.events.emit(THRESHOLD_ALERT, ThresholdAlert(severity=severity, message=message))


def evaluate_thresholds(
    inventory: Inventory,
    config: ThresholdConfig,
    events: EventBus | None = None,
) -> EvaluationResult:
    """
    Classify an inventory against a threshold and its warning bands.

    The combined grouped files are checked first, then every other file on
    its own. Each entity produces at most one alert or one warning.

    Args:
        inventory: Scan result to evaluate
        config: Threshold and warning bands
        events: Optional bus that receives one threshold-alert per determination

    Returns:
        EvaluationResult with alert and warning messages in evaluation order
    """
    collector = _Collector(events)
    if config.threshold_bytes <= 0:
        return collector.result

    limit = config.threshold_label
    group = f"Combined {inventory.grouped_suffix} files"

    if inventory.grouped_files:
        total = inventory.grouped_total_size
        size_text = inventory.grouped_total_size_formatted
        if total >= config.threshold_bytes:
            collector.add(Severity.ERROR, f"{group} ({size_text}) exceed {limit} threshold")
        else:
            band = matching_band(total, config)
            if band is not None:
                collector.add(
                    Severity.WARNING,
                    f"{group} ({size_text}) are at {band}% of {limit} threshold",
                )

    for record in inventory.ungrouped_files:
        if record.size >= config.threshold_bytes:
            collector.add(
                Severity.ERROR,
                f'File "{record.name}" ({record.size_formatted}) exceeds {limit} threshold',
            )
            continue
        band = matching_band(record.size, config)
        if band is not None:
            collector.add(
                Severity.WARNING,
                f'File "{record.name}" ({record.size_formatted}) is at {band}% of {limit} threshold',
            )

    return collector.result


def check_file_size_thresholds(
    inventory: Inventory,
    threshold_mb: float,
    enable_warnings: bool,
    warning_percentages: Iterable[int] = (90, 75),
    events: EventBus | None = None,
) -> EvaluationResult:
    """Evaluate an inventory against a threshold given in megabytes."""
    config = ThresholdConfig.from_megabytes(threshold_mb, enable_warnings, warning_percentages)
    return evaluate_thresholds(inventory, config, events)
