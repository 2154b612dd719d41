"""Data models for bytecap."""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from bytecap.sizes import MEGABYTE, format_size, megabytes_to_bytes

GROUPED_SUFFIX = ".caido"


class Severity(str, Enum):
    """Severity of a threshold determination."""

    ERROR = "error"  # Size met or exceeded the threshold
    WARNING = "warning"  # Size met or exceeded a warning band


class FileRecord(BaseModel):
    """A single regular file found by a scan."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Path relative to the scan root, '/' separated")
    size: int = Field(..., ge=0, description="Size in bytes")
    size_formatted: str = Field(..., description="Human-readable size")

    @classmethod
    def create(cls, name: str, size: int) -> "FileRecord":
        return cls(name=name, size=size, size_formatted=format_size(size))


class Inventory(BaseModel):
    """Result of scanning a workspace directory tree."""

    model_config = ConfigDict(frozen=True)

    files: list[FileRecord] = Field(default_factory=list, description="Files, largest first")
    total_size: int = Field(0, description="Sum of all file sizes")
    total_size_formatted: str = Field("0 B", description="Human-readable total size")
    grouped_files: list[FileRecord] = Field(
        default_factory=list,
        description="Files sharing the grouped suffix, accounted as one entity",
    )
    grouped_total_size: int = Field(0, description="Sum of grouped file sizes")
    grouped_total_size_formatted: str = Field("0 B", description="Human-readable grouped size")
    grouped_suffix: str = Field(GROUPED_SUFFIX, description="Suffix that defines the group")
    scan_path: str = Field("", description="Path that was scanned")

    @classmethod
    def from_files(
        cls,
        files: Iterable[FileRecord],
        scan_path: str,
        grouped_suffix: str = GROUPED_SUFFIX,
    ) -> "Inventory":
        """
        Build an inventory from scanned files.

        Sorting is stable, so files of equal size keep their input order.

        Args:
            files: Scanned files in walk order
            scan_path: Root the files were found under
            grouped_suffix: Suffix of files accounted as one combined entity

        Returns:
            Inventory with sorted files, the grouped subset and both totals
        """
        ordered = sorted(files, key=lambda f: f.size, reverse=True)
        grouped = [f for f in ordered if f.name.endswith(grouped_suffix)]
        total = sum(f.size for f in ordered)
        grouped_total = sum(f.size for f in grouped)

        # model_construct keeps grouped_files as the same objects as files
        return cls.model_construct(
            files=ordered,
            total_size=total,
            total_size_formatted=format_size(total),
            grouped_files=grouped,
            grouped_total_size=grouped_total,
            grouped_total_size_formatted=format_size(grouped_total),
            grouped_suffix=grouped_suffix,
            scan_path=scan_path,
        )

    @classmethod
    def empty(cls, scan_path: str = "", grouped_suffix: str = GROUPED_SUFFIX) -> "Inventory":
        """Inventory for a root that could not be scanned."""
        return cls(scan_path=scan_path, grouped_suffix=grouped_suffix)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def grouped_file_count(self) -> int:
        return len(self.grouped_files)

    @property
    def ungrouped_files(self) -> list[FileRecord]:
        """Files evaluated individually against the threshold."""
        return [f for f in self.files if not f.name.endswith(self.grouped_suffix)]

    @property
    def is_empty(self) -> bool:
        return not self.files


class ThresholdConfig(BaseModel):
    """Threshold and warning bands for one evaluation."""

    threshold_bytes: int = Field(..., description="Hard limit in bytes")
    enable_warnings: bool = Field(True, description="Whether warning bands apply")
    warning_percentages: list[int] = Field(
        default_factory=lambda: [90, 75],
        description="Warning bands checked in order; the first match wins",
    )

    @classmethod
    def from_megabytes(
        cls,
        threshold_mb: float,
        enable_warnings: bool = True,
        warning_percentages: Iterable[int] = (90, 75),
    ) -> "ThresholdConfig":
        return cls(
            threshold_bytes=megabytes_to_bytes(threshold_mb),
            enable_warnings=enable_warnings,
            warning_percentages=list(warning_percentages),
        )

    @property
    def threshold_label(self) -> str:
        """Threshold as shown in messages, e.g. '10MB'."""
        megabytes = self.threshold_bytes / MEGABYTE
        if megabytes == int(megabytes):
            return f"{int(megabytes)}MB"
        return f"{megabytes:.2f}".rstrip("0").rstrip(".") + "MB"


class EvaluationResult(BaseModel):
    """Alerts and warnings produced by one evaluation."""

    alerts: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_alerts(self) -> bool:
        return bool(self.alerts)

    @property
    def is_clear(self) -> bool:
        """True when nothing crossed the threshold or a warning band."""
        return not self.alerts and not self.warnings


class ThresholdAlert(BaseModel):
    """Payload of a threshold-alert event."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str

    @property
    def identity(self) -> str:
        """Key used to deduplicate and escalate repeated notifications."""
        return f"{self.severity.value}:{self.message}"


class ScanSummary(BaseModel):
    """Payload of a scan-complete event."""

    file_count: int
    grouped_file_count: int
    total_size: str
    grouped_total_size: str
