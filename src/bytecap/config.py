"""User settings for bytecap."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from bytecap.models import ThresholdConfig

APP_NAME = "bytecap"
CONFIG_ENV = "BYTECAP_CONFIG"

MIN_THRESHOLD_MB = 1
MAX_THRESHOLD_MB = 20480


class SettingsError(ValueError):
    """Raised when the settings file cannot be read or is invalid."""


class Settings(BaseModel):
    """Persistent user settings."""

    path: str = Field("", description="Directory to scan; empty uses the current project")
    project: Optional[str] = Field(None, description="Current project identifier")
    threshold_mb: int = Field(
        100,
        ge=MIN_THRESHOLD_MB,
        le=MAX_THRESHOLD_MB,
        description="Size cap in megabytes",
    )
    enable_warnings: bool = Field(True, description="Warn before the threshold is reached")
    warn_at_75: bool = Field(True, description="Warn at 75% of the threshold")
    warn_at_90: bool = Field(True, description="Warn at 90% of the threshold")
    alert_interval: float = Field(60.0, gt=0, description="Seconds between alert repeats")
    rescan_interval: float = Field(30.0, gt=0, description="Seconds between watch rescans")

    @property
    def warning_percentages(self) -> list[int]:
        """Enabled warning bands, highest first so the nearest band wins."""
        bands = [(90, self.warn_at_90), (75, self.warn_at_75)]
        return [percentage for percentage, enabled in bands if enabled]

    def threshold_config(self) -> ThresholdConfig:
        return ThresholdConfig.from_megabytes(
            self.threshold_mb, self.enable_warnings, self.warning_percentages
        )


def settings_file() -> Path:
    """Location of the settings file (override with BYTECAP_CONFIG)."""
    override = os.getenv(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(APP_NAME)) / "settings.json"


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from disk.

    Args:
        path: Settings file (defaults to settings_file())

    Returns:
        Stored settings, or defaults when no file exists

    Raises:
        SettingsError: If the file is unreadable or holds invalid values
    """
    path = path or settings_file()
    if not path.exists():
        return Settings()

    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsError(f"Cannot read settings from {path}: {exc}") from exc

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in {path}: {exc}") from exc


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to disk and return the file written."""
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings.model_dump_json(indent=2))
    return path


def update_settings(settings: Settings, key: str, value: Any) -> Settings:
    """
    Return a copy of settings with one field changed and validated.

    Raises:
        SettingsError: If the key is unknown or the value is invalid
    """
    if key not in Settings.model_fields:
        raise SettingsError(f"Unknown setting: {key}")

    data = settings.model_dump()
    data[key] = value
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid value for {key}: {value!r}") from exc
