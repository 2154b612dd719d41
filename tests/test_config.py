"""Tests for settings persistence."""

import json

import pytest

from bytecap.config import (
    Settings,
    SettingsError,
    load_settings,
    save_settings,
    settings_file,
    update_settings,
)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.path == ""
        assert settings.project is None
        assert settings.enable_warnings
        assert settings.alert_interval == 60.0

    def test_warning_percentages_highest_first(self):
        assert Settings().warning_percentages == [90, 75]

    def test_warning_percentages_toggles(self):
        assert Settings(warn_at_90=False).warning_percentages == [75]
        assert Settings(warn_at_75=False).warning_percentages == [90]
        assert Settings(warn_at_75=False, warn_at_90=False).warning_percentages == []

    @pytest.mark.parametrize("threshold", [0, 20481])
    def test_threshold_range(self, threshold):
        with pytest.raises(ValueError):
            Settings(threshold_mb=threshold)

    def test_threshold_config(self):
        config = Settings(threshold_mb=10, enable_warnings=False).threshold_config()
        assert config.threshold_bytes == 10 * 1024 * 1024
        assert not config.enable_warnings
        assert config.warning_percentages == [90, 75]


class TestSettingsFile:
    def test_env_override(self, isolated_settings):
        assert settings_file() == isolated_settings

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("BYTECAP_CONFIG")
        path = settings_file()
        assert path.name == "settings.json"
        assert "bytecap" in str(path)


class TestLoadSave:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "none.json") == Settings()

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        saved = Settings(path="~/exports", threshold_mb=250, warn_at_75=False)

        assert save_settings(saved, path) == path
        assert load_settings(path) == saved

    def test_uses_default_file(self, isolated_settings):
        save_settings(Settings(threshold_mb=42))
        assert json.loads(isolated_settings.read_text())["threshold_mb"] == 42
        assert load_settings().threshold_mb == 42

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")

        with pytest.raises(SettingsError, match="Cannot read settings"):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"threshold_mb": 0}))

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)


class TestUpdateSettings:
    def test_coerces_strings(self):
        settings = update_settings(Settings(), "threshold_mb", "250")
        settings = update_settings(settings, "enable_warnings", "false")

        assert settings.threshold_mb == 250
        assert settings.enable_warnings is False

    def test_does_not_modify_original(self):
        original = Settings()
        update_settings(original, "threshold_mb", 5)
        assert original.threshold_mb == 100

    def test_unknown_key(self):
        with pytest.raises(SettingsError, match="Unknown setting"):
            update_settings(Settings(), "colour", "red")

    def test_invalid_value(self):
        with pytest.raises(SettingsError, match="Invalid value for threshold_mb"):
            update_settings(Settings(), "threshold_mb", "0")
