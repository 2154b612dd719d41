"""Tests for data models and size helpers."""

import pytest
from pydantic import ValidationError

from bytecap.models import (
    EvaluationResult,
    FileRecord,
    Inventory,
    Severity,
    ThresholdAlert,
    ThresholdConfig,
)
from bytecap.sizes import format_size, megabytes_to_bytes


class TestFormatSize:
    def test_zero(self):
        assert format_size(0) == "0 B"

    def test_bytes(self):
        assert format_size(500) == "500 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(11 * 1024**2) == "11 MB"
        assert format_size(1234567) == "1.18 MB"

    def test_gigabytes(self):
        assert format_size(5 * 1024**3) == "5 GB"

    def test_gigabytes_is_largest_unit(self):
        assert format_size(2 * 1024**4) == "2048 GB"


class TestMegabytesToBytes:
    def test_exact_bytes(self):
        assert megabytes_to_bytes(10) == 10_485_760

    def test_one_megabyte(self):
        assert megabytes_to_bytes(1) == 1024 * 1024


class TestFileRecord:
    def test_create_formats_size(self):
        record = FileRecord.create("dir/file.txt", 1536)
        assert record.name == "dir/file.txt"
        assert record.size == 1536
        assert record.size_formatted == "1.5 KB"

    def test_is_immutable(self):
        record = FileRecord.create("file.txt", 10)
        with pytest.raises(ValidationError):
            record.size = 20

    def test_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            FileRecord(name="file.txt", size=-1, size_formatted="?")


class TestInventory:
    def make_files(self, *entries):
        return [FileRecord.create(name, size) for name, size in entries]

    def test_totals_match_file_sizes(self):
        files = self.make_files(("a.caido", 5), ("b.txt", 1), ("c.caido", 5), ("d.txt", 3))
        inventory = Inventory.from_files(files, "/scan")

        assert inventory.total_size == sum(f.size for f in inventory.files) == 14
        assert inventory.grouped_total_size == sum(f.size for f in inventory.grouped_files) == 10

    def test_totals_independent_of_insertion_order(self):
        entries = [("a.caido", 5), ("b.txt", 1), ("c.caido", 7), ("d.txt", 3)]
        forward = Inventory.from_files(self.make_files(*entries), "/scan")
        backward = Inventory.from_files(self.make_files(*reversed(entries)), "/scan")

        assert forward.total_size == backward.total_size
        assert forward.grouped_total_size == backward.grouped_total_size

    def test_sorted_largest_first(self):
        files = self.make_files(("a", 5), ("b", 1), ("c", 5), ("d", 3))
        inventory = Inventory.from_files(files, "/scan")

        assert [f.size for f in inventory.files] == [5, 5, 3, 1]

    def test_sort_is_stable_for_equal_sizes(self):
        files = self.make_files(("a", 5), ("b", 1), ("c", 5), ("d", 3))
        first = Inventory.from_files(files, "/scan")
        second = Inventory.from_files(files, "/scan")

        assert [f.name for f in first.files] == ["a", "c", "d", "b"]
        assert [f.name for f in first.files] == [f.name for f in second.files]

    def test_grouped_files_are_same_objects(self):
        files = self.make_files(("x.caido", 2), ("y.txt", 1))
        inventory = Inventory.from_files(files, "/scan")

        assert len(inventory.grouped_files) == 1
        assert any(inventory.grouped_files[0] is f for f in inventory.files)

    def test_suffix_must_end_name(self):
        files = self.make_files(("x.caido.bak", 2), ("dir.caido/y.txt", 1), ("z.caido", 3))
        inventory = Inventory.from_files(files, "/scan")

        assert [f.name for f in inventory.grouped_files] == ["z.caido"]
        assert {f.name for f in inventory.ungrouped_files} == {"x.caido.bak", "dir.caido/y.txt"}

    def test_formatted_totals(self):
        files = self.make_files(("a.caido", 1024), ("b.txt", 1024))
        inventory = Inventory.from_files(files, "/scan")

        assert inventory.total_size_formatted == "2 KB"
        assert inventory.grouped_total_size_formatted == "1 KB"

    def test_empty(self):
        inventory = Inventory.empty("/missing")

        assert inventory.is_empty
        assert inventory.scan_path == "/missing"
        assert inventory.total_size == 0
        assert inventory.total_size_formatted == "0 B"
        assert inventory.grouped_total_size_formatted == "0 B"
        assert inventory.file_count == 0
        assert inventory.grouped_file_count == 0


class TestThresholdConfig:
    def test_from_megabytes(self):
        config = ThresholdConfig.from_megabytes(10, True, [90, 75])
        assert config.threshold_bytes == 10_485_760
        assert config.warning_percentages == [90, 75]

    def test_threshold_label(self):
        assert ThresholdConfig.from_megabytes(10).threshold_label == "10MB"
        assert ThresholdConfig(threshold_bytes=1536 * 1024).threshold_label == "1.5MB"

    def test_default_bands_highest_first(self):
        assert ThresholdConfig(threshold_bytes=1).warning_percentages == [90, 75]


class TestEvaluationResult:
    def test_clear_by_default(self):
        result = EvaluationResult()
        assert result.is_clear
        assert not result.has_alerts

    def test_warnings_only(self):
        result = EvaluationResult(warnings=["close"])
        assert not result.is_clear
        assert not result.has_alerts


class TestThresholdAlert:
    def test_identity_combines_severity_and_message(self):
        alert = ThresholdAlert(severity=Severity.ERROR, message="too big")
        assert alert.identity == "error:too big"

    def test_same_message_different_severity(self):
        error = ThresholdAlert(severity=Severity.ERROR, message="x")
        warning = ThresholdAlert(severity=Severity.WARNING, message="x")
        assert error.identity != warning.identity

    def test_severity_values(self):
        assert Severity.ERROR == "error"
        assert Severity.WARNING == "warning"
