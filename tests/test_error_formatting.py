"""
Tests for user-facing error messages.
"""
import pytest

from fba_planner.persistence.snapshot_reader import SnapshotError, load_snapshot
from fba_planner.utils.error_formatting import ErrorContext, ErrorFormatter, ErrorSeverity


class TestErrorContext:
    def test_display_sections(self):
        ctx = ErrorContext(
            message="Something failed",
            severity=ErrorSeverity.ERROR,
            technical_details="ValueError: boom",
            context={"File": "snap.json", "Record": None},
            recovery_steps=["Retry"],
            error_code="X_1",
        )
        text = ctx.format_for_display()
        assert text.startswith("Something failed")
        assert "  - File: snap.json" in text
        assert "Record" not in text
        assert "  1. Retry" in text
        assert "Error code: X_1" in text
        assert "Technical details" not in text
        assert "ValueError: boom" in ctx.format_for_display(include_technical=True)

    def test_log_line(self):
        ctx = ErrorContext("Bad", ErrorSeverity.WARNING, "details", context={"Field": "qty"})
        assert ctx.format_for_log() == "[WARNING] Bad | Context: Field=qty | Technical: details"


class TestSnapshotErrors:
    """Test snapshot error mapping."""

    def test_file_not_found(self):
        ctx = ErrorFormatter.format_snapshot_error(FileNotFoundError("nope"), "snap.json")
        assert ctx.error_code == "SNAP_001"
        assert ctx.message == "Snapshot file not found"
        assert ctx.context["File"] == "snap.json"

    def test_invalid_json(self):
        ctx = ErrorFormatter.format_snapshot_error(SnapshotError("snapshot", None, "invalid JSON"), "s.json")
        assert ctx.error_code == "SNAP_002"

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text('{"skus": [', encoding="utf-8")
        with pytest.raises(SnapshotError) as exc_info:
            load_snapshot(path)
        ctx = ErrorFormatter.format_snapshot_error(exc_info.value, path)
        assert ctx.error_code == "SNAP_002"
        assert ctx.message == "Snapshot is not a valid JSON document"

    def test_bad_record(self):
        ctx = ErrorFormatter.format_snapshot_error(SnapshotError("skus", 3, "SKU cannot be empty"), "s.json")
        assert ctx.error_code == "SNAP_003"
        assert ctx.message == "Invalid record in snapshot: SKU cannot be empty"
        assert ctx.context["Section"] == "skus"
        assert ctx.context["Record"] == 3

    def test_permission_error(self):
        ctx = ErrorFormatter.format_snapshot_error(PermissionError("denied"), "s.json")
        assert ctx.error_code == "SNAP_004"

    def test_unexpected(self):
        ctx = ErrorFormatter.format_snapshot_error(RuntimeError("?"), "s.json")
        assert ctx.error_code == "SNAP_UNKNOWN"
        assert ctx.severity is ErrorSeverity.CRITICAL


class TestValidationErrors:
    def test_date_guidance(self):
        ctx = ErrorFormatter.format_validation_error("--today", "03/01/2026", "date format")
        assert ctx.error_code == "VAL_001"
        assert ctx.severity is ErrorSeverity.WARNING
        assert "Date format: YYYY-MM-DD (e.g. 2026-01-28)" in ctx.recovery_steps

    def test_month_guidance(self):
        ctx = ErrorFormatter.format_validation_error("--month", "2026-13", "month")
        assert "Month format: YYYY-MM (e.g. 2026-03)" in ctx.recovery_steps

    def test_expected_in_message(self):
        ctx = ErrorFormatter.format_validation_error("quantity", -1, "range", expected="between 1 and 365")
        assert ctx.message == "Invalid value for 'quantity': between 1 and 365"
        assert "Use a value inside the allowed range" in ctx.recovery_steps


class TestWorkflowErrors:
    def test_value_error(self):
        ctx = ErrorFormatter.format_workflow_error(ValueError("already arrived"), "undo arrival", "TRK-1")
        assert ctx.error_code == "WF_001"
        assert ctx.message == "Operation not allowed: already arrived"
        assert ctx.context["Tracking number"] == "TRK-1"

    def test_other_error(self):
        ctx = ErrorFormatter.format_workflow_error(KeyError("x"), "import")
        assert ctx.error_code == "WF_UNKNOWN"
        assert "Tracking number" not in ctx.context
