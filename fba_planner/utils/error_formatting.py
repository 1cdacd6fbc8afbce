"""
Error messaging for the command line.

Turns snapshot, settings and workflow exceptions into readable messages
with recovery guidance. Technical details go to the log.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity classification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """
    Structured error context.

    Attributes:
        message: Readable error description
        severity: Error severity level
        technical_details: Exception info for logs
        context: Additional context (file, section, record)
        recovery_steps: Actions the user can take
        error_code: Optional stable code
    """
    message: str
    severity: ErrorSeverity
    technical_details: str
    context: Dict[str, Any] = field(default_factory=dict)
    recovery_steps: List[str] = field(default_factory=list)
    error_code: Optional[str] = None

    def format_for_display(self, include_technical: bool = False) -> str:
        lines = [self.message]

        if self.context:
            lines.append("")
            lines.append("Details:")
            for key, value in self.context.items():
                if value is not None:
                    lines.append(f"  - {key}: {value}")

        if self.recovery_steps:
            lines.append("")
            lines.append("Suggested actions:")
            for i, step in enumerate(self.recovery_steps, 1):
                lines.append(f"  {i}. {step}")

        if include_technical and self.technical_details:
            lines.append("")
            lines.append("Technical details:")
            lines.append(f"  {self.technical_details}")

        if self.error_code:
            lines.append("")
            lines.append(f"Error code: {self.error_code}")

        return "\n".join(lines)

    def format_for_log(self) -> str:
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items() if v is not None)
        return f"[{self.severity.value.upper()}] {self.message} | Context: {context_str} | Technical: {self.technical_details}"


class ErrorFormatter:
    """Maps exceptions to ErrorContext objects."""

    @staticmethod
    def format_snapshot_error(exc: Exception, path: Any) -> ErrorContext:
        """
        Format an error raised while loading a planning snapshot.

        Args:
            exc: The exception raised by persistence.snapshot_reader.load_snapshot
            path: Snapshot file path

        Returns:
            ErrorContext with recovery steps
        """
        from ..persistence.snapshot_reader import SnapshotError  # noqa: PLC0415

        context: Dict[str, Any] = {"File": str(path)}

        if isinstance(exc, FileNotFoundError):
            return ErrorContext(
                message="Snapshot file not found",
                severity=ErrorSeverity.ERROR,
                technical_details=f"FileNotFoundError: {exc}",
                context=context,
                recovery_steps=[
                    "Check the snapshot path",
                    "Export a fresh snapshot from the storage layer",
                ],
                error_code="SNAP_001",
            )

        if isinstance(exc, SnapshotError):
            context["Section"] = exc.section
            context["Record"] = exc.index
            if exc.section == "snapshot":
                return ErrorContext(
                    message="Snapshot is not a valid JSON document",
                    severity=ErrorSeverity.ERROR,
                    technical_details=f"SnapshotError: {exc}",
                    context=context,
                    recovery_steps=[
                        "Re-export the snapshot",
                        "Check that the file is a single JSON object",
                    ],
                    error_code="SNAP_002",
                )
            return ErrorContext(
                message=f"Invalid record in snapshot: {exc.reason}",
                severity=ErrorSeverity.ERROR,
                technical_details=f"SnapshotError: {exc}",
                context=context,
                recovery_steps=[
                    "Fix the record shown above",
                    "Dates must be YYYY-MM-DD (e.g. 2026-01-28)",
                    "Quantities must be integers, daily sales a number",
                ],
                error_code="SNAP_003",
            )

        if isinstance(exc, OSError):
            return ErrorContext(
                message="Snapshot file could not be read",
                severity=ErrorSeverity.ERROR,
                technical_details=f"{type(exc).__name__}: {exc}",
                context=context,
                recovery_steps=[
                    "Check file permissions",
                    "Retry once the file is no longer locked",
                ],
                error_code="SNAP_004",
            )

        return ErrorContext(
            message="Unexpected error while loading the snapshot",
            severity=ErrorSeverity.CRITICAL,
            technical_details=f"{type(exc).__name__}: {exc}",
            context=context,
            recovery_steps=["If the error persists, attach the log file to a bug report"],
            error_code="SNAP_UNKNOWN",
        )

    @staticmethod
    def format_validation_error(
        field_name: str,
        value: Any,
        constraint: str,
        expected: Optional[str] = None,
    ) -> ErrorContext:
        """
        Format a rejected input value.

        Args:
            field_name: Field that failed validation
            value: Rejected value
            constraint: Constraint that was violated
            expected: Expected value/format (optional)
        """
        message = f"Invalid value for '{field_name}'"
        if expected:
            message += f": {expected}"

        recovery_steps = [f"Check the format of '{field_name}'"]
        lowered = constraint.lower()
        if "date" in lowered or "format" in lowered:
            recovery_steps.append("Date format: YYYY-MM-DD (e.g. 2026-01-28)")
        elif "month" in lowered:
            recovery_steps.append("Month format: YYYY-MM (e.g. 2026-03)")
        elif "range" in lowered or "between" in lowered:
            recovery_steps.append("Use a value inside the allowed range")
        elif "integer" in lowered or "number" in lowered:
            recovery_steps.append("The value must be a number")

        return ErrorContext(
            message=message,
            severity=ErrorSeverity.WARNING,
            technical_details=f"ValidationError: field={field_name}, value={value}, constraint={constraint}",
            context={"Field": field_name, "Value": str(value), "Constraint": constraint},
            recovery_steps=recovery_steps,
            error_code="VAL_001",
        )

    @staticmethod
    def format_workflow_error(exc: Exception, operation: str, tracking_number: Optional[str] = None) -> ErrorContext:
        """Format an error raised by a shipment workflow (arrival, undo, import)."""
        context: Dict[str, Any] = {"Operation": operation}
        if tracking_number:
            context["Tracking number"] = tracking_number

        if isinstance(exc, ValueError):
            return ErrorContext(
                message=f"Operation not allowed: {exc}",
                severity=ErrorSeverity.WARNING,
                technical_details=f"ValueError: {exc}",
                context=context,
                recovery_steps=["Check the shipment status before retrying"],
                error_code="WF_001",
            )

        return ErrorContext(
            message=f"Unexpected error during {operation}",
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(exc).__name__}: {exc}",
            context=context,
            recovery_steps=["Retry the operation", "If the error persists, check the log file"],
            error_code="WF_UNKNOWN",
        )
