"""Diagnostic issue types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for reported conditions."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class DiagnosticLocation:
    """Where in the type dictionary an issue was found."""

    path: str
    """Dotted path to the issue (e.g., 'struct.42.field.43')."""

    type_id: int | None = None
    """Model id involved (if any)."""

    def __str__(self) -> str:
        """Format location as string."""
        if self.type_id is not None:
            return f"{self.path} (mid {self.type_id})"
        return self.path


@dataclass(frozen=True)
class Diagnostic:
    """A single reported condition."""

    code: str
    """Unique code (e.g., 'C001', 'W002')."""

    message: str
    """Human-readable message."""

    severity: Severity
    """Severity level."""

    location: DiagnosticLocation | None = None
    """Location in the type dictionary."""

    suggestion: str | None = None
    """Suggested fix."""

    context: dict[str, Any] = field(default_factory=dict)
    """Additional context for debugging."""

    def __str__(self) -> str:
        """Format issue as string."""
        parts = [f"[{self.code}]", self.severity.value.upper(), self.message]
        if self.location:
            parts.append(f"at {self.location}")
        if self.suggestion:
            parts.append(f"(hint: {self.suggestion})")
        return " ".join(parts)


@dataclass
class DiagnosticReport:
    """All conditions reported during one run."""

    issues: list[Diagnostic] = field(default_factory=list)

    @property
    def criticals(self) -> list[Diagnostic]:
        """Get only critical issues."""
        return [i for i in self.issues if i.severity == Severity.CRITICAL]

    @property
    def errors(self) -> list[Diagnostic]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[Diagnostic]:
        """Get only informational issues."""
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def is_clean(self) -> bool:
        """Check if there are no criticals or errors (warnings are OK)."""
        return not self.criticals and not self.errors

    def codes(self) -> list[str]:
        """Get the codes of all issues in report order."""
        return [i.code for i in self.issues]

    def add(self, issue: Diagnostic) -> None:
        """Add an issue to the report."""
        self.issues.append(issue)

    def _add(
        self,
        severity: Severity,
        code: str,
        message: str,
        path: str,
        type_id: int | None,
        suggestion: str | None,
        context: dict[str, Any],
    ) -> None:
        self.add(
            Diagnostic(
                code=code,
                message=message,
                severity=severity,
                location=DiagnosticLocation(path=path, type_id=type_id),
                suggestion=suggestion,
                context=context,
            )
        )

    def add_critical(
        self,
        code: str,
        message: str,
        path: str,
        type_id: int | None = None,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add a critical issue."""
        self._add(Severity.CRITICAL, code, message, path, type_id, suggestion, context)

    def add_error(
        self,
        code: str,
        message: str,
        path: str,
        type_id: int | None = None,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add an error issue."""
        self._add(Severity.ERROR, code, message, path, type_id, suggestion, context)

    def add_warning(
        self,
        code: str,
        message: str,
        path: str,
        type_id: int | None = None,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add a warning issue."""
        self._add(Severity.WARNING, code, message, path, type_id, suggestion, context)

    def add_info(
        self,
        code: str,
        message: str,
        path: str,
        type_id: int | None = None,
        **context: Any,
    ) -> None:
        """Add an informational issue."""
        self._add(Severity.INFO, code, message, path, type_id, None, context)

    def merge(self, other: DiagnosticReport) -> None:
        """Merge another report into this one."""
        self.issues.extend(other.issues)


class ErrorCodes:
    """Standard diagnostic codes."""

    # C0xx - Critical: declaration or operation ignored
    C001_REDEFINED_ID = "C001"
    C002_SELF_REFERENCE = "C002"
    C003_UNKNOWN_PREDEFINED_TYPE = "C003"
    C004_RENAME_CONFLICT = "C004"
    C005_REFERENCE_CYCLE = "C005"
    C006_UNDEFINED_NAME_TARGET = "C006"

    # E0xx - Errors: best-effort result kept
    E001_ID_OUT_OF_RANGE = "E001"
    E002_MULTI_DIMENSIONAL_ARRAY = "E002"
    E003_NON_CONTIGUOUS_FIELDS = "E003"
    E004_UNDEFINED_TYPE = "E004"
    E005_REFERENCE_TOO_DEEP = "E005"
    E006_OPERATOR_NOT_FOUND = "E006"
    E007_AMBIGUOUS_OPERATOR = "E007"
    E008_NO_OPERATOR = "E008"

    # W0xx - Warnings
    W001_MISSING_ATTRIBUTE = "W001"
    W002_INVALID_ATTRIBUTE = "W002"
    W003_NO_DATASET_PARAMETERS = "W003"
    W004_NOTHING_TO_EXPORT = "W004"

    # I0xx - Informational
    I001_SCAN_SUMMARY = "I001"
    I002_OPERATOR_PARAMETERS = "I002"
    I003_OPERATOR_LOCATED = "I003"
    I004_DUMP_ALL = "I004"
