"""Diagnostic reporting for the type bridge."""

from typebridge.diagnostics.errors import (
    Diagnostic,
    DiagnosticLocation,
    DiagnosticReport,
    ErrorCodes,
    Severity,
)

__all__ = [
    "Diagnostic",
    "DiagnosticLocation",
    "DiagnosticReport",
    "ErrorCodes",
    "Severity",
]
