"""CLI helpers for typebridge.

The typer application itself lives in ``typebridge.cli_main``.
"""

from typebridge.cli.error_formatter import (
    DiagnosticFormatter,
    DiagnosticTable,
    DiagnosticTree,
)
from typebridge.cli.exception_handler import handle_exceptions
from typebridge.cli.pydantic_errors import (
    format_pydantic_location,
    translate_pydantic_error,
)

__all__ = [
    "DiagnosticFormatter",
    "DiagnosticTable",
    "DiagnosticTree",
    "handle_exceptions",
    "format_pydantic_location",
    "translate_pydantic_error",
]
