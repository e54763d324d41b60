"""Tests for diagnostic formatting."""

from io import StringIO

import pytest
from rich.console import Console
from typebridge.cli.error_formatter import (
    DiagnosticFormatter,
    DiagnosticTable,
    DiagnosticTree,
)
from typebridge.diagnostics.errors import DiagnosticReport


@pytest.fixture
def string_console() -> Console:
    """Create a console that writes to a string."""
    return Console(file=StringIO(), width=120)


def output_of(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


class TestDiagnosticFormatter:
    """Tests for DiagnosticFormatter."""

    def test_clean_report_has_no_summary(self, string_console: Console) -> None:
        """Should only print infos for clean reports."""
        report = DiagnosticReport()
        report.add_info("I001", "Found 1 arrays, 2 structs, 0 type instantiations", "model")

        DiagnosticFormatter(string_console).format_report(report)

        output = output_of(string_console)
        assert "[INFO] I001 Found 1 arrays, 2 structs, 0 type instantiations" in output
        assert "Incomplete Output" not in output
        assert "Warnings" not in output

    def test_hides_info(self, string_console: Console) -> None:
        """Should skip infos when asked to."""
        report = DiagnosticReport()
        report.add_info("I001", "Found", "model")
        report.add_warning("W004", "No data-sets to export", "model")

        DiagnosticFormatter(string_console, show_info=False).format_report(report)

        output = output_of(string_console)
        assert "I001" not in output
        assert "[WARN] W004 No data-sets to export" in output
        assert "Warnings: 1" in output

    def test_errors_summary(self, string_console: Console) -> None:
        """Should summarize criticals and errors."""
        report = DiagnosticReport()
        report.add_critical("C001", "Model id 2 not defined again", "struct.2")
        report.add_error("E004", "mid=7 is referenced but never defined", "require.7")

        DiagnosticFormatter(string_console).format_report(report)

        output = output_of(string_console)
        assert "[CRIT] C001" in output
        assert "[ERR ] E004" in output
        assert "Incomplete Output" in output
        assert "Critical: 1" in output
        assert "Errors: 1" in output

    def test_brackets_in_message(self, string_console: Console) -> None:
        """Should print brackets literally."""
        report = DiagnosticReport()
        report.add_error("E002", "Check (DS=1002) Grid->cells[8][4]", "dataset.1002")

        DiagnosticFormatter(string_console).format_report(report)

        assert "Grid->cells[8][4]" in output_of(string_console)

    def test_suggestion_and_context(self, string_console: Console) -> None:
        """Should show hints and, when asked, locations."""
        report = DiagnosticReport()
        report.add_error(
            "E007", "Multiple operators", "operator.Op", suggestion="Add package path"
        )

        DiagnosticFormatter(string_console, show_context=True).format_report(report)

        output = output_of(string_console)
        assert "Add package path" in output
        assert "at operator.Op" in output

    def test_source_path(self, string_console: Console) -> None:
        """Should name the source file in the summary."""
        report = DiagnosticReport()
        report.add_warning("W003", "Op has  0 DS-inputs out of  1", "operator.Op.input")

        DiagnosticFormatter(string_console).format_report(report, "mapping.xml")  # type: ignore[arg-type]

        assert "File: mapping.xml" in output_of(string_console)


class TestDiagnosticTree:
    """Tests for DiagnosticTree."""

    def test_groups_by_section(self, string_console: Console) -> None:
        """Should group issues by their first path segment."""
        report = DiagnosticReport()
        report.add_error("E003", "gap", "struct.2.field.1")
        report.add_critical("C001", "again", "struct.5")
        report.add_info("I001", "Found", "model")

        DiagnosticTree(string_console).print_report(report)

        output = output_of(string_console)
        assert "struct (2 issues)" in output
        assert "model (1 issues)" in output


class TestDiagnosticTable:
    """Tests for DiagnosticTable."""

    def test_rows(self, string_console: Console) -> None:
        """Should print one row per issue."""
        report = DiagnosticReport()
        report.add_warning("W001", "array.size not set", "array.size")
        report.add_error("E001", "Model id 0 is off scope", "model", type_id=0)

        DiagnosticTable(string_console).print_report(report)

        output = output_of(string_console)
        assert "W001" in output
        assert "WARNING" in output
        assert "model (mid 0)" in output
