"""Diagnostic formatting with Rich."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from typebridge.diagnostics.errors import Severity

if TYPE_CHECKING:
    from typebridge.diagnostics.errors import Diagnostic, DiagnosticReport

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.CRITICAL: "magenta",
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

SEVERITY_TAGS: dict[Severity, str] = {
    Severity.CRITICAL: "CRIT",
    Severity.ERROR: "ERR ",
    Severity.WARNING: "WARN",
    Severity.INFO: "INFO",
}


class DiagnosticFormatter:
    """Formats a diagnostic report for terminal display."""

    def __init__(
        self,
        console: Console | None = None,
        show_info: bool = True,
        show_context: bool = False,
    ) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.
            show_info: Whether to print informational issues.
            show_context: Whether to print the context of each issue.

        """
        self.console = console or Console(stderr=True)
        self.show_info = show_info
        self.show_context = show_context

    def format_report(
        self,
        report: DiagnosticReport,
        source_path: Path | None = None,
    ) -> None:
        """Print all issues in report order, then a summary.

        Args:
        ----
            report: The report to format.
            source_path: Path of the mapping file (for display).

        """
        for issue in report.issues:
            if issue.severity == Severity.INFO and not self.show_info:
                continue
            self._print_issue(issue)

        if report.criticals or report.errors or report.warnings:
            self.console.print(self._build_summary(report, source_path))

    def _build_summary(
        self,
        report: DiagnosticReport,
        source_path: Path | None,
    ) -> Panel:
        """Build summary panel."""
        failed = not report.is_clean
        title = "Incomplete Output" if failed else "Warnings"
        style = "red" if failed else "yellow"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")

        counts = [
            (len(report.criticals), "Critical", "magenta bold"),
            (len(report.errors), "Errors", "red bold"),
            (len(report.warnings), "Warnings", "yellow"),
        ]
        first = True
        for count, label, count_style in counts:
            if count == 0:
                continue
            if not first:
                content.append("  ")
            content.append(f"{label}: {count}", style=count_style)
            first = False

        return Panel(content, title=title, border_style=style)

    def _print_issue(self, issue: Diagnostic) -> None:
        """Print a single issue."""
        color = SEVERITY_COLORS[issue.severity]
        tag = SEVERITY_TAGS[issue.severity]
        self.console.print(
            f"[{color} bold]\\[{tag}][/{color} bold] "
            f"[{color}]{issue.code}[/{color}] "
            f"{escape(issue.message)}",
            highlight=False,
        )

        if self.show_context and issue.location:
            self.console.print(f"  [dim]at {issue.location}[/dim]")

        if issue.suggestion and issue.severity != Severity.INFO:
            self.console.print(f"  [green]💡 {issue.suggestion}[/green]")


class DiagnosticTree:
    """Display issues as a tree grouped by section."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize tree formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_report(self, report: DiagnosticReport) -> None:
        """Print report as tree."""
        tree = Tree("[bold]Diagnostics[/bold]")

        # Group by path prefix
        by_section: dict[str, list[Diagnostic]] = {}

        for issue in report.issues:
            section = issue.location.path.split(".")[0] if issue.location else "general"
            by_section.setdefault(section, []).append(issue)

        for section, issues in sorted(by_section.items()):
            section_node = tree.add(f"[cyan]{section}[/cyan] ({len(issues)} issues)")

            for issue in issues:
                color = SEVERITY_COLORS[issue.severity]
                section_node.add(f"[{color}]{issue.code}[/{color}] {escape(issue.message)}")

        self.console.print(tree)


class DiagnosticTable:
    """Display issues as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize table formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_report(self, report: DiagnosticReport) -> None:
        """Print report as table."""
        table = Table(title="Diagnostics")

        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Location", style="dim")
        table.add_column("Message")

        for issue in report.issues:
            color = SEVERITY_COLORS[issue.severity]
            severity = f"[{color}]{issue.severity.value.upper()}[/{color}]"

            location = str(issue.location) if issue.location else "-"

            table.add_row(
                issue.code,
                severity,
                location,
                escape(issue.message),
            )

        self.console.print(table)
