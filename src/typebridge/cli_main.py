"""Command-line interface for the type bridge."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from typebridge import __version__
from typebridge.cli.error_formatter import (
    DiagnosticFormatter,
    DiagnosticTable,
    DiagnosticTree,
)
from typebridge.cli.exception_handler import handle_exceptions
from typebridge.converters import DataSetWriter
from typebridge.diagnostics.errors import DiagnosticReport
from typebridge.models import load_config, load_mapping
from typebridge.transform.bridge import BridgeError, BridgeResult, TypeBridge

MAPPING_DEFAULT = "mapping.xml"

# Create Typer app
app = typer.Typer(
    name="typebridge",
    help="Map SCADE model I/O types onto TRDP data-set descriptions.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True)

OperatorsArgument = Annotated[
    list[str] | None,
    typer.Argument(
        help="Operators to export (e.g. Pkg::Operator). Defaults to the model's root operator.",
        show_default=False,
    ),
]
InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help=f"Generated {MAPPING_DEFAULT} of KCG. Reads stdin when omitted or '-'.",
        dir_okay=False,
        allow_dash=True,
    ),
]
AllOption = Annotated[
    bool,
    typer.Option(
        "--all",
        "-a",
        help="Dump all known data-sets, not only those the operators need.",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML/JSON configuration file.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"typebridge version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Map SCADE model I/O types onto TRDP data-set descriptions.

    Reads the mapping.xml type dictionary generated by KCG, resolves the
    types used by the root operator's inputs and outputs and writes them as
    a TRDP data-set list.
    """


def _print_report(
    report: DiagnosticReport,
    output_format: str,
    source: Path | None,
    quiet: bool,
    verbose: bool,
) -> None:
    if output_format == "table":
        DiagnosticTable(error_console).print_report(report)
    elif output_format == "tree":
        DiagnosticTree(error_console).print_report(report)
    else:
        DiagnosticFormatter(
            error_console, show_info=not quiet, show_context=verbose
        ).format_report(report, source)


@app.command()
@handle_exceptions()
def convert(
    operators: OperatorsArgument = None,
    input_file: InputOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output data-set XML file. Writes to stdout when omitted.",
            dir_okay=False,
            writable=True,
            resolve_path=True,
        ),
    ] = None,
    dump_all: AllOption = False,
    numeric_types: Annotated[
        bool,
        typer.Option(
            "--numeric-types",
            help="Write scalar types as TRDP numbers ('6') instead of names ('INT32').",
        ),
    ] = False,
    size_type: Annotated[
        str | None,
        typer.Option(
            "--size-type",
            help="TRDP scalar used for the model's 'size' type (default INT32).",
        ),
    ] = None,
    config_file: ConfigOption = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format for diagnostics: text, table, tree.",
        ),
    ] = "text",
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail without writing output if criticals or errors were reported.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output problems, no informational messages.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Show where each diagnostic was raised.",
        ),
    ] = False,
) -> None:
    """Convert a KCG mapping.xml into a TRDP data-set list.

    Examples
    --------
        typebridge convert -i mapping.xml -o datasets.xml
        typebridge convert -i mapping.xml Pkg::Controller
        typebridge convert --all --numeric-types < mapping.xml

    """
    valid_formats = ("text", "table", "tree")
    if output_format not in valid_formats:
        error_console.print(
            f"\n[bold red]✗ Invalid format: {output_format}[/bold red]\n"
            f"Supported: {', '.join(valid_formats)}"
        )
        raise typer.Exit(code=1)

    config = load_config(
        config_file,
        required_only=False if dump_all else None,
        numeric_type_ids=True if numeric_types else None,
        size_maps_to=size_type,
    )
    document = load_mapping(input_file)

    bridge = TypeBridge(config)
    try:
        result = bridge.run_and_raise(document, operators or (), strict=strict)
    except BridgeError as e:
        _print_report(e.result.report, output_format, input_file, quiet, verbose)
        raise

    _print_report(result.report, output_format, input_file, quiet, verbose)

    if not result.datasets:
        return

    writer = DataSetWriter()
    if output is not None:
        writer.write(result.datasets, output)
        if not quiet:
            error_console.print(
                f"[green]✓ Wrote {len(result.datasets)} data-set(s) to {output}[/green]"
            )
    else:
        typer.echo(writer.write_bytes(result.datasets).decode("utf-8"), nl=False)


@app.command()
@handle_exceptions()
def info(
    operators: OperatorsArgument = None,
    input_file: InputOption = None,
    dump_all: AllOption = False,
    config_file: ConfigOption = None,
) -> None:
    """Display what a mapping.xml contains and which data-sets it yields.

    Examples
    --------
        typebridge info -i mapping.xml
        typebridge info -i mapping.xml --all

    """
    config = load_config(config_file, required_only=False if dump_all else None)
    document = load_mapping(input_file)
    result = TypeBridge(config).run(document, operators or ())

    _print_report(result.report, "text", input_file, True, False)
    _print_summary(result, input_file)
    _print_datasets(result)


def _print_summary(result: BridgeResult, source: Path | None) -> None:
    """Print a summary of the type dictionary."""
    table = Table(title="Mapping Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    summary = result.summary
    table.add_row("File", str(source) if source else "<stdin>")
    table.add_row("Operators", ", ".join(result.operators) or "-")
    table.add_row("", "")  # Spacer
    table.add_row("Predefined Types", str(summary.predefined))
    table.add_row("Arrays", str(summary.arrays))
    table.add_row("Structs", str(summary.structs))
    table.add_row("Type Instantiations", str(summary.type_refs))
    table.add_row("", "")  # Spacer
    table.add_row("Data Sets", str(len(result.datasets)))
    table.add_row("Criticals", str(len(result.report.criticals)))
    table.add_row("Errors", str(len(result.report.errors)))
    table.add_row("Warnings", str(len(result.report.warnings)))

    console.print(table)


def _print_datasets(result: BridgeResult) -> None:
    """Print the data sets that would be exported."""
    if not result.datasets:
        return

    table = Table(title="Data Sets")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Elements", justify="right")
    table.add_column("Arrays", justify="right")

    for dataset in result.datasets:
        arrays = sum(1 for e in dataset.elements if e.array_size is not None)
        table.add_row(
            dataset.export_id,
            dataset.name or "-",
            str(len(dataset.elements)),
            str(arrays),
        )

    console.print(table)


if __name__ == "__main__":
    app()
