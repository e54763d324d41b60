"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from typebridge.models.loader import LoaderError
from typebridge.transform.bridge import BridgeError

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    Args:
    ----
        verbose: Whether to show full tracebacks.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except BridgeError as e:
                _handle_bridge_error(e, verbose)
                raise typer.Exit(1) from None
            except LoaderError as e:
                _handle_loader_error(e, verbose)
                raise typer.Exit(1) from None
            except PydanticValidationError as e:
                _handle_config_error(e, verbose)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e, verbose)
                raise typer.Exit(1) from None
            except Exception as e:
                _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _handle_bridge_error(error: BridgeError, verbose: bool) -> None:
    """Handle strict-mode failures; the report itself was already printed."""
    console.print(
        Panel(
            f"[red]{escape(str(error))}[/red]\n\n"
            "No output was written because --strict is set.",
            title="Error",
            border_style="red",
        )
    )


def _handle_loader_error(error: LoaderError, verbose: bool) -> None:
    """Handle unreadable input files."""
    console.print(
        Panel(
            f"[red]{escape(str(error))}[/red]",
            title="Could not read input",
            border_style="red",
        )
    )


def _handle_config_error(error: PydanticValidationError, verbose: bool) -> None:
    """Handle invalid configuration values."""
    from typebridge.cli.pydantic_errors import (
        format_pydantic_location,
        translate_pydantic_error,
    )

    console.print("[red bold]Invalid Configuration[/red bold]")
    console.print()

    for err in error.errors():
        location = format_pydantic_location(err["loc"])
        msg = translate_pydantic_error(err)

        console.print(f"[red]✗[/red] {escape(location)}")
        console.print(f"  {escape(msg)}")
        console.print(f"  [dim]({err['type']})[/dim]")
        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(escape(str(error)))


def _handle_permission_error(error: PermissionError, verbose: bool) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {escape(str(filename))}[/red]\n\n"
            "Check file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{escape(str(error))}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
