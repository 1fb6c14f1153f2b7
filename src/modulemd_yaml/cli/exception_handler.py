"""CLI exception handling."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from modulemd_yaml.errors import EmitError, OpenError, ParseError, ValidationError

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    Args:
    ----
        verbose: Whether to show full tracebacks. Defaults to whether debug
            logging is enabled when the error is handled.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            show_traceback = verbose
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort):
                raise
            except Exception as e:
                if show_traceback is None:
                    show_traceback = logging.getLogger().isEnabledFor(logging.DEBUG)
                _dispatch(e, show_traceback)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _dispatch(error: Exception, verbose: bool) -> None:
    if isinstance(error, ValidationError):
        _handle_validation_error(error, verbose)
    elif isinstance(error, ParseError):
        _handle_parse_error(error, verbose)
    elif isinstance(error, OpenError):
        _handle_open_error(error, verbose)
    elif isinstance(error, EmitError):
        _handle_emit_error(error, verbose)
    elif isinstance(error, PydanticValidationError):
        _handle_pydantic_error(error, verbose)
    else:
        _handle_generic_error(error, verbose)


def _handle_validation_error(error: ValidationError, verbose: bool) -> None:
    """Handle document validation errors raised before emission."""
    from modulemd_yaml.cli.error_formatter import ErrorFormatter

    if error.document_index is not None:
        console.print(f"[red bold]Document {error.document_index} is invalid[/red bold]")
    ErrorFormatter(console).format_validation_result(error.result, error.path)


def _handle_parse_error(error: ParseError, verbose: bool) -> None:
    """Handle malformed input."""
    from modulemd_yaml.cli.error_formatter import ErrorFormatter

    ErrorFormatter(console).format_parse_error(error)
    if verbose and error.__cause__ is not None:
        console.print(f"[dim]Caused by: {escape(str(error.__cause__))}[/dim]")


def _handle_open_error(error: OpenError, verbose: bool) -> None:
    """Handle files that cannot be opened."""
    console.print(
        Panel(
            f"[red]{escape(error.message)}: {escape(str(error.path or 'unknown'))}[/red]\n\n"
            "Please check that the file path is correct and accessible.",
            title="Error",
            border_style="red",
        )
    )


def _handle_emit_error(error: EmitError, verbose: bool) -> None:
    """Handle write failures."""
    console.print(
        Panel(
            f"[red]{escape(str(error))}[/red]",
            title="Write Failed",
            border_style="red",
        )
    )


def _handle_pydantic_error(error: PydanticValidationError, verbose: bool) -> None:
    """Handle Pydantic validation errors."""
    console.print("[red bold]Schema Validation Failed[/red bold]")
    console.print()

    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "(root)"
        console.print(f"[red]✗[/red] {escape(location)}")
        console.print(f"  {escape(err['msg'])}")
        console.print(f"  [dim]({err['type']})[/dim]")
        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(escape(str(error)))


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
        console.print(escape(traceback.format_exc()))
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
