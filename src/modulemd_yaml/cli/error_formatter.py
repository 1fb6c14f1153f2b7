"""Error message formatting with Rich."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from modulemd_yaml.errors import ParseError
    from modulemd_yaml.validation.errors import ValidationIssue, ValidationResult


class ErrorFormatter:
    """Formats validation and parse errors for terminal display."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def format_validation_result(
        self,
        result: ValidationResult,
        source_path: Path | None = None,
    ) -> None:
        """Format and print validation result.

        Args:
        ----
            result: The validation result to format.
            source_path: Path to source file (for display).

        """
        if result.is_valid and not result.warnings:
            self._print_success("Validation passed")
            return

        error_count = len(result.errors)
        warning_count = len(result.warnings)

        self.console.print(self._build_summary(error_count, warning_count, source_path))
        self.console.print()

        # Print errors first
        for issue in result.errors:
            self._print_issue(issue, "red")

        # Then warnings
        for issue in result.warnings:
            self._print_issue(issue, "yellow")

        if error_count > 0:
            self.console.print(f"[red bold]✗ {error_count} error(s)[/red bold]", end="")
        if warning_count > 0:
            if error_count > 0:
                self.console.print(", ", end="")
            self.console.print(f"[yellow]{warning_count} warning(s)[/yellow]", end="")
        self.console.print()

    def format_parse_error(self, error: ParseError) -> None:
        """Print a parse error with its position in the source."""
        content = Text()
        if error.path:
            content.append(f"File: {error.path}\n", style="dim")
        content.append(error.message, style="red")
        self.console.print(Panel(content, title="Parse Failed", border_style="red"))

    def _build_summary(
        self,
        errors: int,
        warnings: int,
        source_path: Path | None,
    ) -> Panel:
        """Build summary panel."""
        title = "Validation Failed" if errors > 0 else "Validation Warnings"
        style = "red" if errors > 0 else "yellow"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")

        if errors > 0:
            content.append(f"Errors: {errors}", style="red bold")
        if warnings > 0:
            if errors > 0:
                content.append("  ")
            content.append(f"Warnings: {warnings}", style="yellow")

        return Panel(content, title=title, border_style=style)

    def _print_issue(self, issue: ValidationIssue, color: str) -> None:
        """Print a single issue."""
        severity = issue.severity.value.upper()
        self.console.print(
            f"[{color} bold]{severity}[/{color} bold] "
            f"[{color}]{escape(f'[{issue.code}]')}[/{color}] "
            f"{escape(issue.message)}"
        )

        if issue.location:
            self.console.print(f"  [dim]at {escape(str(issue.location))}[/dim]")

        if issue.suggestion:
            self.console.print(f"  [green]💡 {escape(issue.suggestion)}[/green]")

        self.console.print()

    def _print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓ {message}[/green]")


class ErrorTable:
    """Display errors as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error table formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as table."""
        table = Table(title="Validation Issues")

        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Location", style="dim")
        table.add_column("Message")

        for issue in result.issues:
            severity_style = "red" if issue.severity.value == "error" else "yellow"
            severity = f"[{severity_style}]{issue.severity.value.upper()}[/{severity_style}]"

            location = escape(str(issue.location)) if issue.location else "-"

            table.add_row(
                issue.code,
                severity,
                location,
                escape(issue.message),
            )

        self.console.print(table)
