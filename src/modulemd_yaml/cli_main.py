"""Command-line interface for modulemd-yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modulemd_yaml import __version__
from modulemd_yaml.cli.exception_handler import handle_exceptions
from modulemd_yaml.cli.logging_config import setup_logging
from modulemd_yaml.codec import YamlEmitter, YamlParser
from modulemd_yaml.models import ModuleDocument, StringSet
from modulemd_yaml.validation import ModuleValidator, ValidationResult

# Create Typer app
app = typer.Typer(
    name="modulemd-yaml",
    help="Read, validate and write modulemd module metadata YAML.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")

OUTPUT_FORMATS = ("text", "table")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"modulemd-yaml version {__version__}")
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable debug logging and full tracebacks.",
        ),
    ] = False,
) -> None:
    """Read, validate and write modulemd module metadata.

    A modulemd file is a YAML stream holding one document per module
    stream, in schema version 1 or 2.
    """
    setup_logging(verbose)


@app.command()
@handle_exceptions()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input modulemd YAML file to validate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Reject unknown keys and treat warnings as errors.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output errors, no success messages.",
        ),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format for validation results: text, table.",
        ),
    ] = "text",
) -> None:
    """Validate a modulemd YAML file.

    Parses every document in the file and runs the checks a document has
    to pass before it can be written.

    Examples
    --------
        modulemd-yaml validate modules.yaml
        modulemd-yaml validate modules.yaml --strict
        modulemd-yaml validate modules.yaml --format table

    """
    from modulemd_yaml.cli.error_formatter import ErrorFormatter, ErrorTable

    if output_format not in OUTPUT_FORMATS:
        error_console.print(
            f"\n✗ Invalid format: {escape(output_format)}\n"
            f"Supported: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(code=1)

    documents = YamlParser(strict=strict).parse_file(input_file)

    validator = ModuleValidator(strict=strict)
    result = ValidationResult()
    for index, doc in enumerate(documents):
        result.merge(validator.validate(doc, index))

    failed = not result.is_valid or (strict and bool(result.warnings))

    if result.issues:
        if output_format == "table":
            ErrorTable(error_console).print_result(result)
        else:
            ErrorFormatter(error_console).format_validation_result(result, input_file)

        if failed:
            raise typer.Exit(code=1)

    if not quiet:
        count = len(documents)
        if result.warnings:
            console.print(
                f"\n[bold yellow]⚠ {escape(input_file.name)} is valid with warnings "
                f"({count} document(s))[/bold yellow]\n"
            )
        else:
            console.print(
                f"\n[bold green]✓ {escape(input_file.name)} is valid "
                f"({count} document(s))[/bold green]\n"
            )


@app.command()
@handle_exceptions()
def dump(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input modulemd YAML file to rewrite.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path. Defaults to standard output.",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite output file if it exists.",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Reject unknown keys and treat warnings as errors.",
        ),
    ] = False,
) -> None:
    """Rewrite a modulemd YAML file in canonical form.

    Examples
    --------
        modulemd-yaml dump modules.yaml
        modulemd-yaml dump modules.yaml -o normalized.yaml --force

    """
    if output is not None and output.exists() and not force:
        error_console.print(
            f"\n✗ Output file already exists: {escape(str(output))}\nUse --force to overwrite."
        )
        raise typer.Exit(code=1)

    documents = YamlParser(strict=strict).parse_file(input_file)
    emitter = YamlEmitter(validator=ModuleValidator(strict=strict))

    if output is None:
        typer.echo(emitter.emit_string(documents), nl=False)
        return

    emitter.emit_file(documents, output)
    console.print(
        f"\n[bold green]✓ Wrote {len(documents)} document(s) to "
        f"{escape(str(output))}[/bold green]\n"
    )


@app.command()
@handle_exceptions()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input modulemd YAML file to inspect.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display a summary of every document in a modulemd file.

    Examples
    --------
        modulemd-yaml info modules.yaml

    """
    documents = YamlParser().parse_file(input_file)

    console.print(f"[bold]{escape(str(input_file))}[/bold]: {len(documents)} document(s)")
    for index, doc in enumerate(documents):
        _print_summary(index, doc)


def _print_summary(index: int, doc: ModuleDocument) -> None:
    """Print a summary of one module document."""
    table = Table(title=f"Document {index}", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Schema version", str(doc.mdversion))
    table.add_row("Name", escape(doc.name or "-"))
    table.add_row("Stream", escape(doc.stream or "-"))
    table.add_row("Version", str(doc.version) if doc.version else "-")

    summary = doc.summary or "-"
    if len(summary) > 60:
        summary = summary[:60] + "..."
    table.add_row("Summary", escape(summary))

    table.add_row("", "")  # Spacer
    table.add_row("Module licenses", escape(_join(doc.module_licenses)))
    table.add_row("Content licenses", escape(_join(doc.content_licenses)))
    table.add_row("Dependency blocks", str(len(doc.dependencies)))

    console.print(table)


def _join(values: StringSet | None) -> str:
    if not values:
        return "-"
    return ", ".join(values)


if __name__ == "__main__":
    app()
