"""CLI interface for jsonapi-spec using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from jsonapi_spec import __description__, __version__
from jsonapi_spec.builder import Builder, RelationBuilder, ResourceBuilder
from jsonapi_spec.config import LogLevel, load_config
from jsonapi_spec.document import Document
from jsonapi_spec.exceptions import UnexpectedDocumentError
from jsonapi_spec.specification import StaticSpecification

app = typer.Typer(
    name="jsonapi-spec",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"jsonapi-spec version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """jsonapi-spec - Compliance validation for JSON:API request documents."""


def _setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else _LOG_LEVELS.get(level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


def _print_table(document: Document) -> None:
    if document.valid():
        console.print("[green]Document is valid.[/green]")
        return

    console.print(f"[red]Document is invalid:[/red] {len(document.errors)} error(s)")

    table = Table()
    table.add_column("Status", style="white", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Pointer", style="magenta")
    table.add_column("Detail", style="white")

    for error in document.errors:
        table.add_row(error.status, error.title, error.pointer.render(), error.detail)

    console.print(table)


@app.command()
def validate(
    document_path: Annotated[
        Path,
        typer.Argument(help="Path to the JSON:API request document")
    ],
    resource_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Resource type the endpoint expects")
    ],
    resource_id: Annotated[
        Optional[str],
        typer.Option("--id", "-i", help="Resource id for an update request (omit for create)")
    ] = None,
    field: Annotated[
        Optional[str],
        typer.Option("--field", help="Relation name, to validate a relationship document")
    ] = None,
    schema: Annotated[
        Optional[Path],
        typer.Option("--schema", "-s", help="Schema definition file (default: schemaPath from config)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .jsonapi-spec.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Validate a JSON:API request document against a schema definition."""
    valid_formats = ["table", "json"]

    if format not in valid_formats:
        _fail(f"Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")

    if resource_id is not None and field is not None:
        _fail("--id and --field cannot be combined")

    try:
        spec_config = load_config(config)
        _setup_logging(spec_config.logging.level, verbose)

        schema_path = schema or spec_config.schema_path
        if not schema_path:
            _fail("No schema definition given. Use --schema or set schemaPath in the config file.")

        specification = StaticSpecification.from_file(schema_path)
        translator = spec_config.translator()

        builder: Builder
        if field is not None:
            builder = RelationBuilder(specification, translator).expects(resource_type, field)
        else:
            builder = ResourceBuilder(specification, translator).expects(resource_type, resource_id)

        document = builder.build(document_path.read_bytes())
    except UnexpectedDocumentError as e:
        _fail(f"Unexpected document: {e}")
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    if format == "json":
        typer.echo(document.errors.to_json(indent=2))
    else:
        _print_table(document)

    raise typer.Exit(0 if document.valid() else 1)


if __name__ == "__main__":
    app()
