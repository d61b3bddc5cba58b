"""
SchemaMold: validate and edit JSON documents against declarative form schemas.
"""

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from .config import Config, load_config
from .console import apply_color_setting, console, err_console
from .documents import dump_document, load_document, write_document
from .logging_utils import configure_logging, resolve_level
from .paths import ABSENT, get_at_path, is_array, is_index, is_object, key_of, parse_key, set_at_path
from .render import render_form
from .schema.core import Schema
from .schema.loader import schema_from_dict
from .schema.validation import ErrorsByPath, SchemaValidator
from .shared.errors import SchemaMoldError

logger = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_USAGE = 2

app = typer.Typer(
    help="SchemaMold: validate and edit JSON documents against form schemas.\n\n"
    "Configuration: Use 'schemamold config init' to create a config file with default values.\n"
    "Environment: Set SCHEMAMOLD_CONFIG to use a custom config file location.",
    epilog="Examples:\n\n"
    "  # Check a document against a schema\n"
    "  schemamold validate person.schema.json person.json\n\n"
    "  # Read one value\n"
    "  schemamold get person.json /favorites/foods/0\n\n"
    "  # Write one value and re-validate\n"
    "  schemamold set person.json /age 31 --schema person.schema.json --in-place\n\n"
    "  # Show the form with current values and errors\n"
    "  schemamold show person.schema.json person.json",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
config_app = typer.Typer(help="Configuration management commands")
app.add_typer(config_app, name="config")


@app.callback()
def cli(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress information to stderr"),
    debug: bool = typer.Option(False, "--debug", help="Log debug information to stderr"),
) -> None:
    ctx.obj = {"verbose": verbose, "debug": debug}
    configure_logging(resolve_level(verbose=verbose, debug=debug))


def _fail(message: str, code: int = EXIT_USAGE, hint: str | None = None) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}", style="bold")
    if hint:
        err_console.print(f"[dim]{escape(hint)}[/dim]")
    return typer.Exit(code)


def _settings(ctx: typer.Context) -> Config:
    """Load configuration and apply its logging and color settings."""
    flags = ctx.obj or {}
    try:
        config = load_config(verbose=flags.get("verbose", False))
    except SchemaMoldError as e:
        raise _fail(e.message, hint=e.recovery_hint) from None

    configure_logging(
        resolve_level(config.get_field_value("system", "log_level"), flags.get("verbose", False), flags.get("debug", False))
    )
    apply_color_setting(config.get_field_value("output", "color"))
    return config


def _load(path: Path) -> Any:
    try:
        return load_document(path)
    except SchemaMoldError as e:
        raise _fail(e.message, hint=e.recovery_hint) from None


def _load_schema(path: Path) -> Schema:
    try:
        return schema_from_dict(load_document(path))
    except SchemaMoldError as e:
        raise _fail(e.message, hint=e.recovery_hint) from None


def _parse_path(key: str, document: Any) -> list[str | int]:
    """
    Parse a key against ``document``.

    ``parse_key`` turns digit segments into indexes; where the document holds
    an object at that point the segment is read as a property name instead.
    """
    try:
        steps = parse_key(key)
    except SchemaMoldError as e:
        raise _fail(e.message, hint=e.recovery_hint) from None

    node = document
    for i, step in enumerate(steps):
        if is_index(step) and is_object(node):
            steps[i] = step = str(step)
        node = get_at_path(node, [step])
    return steps


def _check_no_array_replaced(document: Any, steps: list[str | int]) -> None:
    """Refuse writes that would turn an existing array into an object."""
    node = document
    for i, step in enumerate(steps):
        if isinstance(step, str) and is_array(node):
            raise _fail(
                f"{key_of(steps[:i])} is an array; '{step}' is not an index",
                hint="Array elements are addressed by number, e.g. /items/0",
            )
        node = get_at_path(node, [step])
        if node is ABSENT or node is None:
            return


def _parse_value(raw: str) -> Any:
    """JSON literal if it parses, otherwise the text itself."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def print_errors(errors: ErrorsByPath, fmt: str, indent: int = 2) -> None:
    """Print an error map as a table (text) or as a raw json/yaml mapping."""
    if fmt in ("json", "yaml"):
        typer.echo(dump_document(errors, fmt, indent), nl=False)
        return

    if not errors:
        console.print("[bold green]✅ Document is valid[/bold green]")
        return

    table = Table(title="Validation errors", title_justify="left")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Message", style="red")
    for key, messages in errors.items():
        for message in messages:
            table.add_row(escape(key), escape(message))
    console.print(table)
    console.print(f"[bold red]{len(errors)} path(s) with errors[/bold red]")


@app.command(help="Validate a document against a schema.")
def validate(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., metavar="SCHEMA", help="Schema file (JSON or YAML)"),
    document_path: Path = typer.Argument(..., metavar="DOCUMENT", help="Document file (JSON or YAML)"),
    output_format: str | None = typer.Option(None, "--format", "-f", help="Output format (text, json, yaml)"),
) -> None:
    config = _settings(ctx)
    fmt = output_format or config.get_field_value("output", "format")
    if fmt not in ("text", "json", "yaml"):
        raise _fail(f"unknown output format '{fmt}'")

    schema = _load_schema(schema_path)
    document = _load(document_path)

    errors = SchemaValidator(schema).validate(document)
    print_errors(errors, fmt, int(config.get_field_value("output", "indent")))
    if errors:
        raise typer.Exit(EXIT_INVALID)


@app.command(help="Print the value found at PATH (for example /items/0/name).")
def get(
    ctx: typer.Context,
    document_path: Path = typer.Argument(..., metavar="DOCUMENT", help="Document file (JSON or YAML)"),
    path: str = typer.Argument(..., help="Location in the document, '/' for the root"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format (json, yaml)"),
) -> None:
    config = _settings(ctx)
    document = _load(document_path)
    steps = _parse_path(path, document)

    value = get_at_path(document, steps)
    if value is ABSENT:
        raise _fail(f"no value at {key_of(steps)}", EXIT_INVALID)
    typer.echo(dump_document(value, output_format, int(config.get_field_value("output", "indent"))), nl=False)


@app.command(name="set", help="Write VALUE at PATH; VALUE is parsed as JSON when possible.")
def set_value(
    ctx: typer.Context,
    document_path: Path = typer.Argument(..., metavar="DOCUMENT", help="Document file (JSON or YAML)"),
    path: str = typer.Argument(..., help="Location in the document, '/' for the root"),
    raw_value: str = typer.Argument(..., metavar="VALUE", help="New value, e.g. 42, true, '\"text\"' or '[1, 2]'"),
    schema_path: Path | None = typer.Option(None, "--schema", "-s", help="Validate the result against this schema"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Write the result back to DOCUMENT"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format when printing (json, yaml)"),
) -> None:
    config = _settings(ctx)
    indent = int(config.get_field_value("output", "indent"))
    schema = _load_schema(schema_path) if schema_path is not None else None
    document = _load(document_path)
    steps = _parse_path(path, document)
    _check_no_array_replaced(document, steps)

    try:
        updated = set_at_path(document, steps, _parse_value(raw_value))
    except SchemaMoldError as e:
        raise _fail(e.message, hint=e.recovery_hint) from None

    if in_place:
        try:
            write_document(document_path, updated, indent)
        except SchemaMoldError as e:
            raise _fail(e.message, hint=e.recovery_hint) from None
        err_console.print(f"[green]Updated {escape(str(document_path))} at {escape(key_of(steps))}[/green]")
    else:
        typer.echo(dump_document(updated, output_format, indent), nl=False)

    if schema is not None:
        errors = SchemaValidator(schema).validate(updated)
        if errors:
            for key, messages in errors.items():
                err_console.print(f"[cyan]{escape(key)}[/cyan]: [red]{escape(' '.join(messages))}[/red]")
            raise typer.Exit(EXIT_INVALID)


@app.command(help="Show the form described by SCHEMA filled with DOCUMENT.")
def show(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., metavar="SCHEMA", help="Schema file (JSON or YAML)"),
    document_path: Path | None = typer.Argument(None, metavar="[DOCUMENT]", help="Document file; empty form if omitted"),
) -> None:
    _settings(ctx)
    schema = _load_schema(schema_path)
    document = _load(document_path) if document_path is not None else {}

    errors = SchemaValidator(schema).validate(document)
    console.print(render_form(schema, document, errors))
    if errors:
        console.print(f"[bold red]Cannot submit: {len(errors)} path(s) with errors[/bold red]")
    else:
        console.print("[bold green]Ready to submit[/bold green]")


@config_app.command(name="init", help="Create a default configuration file in the XDG config directory.")
def init_config(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config file"),
    config_path: str | None = typer.Option(None, "--path", "-p", help="Custom config file path"),
) -> None:
    """Create a default configuration file."""
    try:
        config = Config()
        target_path = config.get_default_config_path() if config_path is None else Path(config_path)

        if target_path.exists() and not force:
            console.print(f"[yellow]Configuration file already exists:[/yellow] {target_path}")
            console.print("[dim]Use --force to overwrite the existing configuration file[/dim]")
            raise typer.Exit(0)

        created_path = config.create_default_config(target_path)
        console.print(f"[bold green]✅ Configuration file created:[/bold green] {created_path}")
        console.print()
        console.print("[bold]Configuration file locations (in priority order):[/bold]")
        for i, search_path in enumerate(config.get_config_paths(), 1):
            if search_path == created_path:
                console.print(f"  {i}. {search_path} [bold green](created here)[/bold green]")
            else:
                console.print(f"  {i}. {search_path}")
    except typer.Exit:
        raise
    except OSError as e:
        console.print(f"[red]Error creating configuration file:[/red] {e}", style="bold")
        raise typer.Exit(1) from None
