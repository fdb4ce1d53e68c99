"""
Command-line interface for the model filter.

A developer tool for trying out rule sets. Form data is remembered in a
SQLite session store, exactly as a web application would remember it
between requests, and rendered into SQL on demand.

Commands:
- set: Remember submitted form values for a filter key
- show: Show remembered form values
- render: Render the SQL a rule set produces from the remembered values
- clear: Forget remembered form values

Example:
    $ model-filter set tickets -f status=open -f status=pending -f subject=Print
    $ model-filter render tickets --rules rules.toml --table tickets
    $ model-filter clear tickets
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from model_filter import __version__
from model_filter.config import get_settings, load_settings
from model_filter.engine import FilterEngine
from model_filter.errors import FilterError
from model_filter.query import SQLQuery
from model_filter.rules import load_rules
from model_filter.state import SQLiteSessionStore
from model_filter.utils.logging import get_logger, setup_logging

console = Console()


def parse_form_fields(fields: tuple[str, ...]) -> dict[str, Any]:
    """Turn repeated ``name=value`` options into form data.

    A name given more than once becomes a list, like a multi-select field.
    """
    form_data: dict[str, Any] = {}

    for item in fields:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected name=value, got {item!r}", param_hint="--field")

        if name in form_data:
            existing = form_data[name]
            form_data[name] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            form_data[name] = value

    return form_data


def _engine(ctx: click.Context, key: str) -> FilterEngine:
    store: SQLiteSessionStore = ctx.obj["store"]
    return FilterEngine(store, key, settings=ctx.obj["settings"])


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
    raise SystemExit(1) from error


@click.group()
@click.version_option(version=__version__, prog_name="model-filter")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--db",
    type=click.Path(path_type=Path),
    help="Session database path (overrides config)",
)
@click.option(
    "--session",
    "-s",
    help="Session id (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(
    ctx: click.Context,
    config: Path | None,
    db: Path | None,
    session: str | None,
    verbose: bool,
) -> None:
    """Remember filter form data and render it into SQL."""
    ctx.ensure_object(dict)

    settings = load_settings(config) if config else get_settings()

    log_level = "DEBUG" if verbose else settings.logging.level
    setup_logging(
        level=log_level,
        format=settings.logging.format,
        include_timestamp=settings.logging.include_timestamp,
        include_location=settings.logging.include_location,
    )

    store = SQLiteSessionStore(
        db or settings.session_path,
        session or settings.session.session_id,
        timeout=settings.session.timeout_seconds,
    )
    ctx.call_on_close(store.close)

    ctx.obj["settings"] = settings
    ctx.obj["store"] = store


@main.command("set")
@click.argument("key")
@click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    help="Form value as name=value (repeat a name for lists)",
)
@click.pass_context
def set_form(ctx: click.Context, key: str, fields: tuple[str, ...]) -> None:
    """Remember submitted form values for KEY, replacing earlier ones."""
    form_data = parse_form_fields(fields)

    try:
        _engine(ctx, key).set_form_data(form_data)
    except FilterError as e:
        _fail(e)

    get_logger(__name__).info("form_data_saved", key=key, fields=len(form_data))
    console.print(f"[green]✓[/green] Saved {len(form_data)} field(s) for [cyan]{key}[/cyan]")


@main.command("show")
@click.argument("key")
@click.argument("field", required=False)
@click.pass_context
def show_form(ctx: click.Context, key: str, field: str | None) -> None:
    """Show the form values remembered for KEY."""
    try:
        form_data = _engine(ctx, key).get_form_data()
    except FilterError as e:
        _fail(e)

    if field is not None:
        console.print(json.dumps(form_data.get(field)), markup=False, highlight=False, soft_wrap=True)
        return

    if not form_data:
        console.print(f"No form data for [cyan]{key}[/cyan]")
        return

    table = Table(title=f"Form data: {key}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for name, value in form_data.items():
        table.add_row(name, json.dumps(value))

    console.print(table)


@main.command("render")
@click.argument("key")
@click.option(
    "--rules",
    "-r",
    "rules_path",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="TOML file with a [rules] table",
)
@click.option("--table", "-t", "table_name", help="Table to select from (default: KEY)")
@click.option("--strict", is_flag=True, help="Reject unknown rule kinds")
@click.option("--page", type=int, help="Page number for pagination")
@click.option("--per-page", type=int, default=30, show_default=True, help="Rows per page")
@click.pass_context
def render(
    ctx: click.Context,
    key: str,
    rules_path: Path,
    table_name: str | None,
    strict: bool,
    page: int | None,
    per_page: int,
) -> None:
    """Render the SQL that the remembered form values for KEY produce."""
    try:
        engine = _engine(ctx, key)
        engine.set_rules(load_rules(rules_path, strict=strict))

        query = engine.filter(SQLQuery(table_name or key))
        if page is not None:
            query.paginate(page=page, per_page=per_page)
        sql, params = query.to_sql()
    except (FilterError, ValueError) as e:
        _fail(e)

    console.print(sql, markup=False, highlight=False, soft_wrap=True)
    console.print(f"params: {json.dumps(params)}", markup=False, highlight=False, soft_wrap=True)


@main.command("clear")
@click.argument("key")
@click.pass_context
def clear_form(ctx: click.Context, key: str) -> None:
    """Forget the form values remembered for KEY."""
    try:
        _engine(ctx, key).clear_form_data()
    except FilterError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Cleared form data for [cyan]{key}[/cyan]")


if __name__ == "__main__":
    main()
