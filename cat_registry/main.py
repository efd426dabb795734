from __future__ import annotations

import sqlite3
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from pydantic import ValidationError

from cat_registry import commands
from cat_registry.config import get_settings
from cat_registry.domain.filters import (
    build_find_spec,
    build_new_cat,
    build_update_spec,
    parse_ids,
)
from cat_registry.domain.models import AGE_MAX, ID_MAX
from cat_registry.exceptions import CatRegistryError
from cat_registry.infrastructure.db_factory import open_store
from cat_registry.reporter import (
    CatListView,
    CatView,
    MaybeCatView,
    OutputFormat,
    Renderable,
    render,
    select_format,
)
from cat_registry.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(
    help="A simple command-line interface to the cats registry.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


@dataclass(frozen=True)
class CliState:
    db_path: Path
    output: OutputFormat


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn registry and storage failures into one stderr line and exit status 1."""
    try:
        yield
    except (CatRegistryError, sqlite3.Error) as exc:
        log.debug("Command failed", exc_info=True)
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _emit(ctx: typer.Context, view: Renderable) -> None:
    state: CliState = ctx.obj
    render(view, state.output)


@app.callback()
def cli(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Whether the output should be in JSON format."
    ),
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Registry database file (default from CAT_REGISTRY_DB or ./cat_registry.db).",
    ),
) -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        typer.echo(f"error: invalid settings: {exc.errors()[0]['msg']}", err=True)
        raise typer.Exit(code=1) from exc
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    ctx.obj = CliState(
        db_path=db or settings.db_path,
        output=select_format(json_output, sys.stdout.isatty()),
    )


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="The name of the cat."),
    age: int = typer.Option(
        ..., "--age", "-a", min=0, max=AGE_MAX, help="The age of the cat, in years."
    ),
    breed: Optional[str] = typer.Option(
        None,
        "--breed",
        "-b",
        help="The breed of the cat. Make sure it's spelled correctly, the registry does not check it.",
    ),
) -> None:
    """
    Adds a new cat, producing the new cat with its ID.

    The name and age are required, but the breed is optional.
    """
    with _reporting_errors():
        new_cat = build_new_cat(name, age, breed)
        with open_store(ctx.obj.db_path) as conn:
            cat = commands.add(conn, new_cat)
    _emit(ctx, CatView(cat))


@app.command()
def find(
    ctx: typer.Context,
    name: Optional[List[str]] = typer.Option(
        None, "--name", "-n", help="The name of the cat. Repeat or comma-separate for several."
    ),
    age: Optional[List[str]] = typer.Option(
        None, "--age", "-a", help="The age of the cat, in years. You can specify a range, e.g. 5-12."
    ),
    breed: Optional[List[str]] = typer.Option(None, "--breed", "-b", help="The breed of the cat."),
    no_breed: bool = typer.Option(
        False, "--no-breed", help="Search for cats that don't have a set breed."
    ),
    fuzzy: bool = typer.Option(
        False,
        "--fuzzy",
        "-f",
        help="Match name and breed as whole values (case-insensitive) instead of substrings.",
    ),
) -> None:
    """
    Searches for an existing cat or set of cats.

    Each query parameter can be specified multiple times.
    With no parameters, this will simply return every cat.
    """
    with _reporting_errors():
        spec = build_find_spec(names=name, ages=age, breeds=breed, no_breed=no_breed, fuzzy=fuzzy)
        with open_store(ctx.obj.db_path) as conn:
            cats = commands.find(conn, spec)
    _emit(ctx, CatListView(cats))


@app.command()
def get(
    ctx: typer.Context,
    cat_id: List[str] = typer.Option(
        ..., "--id", "-i", help="The ID of the cat. May be specified multiple times."
    ),
) -> None:
    """Gets a cat or set of cats by ID."""
    with _reporting_errors():
        ids = parse_ids(cat_id)
        with open_store(ctx.obj.db_path) as conn:
            cats = commands.get(conn, ids)
    _emit(ctx, CatListView(cats))


@app.command()
def update(
    ctx: typer.Context,
    cat_id: int = typer.Option(
        ..., "--id", "-i", min=0, max=ID_MAX, help="The ID of the cat to update."
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="The cat's new name."),
    age: Optional[int] = typer.Option(
        None, "--age", "-a", min=0, max=AGE_MAX, help="The cat's new age."
    ),
    breed: Optional[str] = typer.Option(None, "--breed", "-b", help="The cat's new breed."),
    no_breed: bool = typer.Option(False, "--no-breed", help="Clear the cat's breed."),
) -> None:
    """Update a cat's information."""
    with _reporting_errors():
        spec = build_update_spec(cat_id, name=name, age=age, breed=breed, no_breed=no_breed)
        with open_store(ctx.obj.db_path) as conn:
            cat = commands.update(conn, spec)
    _emit(ctx, MaybeCatView(cat))


@app.command()
def delete(
    ctx: typer.Context,
    cat_id: int = typer.Option(
        ..., "--id", "-i", min=0, max=ID_MAX, help="The ID of the cat to remove."
    ),
) -> None:
    """Removes a cat from the registry."""
    with _reporting_errors():
        with open_store(ctx.obj.db_path) as conn:
            cat = commands.delete(conn, cat_id)
    _emit(ctx, MaybeCatView(cat))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
