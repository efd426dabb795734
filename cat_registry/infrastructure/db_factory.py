"""
Connection factory for the cat registry's SQLite store.

One invocation of the CLI opens exactly one connection, runs one command and
closes it. Errors from sqlite3 are not retried or wrapped.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional, Union

from cat_registry.config import get_settings
from cat_registry.domain.models import Cat
from cat_registry.infrastructure.schema import create_tables
from cat_registry.query.builder import SqlFragment
from cat_registry.utils.logging import get_logger

log = get_logger(__name__)


def connect(db_path: Union[str, Path, None] = None) -> sqlite3.Connection:
    """
    Open the store at `db_path` (default: settings) and ensure its schema.

    Parameters
    ----------
    db_path : str | Path | None
        SQLite file to open. `":memory:"` is accepted for throwaway stores.

    Returns
    -------
    sqlite3.Connection
        A connection with the `cats` table present.
    """
    path = db_path if db_path is not None else get_settings().db_path
    conn = sqlite3.connect(str(path))
    try:
        create_tables(conn)
    except sqlite3.Error:
        conn.close()
        raise
    log.debug("Opened store %s", path)
    return conn


@contextmanager
def open_store(
    db_path: Union[str, Path, None] = None,
) -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for one command's connection.

    Example
    -------
        with open_store("cats.db") as conn:
            cats = fetch_all(conn, build_find_query(spec))
    """
    conn = connect(db_path)
    try:
        yield conn
    finally:
        conn.close()


def fetch_all(conn: sqlite3.Connection, query: SqlFragment) -> List[Cat]:
    """Run a SELECT-style query and map every row to a Cat."""
    return [Cat.from_row(row) for row in conn.execute(query.text, query.params)]


def fetch_one(conn: sqlite3.Connection, query: SqlFragment) -> Optional[Cat]:
    row = conn.execute(query.text, query.params).fetchone()
    return Cat.from_row(row) if row is not None else None


__all__ = ["connect", "fetch_all", "fetch_one", "open_store"]
