"""
Schema for the cat registry store.

The registry keeps one table. Creation is idempotent and runs every time a
connection is opened, before any command touches the store.
"""

from __future__ import annotations

import sqlite3

from cat_registry.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS cats (
    id    INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
    name  TEXT NOT NULL,
    age   INTEGER NOT NULL,
    breed TEXT
)
"""


def create_tables(conn: sqlite3.Connection) -> None:
    """
    Create the `cats` table if it is missing.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with conn:
        conn.execute(SCHEMA_SQL)
    log.debug("Schema ensured.")


__all__ = ["SCHEMA_SQL", "create_tables"]
