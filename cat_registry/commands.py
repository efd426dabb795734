"""
Command executor: runs one registry operation against an open store.

Each function takes an open sqlite3 connection and an already validated
request, builds its statement with `cat_registry.query.builder` and maps the
resulting rows back to `Cat` objects. Missing records are reported as `None` or
an empty list, never as errors.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional, Sequence

from cat_registry.domain.models import Cat, FindSpec, NewCat, UpdateSpec
from cat_registry.infrastructure.db_factory import fetch_all, fetch_one
from cat_registry.query.builder import (
    build_delete,
    build_find_query,
    build_get_query,
    build_insert,
    build_select_by_id,
    build_update_query,
)
from cat_registry.utils.logging import get_logger

log = get_logger(__name__)


def add(conn: sqlite3.Connection, cat: NewCat) -> Cat:
    """Store a new cat and return it with its assigned id."""
    insert = build_insert(cat)
    with conn:
        cursor = conn.execute(insert.text, insert.params)
        created = fetch_one(conn, build_select_by_id(cursor.lastrowid))
    if created is None:  # pragma: no cover - the row was inserted in this transaction
        raise sqlite3.DatabaseError("inserted cat could not be read back")
    log.info("Added cat #%s", created.id, extra={"cat_id": created.id})
    return created


def get(conn: sqlite3.Connection, ids: Sequence[int]) -> List[Cat]:
    """Cats whose id is in `ids`; unknown ids are skipped."""
    if not ids:
        return []
    cats = fetch_all(conn, build_get_query(ids))
    log.info("Fetched %d of %d cat(s)", len(cats), len(ids), extra={"rows": len(cats)})
    return cats


def find(conn: sqlite3.Connection, spec: FindSpec) -> List[Cat]:
    """Cats matching `spec`, in storage order."""
    cats = fetch_all(conn, build_find_query(spec))
    log.info("Found %d cat(s)", len(cats), extra={"rows": len(cats)})
    return cats


def update(conn: sqlite3.Connection, spec: UpdateSpec) -> Optional[Cat]:
    """
    Write the provided fields of `spec` and return the updated cat.

    With nothing to write the current record is returned untouched. Returns None
    when no cat has the target id.
    """
    statement = build_update_query(spec)
    select = build_select_by_id(spec.id)
    if statement is None:
        return fetch_one(conn, select)
    with conn:
        conn.execute("BEGIN IMMEDIATE")
        cursor = conn.execute(statement.text, statement.params)
        if cursor.rowcount == 0:
            log.info("No cat #%s to update", spec.id, extra={"cat_id": spec.id})
            return None
        updated = fetch_one(conn, select)
    log.info("Updated cat #%s", spec.id, extra={"cat_id": spec.id})
    return updated


def delete(conn: sqlite3.Connection, cat_id: int) -> Optional[Cat]:
    """Remove a cat and return it as it was, or None if it did not exist."""
    with conn:
        conn.execute("BEGIN IMMEDIATE")
        existing = fetch_one(conn, build_select_by_id(cat_id))
        if existing is None:
            log.info("No cat #%s to delete", cat_id, extra={"cat_id": cat_id})
            return None
        statement = build_delete(cat_id)
        conn.execute(statement.text, statement.params)
    log.info("Deleted cat #%s", cat_id, extra={"cat_id": cat_id})
    return existing


__all__ = ["add", "delete", "find", "get", "update"]
