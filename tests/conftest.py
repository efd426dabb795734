"""
Pytest configuration for the cat registry.

Provides fixtures for:
- Settings isolation (the cached settings are reset around every test)
- A throwaway SQLite store per test
- A store seeded with three cats
- A Typer CLI runner
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Generator, List

import pytest
from typer.testing import CliRunner

from cat_registry import commands
from cat_registry.config import Settings, get_settings
from cat_registry.domain.models import Cat, NewCat
from cat_registry.infrastructure.db_factory import connect


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """
    Clear the cached Settings so environment changes made by a test apply.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of a per-test store file (not created yet)."""
    return tmp_path / "cats.db"


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(db_path=db_path, log_level="DEBUG")


@pytest.fixture
def db_connection(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """
    Provide an open connection to an empty store with the schema applied.
    """
    conn = connect(db_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def seeded_cats(db_connection: sqlite3.Connection) -> List[Cat]:
    """
    Seed three cats aged 1, 5 and 9, in that insertion order.

    Returns the stored cats with their assigned ids.
    """
    return [
        commands.add(db_connection, NewCat(name="Whiskers", age=1, breed="Tabby")),
        commands.add(db_connection, NewCat(name="Tom", age=5, breed=None)),
        commands.add(db_connection, NewCat(name="Mittens", age=9, breed="Maine Coon")),
    ]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
