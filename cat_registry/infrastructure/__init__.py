"""
Infrastructure package for the cat registry.

Exports the SQLite connection factory and schema setup.
"""

from cat_registry.infrastructure.db_factory import connect, fetch_all, fetch_one, open_store
from cat_registry.infrastructure.schema import create_tables

__all__ = [
    "connect",
    "create_tables",
    "fetch_all",
    "fetch_one",
    "open_store",
]
