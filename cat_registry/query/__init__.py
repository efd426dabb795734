"""
Query construction for the cat registry.

All SQL the registry runs is produced here, as text plus positional parameters.
"""

from cat_registry.query.builder import SqlFragment, build_find_query, build_update_query

__all__ = [
    "SqlFragment",
    "build_find_query",
    "build_update_query",
]
