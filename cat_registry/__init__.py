"""
Cat Registry - a personal registry of cats kept in a local SQLite file.

The package provides:

- Typed domain models for cats and for search/update requests
- A parameterized query builder for flexible searches
- A command executor for add, get, find, update and delete
- Table, plain-text and JSON rendering of results
- A Typer command-line interface (`cat-registry`)
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from cat_registry.config import Settings, get_settings
from cat_registry.domain.models import (
    AgeRange,
    BreedAbsent,
    BreedPatterns,
    Cat,
    ConcreteAge,
    FindSpec,
    NewCat,
    NoBreedFilter,
    UpdateSpec,
)
from cat_registry.exceptions import CatRegistryError, ParseError
from cat_registry.query.builder import SqlFragment, build_find_query, build_update_query
from cat_registry.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Cat",
    "NewCat",
    "ConcreteAge",
    "AgeRange",
    "NoBreedFilter",
    "BreedPatterns",
    "BreedAbsent",
    "FindSpec",
    "UpdateSpec",
    # Errors
    "CatRegistryError",
    "ParseError",
    # Query building
    "SqlFragment",
    "build_find_query",
    "build_update_query",
    # Logging
    "configure_logging",
    "get_logger",
]
