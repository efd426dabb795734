"""
Error types raised by the cat registry.

Storage failures are not wrapped: `sqlite3.Error` propagates to the CLI
boundary as-is.
"""

from __future__ import annotations


class CatRegistryError(Exception):
    """Base class for errors reported to the user."""


class ParseError(CatRegistryError, ValueError):
    """Raised when command-line values cannot be turned into a valid request."""


__all__ = ["CatRegistryError", "ParseError"]
