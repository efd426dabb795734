"""
Domain package for the cat registry.

Exports the stored entity and the typed request objects. Keep this package
focused on data definitions and input validation.
"""

from cat_registry.domain.models import Cat, FindSpec, NewCat, UpdateSpec

__all__ = [
    "Cat",
    "FindSpec",
    "NewCat",
    "UpdateSpec",
]
