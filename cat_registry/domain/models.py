"""
Domain models for the cat registry.

Defines the stored entity (`Cat`, aligned with the `cats` table) and the typed
request objects built from command-line input: age filter terms, breed filter
modes, and the find/update specifications consumed by the query builder.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

AGE_MAX = 2**32 - 1
# SQLite INTEGER is a signed 64-bit value.
ID_MAX = 2**63 - 1

# Column order of the persisted schema; rows are mapped back positionally.
CAT_COLUMNS: Tuple[str, ...] = ("id", "name", "age", "breed")


class Cat(BaseModel):
    """
    Representation of a single row in the `cats` table.
    """

    id: int = Field(..., ge=0, description="Primary key, assigned by the store.")
    name: str = Field(..., description="The cat's name.")
    age: int = Field(..., ge=0, description="Age in years.")
    breed: Optional[str] = Field(None, description="Breed; None when unknown.")

    model_config = {
        "frozen": True,
    }

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Cat":
        """Build a Cat from a `(id, name, age, breed)` row."""
        return cls(**dict(zip(CAT_COLUMNS, row)))


class NewCat(BaseModel):
    """Fields of a cat that has not been stored yet."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=AGE_MAX)
    breed: Optional[str] = None

    model_config = {"frozen": True}


class ConcreteAge(BaseModel):
    """Matches cats whose age is exactly `value`."""

    value: int = Field(..., ge=0, le=AGE_MAX)

    model_config = {"frozen": True}


class AgeRange(BaseModel):
    """
    Matches cats with `low <= age <= high`.

    A range with `low > high` is accepted and simply matches nothing.
    """

    low: int = Field(..., ge=0, le=AGE_MAX)
    high: int = Field(..., ge=0, le=AGE_MAX)

    model_config = {"frozen": True}


AgeFilter = Union[ConcreteAge, AgeRange]


class NoBreedFilter(BaseModel):
    """Breed is not constrained."""

    model_config = {"frozen": True}


class BreedPatterns(BaseModel):
    """Breed must match any of `patterns`."""

    patterns: Tuple[str, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}


class BreedAbsent(BaseModel):
    """Breed must be unset."""

    model_config = {"frozen": True}


BreedFilter = Union[NoBreedFilter, BreedPatterns, BreedAbsent]


class FindSpec(BaseModel):
    """
    Search criteria. Each populated field is ANDed with the others; the values
    inside a field are ORed together.
    """

    names: Optional[Tuple[str, ...]] = None
    ages: Optional[Tuple[AgeFilter, ...]] = None
    breed: BreedFilter = Field(default_factory=NoBreedFilter)
    fuzzy: bool = False

    model_config = {"frozen": True}


class UpdateSpec(BaseModel):
    """
    Target id plus the new values to write.

    Only fields explicitly passed at construction are written, so
    `UpdateSpec(id=1, breed=None)` clears the breed while `UpdateSpec(id=1)`
    leaves it alone.
    """

    id: int = Field(..., ge=0, le=ID_MAX)
    name: Optional[str] = Field(None, min_length=1)
    age: Optional[int] = Field(None, ge=0, le=AGE_MAX)
    breed: Optional[str] = None

    model_config = {"frozen": True}

    def changes(self) -> dict[str, Any]:
        """Provided column values, in schema order."""
        return {
            column: getattr(self, column)
            for column in ("name", "age", "breed")
            if column in self.model_fields_set
        }


__all__ = [
    "AGE_MAX",
    "ID_MAX",
    "CAT_COLUMNS",
    "AgeFilter",
    "AgeRange",
    "BreedAbsent",
    "BreedFilter",
    "BreedPatterns",
    "Cat",
    "ConcreteAge",
    "FindSpec",
    "NewCat",
    "NoBreedFilter",
    "UpdateSpec",
]
