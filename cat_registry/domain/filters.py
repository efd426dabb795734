"""
Turn raw command-line values into validated request objects.

Everything that can be wrong with user input is caught here and reported as a
ParseError, so the query builder only ever sees well-formed specifications.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from cat_registry.domain.models import (
    AGE_MAX,
    ID_MAX,
    AgeFilter,
    AgeRange,
    BreedAbsent,
    BreedFilter,
    BreedPatterns,
    ConcreteAge,
    FindSpec,
    NewCat,
    NoBreedFilter,
    UpdateSpec,
)
from cat_registry.exceptions import ParseError


def split_values(values: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """
    Flatten repeated and comma-delimited option values.

    `["a,b", "c"]` becomes `("a", "b", "c")`. Duplicates and order are kept.
    Returns None when nothing was given so callers can tell "no filter" apart.
    """
    if not values:
        return None
    return tuple(part for value in values for part in value.split(","))


def _parse_unsigned(text: str, limit: int, what: str, term: str) -> int:
    """Digits only: no sign, no surrounding whitespace."""
    if not (text.isascii() and text.isdigit()):
        raise ParseError(f"invalid {what} {term!r}: {text!r} is not a non-negative integer")
    value = int(text)
    if value > limit:
        raise ParseError(f"invalid {what} {term!r}: {value} is out of range")
    return value


def _parse_bound(text: str, term: str) -> int:
    return _parse_unsigned(text, AGE_MAX, "age", term)


def parse_age(term: str) -> AgeFilter:
    """
    Parse one age term: either `N` or an inclusive range `LOW-HIGH`.

    The term is split on its first `-`. Bound ordering is not checked.
    """
    low, sep, high = term.partition("-")
    if sep:
        return AgeRange(low=_parse_bound(low, term), high=_parse_bound(high, term))
    return ConcreteAge(value=_parse_bound(term, term))


def parse_ages(terms: Optional[Iterable[str]]) -> Optional[Tuple[AgeFilter, ...]]:
    split = split_values(terms)
    if split is None:
        return None
    return tuple(parse_age(term) for term in split)


def build_breed_filter(breeds: Optional[Iterable[str]], no_breed: bool) -> BreedFilter:
    patterns = split_values(breeds)
    if patterns and no_breed:
        raise ParseError("--breed and --no-breed cannot be used together")
    if no_breed:
        return BreedAbsent()
    if patterns:
        return BreedPatterns(patterns=patterns)
    return NoBreedFilter()


def build_find_spec(
    names: Optional[Iterable[str]] = None,
    ages: Optional[Iterable[str]] = None,
    breeds: Optional[Iterable[str]] = None,
    no_breed: bool = False,
    fuzzy: bool = False,
) -> FindSpec:
    """Build a FindSpec from the raw `find` options."""
    return FindSpec(
        names=split_values(names),
        ages=parse_ages(ages),
        breed=build_breed_filter(breeds, no_breed),
        fuzzy=fuzzy,
    )


def build_new_cat(name: str, age: int, breed: Optional[str] = None) -> NewCat:
    try:
        return NewCat(name=name, age=age, breed=breed)
    except ValidationError as exc:
        raise ParseError(_first_error(exc)) from exc


def build_update_spec(
    cat_id: int,
    name: Optional[str] = None,
    age: Optional[int] = None,
    breed: Optional[str] = None,
    no_breed: bool = False,
) -> UpdateSpec:
    """
    Build an UpdateSpec holding only the values that were actually provided.

    `no_breed` clears the breed and cannot be combined with `breed`.
    """
    if breed is not None and no_breed:
        raise ParseError("--breed and --no-breed cannot be used together")
    changes: dict = {}
    if name is not None:
        changes["name"] = name
    if age is not None:
        changes["age"] = age
    if breed is not None:
        changes["breed"] = breed
    elif no_breed:
        changes["breed"] = None
    try:
        return UpdateSpec(id=cat_id, **changes)
    except ValidationError as exc:
        raise ParseError(_first_error(exc)) from exc


def parse_ids(values: Optional[Iterable[str]]) -> List[int]:
    """Parse repeated / comma-delimited `--id` values, dropping duplicates."""
    ids: List[int] = []
    for value in split_values(values) or ():
        cat_id = _parse_unsigned(value, ID_MAX, "id", value)
        if cat_id not in ids:
            ids.append(cat_id)
    return ids


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"invalid {field}: {error['msg']}" if field else error["msg"]


__all__ = [
    "build_breed_filter",
    "build_find_spec",
    "build_new_cat",
    "build_update_spec",
    "parse_age",
    "parse_ages",
    "parse_ids",
    "split_values",
]
