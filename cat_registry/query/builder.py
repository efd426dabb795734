"""
Parameterized SQL construction for the `cats` table.

Statements are assembled from `SqlFragment` values: a piece of SQL text plus the
positional parameters its `?` placeholders consume. Fragments are only ever
joined with other fragments, so text and parameters grow in lockstep and user
input never becomes part of the SQL text. Column and table names come from the
fixed constants below.

Search semantics:
- Names and breeds: by default a case-insensitive substring match
  (`LIKE '%pattern%'`); in fuzzy mode a case-insensitive full-value match
  (`COLLATE NOCASE IN (...)`). The naming is inherited from the original tool
  and kept as-is.
- Ages: `ConcreteAge` is an equality test, `AgeRange` an inclusive BETWEEN.
- Several values for one field are ORed; the fields are ANDed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

from cat_registry.domain.models import (
    CAT_COLUMNS,
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
from cat_registry.utils.logging import get_logger

log = get_logger(__name__)

TABLE = "cats"
SELECT_COLUMNS = ", ".join(CAT_COLUMNS)


@dataclass(frozen=True)
class SqlFragment:
    """SQL text and the parameters bound to its placeholders, in order."""

    text: str
    params: Tuple[Any, ...] = ()

    def __add__(self, other: "SqlFragment") -> "SqlFragment":
        return SqlFragment(self.text + other.text, self.params + other.params)


def _join(fragments: Iterable[SqlFragment], separator: str) -> SqlFragment:
    parts = list(fragments)
    return SqlFragment(
        separator.join(part.text for part in parts),
        tuple(param for part in parts for param in part.params),
    )


def and_(*fragments: Optional[SqlFragment]) -> Optional[SqlFragment]:
    """AND together the given fragments, skipping None. None if nothing is left."""
    present = [fragment for fragment in fragments if fragment is not None]
    if not present:
        return None
    return _join(present, " AND ")


def or_(fragments: Sequence[SqlFragment]) -> SqlFragment:
    """OR the fragments together as one parenthesized group."""
    joined = _join(fragments, " OR ")
    return SqlFragment(f"({joined.text})", joined.params)


def placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


def text_clause(column: str, patterns: Sequence[str], fuzzy: bool) -> SqlFragment:
    """
    Match `column` against any of `patterns`.

    Fuzzy mode compares whole values case-insensitively; otherwise each pattern
    is wrapped in `%` wildcards and matched as a case-insensitive substring.
    """
    if fuzzy:
        return SqlFragment(
            f"({column} COLLATE NOCASE IN ({placeholders(len(patterns))}))",
            tuple(patterns),
        )
    return or_([SqlFragment(f"{column} LIKE ?", (f"%{pattern}%",)) for pattern in patterns])


def age_term(age: AgeFilter) -> SqlFragment:
    if isinstance(age, ConcreteAge):
        return SqlFragment("age = ?", (age.value,))
    if isinstance(age, AgeRange):
        return SqlFragment("age BETWEEN ? AND ?", (age.low, age.high))
    raise TypeError(f"unsupported age filter: {age!r}")


def age_clause(ages: Sequence[AgeFilter]) -> SqlFragment:
    return or_([age_term(age) for age in ages])


def breed_clause(breed: BreedFilter, fuzzy: bool) -> Optional[SqlFragment]:
    if isinstance(breed, BreedPatterns):
        return text_clause("breed", breed.patterns, fuzzy)
    if isinstance(breed, BreedAbsent):
        return SqlFragment("breed IS NULL")
    if isinstance(breed, NoBreedFilter):
        return None
    raise TypeError(f"unsupported breed filter: {breed!r}")


def where_clause(spec: FindSpec) -> Optional[SqlFragment]:
    """Combined filter for `spec`, or None when it filters nothing."""
    return and_(
        text_clause("name", spec.names, spec.fuzzy) if spec.names else None,
        age_clause(spec.ages) if spec.ages else None,
        breed_clause(spec.breed, spec.fuzzy),
    )


def build_find_query(spec: FindSpec) -> SqlFragment:
    query = SqlFragment(f"SELECT {SELECT_COLUMNS} FROM {TABLE}")
    where = where_clause(spec)
    if where is not None:
        query = query + SqlFragment(" WHERE ") + where
    log.debug("find query: %s", query.text, extra={"params": list(query.params)})
    return query


def build_get_query(ids: Sequence[int]) -> SqlFragment:
    return SqlFragment(
        f"SELECT {SELECT_COLUMNS} FROM {TABLE} WHERE id IN ({placeholders(len(ids))})",
        tuple(ids),
    )


def build_select_by_id(cat_id: int) -> SqlFragment:
    return SqlFragment(f"SELECT {SELECT_COLUMNS} FROM {TABLE} WHERE id = ?", (cat_id,))


def build_insert(cat: NewCat) -> SqlFragment:
    return SqlFragment(
        f"INSERT INTO {TABLE} (name, age, breed) VALUES (?, ?, ?)",
        (cat.name, cat.age, cat.breed),
    )


def build_update_query(spec: UpdateSpec) -> Optional[SqlFragment]:
    """
    UPDATE statement writing the provided fields of `spec`.

    Returns None when no field was provided: an empty SET list is not valid SQL,
    and the caller just re-reads the record instead.
    """
    assignments = [
        SqlFragment(f"{column} = ?", (value,)) for column, value in spec.changes().items()
    ]
    if not assignments:
        return None
    query = (
        SqlFragment(f"UPDATE {TABLE} SET ")
        + _join(assignments, ", ")
        + SqlFragment(" WHERE id = ?", (spec.id,))
    )
    log.debug("update query: %s", query.text, extra={"params": list(query.params)})
    return query


def build_delete(cat_id: int) -> SqlFragment:
    return SqlFragment(f"DELETE FROM {TABLE} WHERE id = ?", (cat_id,))


__all__ = [
    "SqlFragment",
    "age_clause",
    "and_",
    "breed_clause",
    "build_delete",
    "build_find_query",
    "build_get_query",
    "build_insert",
    "build_select_by_id",
    "build_update_query",
    "or_",
    "text_clause",
    "where_clause",
]
