"""
Integration tests for the command executor against a real SQLite store.

Each test gets its own store file, so tests never observe each other's cats.
"""

from __future__ import annotations

import sqlite3
from typing import List

import pytest

from cat_registry import commands
from cat_registry.domain.filters import build_find_spec
from cat_registry.domain.models import (
    AgeRange,
    BreedAbsent,
    BreedPatterns,
    Cat,
    ConcreteAge,
    FindSpec,
    NewCat,
    UpdateSpec,
)
from cat_registry.infrastructure.db_factory import connect


def _names(cats: List[Cat]) -> List[str]:
    return [cat.name for cat in cats]


class TestAddAndGet:
    """Creating cats and reading them back by id."""

    def test_round_trip(self, db_connection: sqlite3.Connection):
        created = commands.add(db_connection, NewCat(name="Whiskers", age=3, breed="Tabby"))

        fetched = commands.get(db_connection, [created.id])

        assert fetched == [Cat(id=created.id, name="Whiskers", age=3, breed="Tabby")]

    def test_ids_are_ascending(self, seeded_cats: List[Cat]):
        ids = [cat.id for cat in seeded_cats]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_ids_are_not_reused_after_delete(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        last = seeded_cats[-1]
        commands.delete(db_connection, last.id)

        replacement = commands.add(db_connection, NewCat(name="Socks", age=2))

        assert replacement.id > last.id

    def test_unknown_ids_are_skipped(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        fetched = commands.get(db_connection, [seeded_cats[1].id, 999])

        assert fetched == [seeded_cats[1]]

    def test_get_without_ids(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        assert commands.get(db_connection, []) == []

    def test_data_survives_reconnect(self, db_path, seeded_cats: List[Cat]):
        conn = connect(db_path)
        try:
            assert commands.find(conn, FindSpec()) == seeded_cats
        finally:
            conn.close()


class TestFind:
    """Search semantics of the find command."""

    def test_empty_store_returns_nothing(self, db_connection: sqlite3.Connection):
        assert commands.find(db_connection, FindSpec()) == []

    def test_no_filters_returns_every_cat(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        assert commands.find(db_connection, FindSpec()) == seeded_cats

    def test_age_range(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        found = commands.find(db_connection, build_find_spec(ages=["3-7"]))

        assert found == [seeded_cats[1]]

    def test_concrete_ages_are_ored_in_insertion_order(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        found = commands.find(db_connection, build_find_spec(ages=["9", "1"]))

        assert found == [seeded_cats[0], seeded_cats[2]]

    def test_concrete_age_is_exact(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        assert commands.find(db_connection, FindSpec(ages=(ConcreteAge(value=4),))) == []
        assert commands.find(db_connection, FindSpec(ages=(ConcreteAge(value=5),))) == [
            seeded_cats[1]
        ]

    def test_inverted_range_matches_nothing(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        assert commands.find(db_connection, FindSpec(ages=(AgeRange(low=9, high=1),))) == []

    def test_inclusive_range_bounds(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        found = commands.find(db_connection, FindSpec(ages=(AgeRange(low=1, high=5),)))

        assert _names(found) == ["Whiskers", "Tom"]

    def test_default_name_match_is_case_insensitive_substring(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        found = commands.find(db_connection, FindSpec(names=("HISK",)))

        assert _names(found) == ["Whiskers"]

    def test_fuzzy_name_match_requires_whole_value(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        assert commands.find(db_connection, FindSpec(names=("hisk",), fuzzy=True)) == []
        found = commands.find(db_connection, FindSpec(names=("wHiSkErS", "tom"), fuzzy=True))
        assert _names(found) == ["Whiskers", "Tom"]

    def test_breed_patterns(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        found = commands.find(
            db_connection, FindSpec(breed=BreedPatterns(patterns=("coon", "tab")))
        )

        assert _names(found) == ["Whiskers", "Mittens"]

    def test_breed_absent(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        found = commands.find(db_connection, FindSpec(breed=BreedAbsent()))

        assert _names(found) == ["Tom"]

    def test_fields_are_anded(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        spec = build_find_spec(names=["i"], ages=["0-5"], breeds=["tabby"])

        assert _names(commands.find(db_connection, spec)) == ["Whiskers"]

    def test_like_wildcards_in_patterns_are_not_escaped(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        found = commands.find(db_connection, FindSpec(names=("M_tt",)))

        assert _names(found) == ["Mittens"]

    def test_hostile_input_is_treated_as_data(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        hostile = "x' OR '1'='1"
        assert commands.find(db_connection, FindSpec(names=(hostile,))) == []
        assert commands.find(db_connection, FindSpec(names=(hostile,), fuzzy=True)) == []
        assert commands.find(db_connection, FindSpec()) == seeded_cats


class TestUpdate:
    """Partial updates."""

    def test_sets_breed_and_keeps_other_fields(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        tom = seeded_cats[1]

        updated = commands.update(db_connection, UpdateSpec(id=tom.id, breed="Siamese"))

        assert updated == Cat(id=tom.id, name="Tom", age=5, breed="Siamese")
        assert commands.get(db_connection, [tom.id]) == [updated]

    def test_clears_breed(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        whiskers = seeded_cats[0]

        updated = commands.update(db_connection, UpdateSpec(id=whiskers.id, breed=None))

        assert updated is not None
        assert updated.breed is None

    def test_without_changes_returns_current_record(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        mittens = seeded_cats[2]

        assert commands.update(db_connection, UpdateSpec(id=mittens.id)) == mittens

    @pytest.mark.parametrize("spec", [UpdateSpec(id=999, name="Ghost"), UpdateSpec(id=999)])
    def test_unknown_id_returns_none(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat], spec: UpdateSpec
    ):
        assert commands.update(db_connection, spec) is None
        assert commands.find(db_connection, FindSpec()) == seeded_cats


class TestDelete:
    """Removing cats."""

    def test_returns_deleted_cat_and_removes_it(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        whiskers = seeded_cats[0]

        assert commands.delete(db_connection, whiskers.id) == whiskers
        assert commands.get(db_connection, [whiskers.id]) == []
        assert commands.find(db_connection, FindSpec()) == seeded_cats[1:]

    def test_unknown_id_returns_none(
        self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]
    ):
        assert commands.delete(db_connection, 999) is None
        assert len(commands.find(db_connection, FindSpec())) == len(seeded_cats)


class TestStorageErrors:
    """Storage failures propagate unchanged."""

    def test_closed_connection(self, db_path):
        conn = connect(db_path)
        conn.close()

        with pytest.raises(sqlite3.ProgrammingError):
            commands.find(conn, FindSpec())

    def test_not_null_constraint(self, db_connection: sqlite3.Connection, seeded_cats: List[Cat]):
        with pytest.raises(sqlite3.IntegrityError):
            commands.update(db_connection, UpdateSpec(id=seeded_cats[0].id, name=None))


def test_full_scenario(db_connection: sqlite3.Connection):
    """Empty store, three cats, range and exact searches, update, delete."""
    assert commands.find(db_connection, FindSpec()) == []

    young = commands.add(db_connection, NewCat(name="Kit", age=1))
    middle = commands.add(db_connection, NewCat(name="Mid", age=5))
    old = commands.add(db_connection, NewCat(name="Elder", age=9))

    assert commands.find(db_connection, build_find_spec(ages=["3-7"])) == [middle]
    assert commands.find(db_connection, build_find_spec(ages=["1", "9"])) == [young, old]

    updated = commands.update(db_connection, UpdateSpec(id=middle.id, breed="Siamese"))
    assert updated == Cat(id=middle.id, name="Mid", age=5, breed="Siamese")

    assert commands.delete(db_connection, young.id) == young
    assert commands.find(db_connection, FindSpec()) == [updated, old]
