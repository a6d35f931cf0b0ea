"""Tests for the stable merge sort and its comparators."""

import random

import pytest

from shelfctl.domain.records import Record
from shelfctl.domain.sorting import (
    COMPARATORS,
    compare_authors,
    compare_normalized_titles,
    compare_titles,
    compare_years,
    merge_sort,
    sort_by,
)
from shelfctl.domain.types import SortKey
from tests.conftest import make_record, titles


class TestComparators:
    def test_titles_case_insensitive(self) -> None:
        assert compare_titles(make_record("apple"), make_record("APPLE")) == 0
        assert compare_titles(make_record("apple"), make_record("Banana")) < 0
        assert compare_titles(make_record("Banana"), make_record("apple")) > 0

    def test_authors_case_insensitive(self) -> None:
        assert compare_authors(make_record("x", "ann"), make_record("y", "Bob")) < 0

    def test_years_ascending_none_last(self) -> None:
        early, late, unknown = (
            make_record("a", year=1900),
            make_record("b", year=2000),
            make_record("c"),
        )
        assert compare_years(early, late) < 0
        assert compare_years(late, unknown) < 0
        assert compare_years(unknown, early) > 0
        assert compare_years(unknown, make_record("d")) == 0

    def test_normalized_titles_ignore_diacritics(self) -> None:
        assert compare_normalized_titles(make_record("Éclair"), make_record("eclair")) == 0
        assert compare_normalized_titles(make_record("Éclair"), make_record("Zebra")) < 0

    def test_raw_title_order_is_not_normalized(self) -> None:
        # Plain lowercasing leaves the accent, which sorts after ASCII letters.
        assert compare_titles(make_record("Éclair"), make_record("Zebra")) > 0

    def test_every_sort_key_has_comparator(self) -> None:
        assert set(COMPARATORS) == set(SortKey)


class TestMergeSort:
    @pytest.mark.parametrize("size", [0, 1])
    def test_trivial_lists(self, size: int) -> None:
        records = [make_record("only")][:size]
        merge_sort(records, compare_titles)
        assert len(records) == size

    def test_sorts_in_place(self) -> None:
        records = [make_record(t) for t in ["Gamma", "alpha", "Delta", "beta"]]
        merge_sort(records, compare_titles)
        assert titles(records) == ["alpha", "beta", "Delta", "Gamma"]

    def test_stable_for_equal_keys(self) -> None:
        first = make_record("Same", "Zed")
        second = make_record("same", "Amy")
        third = make_record("SAME", "Kim")
        records = [make_record("Zulu"), first, make_record("Alpha"), second, third]
        merge_sort(records, compare_titles)
        assert records[1:4] == [first, second, third]
        assert [r.author for r in records[1:4]] == ["Zed", "Amy", "Kim"]

    def test_matches_builtin_sort_on_random_input(self) -> None:
        rng = random.Random(42)
        records = [
            make_record(f"t{rng.randrange(50)}", year=rng.choice([None, 1990, 2000, 2010]))
            for _ in range(300)
        ]
        expected = sorted(records, key=lambda r: (r.year is None, r.year or 0))
        merge_sort(records, compare_years)
        assert [r.identifier for r in records] == [r.identifier for r in expected]


class TestSortBy:
    @pytest.fixture
    def records(self) -> list[Record]:
        return [
            make_record("Quincas Borba", "Machado de Assis", year=1891),
            make_record("Iracema", "José de Alencar", year=1865),
            make_record("O Cortiço", "Aluísio Azevedo"),
            make_record("Dom Casmurro", "Machado de Assis", year=1899),
        ]

    def test_by_title(self, records: list[Record]) -> None:
        sort_by(records, SortKey.TITLE)
        assert titles(records) == ["Dom Casmurro", "Iracema", "O Cortiço", "Quincas Borba"]

    def test_by_author_keeps_input_order_for_ties(self, records: list[Record]) -> None:
        sort_by(records, SortKey.AUTHOR)
        assert titles(records) == ["O Cortiço", "Iracema", "Quincas Borba", "Dom Casmurro"]

    def test_sorting_by_author_twice_keeps_order(self, records: list[Record]) -> None:
        records.append(make_record("Helena", "Machado de Assis", year=1876))
        sort_by(records, SortKey.AUTHOR)
        once = [r.identifier for r in records]
        sort_by(records, SortKey.AUTHOR)
        assert [r.identifier for r in records] == once

    def test_by_year_puts_unknown_last(self, records: list[Record]) -> None:
        sort_by(records, "year")
        assert [r.year for r in records] == [1865, 1891, 1899, None]

    def test_unknown_key_rejected(self, records: list[Record]) -> None:
        with pytest.raises(ValueError):
            sort_by(records, "isbn")
