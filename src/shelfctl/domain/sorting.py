"""Stable merge sort over book records.

The catalog relies on stability: re-sorting after a field update must not
scramble records whose keys compare equal.  Comparators are total,
including for ``None`` fields, and are selected by :class:`SortKey`.
"""

from __future__ import annotations

from collections.abc import Callable

from shelfctl.domain.normalize import normalize
from shelfctl.domain.records import Record
from shelfctl.domain.types import SortKey

Comparator = Callable[[Record, Record], int]


def _compare_text(a: str | None, b: str | None) -> int:
    """Case-insensitive comparison; ``None`` sorts first."""
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    la, lb = a.lower(), b.lower()
    return (la > lb) - (la < lb)


def compare_titles(a: Record, b: Record) -> int:
    return _compare_text(a.title, b.title)


def compare_authors(a: Record, b: Record) -> int:
    return _compare_text(a.author, b.author)


def compare_years(a: Record, b: Record) -> int:
    """Ascending year; records without a year go last."""
    if a.year is None and b.year is None:
        return 0
    if a.year is None:
        return 1
    if b.year is None:
        return -1
    return (a.year > b.year) - (a.year < b.year)


def compare_normalized_titles(a: Record, b: Record) -> int:
    """Diacritic-insensitive title order (the catalog's search order)."""
    na, nb = normalize(a.title), normalize(b.title)
    return (na > nb) - (na < nb)


COMPARATORS: dict[SortKey, Comparator] = {
    SortKey.TITLE: compare_titles,
    SortKey.AUTHOR: compare_authors,
    SortKey.YEAR: compare_years,
}


def merge_sort(records: list[Record], compare: Comparator) -> None:
    """Sort *records* in place with a top-down stable merge sort."""
    if len(records) <= 1:
        return
    buffer: list[Record] = list(records)
    _sort_range(records, buffer, 0, len(records) - 1, compare)


def sort_by(records: list[Record], key: SortKey | str) -> None:
    """Sort *records* in place by one of the closed set of keys."""
    merge_sort(records, COMPARATORS[SortKey(key)])


def _sort_range(
    records: list[Record],
    buffer: list[Record],
    start: int,
    end: int,
    compare: Comparator,
) -> None:
    if start >= end:
        return
    middle = (start + end) // 2
    _sort_range(records, buffer, start, middle, compare)
    _sort_range(records, buffer, middle + 1, end, compare)
    _merge(records, buffer, start, middle, end, compare)


def _merge(
    records: list[Record],
    buffer: list[Record],
    start: int,
    middle: int,
    end: int,
    compare: Comparator,
) -> None:
    """Merge the sorted runs ``[start, middle]`` and ``[middle+1, end]``.

    Ties take from the left run, which is what keeps the sort stable.
    """
    left, right, free = start, middle + 1, start
    while left <= middle and right <= end:
        if compare(records[left], records[right]) <= 0:
            buffer[free] = records[left]
            left += 1
        else:
            buffer[free] = records[right]
            right += 1
        free += 1
    while left <= middle:
        buffer[free] = records[left]
        left += 1
        free += 1
    while right <= end:
        buffer[free] = records[right]
        right += 1
        free += 1
    records[start : end + 1] = buffer[start : end + 1]
