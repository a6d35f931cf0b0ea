"""Binary-search lookups over a title-sorted record sequence.

PRECONDITION: every function here expects *records* sorted by normalized
title ascending (the catalog invariant).  Results on unsorted input are
undefined but never raise.

- ``find_insertion_point``: O(log n) position of a normalized key.
- ``find_upper_bound``: O(log n) stable insertion position.
- ``search_exact``: first exact normalized-title hit, or None.
- ``search``: the run of equal titles, else a nearby window.
- ``search_prefix``: the run of titles starting with the query.
"""

from __future__ import annotations

from collections.abc import Sequence

from shelfctl.domain.normalize import normalize
from shelfctl.domain.records import Record

NEARBY_RADIUS = 5


def find_insertion_point(records: Sequence[Record], normalized_query: str) -> int:
    """Binary search for *normalized_query* among normalized titles.

    Returns the index of some record whose normalized title equals the
    query (not necessarily the first of a run of duplicates), or the
    lower-bound position where the query would be inserted.
    """
    left, right = 0, len(records) - 1
    while left <= right:
        middle = left + (right - left) // 2
        title = normalize(records[middle].title)
        if title == normalized_query:
            return middle
        if title > normalized_query:
            right = middle - 1
        else:
            left = middle + 1
    return left


def find_upper_bound(records: Sequence[Record], normalized_key: str) -> int:
    """Index just past every title that sorts at or before *normalized_key*.

    Inserting there is what a stable re-sort does with an appended record:
    it lands after any existing records with an equal title.
    """
    left, right = 0, len(records)
    while left < right:
        middle = (left + right) // 2
        if normalize(records[middle].title) <= normalized_key:
            left = middle + 1
        else:
            right = middle
    return left


def search_exact(records: Sequence[Record], query: str | None) -> Record | None:
    """Return a record whose normalized title equals the query, if any."""
    key = normalize((query or "").strip())
    if not key or not records:
        return None
    index = find_insertion_point(records, key)
    if index < len(records) and normalize(records[index].title) == key:
        return records[index]
    return None


def search(
    records: Sequence[Record],
    query: str | None,
    *,
    radius: int = NEARBY_RADIUS,
) -> list[Record]:
    """Exact-title run, or the nearby window when nothing matches exactly.

    On an exact hit, expands left and right from the found index so that
    every duplicate title is returned, in sequence order.  Otherwise
    returns up to ``radius`` records before the insertion point and up to
    ``radius`` from it onward, clipped at the sequence ends.
    """
    key = normalize((query or "").strip())
    if not key or not records:
        return []

    index = find_insertion_point(records, key)
    if index < len(records) and normalize(records[index].title) == key:
        first, last = _equal_run(records, index, key)
        return list(records[first : last + 1])

    start = max(0, index - radius)
    end = min(len(records), index + radius)
    return list(records[start:end])


def is_exact_hit(results: Sequence[Record], query: str | None) -> bool:
    """Whether *results* (from :func:`search`) is an exact-title run."""
    key = normalize((query or "").strip())
    return bool(results) and all(normalize(r.title) == key for r in results)


def search_prefix(records: Sequence[Record], query: str | None) -> list[Record]:
    """Records whose normalized title starts with the normalized query.

    Titles sharing a prefix are contiguous in title order, so the run is
    found from the insertion point in O(log n + k).
    """
    key = normalize((query or "").strip())
    if not key or not records:
        return []

    index = find_insertion_point(records, key)
    # The found index may sit inside a run of exact matches; back up to its start.
    while index > 0 and normalize(records[index - 1].title).startswith(key):
        index -= 1
    end = index
    while end < len(records) and normalize(records[end].title).startswith(key):
        end += 1
    return list(records[index:end])


def _equal_run(records: Sequence[Record], index: int, key: str) -> tuple[int, int]:
    """Bounds (inclusive) of the run of titles equal to *key* around *index*."""
    first = index
    while first > 0 and normalize(records[first - 1].title) == key:
        first -= 1
    last = index
    while last + 1 < len(records) and normalize(records[last + 1].title) == key:
        last += 1
    return first, last
