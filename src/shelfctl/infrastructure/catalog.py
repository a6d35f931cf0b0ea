"""Catalog: exclusive owner of the live record sequence.

INVARIANT: After any mutating call returns, the sequence is sorted by
normalized title ascending.  Search relies on it.  ``update`` and the
initial load re-establish it with the stable merge sort; ``add`` inserts
at the stable upper bound (the position a stable re-sort would give an
appended record); ``remove`` preserves it.

Nothing outside this class ever holds the live list: every operation that
returns records returns a new list of frozen snapshots.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from shelfctl.domain import search as title_index
from shelfctl.domain.ids import generate_identifier
from shelfctl.domain.normalize import normalize
from shelfctl.domain.records import Record, ValidationError, require_text, validate_year
from shelfctl.domain.similarity import SimilarityScore, rank_similar, score_similarity
from shelfctl.domain.sorting import compare_normalized_titles, merge_sort, sort_by
from shelfctl.domain.types import SortKey, YearAction, YearChange

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogStats:
    """Summary counts for the statistics query."""

    total: int
    first_title: str | None = None
    last_title: str | None = None
    top_author: str | None = None
    top_author_count: int = 0


class Catalog:
    """In-memory, title-sorted collection of book records.

    One lock guards every operation so that sorting and searching always
    see a consistent sequence, even if a caller shares the catalog across
    threads.
    """

    def __init__(self, records: Iterable[Record] = (), *, nearby_radius: int = 5) -> None:
        self._lock = threading.RLock()
        self._nearby_radius = nearby_radius
        self._records: list[Record] = []
        self._identifiers: set[str] = set()
        for record in records:
            if record.identifier in self._identifiers:
                logger.warning(
                    "Skipping duplicate identifier %s (%r)", record.identifier, record.title
                )
                continue
            self._identifiers.add(record.identifier)
            self._records.append(record)
        self._resort()
        logger.debug("Catalog loaded with %d records", len(self._records))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, title: str, author: str, year: int | None = None) -> str:
        """Validate and insert a new record; return its identifier.

        Raises:
            ValidationError: blank title/author, or year outside
                ``[0, current year]``.  The catalog is left unchanged.
        """
        clean_title = require_text(title, "title")
        clean_author = require_text(author, "author")
        if year is not None:
            validate_year(year)

        with self._lock:
            identifier = generate_identifier(self._identifiers.__contains__)
            record = Record(
                title=clean_title, author=clean_author, identifier=identifier, year=year
            )
            position = title_index.find_upper_bound(self._records, normalize(clean_title))
            self._records.insert(position, record)
            self._identifiers.add(identifier)
        logger.debug("Added %s (%r)", identifier, clean_title)
        return identifier

    def remove(self, identifier: str) -> bool:
        """Remove the record with *identifier*; return whether one existed."""
        key = (identifier or "").strip()
        if not key:
            return False
        with self._lock:
            index = self._index_of(key)
            if index is None:
                return False
            del self._records[index]
            self._identifiers.discard(key)
        logger.debug("Removed %s", key)
        return True

    def update(
        self,
        identifier: str,
        title: str | None = None,
        author: str | None = None,
        year: YearChange | None = None,
    ) -> bool:
        """Overwrite the provided fields of an existing record.

        Blank *title* or *author* means "leave unchanged"; *year* defaults
        to :meth:`YearChange.unchanged`.  Returns False when the identifier
        is unknown or no field was provided.

        Raises:
            ValidationError: *year* sets a value outside ``[0, current year]``.
                The record is not modified.
        """
        key = (identifier or "").strip()
        if not key:
            return False
        change = year or YearChange.unchanged()

        with self._lock:
            index = self._index_of(key)
            if index is None:
                return False

            updates: dict[str, object] = {}
            if title is not None and title.strip():
                updates["title"] = title.strip()
            if author is not None and author.strip():
                updates["author"] = author.strip()
            if change.action is YearAction.CLEAR:
                updates["year"] = None
            elif change.action is YearAction.SET:
                if change.value is None:
                    raise ValidationError("Year value missing", field="year")
                updates["year"] = validate_year(change.value)

            if not updates:
                return False
            self._records[index] = self._records[index].model_copy(update=updates)
            self._resort()
        logger.debug("Updated %s fields=%s", key, sorted(updates))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_identifier(self, identifier: str) -> Record | None:
        """Linear scan: the identifier is not the sort key."""
        key = (identifier or "").strip()
        if not key:
            return None
        with self._lock:
            index = self._index_of(key)
            return None if index is None else self._records[index]

    def search(self, title: str) -> list[Record]:
        with self._lock:
            return title_index.search(self._records, title, radius=self._nearby_radius)

    def search_exact(self, title: str) -> Record | None:
        with self._lock:
            return title_index.search_exact(self._records, title)

    def search_prefix(self, prefix: str) -> list[Record]:
        with self._lock:
            return title_index.search_prefix(self._records, prefix)

    def rank_similar(self, query: str, max_results: int) -> list[Record]:
        with self._lock:
            return rank_similar(self._records, query, max_results)

    def score_similar(self, query: str, max_results: int) -> list[SimilarityScore]:
        if max_results <= 0:
            return []
        with self._lock:
            return score_similarity(self._records, query)[:max_results]

    def list_sorted_by(self, key: SortKey | str) -> list[Record]:
        """A sorted copy; the catalog's own order is untouched."""
        with self._lock:
            ordered = list(self._records)
        sort_by(ordered, key)
        return ordered

    def records(self) -> list[Record]:
        """A copy of all records in title order."""
        with self._lock:
            return list(self._records)

    def statistics(self) -> CatalogStats:
        """Count, first/last title, and the most frequent author.

        Author ties go to the author seen first in the current order.
        """
        with self._lock:
            if not self._records:
                return CatalogStats(total=0)
            counts = Counter(record.author for record in self._records)
            # Counter keeps first-seen order and max() returns the first maximum.
            top_author, top_count = max(counts.items(), key=lambda item: item[1])
            return CatalogStats(
                total=len(self._records),
                first_title=self._records[0].title,
                last_title=self._records[-1].title,
                top_author=top_author,
                top_author_count=top_count,
            )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resort(self) -> None:
        merge_sort(self._records, compare_normalized_titles)

    def _index_of(self, identifier: str) -> int | None:
        if identifier not in self._identifiers:
            return None
        for index, record in enumerate(self._records):
            if record.identifier == identifier:
                return index
        return None
