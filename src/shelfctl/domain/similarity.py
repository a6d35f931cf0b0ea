"""Fuzzy title ranking, the fallback when exact search misses.

Scoring tiers (normalized query ``q`` against normalized title ``t``):

- exact match: 1000
- ``q`` is a substring of ``t``: ``500 + (100 - |len(t) - len(q)|)``
- word overlap: ``100 * n`` where ``n`` counts query words longer than two
  characters that occur inside some title word, or contain one
- character presence: ``present * 10 // len(q)`` where ``present`` counts
  query characters found anywhere in ``t``

The last tier is a heuristic with no linguistic basis; it only orders
otherwise unrelated titles.  Scores of zero or less are dropped.

Independent of sort order: this is a linear scan.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from shelfctl.domain.normalize import normalize
from shelfctl.domain.records import Record

EXACT_SCORE = 1000
SUBSTRING_BASE = 500
SUBSTRING_LENGTH_BONUS = 100
WORD_SCORE = 100
CHAR_SCALE = 10
MIN_WORD_LENGTH = 3


@dataclass(frozen=True, slots=True)
class SimilarityScore:
    """A record paired with its score for one ranking pass."""

    record: Record
    score: int


def title_score(normalized_title: str, normalized_query: str) -> int:
    """Score one normalized title against one normalized query."""
    if not normalized_query:
        return 0
    if normalized_title == normalized_query:
        return EXACT_SCORE
    if normalized_query in normalized_title:
        gap = abs(len(normalized_title) - len(normalized_query))
        return SUBSTRING_BASE + (SUBSTRING_LENGTH_BONUS - gap)

    common = _common_words(normalized_title, normalized_query)
    if common:
        return WORD_SCORE * common

    present = sum(1 for ch in normalized_query if ch in normalized_title)
    return present * CHAR_SCALE // len(normalized_query)


def score_similarity(records: Sequence[Record], query: str | None) -> list[SimilarityScore]:
    """Score every record, drop non-positive scores, best first (stable)."""
    key = normalize((query or "").strip())
    if not key or not records:
        return []
    scored = [SimilarityScore(r, title_score(normalize(r.title), key)) for r in records]
    kept = [s for s in scored if s.score > 0]
    # sorted() is stable with reverse=True: equal scores keep input order.
    return sorted(kept, key=lambda s: s.score, reverse=True)


def rank_similar(records: Sequence[Record], query: str | None, max_results: int) -> list[Record]:
    """Up to *max_results* records ordered best match first."""
    if max_results <= 0:
        return []
    return [s.record for s in score_similarity(records, query)[:max_results]]


def _common_words(normalized_title: str, normalized_query: str) -> int:
    title_words = normalized_title.split()
    if not title_words:
        return 0
    count = 0
    for word in normalized_query.split():
        if len(word) < MIN_WORD_LENGTH:
            continue
        if any(word in tw or tw in word for tw in title_words):
            count += 1
    return count
