"""CatalogService: the operations the shell calls.

Wraps each Catalog operation in a ServiceResult:
- add / remove / update: mutations (VALIDATION_FAILED, NOT_FOUND, NO_CHANGES)
- get: lookup by identifier
- search: exact-title run, or nearby window plus similarity suggestions
- prefix / similar: title-prefix run and fuzzy ranking
- list / stats: ordered listing and summary counts
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shelfctl.domain.records import ValidationError
from shelfctl.domain.search import is_exact_hit
from shelfctl.domain.types import SortKey, YearChange
from shelfctl.services.base import BaseService
from shelfctl.services.result import ServiceResult

if TYPE_CHECKING:
    from shelfctl.infrastructure.catalog import Catalog

logger = logging.getLogger(__name__)

DEFAULT_SIMILAR_LIMIT = 10


class CatalogService(BaseService):
    """Shell-facing operations over one Catalog."""

    def __init__(self, catalog: Catalog, *, similar_limit: int = DEFAULT_SIMILAR_LIMIT) -> None:
        super().__init__(catalog)
        self._similar_limit = similar_limit

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, title: str, author: str, year: int | None = None) -> ServiceResult:
        op = "add"
        try:
            identifier = self._catalog.add(title, author, year)
        except ValidationError as exc:
            return ServiceResult.failure(op, "VALIDATION_FAILED", str(exc), field=exc.field)
        record = self._catalog.find_by_identifier(identifier)
        assert record is not None
        return ServiceResult(ok=True, op=op, data=record.to_dict())

    def remove(self, identifier: str) -> ServiceResult:
        op = "remove"
        record = self._catalog.find_by_identifier(identifier)
        if record is None or not self._catalog.remove(identifier):
            return _not_found(op, identifier)
        return ServiceResult(ok=True, op=op, data=record.to_dict())

    def update(
        self,
        identifier: str,
        *,
        title: str | None = None,
        author: str | None = None,
        year: YearChange | None = None,
    ) -> ServiceResult:
        """Apply the provided changes; blank strings mean "unchanged"."""
        op = "update"
        before = self._catalog.find_by_identifier(identifier)
        if before is None:
            return _not_found(op, identifier)
        try:
            changed = self._catalog.update(identifier, title=title, author=author, year=year)
        except ValidationError as exc:
            return ServiceResult.failure(op, "VALIDATION_FAILED", str(exc), field=exc.field)
        if not changed:
            return ServiceResult.failure(op, "NO_CHANGES", "No changes specified")

        after = self._catalog.find_by_identifier(identifier)
        assert after is not None
        fields_changed = [
            name
            for name in ("title", "author", "year")
            if getattr(before, name) != getattr(after, name)
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={**after.to_dict(), "fields_changed": fields_changed},
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, identifier: str) -> ServiceResult:
        op = "get"
        record = self._catalog.find_by_identifier(identifier)
        if record is None:
            return _not_found(op, identifier)
        return ServiceResult(ok=True, op=op, data=record.to_dict())

    def search(self, title: str) -> ServiceResult:
        """Exact-title search.

        On a miss the nearby window is returned as ``items`` with
        ``match="nearby"``, and the similarity ranking is attached as
        ``suggestions``.
        """
        op = "search"
        if not title.strip():
            return _empty_query(op)

        items = self._catalog.search(title)
        exact = is_exact_hit(items, title)
        data: dict[str, object] = {
            "query": title.strip(),
            "match": "exact" if exact else "nearby",
            "items": [r.to_dict() for r in items],
            "count": len(items),
        }
        if not exact:
            scored = self._catalog.score_similar(title, self._similar_limit)
            data["suggestions"] = [{**s.record.to_dict(), "score": s.score} for s in scored]
        logger.debug("search %r -> %s (%d)", title, data["match"], len(items))
        return ServiceResult(ok=True, op=op, data=data)

    def prefix(self, text: str) -> ServiceResult:
        op = "prefix"
        if not text.strip():
            return _empty_query(op)
        items = self._catalog.search_prefix(text)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "query": text.strip(),
                "items": [r.to_dict() for r in items],
                "count": len(items),
            },
        )

    def similar(self, query: str, *, limit: int | None = None) -> ServiceResult:
        op = "similar"
        if not query.strip():
            return _empty_query(op)
        scored = self._catalog.score_similar(query, self._similar_limit if limit is None else limit)
        items = [{**s.record.to_dict(), "score": s.score} for s in scored]
        return ServiceResult(
            ok=True,
            op=op,
            data={"query": query.strip(), "items": items, "count": len(items)},
        )

    def list_records(self, *, sort: SortKey | str = SortKey.TITLE) -> ServiceResult:
        op = "list"
        key = SortKey(sort)
        records = self._catalog.list_sorted_by(key)
        warnings = [] if records else ["The catalog is empty"]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "sort": key.value,
                "items": [r.to_dict() for r in records],
                "count": len(records),
            },
            warnings=warnings,
        )

    def stats(self) -> ServiceResult:
        stats = self._catalog.statistics()
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "total": stats.total,
                "first_title": stats.first_title,
                "last_title": stats.last_title,
                "top_author": stats.top_author,
                "top_author_count": stats.top_author_count,
            },
        )


def _not_found(op: str, identifier: str) -> ServiceResult:
    return ServiceResult.failure(
        op,
        "NOT_FOUND",
        f"No book found with identifier: {identifier.strip()}",
        identifier=identifier.strip(),
    )


def _empty_query(op: str) -> ServiceResult:
    return ServiceResult.failure(op, "EMPTY_QUERY", "Search query cannot be empty")
