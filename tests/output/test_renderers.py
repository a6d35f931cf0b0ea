"""Tests for the Rich renderers."""

from __future__ import annotations

from shelfctl.output.renderers import render_quiet, render_result
from shelfctl.services.result import ServiceResult

DOM = {"id": "9788535910663", "title": "Dom Casmurro", "author": "Machado", "year": 1899}
IRA = {"id": "9788508133020", "title": "Iracema", "author": "Alencar", "year": None}


class TestRenderQuiet:
    def test_listing_prints_ids(self) -> None:
        result = ServiceResult(ok=True, op="list", data={"items": [DOM, IRA], "count": 2})
        assert render_quiet(result) == "9788535910663\n9788508133020"

    def test_single_record(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="add", data=DOM)) == "9788535910663"

    def test_status_line(self) -> None:
        result = ServiceResult(ok=True, op="stats", data={"total": 0})
        assert render_quiet(result) == "OK: stats"

    def test_error(self) -> None:
        result = ServiceResult.failure("remove", "NOT_FOUND", "No book found")
        assert render_quiet(result) == "ERROR: remove — No book found"


class TestRenderResult:
    def test_mutation(self) -> None:
        data = {**IRA, "fields_changed": ["author", "year"]}
        output = render_result(ServiceResult(ok=True, op="update", data=data))
        assert "OK" in output
        assert "update" in output
        assert "fields_changed: author, year" in output
        assert "year: —" in output

    def test_record_panel(self) -> None:
        output = render_result(ServiceResult(ok=True, op="get", data=DOM))
        assert "9788535910663" in output
        assert "author: Machado" in output
        assert "year: 1899" in output

    def test_search_exact(self) -> None:
        data = {"query": "Dom Casmurro", "match": "exact", "items": [DOM], "count": 1}
        output = render_result(ServiceResult(ok=True, op="search", data=data))
        assert "1 book(s) titled Dom Casmurro" in output
        assert "Nearby titles" not in output

    def test_search_nearby_with_suggestions(self) -> None:
        data = {
            "query": "Iracemas",
            "match": "nearby",
            "items": [DOM, IRA],
            "count": 2,
            "suggestions": [{**IRA, "score": 598}],
        }
        output = render_result(ServiceResult(ok=True, op="search", data=data))
        assert "No book titled Iracemas." in output
        assert "Nearby titles" in output
        assert "Similar titles" in output
        assert "598" in output

    def test_search_empty_catalog(self) -> None:
        data = {"query": "X", "match": "nearby", "items": [], "count": 0, "suggestions": []}
        output = render_result(ServiceResult(ok=True, op="search", data=data))
        assert output == "No book titled X."

    def test_list(self) -> None:
        data = {"sort": "year", "items": [DOM, IRA], "count": 2}
        output = render_result(ServiceResult(ok=True, op="list", data=data))
        assert "Sorted by year" in output
        assert "Iracema" in output
        assert "2 book(s)" in output
        assert "Score" not in output

    def test_similar_shows_score_column(self) -> None:
        data = {"query": "dom", "items": [{**DOM, "score": 591}], "count": 1}
        output = render_result(ServiceResult(ok=True, op="similar", data=data))
        assert "Score" in output
        assert "591" in output

    def test_markup_in_titles_is_literal(self) -> None:
        item = {**DOM, "title": "[bold]Not markup[/bold]"}
        data = {"query": "[x]", "items": [item], "count": 1}
        output = render_result(ServiceResult(ok=True, op="prefix", data=data))
        assert "[bold]Not markup[/bold]" in output

    def test_stats(self) -> None:
        data = {
            "total": 4,
            "first_title": "Dom Casmurro",
            "last_title": "Quincas Borba",
            "top_author": "Machado de Assis",
            "top_author_count": 2,
        }
        output = render_result(ServiceResult(ok=True, op="stats", data=data))
        assert "Catalog statistics" in output
        assert "Total books" in output
        assert "Machado de Assis (2 books)" in output

    def test_stats_empty(self) -> None:
        output = render_result(ServiceResult(ok=True, op="stats", data={"total": 0}))
        assert "First title" not in output

    def test_generic_fallback(self) -> None:
        output = render_result(ServiceResult(ok=True, op="custom", data={"answer": 42}))
        assert "answer: 42" in output

    def test_error(self) -> None:
        result = ServiceResult.failure("add", "VALIDATION_FAILED", "Title cannot be empty")
        output = render_result(result)
        assert "ERROR" in output
        assert "Title cannot be empty" in output
        assert "detail" not in output

    def test_error_detail_when_verbose(self) -> None:
        result = ServiceResult.failure("add", "VALIDATION_FAILED", "bad", field="title")
        output = render_result(result, verbose=True)
        assert "field: title" in output
