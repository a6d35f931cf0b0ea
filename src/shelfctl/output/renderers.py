"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Console; ``render_result``
dispatches on ``result.op`` and falls back to a generic key-value view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shelfctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from shelfctl.services.result import ServiceResult

    Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: identifiers for listings, a status line otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="shelf.ok"), Text(f"  {result.op}", style="shelf.op"))


def _field(console: Console, key: str, value: Any) -> None:
    styles = {"id": "shelf.id", "title": "shelf.title", "author": "shelf.author"}
    shown = "—" if value is None else str(value)
    console.print(
        Text(f"  {key}: ", style="shelf.key"),
        Text(shown, style=styles.get(key, "")),
        sep="",
    )


def _record_table(items: list[dict[str, Any]], *, score: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="shelf.id", no_wrap=True)
    table.add_column("Title", style="shelf.title")
    table.add_column("Author", style="shelf.author")
    table.add_column("Year", style="shelf.year", justify="right")
    if score:
        table.add_column("Score", style="shelf.score", justify="right")
    for position, item in enumerate(items, start=1):
        year = item.get("year")
        row = [
            str(position),
            str(item.get("id", "")),
            str(item.get("title", "")),
            str(item.get("author", "")),
            "—" if year is None else str(year),
        ]
        if score:
            row.append(str(item.get("score", "")))
        table.add_row(*(escape(cell) for cell in row))
    return table


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="shelf.error"),
        Text(f"  {result.op}", style="shelf.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation / single-record renderers ───────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add/remove/update results."""
    _status_line(console, result)
    for key in ("id", "title", "author", "year"):
        if key in result.data:
            _field(console, key, result.data[key])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]))


def _render_record(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    year = d.get("year")
    body = "\n".join(
        [
            f"author: {d.get('author', '')}",
            f"year: {'—' if year is None else year}",
        ]
    )
    title = f"{d.get('id', '?')} — {d.get('title', 'Untitled')}"
    console.print(Panel(Text(body), title=Text(title), border_style="dim", expand=False))


# ── Listing renderers ─────────────────────────────────────────────────


def _render_search(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Exact run, or nearby window followed by similarity suggestions."""
    d = result.data
    items = d.get("items", [])
    query = escape(str(d.get("query", "")))
    if d.get("match") == "exact":
        console.print(f"{len(items)} book(s) titled [shelf.title]{query}[/shelf.title]")
        console.print(_record_table(items))
        return

    console.print(f"No book titled [shelf.title]{query}[/shelf.title].")
    if items:
        console.print("\n[bold]Nearby titles[/bold]")
        console.print(_record_table(items))
    suggestions = d.get("suggestions", [])
    if suggestions:
        console.print("\n[bold]Similar titles[/bold]")
        console.print(_record_table(suggestions, score=True))


def _render_record_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render prefix, similar, and list results."""
    items = result.data.get("items", [])
    if result.op == "list":
        console.print(f"Sorted by [bold]{result.data.get('sort', 'title')}[/bold]")
    console.print(_record_table(items, score=result.op == "similar"))
    console.print(f"\n{result.data.get('count', len(items))} book(s)")


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="shelf.key")
    table.add_column()
    table.add_row("Total books", str(d.get("total", 0)))
    if d.get("total"):
        table.add_row("First title", escape(str(d.get("first_title"))))
        table.add_row("Last title", escape(str(d.get("last_title"))))
        table.add_row(
            "Top author",
            escape(f"{d.get('top_author')} ({d.get('top_author_count', 0)} books)"),
        )
    console.print(Panel(table, title="Catalog statistics", border_style="dim", expand=False))


_OP_RENDERERS: dict[str, Renderer] = {
    "add": _render_mutation,
    "remove": _render_mutation,
    "update": _render_mutation,
    "get": _render_record,
    "search": _render_search,
    "prefix": _render_record_table,
    "similar": _render_record_table,
    "list": _render_record_table,
    "stats": _render_stats,
}
