"""Command: interactive menu loop over one in-memory catalog.

The catalog lives only as long as the shell; nothing is written back to
the record source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfCommand
from shelfctl.domain.records import current_year
from shelfctl.domain.types import CLEAR_YEAR_INPUT, SortKey, YearChange

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext
    from shelfctl.services.result import ServiceResult

_MENU = """
==================================================
                    MAIN MENU
==================================================
  1. Add a book
  2. Remove a book
  3. Update a book
  4. Search by title
  5. Similar titles
  6. List all books
  7. Statistics
  8. Quit
=================================================="""

_QUIT = 8


@click.command(
    cls=ShelfCommand,
    examples="""\
  shelfctl shell
  shelfctl --source ~/books.csv shell""",
)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Interactive catalog shell (changes last until you quit)."""
    click.echo(f"Library shell — {len(app.catalog)} book(s) loaded.")
    actions = {
        1: _add,
        2: _remove,
        3: _update,
        4: _search,
        5: _similar,
        6: _list,
        7: _stats,
    }
    try:
        while True:
            click.echo(_MENU)
            choice = click.prompt("Choose an option", type=click.IntRange(1, _QUIT))
            if choice == _QUIT:
                break
            actions[choice](app)
    except click.Abort:
        click.echo()
    click.echo("Goodbye!")


# ── Actions ───────────────────────────────────────────────────────────


def _show(app: AppContext, result: ServiceResult) -> None:
    click.echo(app.render(result), err=not result.ok)


def _add(app: AppContext) -> None:
    title = _prompt_text("Title")
    author = _prompt_text("Author")
    year = _prompt_year("Publication year (blank if unknown)", allow_clear=False)
    result = app.service.add(title, author, year)
    _show(app, result)
    if result.ok:
        click.echo("Keep this identifier for updates and removal.")


def _remove(app: AppContext) -> None:
    identifier = _prompt_text("Identifier of the book to remove")
    found = app.service.get(identifier)
    _show(app, found)
    if not found.ok:
        return
    if click.confirm("Remove this book?", default=False):
        _show(app, app.service.remove(identifier))
    else:
        click.echo("Cancelled.")


def _update(app: AppContext) -> None:
    identifier = _prompt_text("Identifier of the book to update")
    found = app.service.get(identifier)
    _show(app, found)
    if not found.ok:
        return
    click.echo("Leave a field blank to keep its current value.")
    title = _prompt_text("New title")
    author = _prompt_text("New author")
    year = _prompt_year(f"New year ({CLEAR_YEAR_INPUT} clears it)", allow_clear=True)
    if not title and not author and year is None:
        click.echo("No changes made.")
        return
    _show(
        app,
        app.service.update(
            identifier,
            title=title,
            author=author,
            year=YearChange.from_input(year),
        ),
    )


def _search(app: AppContext) -> None:
    _show(app, app.service.search(_prompt_text("Title")))


def _similar(app: AppContext) -> None:
    _show(app, app.service.similar(_prompt_text("Title (approximate)")))


def _list(app: AppContext) -> None:
    sort = click.prompt(
        "Sort by",
        type=click.Choice([key.value for key in SortKey]),
        default=SortKey.TITLE.value,
    )
    _show(app, app.service.list_records(sort=sort))


def _stats(app: AppContext) -> None:
    _show(app, app.service.stats())


# ── Prompts ───────────────────────────────────────────────────────────


def _prompt_text(label: str) -> str:
    return str(click.prompt(label, default="", show_default=False)).strip()


def _prompt_year(label: str, *, allow_clear: bool) -> int | None:
    """Ask until the answer is blank, a valid year, or (if allowed) -1."""
    upper = current_year()
    while True:
        raw = _prompt_text(label)
        if not raw:
            return None
        try:
            year = int(raw)
        except ValueError:
            click.echo("Please enter a number, or leave blank.", err=True)
            continue
        if allow_clear and year == CLEAR_YEAR_INPUT:
            return year
        if 0 <= year <= upper:
            return year
        click.echo(f"Invalid year: must be between 0 and {upper}.", err=True)
