"""Command group: title search, lookups, listings, and statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfGroup
from shelfctl.domain.types import SortKey

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  shelfctl query search "Dom Casmurro"
  shelfctl query prefix "the lord"
  shelfctl query similar "harry poter" --limit 5
  shelfctl query get 9788535910663
  shelfctl query list --sort author
  shelfctl query stats"""


@click.group(cls=ShelfGroup, examples=_QUERY_EXAMPLES)
def query() -> None:
    """Search, list, and summarize the catalog."""


@query.command(
    examples="""\
  shelfctl query search "Dom Casmurro"
  shelfctl query search "memorias postumas"
  shelfctl --json query search Iracema"""
)
@click.argument("title")
@click.pass_obj
def search(app: AppContext, title: str) -> None:
    """Exact title search (case and accents ignored).

    When no title matches, shows the nearby titles in sort order and the
    most similar titles.
    """
    app.emit(app.service.search(title))


@query.command(
    examples="""\
  shelfctl query prefix "the"
  shelfctl -q query prefix harry"""
)
@click.argument("text")
@click.pass_obj
def prefix(app: AppContext, text: str) -> None:
    """Books whose title starts with TEXT."""
    app.emit(app.service.prefix(text))


@query.command(
    examples="""\
  shelfctl query similar "harry poter"
  shelfctl query similar "senhor aneis" --limit 3"""
)
@click.argument("text")
@click.option("--limit", default=None, type=click.IntRange(min=1), help="Max results.")
@click.pass_obj
def similar(app: AppContext, text: str, limit: int | None) -> None:
    """Fuzzy title matches, best first."""
    app.emit(app.service.similar(text, limit=limit))


@query.command(
    examples="""\
  shelfctl query get 9788535910663
  shelfctl --json query get 9788535910663"""
)
@click.argument("identifier")
@click.pass_obj
def get(app: AppContext, identifier: str) -> None:
    """Show one book by its 13-digit identifier."""
    app.emit(app.service.get(identifier))


@query.command(
    name="list",
    examples="""\
  shelfctl query list
  shelfctl query list --sort author
  shelfctl query list --sort year""",
)
@click.option(
    "--sort",
    type=click.Choice([key.value for key in SortKey]),
    default=SortKey.TITLE.value,
    help="Sort key (books without a year list last).",
)
@click.pass_obj
def list_cmd(app: AppContext, sort: str) -> None:
    """List every book."""
    app.emit(app.service.list_records(sort=sort))


@query.command(examples="  shelfctl query stats")
@click.pass_obj
def stats(app: AppContext) -> None:
    """Total count, first and last titles, and the top author."""
    app.emit(app.service.stats())
