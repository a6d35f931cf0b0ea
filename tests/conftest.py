"""Shared pytest fixtures and test helpers for shelfctl tests."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from shelfctl.domain.records import Record
from shelfctl.infrastructure.catalog import Catalog

SAMPLE_CSV = """\
title,author,isbn,year
Dom Casmurro,Machado de Assis,9788535910663,1899
Iracema,José de Alencar,9788508133020,1865
"Memórias Póstumas de Brás Cubas",Machado de Assis,9788535910664,1881
O Cortiço,Aluísio Azevedo,9788508133021,
Quincas Borba,Machado de Assis,9788535910665,1891
"""

_ids = itertools.count(1)


def make_record(
    title: str,
    author: str = "Anonymous",
    *,
    identifier: str | None = None,
    year: int | None = None,
) -> Record:
    """Build a Record with a unique 13-digit identifier unless one is given."""
    return Record(
        title=title,
        author=author,
        identifier=identifier or f"{next(_ids):013d}",
        year=year,
    )


def titles(records: list[Record]) -> list[str]:
    return [r.title for r in records]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def books_csv(tmp_path: Path) -> Path:
    """A small CSV record source."""
    path = tmp_path / "books.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def catalog() -> Catalog:
    """A catalog seeded with a handful of records, deliberately unsorted."""
    return Catalog(
        [
            make_record("Quincas Borba", "Machado de Assis", year=1891),
            make_record("Dom Casmurro", "Machado de Assis", year=1899),
            make_record("Iracema", "José de Alencar", year=1865),
            make_record("O Cortiço", "Aluísio Azevedo"),
        ]
    )


@pytest.fixture
def _isolated_source(
    tmp_path: Path, books_csv: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Run CLI commands from a directory holding ``books.csv`` and no config.

    Use via ``@pytest.mark.usefixtures("_isolated_source")``.
    """
    monkeypatch.delenv("SHELFCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo ``configure_logging`` so CLI tests do not leak handlers."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    shelf_level = logging.getLogger("shelfctl").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("shelfctl").setLevel(shelf_level)
    structlog.reset_defaults()
