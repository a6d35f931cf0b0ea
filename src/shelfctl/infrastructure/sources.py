"""Record sources: where the initial, unordered records come from.

A source never raises for bad data: unreadable files yield no records and
malformed rows are skipped, each with a logged warning.  The catalog only
ever sees complete records.

CSV layout (header row required, quoted fields allowed)::

    title,author,isbn,year
    "Dom Casmurro",Machado de Assis,9788535910663,1899
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Protocol

import structlog

from shelfctl.domain.records import Record

log = structlog.get_logger(__name__)

MIN_FIELDS = 4


class RecordSource(Protocol):
    """Anything that can produce the catalog's initial records."""

    def load(self) -> list[Record]: ...


class CsvRecordSource:
    """Load records from a ``title,author,isbn,year`` CSV file."""

    def __init__(self, path: Path, *, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding

    def load(self) -> list[Record]:
        if not self.path.is_file():
            log.warning("source.missing", path=str(self.path))
            return []
        try:
            with self.path.open(encoding=self.encoding, newline="") as fh:
                reader = csv.reader(fh)
                next(reader, None)  # header
                records = [
                    record
                    for line_no, row in enumerate(reader, start=2)
                    if (record := parse_row(row, line_no)) is not None
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            log.warning("source.unreadable", path=str(self.path), error=str(exc))
            return []
        log.debug("source.loaded", path=str(self.path), count=len(records))
        return records


def parse_row(row: list[str], line_no: int = 0) -> Record | None:
    """Turn one CSV row into a Record, or None if it is unusable.

    An unparseable year becomes ``None`` rather than rejecting the row.
    """
    if len(row) < MIN_FIELDS:
        if row:
            log.warning("source.row_skipped", line=line_no, reason="too few fields")
        return None
    title, author, identifier, raw_year = (field.strip() for field in row[:MIN_FIELDS])
    if not title or not author or not identifier:
        log.warning("source.row_skipped", line=line_no, reason="blank required field")
        return None
    year: int | None = None
    if raw_year:
        try:
            year = int(raw_year)
        except ValueError:
            log.debug("source.year_ignored", line=line_no, value=raw_year)
    return Record(title=title, author=author, identifier=identifier, year=year)
