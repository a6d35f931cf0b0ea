"""Book record model and field validation.

INVARIANT: A record's identity is its ``identifier``.  Two records with the
same identifier are the same book regardless of title, author, or year.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel


class ValidationError(ValueError):
    """A required field is blank or a year is out of range."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field


class Record(BaseModel):
    """A single book entry.

    Records are frozen snapshots.  The catalog replaces a stored record on
    update instead of mutating it, so records handed to callers never alias
    the catalog's live sequence.
    """

    model_config = {"frozen": True}

    title: str
    author: str
    identifier: str
    year: int | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.identifier,
            "title": self.title,
            "author": self.author,
            "year": self.year,
        }


def current_year() -> int:
    """The latest year a record may carry."""
    return datetime.now(UTC).year


def require_text(value: str | None, field: str) -> str:
    """Return *value* trimmed, or raise if it is blank."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} cannot be empty", field=field)
    return text


def validate_year(year: int) -> int:
    """Return *year* if it lies in ``[0, current_year()]``."""
    upper = current_year()
    if year < 0 or year > upper:
        raise ValidationError(f"Invalid year {year}: must be between 0 and {upper}", field="year")
    return year
