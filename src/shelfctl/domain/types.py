"""Classification enums and the three-way year change.

``SortKey`` is the closed set of orderings a caller may ask for.
``YearChange`` keeps "leave the year alone", "clear the year" and "set
the year" as distinct values; only the shell still reads ``-1`` as "clear".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

CLEAR_YEAR_INPUT = -1


class SortKey(StrEnum):
    """Orderings available for listing the catalog."""

    TITLE = "title"
    AUTHOR = "author"
    YEAR = "year"


class YearAction(StrEnum):
    """What an update does to a record's year."""

    UNCHANGED = "unchanged"
    CLEAR = "clear"
    SET = "set"


@dataclass(frozen=True, slots=True)
class YearChange:
    """Year argument for ``Catalog.update``.

    Build instances through the classmethods; ``value`` is only meaningful
    when ``action`` is ``SET``.
    """

    action: YearAction = YearAction.UNCHANGED
    value: int | None = None

    @classmethod
    def unchanged(cls) -> YearChange:
        return cls(YearAction.UNCHANGED)

    @classmethod
    def clear(cls) -> YearChange:
        return cls(YearAction.CLEAR)

    @classmethod
    def set_to(cls, year: int) -> YearChange:
        return cls(YearAction.SET, year)

    @classmethod
    def from_input(cls, raw: int | None) -> YearChange:
        """Map the shell convention (blank / ``-1`` / year) to a change.

        Examples:
            >>> YearChange.from_input(None).action
            <YearAction.UNCHANGED: 'unchanged'>
            >>> YearChange.from_input(-1).action
            <YearAction.CLEAR: 'clear'>
            >>> YearChange.from_input(1999).value
            1999
        """
        if raw is None:
            return cls.unchanged()
        if raw == CLEAR_YEAR_INPUT:
            return cls.clear()
        return cls.set_to(raw)

    @property
    def is_unchanged(self) -> bool:
        return self.action is YearAction.UNCHANGED
