"""Lookup keys for title comparison.

Two titles are "the same for search purposes" when their normalized keys
are equal: case and diacritics are ignored, everything else is kept.
"""

from __future__ import annotations

import unicodedata


def normalize(text: str | None) -> str:
    """Return the lowercase, diacritic-free key for *text*.

    NFD decomposes accented characters into base letter + combining marks
    and the marks are dropped.  Lowercasing happens before decomposition
    so that characters whose lowercase form carries a mark (``"İ"``) lose
    it too.  ``None`` and the empty string both yield ``""``.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
