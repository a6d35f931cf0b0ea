"""Rich Console factory and theme for shelfctl output.

Consoles render into a StringIO buffer so that renderers stay pure
``ServiceResult -> str`` functions.  Rich drops color codes by itself
when the output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SHELF_THEME = Theme(
    {
        "shelf.ok": "bold green",
        "shelf.error": "bold red",
        "shelf.warning": "bold yellow",
        "shelf.op": "bold cyan",
        "shelf.key": "dim",
        "shelf.id": "bold blue",
        "shelf.title": "bold",
        "shelf.author": "green",
        "shelf.year": "cyan",
        "shelf.score": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Fixed width, for stable output in tests.
    """
    return Console(
        file=StringIO(),
        theme=SHELF_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
