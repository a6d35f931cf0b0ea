"""Subcommand modules for shelfctl.

``register_commands()`` imports command modules lazily to keep
``shelfctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the query group and the interactive shell."""
    from shelfctl.commands.query import query
    from shelfctl.commands.shell import shell

    cli.add_command(query)
    cli.add_command(shell)
