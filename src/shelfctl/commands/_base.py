"""Click base classes that add an ``--examples`` flag.

``--help`` stays about options; ``--examples`` prints ready-to-paste
invocations for the command and exits.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager ``--examples`` flag bound to one command's example text."""

    def __init__(self, examples: str) -> None:
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._show,
            help="Show usage examples.",
        )
        self.examples = examples

    def _show(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class _ExamplesMixin:
    params: list[click.Parameter]
    examples: str | None

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))


class ShelfCommand(_ExamplesMixin, click.Command):
    """Command that takes an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class ShelfGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are :class:`ShelfCommand` by default."""

    command_class = ShelfCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)
