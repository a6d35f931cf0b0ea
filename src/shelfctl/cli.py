"""Root CLI group for shelfctl with global flags and command registration."""

from __future__ import annotations

import click

from shelfctl import __version__
from shelfctl.commands import register_commands
from shelfctl.commands._base import ShelfGroup
from shelfctl.commands._context import AppContext
from shelfctl.config.settings import ShelfSettings

_CLI_EXAMPLES = """\
  shelfctl query search "Dom Casmurro"
  shelfctl --source ~/books.csv query list --sort year
  shelfctl --json query stats
  shelfctl shell"""


@click.group(cls=ShelfGroup, invoke_without_command=True, examples=_CLI_EXAMPLES)
@click.version_option(version=__version__, prog_name="shelfctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (identifiers only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-s",
    "--source",
    "source_path",
    default=None,
    help="CSV file to load books from (overrides [source] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    source_path: str | None,
) -> None:
    """shelfctl: in-memory book catalog with title search."""
    settings = ShelfSettings.from_cli(
        config_path=config_path,
        source_path=source_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
