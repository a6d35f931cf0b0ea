"""AppContext: shared Click context for all commands.

Created once by the root group and passed down with ``@click.pass_obj``.
Loads the catalog lazily, so ``--help`` and ``--version`` never read the
record source, and centralizes result emission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import structlog

from shelfctl.config.logging import configure_logging
from shelfctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from shelfctl.config.settings import ShelfSettings
    from shelfctl.infrastructure.catalog import Catalog
    from shelfctl.services.catalog import CatalogService
    from shelfctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class AppContext:
    """Settings, the process's single Catalog, and output routing."""

    def __init__(self, settings: ShelfSettings) -> None:
        self.settings = settings
        self._catalog: Catalog | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def catalog(self) -> Catalog:
        """The catalog, loaded from the record source on first access."""
        if self._catalog is None:
            from shelfctl.infrastructure.catalog import Catalog
            from shelfctl.infrastructure.sources import CsvRecordSource

            source = CsvRecordSource(
                self.settings.source_path, encoding=self.settings.source.encoding
            )
            records = source.load()
            if not records:
                log.info("catalog.empty", source=str(self.settings.source_path))
            self._catalog = Catalog(records, nearby_radius=self.settings.search.nearby_radius)
        return self._catalog

    @property
    def service(self) -> CatalogService:
        from shelfctl.services.catalog import CatalogService

        return CatalogService(self.catalog, similar_limit=self.settings.search.similar_limit)

    def render(self, result: ServiceResult) -> str:
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        return format_result(result, settings=settings)

    def emit(self, result: ServiceResult) -> None:
        """Output a ServiceResult with the right stream and exit code.

        * Success: stdout; warnings go to stderr (already inside the
          payload in JSON mode).
        * Failure: stderr, then exit code 1.
        """
        output = self.render(result)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
