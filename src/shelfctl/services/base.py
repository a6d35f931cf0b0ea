"""BaseService: shared foundation for services over a Catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shelfctl.infrastructure.catalog import Catalog


class BaseService:
    """Base for service-layer classes.

    Every service receives the :class:`Catalog` it operates on at
    construction time and never keeps a reference to its records.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
