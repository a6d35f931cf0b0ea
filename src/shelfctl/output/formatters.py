"""Dispatch a ServiceResult to the requested output mode.

- JSON (``--json``): the full result, machine-readable
- quiet (``-q``): identifiers only for listings, a status line otherwise
- human (default): Rich renderers keyed by ``result.op``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from shelfctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from shelfctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags relevant to formatting."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display; JSON wins over quiet."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
