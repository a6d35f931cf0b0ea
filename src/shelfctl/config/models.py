"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``shelfctl.toml`` only holds
overrides.  An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    """[source] section: the CSV the catalog is loaded from."""

    model_config = {"frozen": True}

    path: Path = Path("books.csv")
    encoding: str = "utf-8"


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    nearby_radius: int = Field(default=5, ge=0)
    similar_limit: int = Field(default=10, ge=1)

