"""Unified settings: CLI flags, env vars, and TOML config in one object.

Sources, strongest first:
  1. CLI flags (init kwargs from Click)
  2. ``SHELFCTL_*`` env vars, ``__`` separating section and key
     (``SHELFCTL_SEARCH__NEARBY_RADIUS=3``)
  3. ``shelfctl.toml``: ``--config``, else ``SHELFCTL_CONFIG``, else the
     nearest one in the working directory or a parent
  4. Defaults on the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from shelfctl.config.models import SearchConfig, SourceConfig

CONFIG_FILENAME = "shelfctl.toml"
CONFIG_ENV_VAR = "SHELFCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate ``shelfctl.toml`` for *start* (default: the working directory).

    ``SHELFCTL_CONFIG`` names the file outright.  Otherwise the nearest
    file in *start* or one of its parents wins, the way git finds ``.git``.
    """
    named = os.environ.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        if (directory / CONFIG_FILENAME).is_file():
            return directory / CONFIG_FILENAME
    return None


def read_toml(path: Path | None) -> dict[str, Any]:
    """Parse *path*, or return ``{}`` when there is no file.

    Raises:
        click.ClickException: The file exists but is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by an already-located ``shelfctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._values = read_toml(path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, field_name in self._values

    def __call__(self) -> dict[str, Any]:
        return dict(self._values)


# settings_customise_sources is a classmethod; the located file reaches it here.
_located = threading.local()


def _locate_config(config_path: str | None, root: Path | None) -> Path | None:
    if config_path:
        explicit = Path(config_path)
        return explicit if explicit.is_file() else None
    return find_config(root)


class ShelfSettings(BaseSettings):
    """Settings for one CLI invocation, frozen once built.

    Attributes:
        root: Directory a relative ``[source] path`` resolves against: the
            config file's directory, else the working directory.
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SHELFCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    source: SourceConfig = Field(default_factory=SourceConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlConfigSource(settings_cls, getattr(_located, "path", None))
        return init_settings, env_settings, toml

    @property
    def source_path(self) -> Path:
        """The CSV to load, resolved against :attr:`root` when relative."""
        path = self.source.path.expanduser()
        return path if path.is_absolute() else self.root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        source_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> ShelfSettings:
        """Build settings for one invocation.

        ``--config`` replaces discovery.  ``--source`` is taken relative to
        the working directory rather than the config file.
        """
        located = _locate_config(config_path, root)
        if root is None:
            root = located.parent if located else Path.cwd()

        _located.path = located
        try:
            settings = cls(root=root, config_path=located, **cli_flags)
        finally:
            _located.path = None

        if not source_path:
            return settings
        source = settings.source.model_copy(
            update={"path": Path(source_path).expanduser().resolve()}
        )
        return settings.model_copy(update={"source": source})
