"""Settings for edgy, merged from CLI flags, env vars and a TOML file.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags or explicit arguments
  2. Env vars: ``EDGY_*`` prefix (``EDGY_DATABASE__URL`` for nesting)
  3. TOML file: ``edgy.toml`` or ``[tool.edgy]`` in pyproject.toml
  4. Code defaults: baked into the section models

Relative SQLite paths are resolved against ``root`` (the directory of the
config file), so every subdirectory of a project opens the same database.
The settings object is passed explicitly to whatever needs it; nothing
reads it from a global.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from sqlalchemy.engine import make_url

from edgy.config.discovery import find_config, read_config
from edgy.config.models import DatabaseConfig, TraversalConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings data from the discovered config file (empty when there is none)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = read_config(path) if path and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The config path chosen by from_cli(), visible to settings_customise_sources.
_pending = threading.local()


class EdgySettings(BaseSettings):
    """Settings for the edgy library and CLI.

    Attributes:
        root: Directory of the config file (cwd when there is none).
        config_path: The config file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "EDGY_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    traversal: TraversalConfig = Field(default_factory=TraversalConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_pending, "path", None)),
        )

    @property
    def database_url(self) -> str:
        """``database.url`` with a relative SQLite path made absolute under ``root``."""
        url = make_url(self.database.url)
        if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
            return self.database.url
        path = Path(url.database)
        if path.is_absolute():
            return self.database.url
        return url.set(database=str(self.root / path)).render_as_string(hide_password=False)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        database_url: str | None = None,
        **cli_flags: Any,
    ) -> EdgySettings:
        """Resolve settings for a CLI invocation or a library caller.

        *config_path* skips discovery. *database_url* and *cli_flags* win
        over every other source.

        Raises:
            InvalidArgument: the config file is not valid TOML.
        """
        path = Path(config_path) if config_path else find_config(root)
        if path is not None and not path.is_file():
            path = None

        overrides: dict[str, Any] = dict(cli_flags)
        if database_url:
            overrides["database"] = {"url": database_url}

        _pending.path = path
        try:
            return cls(
                root=root or (path.parent if path else Path.cwd()),
                config_path=path,
                **overrides,
            )
        finally:
            _pending.path = None
