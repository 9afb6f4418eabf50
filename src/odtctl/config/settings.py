"""OdtSettings: one frozen object built from every configuration layer.

Highest priority first:

1. keyword arguments (the CLI flags)
2. ``ODTCTL_*`` environment variables, ``__`` separating nested keys
   (``ODTCTL_LAUNCHER__ENABLED=false``)
3. the discovered ``odtctl.toml``
4. model defaults; ``output_root`` defaults to the config file's
   directory, or the current directory without one
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from odtctl.config.discovery import InvalidConfigError, find_config, read_toml
from odtctl.config.models import DocumentConfig, LauncherConfig, PluginsConfig

# The TOML file and fallback output root chosen by ``from_cli`` for the
# settings being constructed.
_active_source: ContextVar[tuple[Path | None, Path | None]] = ContextVar(
    "odtctl_active_source", default=(None, None)
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feeds the top-level tables and keys of a TOML file to pydantic-settings."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        toml_path: Path | None,
        fallback_root: Path | None = None,
    ) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            try:
                self._data = read_toml(toml_path)
            except InvalidConfigError as exc:
                raise click.ClickException(str(exc)) from exc
        if fallback_root is not None:
            self._data.setdefault("output_root", fallback_root)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        known = self.settings_cls.model_fields
        return {key: value for key, value in self._data.items() if key in known}


class OdtSettings(BaseSettings):
    """Settings for a single odtctl run.

    Attributes:
        output_root: Where dated folders are created. The directory of
            the config file, or the current directory without one.
        config_path: The ``odtctl.toml`` in effect, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="ODTCTL_",
        env_nested_delimiter="__",
    )

    output_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False
    no_open: bool = False

    document: DocumentConfig = Field(default_factory=DocumentConfig)
    launcher: LauncherConfig = Field(default_factory=LauncherConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, *_active_source.get())
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        output_root: Path | None = None,
        **cli_flags: Any,
    ) -> OdtSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* that does not exist means "no config";
        it never falls back to discovery. An explicit *output_root* beats
        ``ODTCTL_OUTPUT_ROOT``; without either, the fallback root applies.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(output_root)

        init: dict[str, Any] = {"config_path": toml_path, **cli_flags}
        if output_root is not None:
            init["output_root"] = output_root
        fallback_root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _active_source.set((toml_path, fallback_root))
        try:
            return cls(**init)
        finally:
            _active_source.reset(token)
