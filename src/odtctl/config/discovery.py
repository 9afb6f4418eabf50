"""Locate and read ``odtctl.toml``.

Lookup order: the ``ODTCTL_CONFIG`` environment variable, then the first
``odtctl.toml`` found walking up from the start directory.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from odtctl.config.models import OdtConfig

CONFIG_FILENAME = "odtctl.toml"
CONFIG_ENV_VAR = "ODTCTL_CONFIG"


class InvalidConfigError(ValueError):
    """The config file exists but is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid TOML in {path}: {reason}")


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    A set but dangling ``ODTCTL_CONFIG`` disables the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(path, str(exc)) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> OdtConfig:
    """Validate the TOML sections into an :class:`OdtConfig`.

    Defaults are returned when no file is given or discovered.
    """
    path = path or find_config(cwd)
    if path is None:
        return OdtConfig()
    return OdtConfig.model_validate(read_toml(path))
