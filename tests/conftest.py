"""Shared pytest fixtures and test helpers for odtctl tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pluggy
import pytest
from click.testing import CliRunner

from odtctl.config.settings import OdtSettings
from odtctl.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("odtctl")

JULY_15_2025 = date(2025, 7, 15)


@pytest.fixture(autouse=True)
def _quiet_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never launch real applications or load installed plugins during tests."""
    monkeypatch.delenv("ODTCTL_CONFIG", raising=False)
    monkeypatch.delenv("ODTCTL_OUTPUT_ROOT", raising=False)
    monkeypatch.setenv("ODTCTL_LAUNCHER__ENABLED", "false")
    monkeypatch.setenv("ODTCTL_PLUGINS__ENABLED", "false")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fixed_today() -> date:
    return JULY_15_2025


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """Empty directory that receives dated folders."""
    root = tmp_path / "out"
    root.mkdir()
    return root


@pytest.fixture
def settings(output_root: Path) -> OdtSettings:
    return OdtSettings.from_cli(output_root=output_root)


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI writes there.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Plugin helpers
# ---------------------------------------------------------------------------


class RecordingPlugin:
    """Records hook calls; opens documents successfully unless told otherwise."""

    def __init__(self, *, opens: bool | None = True) -> None:
        self.opens = opens
        self.created: list[dict[str, str]] = []
        self.opened: list[str] = []

    @hookimpl
    def post_create(self, folder: str, path: str, filename: str, date: str) -> None:
        self.created.append({"folder": folder, "path": path, "filename": filename, "date": date})

    @hookimpl
    def open_document(self, path: str) -> bool | None:
        self.opened.append(path)
        return self.opens


@pytest.fixture
def recording_plugin() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def plugins(recording_plugin: RecordingPlugin) -> PluginManager:
    manager = PluginManager()
    manager.register_plugin(recording_plugin, name="recorder")
    return manager
