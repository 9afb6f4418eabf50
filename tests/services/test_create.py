"""Tests for CreateService — the dated document pipeline."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import pluggy
import pytest
import structlog

from odtctl.config.settings import OdtSettings
from odtctl.domain.odt import extract_text, inspect_odt
from odtctl.plugins.manager import PluginManager
from odtctl.services.create import CreateService

hookimpl = pluggy.HookimplMarker("odtctl")


def _entries(root: Path) -> list[Path]:
    return sorted(root.rglob("*"))


class TestEndToEnd:
    def test_next_month(self, settings: OdtSettings, fixed_today: date) -> None:
        result = CreateService(settings).create_document("meeting-notes", today=fixed_today)
        assert result.ok, result.error
        path = settings.output_root / "20250806" / "meeting-notes.odt"
        assert result.data["path"] == str(path)
        assert result.data["folder_name"] == "20250806"
        assert result.data["date"] == "2025-08-06"
        assert inspect_odt(path.read_bytes()).ok

    def test_explicit_later_month(self, settings: OdtSettings, fixed_today: date) -> None:
        result = CreateService(settings).create_document(
            "quarterly-report", month=9, today=fixed_today
        )
        assert result.ok
        assert (settings.output_root / "20250903" / "quarterly-report.odt").is_file()

    def test_explicit_earlier_month_next_year(
        self, settings: OdtSettings, fixed_today: date
    ) -> None:
        result = CreateService(settings).create_document("plan", month=3, today=fixed_today)
        assert result.ok
        assert result.data["folder_name"] == "20260304"

    def test_body_text_written(self, settings: OdtSettings, fixed_today: date) -> None:
        result = CreateService(settings).create_document(
            "notes", body="Agenda: budget", today=fixed_today
        )
        assert extract_text(Path(result.data["path"]).read_bytes()) == ["Agenda: budget"]

    def test_default_body_from_config(self, output_root: Path, fixed_today: date) -> None:
        (output_root / "odtctl.toml").write_text('[document]\ndefault_body = "From config"\n')
        settings = OdtSettings.from_cli(output_root=output_root)
        result = CreateService(settings).create_document("notes", today=fixed_today)
        assert extract_text(Path(result.data["path"]).read_bytes()) == ["From config"]

    def test_meta_creation_date_is_today(self, settings: OdtSettings, fixed_today: date) -> None:
        import zipfile

        result = CreateService(settings).create_document("notes", today=fixed_today)
        with zipfile.ZipFile(result.data["path"]) as zf:
            assert b"2025-07-15T00:00:00" in zf.read("meta.xml")

    def test_filename_trimmed(self, settings: OdtSettings, fixed_today: date) -> None:
        result = CreateService(settings).create_document("  padded  ", today=fixed_today)
        assert result.data["filename"] == "padded.odt"

    def test_rerun_overwrites(self, settings: OdtSettings, fixed_today: date) -> None:
        svc = CreateService(settings)
        svc.create_document("notes", body="first", today=fixed_today)
        result = svc.create_document("notes", body="second", today=fixed_today)
        assert result.ok
        assert extract_text(Path(result.data["path"]).read_bytes()) == ["second"]
        assert len(list((settings.output_root / "20250806").iterdir())) == 1


class TestValidation:
    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month_creates_nothing(
        self, settings: OdtSettings, fixed_today: date, month: int
    ) -> None:
        result = CreateService(settings).create_document("notes", month=month, today=fixed_today)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_MONTH"
        assert _entries(settings.output_root) == []

    @pytest.mark.parametrize("filename", ["", "   ", None])
    def test_empty_filename_creates_nothing(
        self, settings: OdtSettings, fixed_today: date, filename: str | None
    ) -> None:
        result = CreateService(settings).create_document(filename, today=fixed_today)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "EMPTY_FILENAME"
        assert _entries(settings.output_root) == []

    def test_traversal_filename_creates_nothing(
        self, settings: OdtSettings, fixed_today: date
    ) -> None:
        result = CreateService(settings).create_document("../../escape", today=fixed_today)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_FILENAME"
        assert _entries(settings.output_root) == []

    @pytest.mark.parametrize("month", [1, 12])
    def test_boundary_months_succeed(
        self, settings: OdtSettings, fixed_today: date, month: int
    ) -> None:
        assert CreateService(settings).create_document("n", month=month, today=fixed_today).ok


class TestIoErrors:
    def test_folder_blocked_by_file(self, settings: OdtSettings, fixed_today: date) -> None:
        (settings.output_root / "20250806").write_text("in the way")
        result = CreateService(settings).create_document("notes", today=fixed_today)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IO_ERROR"
        assert result.error.detail["cause"]

    def test_write_failure_keeps_folder(
        self, settings: OdtSettings, fixed_today: date, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail(*_args: Any, **_kwargs: Any) -> Path:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("odtctl.services.create.write_document", _fail)
        result = CreateService(settings).create_document("notes", today=fixed_today)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IO_ERROR"
        assert "Permission denied" in result.error.message
        assert (settings.output_root / "20250806").is_dir()
        assert not (settings.output_root / "20250806" / "notes.odt").exists()

    def test_build_failure_writes_nothing(
        self, settings: OdtSettings, fixed_today: date, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail(*_args: Any, **_kwargs: Any) -> bytes:
            raise OSError("disk full")

        monkeypatch.setattr("odtctl.services.create.build_odt", _fail)
        result = CreateService(settings).create_document("notes", today=fixed_today)
        assert not result.ok
        assert not (settings.output_root / "20250806" / "notes.odt").exists()


class TestPluginsAndLaunch:
    def test_post_create_event(
        self,
        settings: OdtSettings,
        plugins: PluginManager,
        recording_plugin: Any,
        fixed_today: date,
    ) -> None:
        result = CreateService(settings, plugins).create_document("notes", today=fixed_today)
        assert result.ok
        assert recording_plugin.created == [
            {
                "folder": str(settings.output_root / "20250806"),
                "path": result.data["path"],
                "filename": "notes",
                "date": "2025-08-06",
            }
        ]

    def test_opens_document(
        self,
        settings: OdtSettings,
        plugins: PluginManager,
        recording_plugin: Any,
        fixed_today: date,
    ) -> None:
        result = CreateService(settings, plugins).create_document("notes", today=fixed_today)
        assert result.data["opened"] is True
        assert recording_plugin.opened == [result.data["path"]]
        assert result.warnings == []

    def test_open_skipped(
        self,
        settings: OdtSettings,
        plugins: PluginManager,
        recording_plugin: Any,
        fixed_today: date,
    ) -> None:
        result = CreateService(settings, plugins).create_document(
            "notes", today=fixed_today, open_document=False
        )
        assert result.data["opened"] is False
        assert recording_plugin.opened == []

    def test_no_open_setting(
        self,
        output_root: Path,
        plugins: PluginManager,
        recording_plugin: Any,
        fixed_today: date,
    ) -> None:
        settings = OdtSettings.from_cli(output_root=output_root, no_open=True)
        CreateService(settings, plugins).create_document("notes", today=fixed_today)
        assert recording_plugin.opened == []

    def test_launch_failure_is_warning(
        self,
        settings: OdtSettings,
        plugins: PluginManager,
        recording_plugin: Any,
        fixed_today: date,
    ) -> None:
        recording_plugin.opens = False
        result = CreateService(settings, plugins).create_document("notes", today=fixed_today)
        assert result.ok
        assert result.data["opened"] is False
        assert any("open it manually" in w for w in result.warnings)
        assert Path(result.data["path"]).is_file()

    def test_raising_plugin_is_warning(self, settings: OdtSettings, fixed_today: date) -> None:
        manager = PluginManager()
        manager.register_plugin(_CrashingLauncher(), name="crasher")
        result = CreateService(settings, manager).create_document("notes", today=fixed_today)
        assert result.ok
        assert result.data["opened"] is False
        assert any("launcher crashed" in w for w in result.warnings)


class _CrashingLauncher:
    @hookimpl
    def open_document(self, path: str) -> bool:
        raise RuntimeError("launcher crashed")


class TestLogContext:
    def test_context_cleared_after_success(self, settings: OdtSettings, fixed_today: date) -> None:
        assert CreateService(settings).create_document("notes", today=fixed_today).ok
        assert "folder" not in structlog.contextvars.get_contextvars()

    def test_context_cleared_after_io_error(
        self, settings: OdtSettings, fixed_today: date
    ) -> None:
        (settings.output_root / "20250806").write_text("in the way")
        assert not CreateService(settings).create_document("notes", today=fixed_today).ok
        assert "filename" not in structlog.contextvars.get_contextvars()
