"""CreateService — dated document creation pipeline.

Pipeline: VALIDATE → RESOLVE → FOLDER → BUILD → WRITE → EVENT → LAUNCH → RESPOND

Validation (month and filename) finishes before the first filesystem
change. An I/O failure stops the pipeline; a folder already created is
left in place. Launch failures are warnings only.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from odtctl.config.logging import run_context
from odtctl.domain.dates import ResolvedDate, resolve_date
from odtctl.domain.document import DocumentSpec
from odtctl.domain.errors import DomainValidationError
from odtctl.domain.odt import OdtOptions, build_odt
from odtctl.infrastructure.filesystem import (
    create_folder,
    resolve_document_path,
    write_document,
)
from odtctl.infrastructure.templates import build_template_environment
from odtctl.services.base import BaseService
from odtctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

_OP = "create_document"


class CreateService(BaseService):
    """Creates ``<output_root>/<YYYYMMDD>/<filename>.odt``."""

    def create_document(
        self,
        filename: str | None,
        *,
        body: str | None = None,
        month: int | None = None,
        today: date | None = None,
        open_document: bool = True,
    ) -> ServiceResult:
        """Create a dated ODT document.

        Args:
            filename: Name without extension; trimmed, must be non-empty.
            body: Paragraph text. Defaults to ``[document] default_body``.
            month: Explicit month 1-12, or None for the month after *today*.
            today: Reference date (defaults to the local calendar date).
            open_document: Try to open the file once written.
        """
        today = self._today(today)
        if body is None:
            body = self._settings.document.default_body

        # --- VALIDATE / RESOLVE ---
        try:
            resolved = resolve_date(today, month)
            doc = DocumentSpec.create(filename, body)
        except DomainValidationError as exc:
            return ServiceResult.failure(_OP, exc.code, str(exc), month=month)

        root = self._settings.output_root
        try:
            resolve_document_path(root / resolved.folder_name, doc.filename)
        except ValueError as exc:
            return ServiceResult.failure(_OP, "INVALID_FILENAME", str(exc), filename=doc.filename)

        with run_context(folder=resolved.folder_name, filename=doc.filename):
            logger.debug("Resolved %s to folder %s", month or "next month", resolved.folder_name)
            return self._materialize(resolved, doc, created=today, open_document=open_document)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _materialize(
        self,
        resolved: ResolvedDate,
        doc: DocumentSpec,
        *,
        created: date,
        open_document: bool,
    ) -> ServiceResult:
        root = self._settings.output_root

        # --- FOLDER / BUILD / WRITE ---
        try:
            folder = create_folder(root, resolved.folder_name)
            data = self._build(doc, created=created)
            path = write_document(folder, doc.filename, data)
        except OSError as exc:
            logger.error("Could not write document: %s", exc)
            return ServiceResult.failure(
                _OP,
                "IO_ERROR",
                f"Could not create document: {exc}",
                path=str(root / resolved.folder_name / doc.file_name),
                cause=type(exc).__name__,
            )

        # --- EVENT / LAUNCH ---
        warnings: list[str] = []
        opened = False
        if self._plugins is not None:
            warnings.extend(
                self._plugins.post_create(
                    folder=folder, path=path, filename=doc.filename, date=resolved.isoformat()
                )
            )
            if open_document and not self._settings.no_open:
                opened, launch_warnings = self._plugins.open_document(path)
                warnings.extend(launch_warnings)

        return ServiceResult(
            ok=True,
            op=_OP,
            data=self._payload(resolved, folder, path, doc, len(data), opened),
            warnings=warnings,
        )

    def _build(self, doc: DocumentSpec, *, created: date) -> bytes:
        cfg = self._settings.document
        options = OdtOptions(
            include_styles=cfg.include_styles,
            include_meta=cfg.include_meta,
            include_settings=cfg.include_settings,
            generator=cfg.generator,
            language=cfg.language,
            country=cfg.country,
        )
        env = build_template_environment("odt", output_root=self._settings.output_root)
        return build_odt(doc.body_text, options=options, created=created, env=env)

    @staticmethod
    def _payload(
        resolved: ResolvedDate,
        folder: Path,
        path: Path,
        doc: DocumentSpec,
        size: int,
        opened: bool,
    ) -> dict[str, object]:
        return {
            "path": str(path),
            "folder": str(folder),
            "folder_name": resolved.folder_name,
            "date": resolved.isoformat(),
            "filename": doc.file_name,
            "bytes": size,
            "opened": opened,
        }
