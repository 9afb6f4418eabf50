"""VerifyService — check an existing .odt file's package structure."""

from __future__ import annotations

from pathlib import Path

from odtctl.domain.odt import extract_text, inspect_odt
from odtctl.infrastructure.filesystem import read_document
from odtctl.services.base import BaseService
from odtctl.services.result import ServiceResult

_OP = "verify_document"


class VerifyService(BaseService):
    """Reads a document and reports packaging problems."""

    def verify(self, path: Path) -> ServiceResult:
        if not path.is_file():
            return ServiceResult.failure(_OP, "NOT_FOUND", f"No such file: {path}", path=str(path))
        try:
            data = read_document(path)
        except OSError as exc:
            return ServiceResult.failure(
                _OP, "IO_ERROR", f"Could not read {path}: {exc}", path=str(path)
            )

        report = inspect_odt(data)
        payload: dict[str, object] = {
            "path": str(path),
            "entries": report.entries,
            "manifest_entries": report.manifest_entries,
        }
        if not report.ok:
            return ServiceResult.failure(
                _OP,
                "INVALID_PACKAGE",
                f"{len(report.issues)} problem(s) in {path.name}",
                data={**payload, "issues": report.issues},
                issues=report.issues,
            )

        payload["paragraphs"] = extract_text(data)
        return ServiceResult(ok=True, op=_OP, data=payload)
