"""ResolveService — preview which folder a month selection maps to."""

from __future__ import annotations

from datetime import date

from odtctl.domain.dates import resolve_date
from odtctl.domain.errors import DomainValidationError
from odtctl.services.base import BaseService
from odtctl.services.result import ServiceResult


class ResolveService(BaseService):
    """Date resolution without touching the filesystem."""

    def resolve(self, month: int | None = None, *, today: date | None = None) -> ServiceResult:
        """Resolve *month* (None = next month) against *today*."""
        op = "resolve_date"
        today = self._today(today)
        try:
            resolved = resolve_date(today, month)
        except DomainValidationError as exc:
            return ServiceResult.failure(op, exc.code, str(exc), month=month)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "date": resolved.isoformat(),
                "folder": resolved.folder_name,
                "path": str(self._settings.output_root / resolved.folder_name),
                "today": today.isoformat(),
            },
        )
