"""The value every service call returns.

Services never raise for expected failures (bad month, empty filename,
unwritable folder, broken package); they return ``ok=False`` with an
error code from the table below, and the CLI maps that to exit status 1.

=================  ==============================================
INVALID_MONTH      explicit month outside 1-12
EMPTY_FILENAME     filename blank after trimming
INVALID_FILENAME   filename resolves outside the dated folder
IO_ERROR           folder or file could not be created or read
NOT_FOUND          file to verify does not exist
INVALID_PACKAGE    file is not a well-formed ODT package
=================  ==============================================
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation (``op``) with its payload and warnings."""

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """``ok=False`` result; extra keywords land in ``error.detail``."""
        error = ServiceError(code=code, message=message, detail=detail)
        return cls(ok=False, op=op, data=data or {}, error=error)
