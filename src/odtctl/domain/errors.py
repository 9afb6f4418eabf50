"""Domain validation errors.

Each error carries a stable ``code`` that the service layer copies into
``ServiceError.code`` so CLI and JSON consumers can branch on it.
"""

from __future__ import annotations


class DomainValidationError(ValueError):
    """User input outside the domain. Raised before any filesystem change."""

    code = "VALIDATION_ERROR"


class InvalidMonthError(DomainValidationError):
    """Explicit month is not in [1, 12]."""

    code = "INVALID_MONTH"

    def __init__(self, month: object) -> None:
        self.month = month
        super().__init__(f"Month must be a number between 1 and 12, got: {month}")


class EmptyFilenameError(DomainValidationError):
    """Filename is blank after trimming."""

    code = "EMPTY_FILENAME"

    def __init__(self) -> None:
        super().__init__("Filename cannot be empty")
