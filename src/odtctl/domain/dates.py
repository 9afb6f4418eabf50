"""First-Wednesday date resolution.

A month selector is either unspecified (the month after today) or an
explicit month 1-12. Explicit months roll to next year unless they are
strictly later than today's month.

INVARIANT: ``ResolvedDate.day`` is the first Wednesday of its month,
so it is always in 1..7.
"""

from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel

from odtctl.domain.errors import InvalidMonthError

WEDNESDAY = 3  # ISO weekday, Monday=1
FOLDER_NAME_PATTERN = re.compile(r"^\d{8}$")


def validate_month(month: int) -> int:
    """Return *month* unchanged if it lies in [1, 12], else raise.

    Never clamps: 0 and 13 are errors, not January and December.
    """
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidMonthError(month)
    return month


class MonthSelector(BaseModel):
    """Which month to target. ``month=None`` means the month after today."""

    model_config = {"frozen": True}

    month: int | None = None

    @classmethod
    def unspecified(cls) -> MonthSelector:
        return cls()

    @classmethod
    def explicit(cls, month: int) -> MonthSelector:
        return cls(month=validate_month(month))

    @property
    def is_explicit(self) -> bool:
        return self.month is not None


class ResolvedDate(BaseModel):
    """A concrete first-Wednesday date."""

    model_config = {"frozen": True}

    year: int
    month: int
    day: int

    @property
    def folder_name(self) -> str:
        return folder_name(self)

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return self.as_date().isoformat()


def target_month(today: date, selector: MonthSelector) -> tuple[int, int]:
    """Return ``(year, month)`` chosen by *selector* relative to *today*."""
    if selector.month is None:
        if today.month == 12:
            return today.year + 1, 1
        return today.year, today.month + 1

    month = validate_month(selector.month)
    if month > today.month:
        return today.year, month
    return today.year + 1, month


def first_wednesday(year: int, month: int) -> int:
    """Day-of-month of the first Wednesday in (*year*, *month*)."""
    weekday = date(year, month, 1).isoweekday()
    return 1 + ((WEDNESDAY - weekday + 7) % 7)


def resolve_date(today: date, selector: MonthSelector | int | None = None) -> ResolvedDate:
    """Resolve *selector* against *today* to the first Wednesday of the target month.

    *selector* may be a :class:`MonthSelector`, a bare month number, or
    ``None`` for the month after today.

    Raises:
        InvalidMonthError: explicit month outside [1, 12].
    """
    if not isinstance(selector, MonthSelector):
        selector = (
            MonthSelector.unspecified() if selector is None else MonthSelector.explicit(selector)
        )
    year, month = target_month(today, selector)
    return ResolvedDate(year=year, month=month, day=first_wednesday(year, month))


def folder_name(resolved: ResolvedDate) -> str:
    """Render *resolved* as ``YYYYMMDD``."""
    return f"{resolved.year:04d}{resolved.month:02d}{resolved.day:02d}"
