"""Options shared by several commands."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

import click

from odtctl.domain.dates import validate_month
from odtctl.domain.errors import InvalidMonthError

F = TypeVar("F", bound=Callable[..., Any])


def _check_month(_ctx: click.Context, _param: click.Parameter, value: int | None) -> int | None:
    """Reject out-of-range months before any prompt or filesystem change."""
    if value is None:
        return None
    try:
        return validate_month(value)
    except InvalidMonthError as exc:
        raise click.BadParameter(str(exc)) from exc


def _to_date(_ctx: click.Context, _param: click.Parameter, value: Any) -> date | None:
    if value is None:
        return None
    return value.date()


def month_option(func: F) -> F:
    return click.option(
        "-m",
        "--month",
        type=int,
        default=None,
        callback=_check_month,
        help="Month (1-12) to create the folder for. Defaults to next month.",
    )(func)


def today_option(func: F) -> F:
    return click.option(
        "--today",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        default=None,
        callback=_to_date,
        help="Treat this date (YYYY-MM-DD) as today.",
    )(func)
