"""Command: show which folder a month selection resolves to."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import click

from odtctl.commands._base import OdtCommand
from odtctl.commands._options import month_option, today_option

if TYPE_CHECKING:
    from odtctl.commands._context import AppContext


@click.command(
    cls=OdtCommand,
    examples="""\
  odtctl when
  odtctl when -m 3
  odtctl -q when --month 9 --today 2025-07-15""",
)
@month_option
@today_option
@click.pass_obj
def when(app: AppContext, month: int | None, today: date | None) -> None:
    """Print the first-Wednesday date and folder name without creating anything."""
    from odtctl.services.resolve import ResolveService

    app.emit(ResolveService(app.settings).resolve(month, today=today))
