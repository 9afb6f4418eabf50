"""Command: create the first-Wednesday folder and an ODT document inside it."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import click

from odtctl.commands._base import OdtCommand
from odtctl.commands._options import month_option, today_option
from odtctl.domain.document import normalize_filename
from odtctl.domain.errors import EmptyFilenameError

if TYPE_CHECKING:
    from odtctl.commands._context import AppContext

FILENAME_PROMPT = "Enter the filename for the ODT document (without extension)"


def _filename_value(raw: str) -> str:
    try:
        return normalize_filename(raw)
    except EmptyFilenameError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command(
    cls=OdtCommand,
    examples="""\
  odtctl new                          # next month's first Wednesday
  odtctl new -m 9                     # September's first Wednesday
  odtctl new --month 12 -f agenda     # no filename prompt
  odtctl new -f notes -b "Agenda items" --no-open
  odtctl --json new -f notes --today 2025-07-15""",
)
@month_option
@click.option("-f", "--filename", default=None, help="Document name without extension.")
@click.option("-b", "--body", default=None, help="Text of the document's paragraph.")
@today_option
@click.option("--no-open", "no_open", is_flag=True, help="Do not open the document afterwards.")
@click.pass_obj
def new(
    app: AppContext,
    month: int | None,
    filename: str | None,
    body: str | None,
    today: date | None,
    no_open: bool,
) -> None:
    """Create <YYYYMMDD>/<filename>.odt for the month's first Wednesday."""
    from odtctl.services.create import CreateService

    can_prompt = not app.settings.no_interact and not app.settings.json_output
    if filename is None and can_prompt:
        filename = click.prompt(FILENAME_PROMPT, value_proc=_filename_value)

    if body is None and app.interactive:
        body = click.prompt(
            "Document text", default=app.settings.document.default_body, show_default=False
        )

    svc = CreateService(app.settings, app.plugins)
    app.emit(
        svc.create_document(
            filename,
            body=body,
            month=month,
            today=today,
            open_document=not no_open,
        )
    )
