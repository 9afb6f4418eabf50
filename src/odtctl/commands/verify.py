"""Command: check that an .odt file is a well-formed OpenDocument package."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from odtctl.commands._base import OdtCommand

if TYPE_CHECKING:
    from odtctl.commands._context import AppContext


@click.command(
    cls=OdtCommand,
    examples="""\
  odtctl verify 20250806/meeting-notes.odt
  odtctl --json verify report.odt""",
)
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def verify(app: AppContext, path: Path) -> None:
    """Verify the package structure of PATH."""
    from odtctl.services.verify import VerifyService

    app.emit(VerifyService(app.settings).verify(path))
