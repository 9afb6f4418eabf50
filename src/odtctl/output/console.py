"""Rich consoles that capture output as text.

Renderers print to a console backed by ``StringIO`` and hand the text
back, so callers decide where it goes (stdout, stderr, or a test).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

OUTPUT_WIDTH = 120

ODT_THEME = Theme(
    {
        "odt.ok": "bold green",
        "odt.error": "bold red",
        "odt.warning": "bold yellow",
        "odt.op": "bold cyan",
        "odt.key": "dim",
        "odt.path": "bold blue",
        "odt.date": "magenta",
        "odt.issue": "red",
    }
)


def create_console(*, width: int = OUTPUT_WIDTH, color: bool | None = None) -> Console:
    """A themed console writing into memory.

    *color* forces styling on or off; by default Rich decides, which means
    plain text whenever the real terminal is not a TTY.
    """
    return Console(
        file=StringIO(),
        theme=ODT_THEME,
        width=width,
        highlight=False,
        no_color=color is False,
        force_terminal=color or None,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
