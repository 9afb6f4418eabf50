"""Human-readable rendering of ServiceResult, one function per operation.

``_OP_RENDERERS`` maps ``result.op`` to its renderer; operations without
one print every data item.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from odtctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from odtctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]

_PATH_KEYS = frozenset({"path", "folder"})
_DATE_KEYS = frozenset({"date", "today"})


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Rich rendering of *result*, captured as text.

    Styling is dropped when stdout is not a terminal.
    """
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """The one value worth piping: folder name, file path, or error line."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"
    if result.op == "resolve_date":
        return str(result.data.get("folder", ""))
    if result.data.get("path"):
        return str(result.data["path"])
    return f"OK: {result.op}"


def _header(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="odt.ok"), Text(f"  {result.op}", style="odt.op"))


def _item(console: Console, key: str, value: Any) -> None:
    style = "odt.path" if key in _PATH_KEYS else "odt.date" if key in _DATE_KEYS else ""
    console.print(Text(f"  {key}: ", style="odt.key"), Text(str(value), style=style), sep="")


def _items(console: Console, data: dict[str, Any], keys: tuple[str, ...]) -> None:
    for key in keys:
        if key in data:
            _item(console, key, data[key])


def _render_generic(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    for key, value in result.data.items():
        _item(console, key, value)


def _render_create(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    _items(console, result.data, ("path", "date", "bytes"))
    if result.data.get("opened"):
        console.print(Text("  Opening document with default application...", style="odt.key"))


def _render_resolve(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    _items(console, result.data, ("folder", "date", "today"))


def _render_verify(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    _item(console, "path", result.data.get("path", ""))
    for entry in result.data.get("entries", []):
        console.print(Text(f"    {entry}"))
    paragraphs = result.data.get("paragraphs") or []
    if paragraphs:
        _item(console, "text", paragraphs[0])


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    message = result.error.message if result.error else "Unknown error"
    console.print(Text("ERROR", style="odt.error"), Text(f"  {result.op} — {message}"))
    for issue in result.data.get("issues") or []:
        console.print(Text(f"  - {issue}", style="odt.issue"))
    if verbose and result.error is not None:
        _item(console, "code", result.error.code)
        for key, value in result.error.detail.items():
            if key != "issues":
                _item(console, key, value)


_OP_RENDERERS: dict[str, Renderer] = {
    "create_document": _render_create,
    "resolve_date": _render_resolve,
    "verify_document": _render_verify,
}
