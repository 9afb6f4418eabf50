"""Pluggy hook specifications for odtctl.

One lifecycle event fires after a document is written. One first-result
hook lets plugins take over opening the document; the built-in platform
launcher answers last.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("odtctl")


class OdtctlHookSpec:
    """Hook specifications for the odtctl plugin system."""

    @hookspec
    def post_create(
        self,
        folder: str,
        path: str,
        filename: str,
        date: str,
    ) -> None:
        """Called after a document has been written to disk."""

    @hookspec(firstresult=True)
    def open_document(self, path: str) -> bool | None:
        """Try to open *path*.

        Return True if it was opened, False if this plugin tried and failed,
        or None to let the next plugin try.
        """
