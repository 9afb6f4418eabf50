"""Built-in plugin that opens documents with the platform launcher.

Registered first so pluggy calls it last: any installed plugin that
returns a non-None answer from ``open_document`` wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pluggy

from odtctl.infrastructure.launcher import DocumentLauncher, select_launcher

hookimpl = pluggy.HookimplMarker("odtctl")

logger = logging.getLogger(__name__)


class PlatformLauncherPlugin:
    """Open documents with the launcher chosen for this platform."""

    def __init__(self, launcher: DocumentLauncher | None = None) -> None:
        self._launcher = launcher or select_launcher()

    @hookimpl
    def open_document(self, path: str) -> bool:
        outcome = self._launcher.open(Path(path))
        if not outcome.opened:
            for error in outcome.errors:
                logger.debug("open_document: %s", error)
            logger.warning("Could not open document automatically: %s", path)
        return outcome.opened
