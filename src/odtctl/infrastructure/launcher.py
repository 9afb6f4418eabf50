"""Best-effort "open this file" launchers.

A launcher is anything with ``open(path) -> LaunchOutcome``. One is
selected per platform at startup; each tries its candidate commands in
order and stops at the first one that spawns. The launched application
is never waited on.

All subprocess calls are wrapped so a missing binary never interrupts
document creation; failures come back as an unopened outcome.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

PATH_PLACEHOLDER = "{path}"

WINDOWS_COMMANDS: tuple[tuple[str, ...], ...] = (("cmd", "/C", "start", "", PATH_PLACEHOLDER),)
MACOS_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("open", PATH_PLACEHOLDER),
    ("open", "-a", "LibreOffice", PATH_PLACEHOLDER),
)
UNIX_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("libreoffice", PATH_PLACEHOLDER),
    ("soffice", PATH_PLACEHOLDER),
    ("openoffice", PATH_PLACEHOLDER),
    ("xdg-open", PATH_PLACEHOLDER),
)


@dataclass
class LaunchOutcome:
    """What happened when a launcher tried to open a path."""

    opened: bool
    command: list[str] | None = None
    errors: list[str] = field(default_factory=list)


class DocumentLauncher(Protocol):
    """A thing that can attempt to open a path with an external application."""

    def open(self, path: Path) -> LaunchOutcome: ...


def expand_command(template: Sequence[str], path: Path) -> list[str]:
    """Substitute *path* into a command template.

    A template without ``{path}`` gets the path appended.
    """
    target = str(path)
    if PATH_PLACEHOLDER not in template:
        return [*template, target]
    return [target if arg == PATH_PLACEHOLDER else arg for arg in template]


class CommandLauncher:
    """Try each command template in turn until one spawns."""

    def __init__(self, candidates: Sequence[Sequence[str]]) -> None:
        self.candidates = [tuple(c) for c in candidates if c]

    def open(self, path: Path) -> LaunchOutcome:
        errors: list[str] = []
        for template in self.candidates:
            argv = expand_command(template, path)
            try:
                self._spawn(argv)
            except OSError as exc:
                logger.debug("Launcher %s failed: %s", argv[0], exc)
                errors.append(f"{argv[0]}: {exc}")
                continue
            logger.debug("Launched %s", argv)
            return LaunchOutcome(opened=True, command=argv, errors=errors)
        return LaunchOutcome(opened=False, errors=errors)

    def _spawn(self, argv: list[str]) -> None:
        """Start *argv* detached from our stdio; never wait for it."""
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=sys.platform != "win32",
        )


class NullLauncher:
    """Launcher used when opening is disabled."""

    def open(self, path: Path) -> LaunchOutcome:
        return LaunchOutcome(opened=False, errors=["Launching is disabled"])


def platform_commands(platform: str) -> tuple[tuple[str, ...], ...]:
    """Default candidate commands for a ``sys.platform`` value."""
    if platform.startswith("win"):
        return WINDOWS_COMMANDS
    if platform == "darwin":
        return MACOS_COMMANDS
    return UNIX_COMMANDS


def select_launcher(
    platform: str | None = None,
    *,
    commands: Sequence[Sequence[str]] | None = None,
    enabled: bool = True,
) -> DocumentLauncher:
    """Pick the launcher for *platform* (default: the running one).

    Explicit *commands* replace the platform table.
    """
    if not enabled:
        return NullLauncher()
    if commands:
        return CommandLauncher(commands)
    return CommandLauncher(platform_commands(platform or sys.platform))
