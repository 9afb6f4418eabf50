"""AppContext: the object every subcommand receives via ``@click.pass_obj``.

It owns the run's settings, configures logging once, builds the plugin
manager on first use and turns a ServiceResult into output and an exit code.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from odtctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from odtctl.config.settings import OdtSettings
    from odtctl.plugins.manager import PluginManager
    from odtctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Plugins load on first use so ``--help`` and ``--version`` never
    import entry points.
    """

    def __init__(self, settings: OdtSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from odtctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def interactive(self) -> bool:
        """Prompts require: no ``--no-interact``, no ``--json``, and a TTY on stdin."""
        return (
            not self.settings.no_interact
            and not self.settings.json_output
            and sys.stdin.isatty()
        )

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (created lazily on first access)."""
        if self._plugins is None:
            from odtctl.infrastructure.launcher import select_launcher
            from odtctl.plugins.builtins.launcher import PlatformLauncherPlugin
            from odtctl.plugins.manager import PluginManager

            manager = PluginManager()
            launcher = select_launcher(
                commands=self.settings.launcher.commands,
                enabled=self.settings.launcher.enabled,
            )
            manager.register_plugin(PlatformLauncherPlugin(launcher), name="platform-launcher")
            if self.settings.plugins.enabled:
                manager.discover_and_load()
            self._plugins = manager
        return self._plugins

    def use_plugins(self, manager: PluginManager) -> None:
        """Install a prepared plugin manager (tests, embedding)."""
        self._plugins = manager

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result ends the process with status 1.

        Successful output goes to stdout and warnings to stderr, except in
        JSON mode where warnings are part of the payload.
        """
        text = format_result(
            result,
            settings=OutputSettings(
                json_output=self.settings.json_output,
                quiet=self.settings.quiet,
                verbose=self.settings.verbose,
            ),
        )
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.secho(f"WARNING: {warning}", fg="yellow", err=True)
