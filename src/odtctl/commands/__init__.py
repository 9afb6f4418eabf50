"""Subcommand modules for odtctl.

Provides register_commands() which uses deferred imports to keep
``odtctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from odtctl.commands.new import new
    from odtctl.commands.verify import verify
    from odtctl.commands.when import when

    cli.add_command(new)
    cli.add_command(when)
    cli.add_command(verify)
