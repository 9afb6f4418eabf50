"""Entry point: the ``odtctl`` command group."""

from __future__ import annotations

import click

from odtctl import __version__
from odtctl.commands import register_commands
from odtctl.commands._base import OdtGroup
from odtctl.commands._context import AppContext
from odtctl.config.settings import OdtSettings


@click.group(
    cls=OdtGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    examples="""\
  odtctl new                 # next month's first Wednesday
  odtctl when -m 3           # preview the folder name only
  odtctl -q new -f notes     # print just the created path""",
)
@click.version_option(__version__, "-V", "--version", prog_name="odtctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the essential value.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs and error details.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("--no-interact", is_flag=True, help="Never prompt; missing input is an error.")
@click.option("--no-open", is_flag=True, help="Do not open documents after creating them.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this odtctl.toml instead of searching for one.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """odtctl — dated OpenDocument files for the first Wednesday of a month."""
    ctx.obj = AppContext(OdtSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
