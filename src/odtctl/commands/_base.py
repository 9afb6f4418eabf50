"""Click classes that add an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits without running the command.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Shared ``examples=`` keyword handling for commands and groups."""

    examples: str | None

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        option = click.Option(
            ["--examples"],
            is_flag=True,
            is_eager=True,
            expose_value=False,
            callback=self._print_examples,
            help="Show usage examples and exit.",
        )
        self.params.append(option)  # type: ignore[attr-defined]

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
        ctx.exit(0)


class OdtCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class OdtGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command()`` children are :class:`OdtCommand`."""

    command_class = OdtCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
