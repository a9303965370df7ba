"""Click classes carrying per-command usage examples.

``DentalGroup`` and ``DentalCommand`` take an ``examples=`` string and add an
eager ``--examples`` flag that prints it. The flag is processed before
arguments and prompts, so ``dentalctl auth password --examples`` never asks
for a password.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = None
        if examples:
            self.examples = textwrap.indent(textwrap.dedent(examples).strip("\n"), "  ")
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and self.examples:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class DentalCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class DentalGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command()`` subcommands are :class:`DentalCommand`."""

    command_class = DentalCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
