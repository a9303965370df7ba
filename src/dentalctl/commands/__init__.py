"""Subcommand modules for dentalctl.

Provides register_commands() which uses deferred imports to keep
``dentalctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from dentalctl.commands.access import access
    from dentalctl.commands.auth import auth
    from dentalctl.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(auth)
    cli.add_command(access)
