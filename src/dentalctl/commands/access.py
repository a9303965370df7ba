"""Command group: role and permission queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dentalctl.commands._base import DentalGroup

if TYPE_CHECKING:
    from dentalctl.commands._context import AppContext

_ACCESS_EXAMPLES = """\
  dentalctl access check --role dokter patients:view
  dentalctl access check --role staf --any users:manage payments:view
  dentalctl access list --role "kepala klinik"
  dentalctl access matrix"""

_role_option = click.option(
    "--role",
    "roles",
    multiple=True,
    help="Role held by the user (repeatable; aliases accepted).",
)


@click.group(cls=DentalGroup, examples=_ACCESS_EXAMPLES)
def access() -> None:
    """Resolve role permissions."""


@access.command(
    examples="""\
  dentalctl access check --role dokter patients:view
  dentalctl access check --role staf --role dokter medical_records:create
  dentalctl -q access check --role staf --any users:manage payments:view"""
)
@_role_option
@click.option("--any", "any_", is_flag=True, help="Grant if any permission is held.")
@click.argument("permissions", nargs=-1, required=True)
@click.pass_obj
def check(app: AppContext, roles: tuple[str, ...], any_: bool, permissions: tuple[str, ...]) -> None:
    """Decide whether the given roles hold PERMISSIONS (all of them by default)."""
    app.emit(app.access().check(roles, permissions, mode="any" if any_ else "all"))


@access.command(
    "list",
    examples="""\
  dentalctl access list --role staf
  dentalctl -q access list --role dokter --role staf""",
)
@_role_option
@click.pass_obj
def list_cmd(app: AppContext, roles: tuple[str, ...]) -> None:
    """List the union of permissions held by the given roles."""
    app.emit(app.access().permissions_for(roles))


@access.command(
    examples="""\
  dentalctl access matrix
  dentalctl --json access matrix"""
)
@click.pass_obj
def matrix(app: AppContext) -> None:
    """Show which role holds which permission."""
    app.emit(app.access().matrix())
