"""Command group: credential rules, bearer headers, and the timing guard."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from dentalctl.commands._base import DentalGroup
from dentalctl.domain.credentials import PASSWORD_POLICIES

if TYPE_CHECKING:
    from dentalctl.commands._context import AppContext

_AUTH_EXAMPLES = """\
  dentalctl auth username dr_budi
  dentalctl auth password --policy register
  dentalctl auth header "Bearer aaa.bbb.ccc"
  dentalctl auth timing --fail"""


@click.group(cls=DentalGroup, examples=_AUTH_EXAMPLES)
def auth() -> None:
    """Check usernames, passwords, authorization headers, and response timing."""


@auth.command(
    examples="""\
  dentalctl auth username dr_budi
  dentalctl --json auth username "  Staf_01 \""""
)
@click.argument("name")
@click.pass_obj
def username(app: AppContext, name: str) -> None:
    """Check a login NAME and show its normalized form."""
    app.emit(app.validation().check_username(name))


@auth.command(
    examples="""\
  dentalctl auth password
  dentalctl auth password --policy login
  dentalctl auth password --password 'Rahasia#2024'"""
)
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    help="Password to check (prompted when omitted).",
)
@click.option(
    "--policy",
    type=click.Choice(sorted(PASSWORD_POLICIES)),
    default="register",
    help="Which password rule to apply.",
)
@click.pass_obj
def password(app: AppContext, password: str, policy: str) -> None:
    """Check a password against the rule for a given use."""
    app.emit(app.validation().check_password(password, policy=policy))


@auth.command(
    examples="""\
  dentalctl auth header "Bearer aaa.bbb.ccc"
  dentalctl --json auth header "Basic dXNlcjpwYXNz\""""
)
@click.argument("value")
@click.pass_obj
def header(app: AppContext, value: str) -> None:
    """Extract the bearer token from an Authorization header VALUE."""
    app.emit(app.auth().check_authorization_header(value))


@auth.command(
    examples="""\
  dentalctl auth timing
  dentalctl auth timing --fail
  DENTALCTL_TIMING__MIN_RESPONSE_MS=500 dentalctl --json auth timing"""
)
@click.option("--fail", is_flag=True, help="Make the guarded operation fail.")
@click.pass_obj
def timing(app: AppContext, fail: bool) -> None:
    """Measure the padded latency of a guarded no-op."""
    app.emit(asyncio.run(app.auth().probe_timing(fail=fail)))
