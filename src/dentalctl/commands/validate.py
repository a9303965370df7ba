"""Command group: validate clinic values and records."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import click

from dentalctl.commands._base import DentalGroup
from dentalctl.domain.schema import SCHEMAS

if TYPE_CHECKING:
    from dentalctl.commands._context import AppContext

_VALIDATE_EXAMPLES = """\
  dentalctl validate money 150000.50
  dentalctl validate invoice INV/20240115/0001
  dentalctl validate duration 90
  dentalctl validate payment-date 2024-01-15T10:00:00Z
  dentalctl validate record payment payment.json"""


@click.group(cls=DentalGroup, examples=_VALIDATE_EXAMPLES)
def validate() -> None:
    """Validate money, dates, invoice numbers, durations, and records."""


@validate.command(
    examples="""\
  dentalctl validate money 1500000
  dentalctl validate money 10.005
  dentalctl --json validate money 0"""
)
@click.argument("amount")
@click.pass_obj
def money(app: AppContext, amount: str) -> None:
    """Check a money AMOUNT and show it rounded to two decimals."""
    app.emit(app.validation().check_value("money", amount))


@validate.command(
    "payment-date",
    examples="""\
  dentalctl validate payment-date 2024-01-15
  dentalctl validate payment-date 2024-01-15T10:00:00+07:00""",
)
@click.argument("value")
@click.pass_obj
def payment_date(app: AppContext, value: str) -> None:
    """Check that VALUE is a valid, non-future payment date."""
    app.emit(app.validation().check_value("payment-date", value))


@validate.command(
    examples="""\
  dentalctl validate invoice INV/20240115/0001
  dentalctl --json validate invoice INV/20240115/0001"""
)
@click.argument("number")
@click.pass_obj
def invoice(app: AppContext, number: str) -> None:
    """Check an invoice NUMBER of the form INV/YYYYMMDD/NNNN."""
    app.emit(app.validation().check_value("invoice", number))


@validate.command(
    examples="""\
  dentalctl validate duration 90
  DENTALCTL_VALIDATION__LOCALE=en dentalctl validate duration 90"""
)
@click.argument("minutes")
@click.pass_obj
def duration(app: AppContext, minutes: str) -> None:
    """Check a treatment duration in MINUTES (0 to 1440)."""
    app.emit(app.validation().check_value("duration", minutes))


@validate.command(
    examples="""\
  dentalctl validate record treatment treatment.json
  echo '{"jumlah": 2, "harga_satuan": 50000, "diskon": 10000}' \\
    | dentalctl validate record medical_record_treatment -"""
)
@click.argument("schema", type=click.Choice(sorted(SCHEMAS)))
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_obj
def record(app: AppContext, schema: str, source: IO[str]) -> None:
    """Validate a JSON object from SOURCE (file or - for stdin) against SCHEMA."""
    try:
        payload = json.load(source)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise click.ClickException("Record must be a JSON object")
    app.emit(app.validation().check_record(schema, payload))
