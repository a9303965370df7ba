"""Small coercion helpers shared by value objects and field validators."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

CENTS = Decimal("0.01")


def is_number(value: object) -> bool:
    """True for finite ``int``/``float``/``Decimal`` values. ``bool`` is not a number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def to_decimal(value: int | float | Decimal) -> Decimal:
    """Convert via the shortest repr so ``0.1`` becomes ``Decimal("0.1")``."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc


def round_cents(value: Decimal) -> Decimal:
    """Round half-up to 2 places, widening precision so large amounts stay exact."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_moment(value: object) -> datetime | None:
    """Parse a datetime, date, or ISO-8601 string into an aware UTC datetime.

    Naive inputs are taken as UTC. Returns None when *value* cannot be parsed.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)
