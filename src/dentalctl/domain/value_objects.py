"""Value objects — immutable, self-validating clinic primitives.

Construction is the only way to obtain an instance. An invalid input raises
:class:`~dentalctl.domain.errors.InvalidValueObject`; a partially valid
instance never exists. All four types are frozen dataclasses, so equality
and hashing are by value.

When crossing into storage they serialize to plain primitives:
``Money.amount`` (float), ``PaymentDate.to_iso()`` (str),
``InvoiceNumber.value`` (str), ``TreatmentDuration.minutes`` (int).
"""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, localcontext
from typing import Self

from dentalctl.domain._helpers import (
    is_number,
    parse_moment,
    round_cents,
    to_decimal,
    utc_now,
)
from dentalctl.domain.errors import InvalidInput, InvalidValueObject

# Digits needed to hold any finite float amount to the cent
_MONEY_PRECISION = 312
_MAX_AMOUNT = Decimal(sys.float_info.max)


@dataclass(frozen=True)
class Money:
    """Non-negative amount of rupiah, rounded half-up to 2 decimals.

    INVARIANT: ``amount >= 0``. Arithmetic returns new instances;
    ``subtract`` clamps at zero instead of going negative.
    """

    amount: float

    def __post_init__(self) -> None:
        if not is_number(self.amount):
            raise InvalidValueObject(f"Money amount must be a number, got {self.amount!r}")
        if self.amount < 0:
            raise InvalidValueObject("Money amount cannot be negative")
        exact = to_decimal(self.amount)
        if exact > _MAX_AMOUNT:
            raise InvalidValueObject("Money amount out of range")
        amount = float(round_cents(exact))
        if not math.isfinite(amount):
            raise InvalidValueObject("Money amount out of range")
        object.__setattr__(self, "amount", amount)

    @classmethod
    def zero(cls) -> Self:
        return cls(0)

    def _decimal(self) -> Decimal:
        return to_decimal(self.amount)

    def add(self, other: Money) -> Money:
        with localcontext(prec=_MONEY_PRECISION):
            return Money(self._decimal() + other._decimal())

    def subtract(self, other: Money) -> Money:
        with localcontext(prec=_MONEY_PRECISION):
            result = self._decimal() - other._decimal()
            return Money(max(result, Decimal(0)))

    def is_greater_than(self, other: Money) -> bool:
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        return self.amount >= other.amount

    def equals(self, other: Money) -> bool:
        return self.amount == other.amount

    def format_idr(self) -> str:
        """Render as Indonesian currency, e.g. ``Rp 1.500.000`` or ``Rp 10,50``."""
        value = round_cents(self._decimal())
        whole = int(value)
        with localcontext(prec=_MONEY_PRECISION):
            cents = int((value - whole) * 100)
        text = f"Rp {whole:,}".replace(",", ".")
        if cents:
            text += f",{cents:02d}"
        return text

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class PaymentDate:
    """The moment a payment was received, normalized to aware UTC.

    INVARIANT: never after "now" at construction time.
    """

    value: datetime

    def __post_init__(self) -> None:
        moment = parse_moment(self.value)
        if moment is None:
            raise InvalidValueObject(f"Invalid payment date: {self.value!r}")
        if moment > utc_now():
            raise InvalidValueObject("Payment date cannot be in the future")
        object.__setattr__(self, "value", moment)

    def is_same_day(self, other: PaymentDate | datetime | date) -> bool:
        """Compare by UTC calendar day, not by instant."""
        if isinstance(other, PaymentDate):
            return self.value.date() == other.value.date()
        moment = parse_moment(other)
        if moment is None:
            return False
        return self.value.date() == moment.date()

    def to_iso(self) -> str:
        return self.value.isoformat()

    def __str__(self) -> str:
        return self.to_iso()


# INV/YYYYMMDD/NNNN, ASCII digits only
_INVOICE_PATTERN = re.compile(r"INV/(\d{8})/(\d{4})", re.ASCII)


@dataclass(frozen=True)
class InvoiceNumber:
    """Invoice identifier of the form ``INV/YYYYMMDD/NNNN``."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or _INVOICE_PATTERN.fullmatch(self.value) is None:
            raise InvalidValueObject(
                f"Invalid invoice number {self.value!r}, expected INV/YYYYMMDD/NNNN"
            )

    @classmethod
    def generate(cls, day: date, sequence: int) -> Self:
        """Build the invoice number for *day* and a 1-based daily *sequence*."""
        if isinstance(sequence, bool) or not isinstance(sequence, int):
            raise InvalidValueObject("Invoice sequence must be an integer")
        if not 1 <= sequence <= 9999:
            raise InvalidValueObject("Invoice sequence must be between 1 and 9999")
        return cls(f"INV/{day:%Y%m%d}/{sequence:04d}")

    @property
    def issued_on(self) -> date | None:
        """Calendar date encoded in the number, or None if it is not a real date."""
        match = _INVOICE_PATTERN.fullmatch(self.value)
        assert match is not None
        try:
            return datetime.strptime(match.group(1), "%Y%m%d").date()
        except ValueError:
            return None

    @property
    def sequence(self) -> int:
        match = _INVOICE_PATTERN.fullmatch(self.value)
        assert match is not None
        return int(match.group(2))

    def __str__(self) -> str:
        return self.value


MAX_TREATMENT_MINUTES = 24 * 60

_DURATION_UNITS: dict[str, tuple[str, str]] = {
    "id": ("jam", "menit"),
    "en": ("hr", "min"),
}


@dataclass(frozen=True)
class TreatmentDuration:
    """Estimated length of a treatment in whole minutes (0..1440)."""

    minutes: int

    def __post_init__(self) -> None:
        minutes = self.minutes
        if isinstance(minutes, float) and minutes.is_integer():
            minutes = int(minutes)
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise InvalidValueObject(f"Duration must be a whole number of minutes, got {self.minutes!r}")
        if minutes < 0:
            raise InvalidValueObject("Duration cannot be negative")
        if minutes > MAX_TREATMENT_MINUTES:
            raise InvalidValueObject(f"Duration cannot exceed {MAX_TREATMENT_MINUTES} minutes")
        object.__setattr__(self, "minutes", minutes)

    @property
    def hours(self) -> int:
        return self.minutes // 60

    @property
    def remaining_minutes(self) -> int:
        return self.minutes % 60

    def formatted_duration(self, locale: str = "id") -> str:
        """Human-readable text, e.g. ``1 jam 30 menit``.

        Zero-hour and zero-minute parts are omitted; a zero duration
        renders as ``0 menit``.
        """
        units = _DURATION_UNITS.get(locale)
        if units is None:
            raise InvalidInput(f"Unsupported locale: {locale}")
        hour_unit, minute_unit = units

        parts: list[str] = []
        if self.hours:
            parts.append(f"{self.hours} {hour_unit}")
        if self.remaining_minutes:
            parts.append(f"{self.remaining_minutes} {minute_unit}")
        if not parts:
            return f"0 {minute_unit}"
        return " ".join(parts)

    def __str__(self) -> str:
        return self.formatted_duration()
