"""Field validators — named predicates over one field of a record.

Each validator is a :class:`FieldValidator`: a callable
``validator(value, record) -> bool`` plus a default (Indonesian) error
message. ``record`` is the whole mapping the field belongs to, so
cross-field rules can read siblings (discount vs. subtotal).

Edge-case policy:
- ``None`` on an optional field is valid; required-ness is checked elsewhere.
- Type mismatches are invalid, except where a rule explicitly defers
  (sufficient payment ignores the total's type).

Record keys are snake_case: ``jumlah``, ``harga_satuan``, ``diskon``,
``diskon_total``, ``total_biaya``, ``jumlah_bayar``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from dentalctl.domain._helpers import is_number, parse_moment, to_decimal, utc_now
from dentalctl.domain.value_objects import MAX_TREATMENT_MINUTES

Check = Callable[[Any, Mapping[str, Any]], bool]

MAX_PRICE = Decimal("999999999999.99")
MAX_PRICE_DECIMALS = 2


@dataclass(frozen=True)
class FieldValidator:
    """A named field predicate with its default error message."""

    name: str
    check: Check
    message: str

    def __call__(self, value: Any, record: Mapping[str, Any] | None = None) -> bool:
        return self.check(value, record if record is not None else {})


def _validator(name: str, message: str) -> Callable[[Check], FieldValidator]:
    def wrap(check: Check) -> FieldValidator:
        return FieldValidator(name=name, check=check, message=message)

    return wrap


def _decimal_places(value: int | float | Decimal) -> int:
    exponent = to_decimal(value).normalize().as_tuple().exponent
    assert isinstance(exponent, int)
    return max(0, -exponent)


def _sibling_amount(record: Mapping[str, Any], key: str) -> Decimal:
    """Numeric sibling value, or 0 when missing or not a number."""
    value = record.get(key)
    return to_decimal(value) if is_number(value) else Decimal(0)


# ---------------------------------------------------------------------------
# Single-field rules
# ---------------------------------------------------------------------------


@_validator(
    "is_valid_price",
    "Harga harus berupa angka antara 0 dan 999.999.999.999,99 dengan maksimal 2 angka desimal",
)
def is_valid_price(value: Any, record: Mapping[str, Any]) -> bool:
    if not is_number(value):
        return False
    amount = to_decimal(value)
    if amount < 0 or amount > MAX_PRICE:
        return False
    return _decimal_places(amount) <= MAX_PRICE_DECIMALS


@_validator(
    "is_valid_duration",
    f"Durasi harus berupa bilangan bulat antara 0 dan {MAX_TREATMENT_MINUTES} menit",
)
def is_valid_duration(value: Any, record: Mapping[str, Any]) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= MAX_TREATMENT_MINUTES


@_validator("is_positive_number", "Nilai harus berupa angka yang tidak negatif")
def is_positive_number(value: Any, record: Mapping[str, Any]) -> bool:
    return is_number(value) and value >= 0


@_validator("is_not_future_date", "Tanggal tidak boleh di masa depan")
def is_not_future_date(value: Any, record: Mapping[str, Any]) -> bool:
    if value is None or value == "":
        return True
    moment = parse_moment(value)
    if moment is None:
        return False
    return moment <= utc_now()


# ---------------------------------------------------------------------------
# Cross-field rules
# ---------------------------------------------------------------------------


@_validator(
    "is_valid_treatment_discount",
    "Diskon tidak boleh negatif atau melebihi subtotal (jumlah x harga satuan)",
)
def is_valid_treatment_discount(value: Any, record: Mapping[str, Any]) -> bool:
    """Treatment / medical-record line discount: ``0 <= diskon <= jumlah * harga_satuan``."""
    if value is None:
        return True
    if not is_number(value):
        return False
    subtotal = _sibling_amount(record, "jumlah") * _sibling_amount(record, "harga_satuan")
    discount = to_decimal(value)
    return 0 <= discount <= subtotal


@_validator(
    "is_valid_payment_discount",
    "Diskon total harus berupa angka antara 0 dan total biaya",
)
def is_valid_payment_discount(value: Any, record: Mapping[str, Any]) -> bool:
    """Payment discount: both ``diskon_total`` and ``total_biaya`` must be numbers."""
    if value is None:
        return True
    total = record.get("total_biaya")
    if not is_number(value) or not is_number(total):
        return False
    return 0 <= to_decimal(value) <= to_decimal(total)


@_validator("is_sufficient_payment", "Jumlah bayar harus berupa angka yang tidak negatif")
def is_sufficient_payment(value: Any, record: Mapping[str, Any]) -> bool:
    # Comparison against total_biaya belongs to the payment-status logic.
    return is_number(value) and value >= 0


def matches_field(other: str, message: str | None = None) -> FieldValidator:
    """Validator requiring the value to equal sibling field *other* (confirm fields)."""

    def check(value: Any, record: Mapping[str, Any]) -> bool:
        return value == record.get(other)

    return FieldValidator(
        name=f"matches:{other}",
        check=check,
        message=message or f"Nilai harus sama dengan {other}",
    )
