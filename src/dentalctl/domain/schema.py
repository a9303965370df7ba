"""Record schemas — explicit field-rule registration and evaluation.

A :class:`RecordSchema` maps field names to an ordered list of
:class:`FieldRule`. Every rule receives the field value and the whole
record. For each field the first failing rule wins, so each invalid field
reports exactly one message.

Canonical schemas for clinic records live at the bottom of this module and
are collected in :data:`SCHEMAS`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from dentalctl.domain.errors import ValidationFailed
from dentalctl.domain.fields import (
    FieldValidator,
    is_not_future_date,
    is_positive_number,
    is_sufficient_payment,
    is_valid_duration,
    is_valid_payment_discount,
    is_valid_price,
    is_valid_treatment_discount,
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a whole record."""

    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldRule:
    """A validator bound to a field, with an optional message override."""

    validator: FieldValidator
    message: str | None = None

    @property
    def error_message(self) -> str:
        return self.message or self.validator.message

    def passes(self, value: Any, record: Mapping[str, Any]) -> bool:
        return self.validator(value, record)


class RecordSchema:
    """Ordered field → rules registry evaluated against a record mapping."""

    def __init__(self, name: str, rules: Mapping[str, list[FieldRule]] | None = None) -> None:
        self.name = name
        self._rules: dict[str, tuple[FieldRule, ...]] = {
            key: tuple(value) for key, value in (rules or {}).items()
        }

    @property
    def fields(self) -> list[str]:
        return list(self._rules)

    def rules_for(self, field_name: str) -> tuple[FieldRule, ...]:
        return self._rules.get(field_name, ())

    def extend(self, field_name: str, *rules: FieldRule) -> RecordSchema:
        """Return a new schema with *rules* appended to *field_name*."""
        merged = {key: list(value) for key, value in self._rules.items()}
        merged.setdefault(field_name, []).extend(rules)
        return RecordSchema(self.name, merged)

    def validate(self, record: Mapping[str, Any]) -> ValidationResult:
        errors: dict[str, str] = {}
        for field_name, rules in self._rules.items():
            value = record.get(field_name)
            for rule in rules:
                if not rule.passes(value, record):
                    errors[field_name] = rule.error_message
                    break
        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_or_raise(self, record: Mapping[str, Any]) -> None:
        """Raise :class:`ValidationFailed` for the first invalid field."""
        result = self.validate(record)
        for field_name, message in result.errors.items():
            raise ValidationFailed(field_name, message)


# ---------------------------------------------------------------------------
# Canonical clinic schemas
# ---------------------------------------------------------------------------

TREATMENT_SCHEMA = RecordSchema(
    "treatment",
    {
        "harga": [FieldRule(is_valid_price)],
        "durasi_estimasi": [FieldRule(is_valid_duration)],
    },
)

MEDICAL_RECORD_TREATMENT_SCHEMA = RecordSchema(
    "medical_record_treatment",
    {
        "jumlah": [FieldRule(is_positive_number, "Jumlah harus berupa angka yang tidak negatif")],
        "harga_satuan": [FieldRule(is_valid_price)],
        "diskon": [FieldRule(is_valid_treatment_discount)],
    },
)

PAYMENT_SCHEMA = RecordSchema(
    "payment",
    {
        "total_biaya": [FieldRule(is_positive_number, "Total biaya harus berupa angka yang tidak negatif")],
        "diskon_total": [FieldRule(is_valid_payment_discount)],
        "jumlah_bayar": [FieldRule(is_sufficient_payment)],
        "tanggal_pembayaran": [FieldRule(is_not_future_date)],
    },
)

SCHEMAS: dict[str, RecordSchema] = {
    schema.name: schema
    for schema in (TREATMENT_SCHEMA, MEDICAL_RECORD_TREATMENT_SCHEMA, PAYMENT_SCHEMA)
}
