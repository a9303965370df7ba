"""ValidationService — run value objects, credential rules, and record schemas.

Accepts raw (string or JSON-decoded) input, builds the domain object, and
reports the normalized value or the domain error as a ServiceResult.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from dentalctl.domain.credentials import (
    PASSWORD_POLICIES,
    check_password_strength,
    validate_username,
)
from dentalctl.domain.errors import DentalError, InvalidInput, InvalidValueObject
from dentalctl.domain.schema import SCHEMAS
from dentalctl.domain.value_objects import InvoiceNumber, Money, PaymentDate, TreatmentDuration
from dentalctl.services.base import BaseService
from dentalctl.services.result import ServiceError, ServiceResult


def _money(raw: str) -> dict[str, Any]:
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise InvalidValueObject(f"Money amount must be a number, got {raw!r}") from exc
    money = Money(amount)
    return {"amount": money.amount, "formatted": money.format_idr()}


def _payment_date(raw: str) -> dict[str, Any]:
    return {"iso": PaymentDate(raw).to_iso()}


def _invoice(raw: str) -> dict[str, Any]:
    invoice = InvoiceNumber(raw.strip())
    issued = invoice.issued_on
    return {
        "invoice": invoice.value,
        "issued_on": issued.isoformat() if issued else None,
        "sequence": invoice.sequence,
    }


def _duration(raw: str, locale: str) -> dict[str, Any]:
    try:
        minutes = int(raw.strip())
    except ValueError as exc:
        raise InvalidValueObject(f"Duration must be a whole number of minutes, got {raw!r}") from exc
    duration = TreatmentDuration(minutes)
    return {
        "minutes": duration.minutes,
        "hours": duration.hours,
        "formatted": duration.formatted_duration(locale),
    }


class ValidationService(BaseService):
    """Validate individual values and whole records."""

    VALUE_KINDS = ("money", "payment-date", "invoice", "duration")

    def check_value(self, kind: str, raw: str) -> ServiceResult:
        op = f"validate_{kind.replace('-', '_')}"
        builders: dict[str, Callable[[str], dict[str, Any]]] = {
            "money": _money,
            "payment-date": _payment_date,
            "invoice": _invoice,
            "duration": lambda text: _duration(text, self._settings.validation.locale),
        }
        builder = builders.get(kind)
        if builder is None:
            return self._fail(op, InvalidInput(f"Unknown value kind: {kind}"))
        try:
            data = builder(raw)
        except DentalError as exc:
            return self._fail(op, exc, input=raw)
        return ServiceResult(ok=True, op=op, data=data)

    def check_username(self, raw: str) -> ServiceResult:
        try:
            username = validate_username(raw)
        except DentalError as exc:
            return self._fail("validate_username", exc)
        return ServiceResult(ok=True, op="validate_username", data={"username": username})

    def check_password(self, raw: str, *, policy: str = "register") -> ServiceResult:
        """Apply the named password policy (``login``, ``register``, ...)."""
        op = "validate_password"
        rule = PASSWORD_POLICIES.get(policy)
        if rule is None:
            return self._fail(op, InvalidInput(f"Unknown password policy: {policy}"))
        try:
            rule(raw)
        except DentalError as exc:
            strength = check_password_strength(raw)
            return self._fail(op, exc, policy=policy, unmet=strength.errors)
        return ServiceResult(ok=True, op=op, data={"policy": policy})

    def check_record(self, schema_name: str, record: Mapping[str, Any]) -> ServiceResult:
        op = "validate_record"
        schema = SCHEMAS.get(schema_name)
        if schema is None:
            return self._fail(
                op,
                InvalidInput(f"Unknown schema: {schema_name}"),
                available=sorted(SCHEMAS),
            )
        result = schema.validate(record)
        if result.is_valid:
            return ServiceResult(ok=True, op=op, data={"schema": schema_name, "errors": {}})
        return ServiceResult(
            ok=False,
            op=op,
            data={"schema": schema_name, "errors": result.errors},
            error=ServiceError(
                code="VALIDATION_FAILED",
                message=f"{len(result.errors)} field(s) failed validation",
                detail={"errors": result.errors},
            ),
        )
