"""Tests for Money, PaymentDate, InvoiceNumber, and TreatmentDuration."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dentalctl.domain.errors import InvalidInput, InvalidValueObject
from dentalctl.domain.value_objects import (
    MAX_TREATMENT_MINUTES,
    InvoiceNumber,
    Money,
    PaymentDate,
    TreatmentDuration,
)


class TestMoney:
    @pytest.mark.parametrize("amount", [-0.01, -1, -1_000_000, Decimal("-5")])
    def test_negative_rejected(self, amount: float) -> None:
        with pytest.raises(InvalidValueObject):
            Money(amount)

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, 0.0),
            (10, 10.0),
            (10.5, 10.5),
            (10.123, 10.12),
            (10.125, 10.13),
            (10.005, 10.01),
            (Decimal("99.999"), 100.0),
            (1_500_000, 1_500_000.0),
        ],
    )
    def test_rounds_to_two_decimals(self, amount: float, expected: float) -> None:
        assert Money(amount).amount == expected

    @pytest.mark.parametrize("amount", ["10", None, True, float("nan"), float("inf")])
    def test_non_numbers_rejected(self, amount: object) -> None:
        with pytest.raises(InvalidValueObject):
            Money(amount)  # type: ignore[arg-type]

    def test_subtract_clamps_at_zero(self) -> None:
        assert Money(10).subtract(Money(15)).amount == 0

    def test_subtract(self) -> None:
        assert Money(100.5).subtract(Money(0.25)).amount == 100.25

    def test_add_avoids_float_drift(self) -> None:
        assert Money(0.1).add(Money(0.2)).amount == 0.3

    def test_arithmetic_returns_new_instances(self) -> None:
        a = Money(5)
        b = a.add(Money(1))
        assert a.amount == 5
        assert b.amount == 6

    def test_comparisons(self) -> None:
        assert Money(10).is_greater_than(Money(9.99))
        assert not Money(10).is_greater_than(Money(10))
        assert Money(10).is_greater_than_or_equal(Money(10))
        assert Money(10).equals(Money(10.001))

    def test_value_equality_and_hash(self) -> None:
        assert Money(10) == Money(10.0)
        assert len({Money(1), Money(1.0), Money(2)}) == 2

    def test_frozen(self) -> None:
        money = Money(1)
        with pytest.raises(FrozenInstanceError):
            money.amount = 2  # type: ignore[misc]

    def test_zero(self) -> None:
        assert Money.zero().amount == 0

    @pytest.mark.parametrize("amount", [10**27, 1e30, Decimal("1e40")])
    def test_large_amounts(self, amount: float) -> None:
        assert Money(amount).amount == float(amount)

    def test_large_amount_arithmetic_and_format(self) -> None:
        big = Money(1e30)
        assert big.add(Money(1e30)).amount == 2e30
        assert big.subtract(Money(1e30)).amount == 0
        assert big.format_idr() == "Rp 1" + ".000" * 10

    @pytest.mark.parametrize("amount", [10**400, Decimal("1e400"), Decimal("1E+1000000")])
    def test_beyond_float_range_rejected(self, amount: float) -> None:
        with pytest.raises(InvalidValueObject, match="out of range"):
            Money(amount)

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, "Rp 0"),
            (1_500_000, "Rp 1.500.000"),
            (10.5, "Rp 10,50"),
            (1234.05, "Rp 1.234,05"),
        ],
    )
    def test_format_idr(self, amount: float, expected: str) -> None:
        assert Money(amount).format_idr() == expected

    def test_str(self) -> None:
        assert str(Money(7)) == "7.00"


class TestPaymentDate:
    def test_future_rejected(self) -> None:
        with pytest.raises(InvalidValueObject, match="future"):
            PaymentDate(datetime.now(UTC) + timedelta(days=1))

    def test_future_string_rejected(self) -> None:
        tomorrow = (datetime.now(UTC) + timedelta(days=2)).isoformat()
        with pytest.raises(InvalidValueObject):
            PaymentDate(tomorrow)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["not a date", "", "2024-13-45", None, 12345])
    def test_unparseable_rejected(self, value: object) -> None:
        with pytest.raises(InvalidValueObject, match="Invalid payment date"):
            PaymentDate(value)  # type: ignore[arg-type]

    def test_past_accepted(self) -> None:
        paid = PaymentDate(datetime(2024, 1, 15, 10, 30, tzinfo=UTC))
        assert paid.value == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    def test_now_accepted(self) -> None:
        PaymentDate(datetime.now(UTC))

    def test_iso_string_with_z(self) -> None:
        paid = PaymentDate("2024-01-15T10:30:00Z")  # type: ignore[arg-type]
        assert paid.value == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    def test_date_accepted(self) -> None:
        paid = PaymentDate(date(2024, 1, 15))  # type: ignore[arg-type]
        assert paid.value == datetime(2024, 1, 15, tzinfo=UTC)

    def test_naive_taken_as_utc(self) -> None:
        paid = PaymentDate(datetime(2024, 1, 15, 8, 0))
        assert paid.value.tzinfo is not None
        assert paid.value.hour == 8

    def test_offset_normalized_to_utc(self) -> None:
        wib = timezone(timedelta(hours=7))
        paid = PaymentDate(datetime(2024, 1, 15, 3, 0, tzinfo=wib))
        assert paid.value == datetime(2024, 1, 14, 20, 0, tzinfo=UTC)

    def test_iso_round_trip_same_instant(self) -> None:
        moment = datetime(2023, 6, 1, 12, 0, 30, 123000, tzinfo=UTC)
        text = str(PaymentDate(moment))
        assert datetime.fromisoformat(text) == moment

    def test_is_same_day_compares_calendar_day(self) -> None:
        morning = PaymentDate(datetime(2024, 1, 15, 0, 5, tzinfo=UTC))
        night = PaymentDate(datetime(2024, 1, 15, 23, 55, tzinfo=UTC))
        next_day = PaymentDate(datetime(2024, 1, 16, 0, 1, tzinfo=UTC))
        assert morning.is_same_day(night)
        assert not night.is_same_day(next_day)

    def test_is_same_day_accepts_plain_date(self) -> None:
        paid = PaymentDate(datetime(2024, 1, 15, 9, tzinfo=UTC))
        assert paid.is_same_day(date(2024, 1, 15))
        assert not paid.is_same_day(date(2024, 1, 14))


class TestInvoiceNumber:
    def test_valid(self) -> None:
        invoice = InvoiceNumber("INV/20240101/0001")
        assert invoice.value == "INV/20240101/0001"
        assert str(invoice) == "INV/20240101/0001"

    @pytest.mark.parametrize(
        "value",
        [
            "INV/2024/1",
            "",
            "inv/20240101/0001",
            "INV/20240101/001",
            "INV/20240101/00001",
            "INV-20240101-0001",
            " INV/20240101/0001",
            "INV/20240101/0001\n",
            "INV/２０２４０１０１/0001",
        ],
    )
    def test_malformed_rejected(self, value: str) -> None:
        with pytest.raises(InvalidValueObject):
            InvoiceNumber(value)

    def test_equality_by_string(self) -> None:
        assert InvoiceNumber("INV/20240101/0001") == InvoiceNumber("INV/20240101/0001")
        assert InvoiceNumber("INV/20240101/0001") != InvoiceNumber("INV/20240101/0002")

    def test_generate(self) -> None:
        invoice = InvoiceNumber.generate(date(2024, 3, 5), 42)
        assert invoice.value == "INV/20240305/0042"

    @pytest.mark.parametrize("sequence", [0, 10_000, -1])
    def test_generate_sequence_bounds(self, sequence: int) -> None:
        with pytest.raises(InvalidValueObject):
            InvoiceNumber.generate(date(2024, 3, 5), sequence)

    def test_parts(self) -> None:
        invoice = InvoiceNumber("INV/20240305/0042")
        assert invoice.issued_on == date(2024, 3, 5)
        assert invoice.sequence == 42

    def test_issued_on_none_for_impossible_date(self) -> None:
        assert InvoiceNumber("INV/20241399/0001").issued_on is None


class TestTreatmentDuration:
    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [
            (90, "1 jam 30 menit"),
            (0, "0 menit"),
            (60, "1 jam"),
            (45, "45 menit"),
            (1440, "24 jam"),
            (125, "2 jam 5 menit"),
        ],
    )
    def test_formatted_duration(self, minutes: int, expected: str) -> None:
        assert TreatmentDuration(minutes).formatted_duration() == expected

    def test_english_locale(self) -> None:
        assert TreatmentDuration(90).formatted_duration("en") == "1 hr 30 min"
        assert TreatmentDuration(0).formatted_duration("en") == "0 min"

    def test_unknown_locale(self) -> None:
        with pytest.raises(InvalidInput):
            TreatmentDuration(10).formatted_duration("fr")

    @pytest.mark.parametrize("minutes", [-1, MAX_TREATMENT_MINUTES + 1, 10_000])
    def test_out_of_range(self, minutes: int) -> None:
        with pytest.raises(InvalidValueObject):
            TreatmentDuration(minutes)

    @pytest.mark.parametrize("minutes", [1.5, "30", None, True])
    def test_non_integers_rejected(self, minutes: object) -> None:
        with pytest.raises(InvalidValueObject):
            TreatmentDuration(minutes)  # type: ignore[arg-type]

    def test_integral_float_coerced(self) -> None:
        duration = TreatmentDuration(30.0)  # type: ignore[arg-type]
        assert duration.minutes == 30
        assert isinstance(duration.minutes, int)

    def test_derived_parts(self) -> None:
        duration = TreatmentDuration(135)
        assert duration.hours == 2
        assert duration.remaining_minutes == 15

    def test_str_uses_default_locale(self) -> None:
        assert str(TreatmentDuration(30)) == "30 menit"
