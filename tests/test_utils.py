"""Tests for parsing, rounding and month arithmetic helpers."""

from datetime import date
from decimal import Decimal

import pytest

from loan_cost.utils import (
    add_months,
    decimal_from_str,
    on_day,
    parse_date,
    periods_in_days,
    round_to_cent,
    to_decimal,
)


def test_parse_date():
    assert parse_date(" 2024-02-29 ") == date(2024, 2, 29)
    with pytest.raises(ValueError):
        parse_date("2023-02-29")


def test_decimal_from_str():
    assert decimal_from_str("1,000.50") == Decimal("1000.50")
    with pytest.raises(ValueError):
        decimal_from_str("ten")


class TestToDecimal:
    def test_float_goes_through_str(self):
        assert to_decimal(0.1, "x") == Decimal("0.1")

    @pytest.mark.parametrize("value", ["nan", float("inf"), None, True])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value, "x")


def test_round_to_cent_is_half_up():
    assert round_to_cent(Decimal("2.675")) == Decimal("2.68")
    assert round_to_cent(Decimal("2.665")) == Decimal("2.67")
    assert round_to_cent(Decimal("-2.665")) == Decimal("-2.67")


def test_periods_in_days():
    assert [periods_in_days(d) for d in (0, 1, 30, 31, 60)] == [0, 1, 1, 2, 2]


class TestMonthArithmetic:
    def test_add_months_clamps(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_on_day_clamps(self):
        assert on_day(date(2024, 4, 3), 31) == date(2024, 4, 30)
        assert on_day(date(2024, 4, 3), 15) == date(2024, 4, 15)
