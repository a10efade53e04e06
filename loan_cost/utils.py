"""Utility functions for the loan cost calculator.

This module provides helpers for parsing user input into Python data types,
rounding money, and calendar arithmetic. Month arithmetic is delegated to
``dateutil.relativedelta`` which clamps the day of the month to the last valid
day instead of overflowing into the following month.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext

from dateutil.relativedelta import relativedelta

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")
DAYS_PER_PERIOD = 30


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date`` object.

    Raises
    ------
    ValueError
        If the string is not a valid calendar date.
    """
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid date string: {value}") from exc


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and surrounding whitespace. It raises
    ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.replace(",", "").strip()
        return Decimal(cleaned)
    except (AttributeError, InvalidOperation) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc


def to_decimal(value, name: str, error=ValueError) -> Decimal:
    """Return ``value`` as a finite ``Decimal``.

    Floats are converted through ``str`` so ``0.1`` becomes ``Decimal("0.1")``
    and not its binary approximation. ``error`` is the exception class raised
    for values that are not numbers.
    """
    if isinstance(value, bool):
        raise error(f"Invalid numeric value for {name}: {value!r}")
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, str):
            result = decimal_from_str(value)
        else:
            result = Decimal(str(value))
    except (ValueError, InvalidOperation) as exc:
        raise error(f"Invalid numeric value for {name}: {value!r}") from exc
    if not result.is_finite():
        raise error(f"Invalid numeric value for {name}: {value!r}")
    return result


def round_to_cent(amount: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def is_whole_cents(amount: Decimal) -> bool:
    return amount == amount.quantize(CENT)


def periods_in_days(days: int) -> int:
    """Number of started 30-day periods in ``days`` (ceiling division)."""
    return -(-days // DAYS_PER_PERIOD)


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    return dt + relativedelta(months=months)


def on_day(dt: date, day: int) -> date:
    """Move ``dt`` onto ``day`` of the same month, clamped to the month end."""
    return dt + relativedelta(day=day)


def days_between(start: date, end: date) -> int:
    return (end - start).days
