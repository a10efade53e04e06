"""Interest accrual.

Short-term credit is quoted as flat simple interest over the term:

    total_interest = principal * monthly_rate * term_days / 30

The product is rounded to the cent once, at the end.
"""

from __future__ import annotations

from decimal import Decimal

from .errors import InvalidRate, InvalidTerm
from .utils import DAYS_PER_PERIOD, round_to_cent


def accrue(principal: Decimal, monthly_rate: Decimal, term_days: int) -> Decimal:
    """Return the total interest owed over ``term_days`` days."""
    if monthly_rate < 0:
        raise InvalidRate("Monthly rate cannot be negative", monthly_rate=monthly_rate)
    if term_days <= 0:
        raise InvalidTerm("Term must be positive", term_days=term_days)
    return round_to_cent(principal * monthly_rate * term_days / DAYS_PER_PERIOD)


def accrue_for_days(principal: Decimal, monthly_rate: Decimal, days: int) -> Decimal:
    """Like ``accrue`` but allows zero days, used for pro-rated settlements."""
    if days == 0:
        return Decimal("0.00")
    return accrue(principal, monthly_rate, days)
