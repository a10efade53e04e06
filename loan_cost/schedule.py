"""Installment due-date generation.

Due dates follow a monthly cadence from the start date:

* A loan repaid in a single installment is due on its maturity date,
  ``start_date + term_days``.
* A loan repaid in several installments is due one calendar month after the
  start date, then every month after that. Month ends are clamped, so a loan
  started on 31 January is next due on 28/29 February and then 31 March.

When the borrower's salary day is known, each cadence point is moved forward
to the first salary day on or after it. A salary day that does not exist in a
month (31 in April) falls on that month's last day. Dates are always strictly
increasing; if two cadence points would land on the same pay day, the later
one moves on to the following month's pay day.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional

from .errors import InvalidSalaryDay, InvalidTerm
from .utils import add_months, days_between, on_day, periods_in_days

logger = logging.getLogger(__name__)


def number_of_repayments(term_days: int) -> int:
    """Return one installment per started 30-day period, at least one."""
    if term_days <= 0:
        raise InvalidTerm("Term must be positive", term_days=term_days)
    return max(1, periods_in_days(term_days))


def validate_salary_day(salary_day: Optional[int]) -> None:
    if salary_day is None:
        return
    if isinstance(salary_day, bool) or not isinstance(salary_day, int):
        raise InvalidSalaryDay("Salary day must be a whole number", salary_day=salary_day)
    if not 1 <= salary_day <= 31:
        raise InvalidSalaryDay("Salary day must be between 1 and 31", salary_day=salary_day)


def cadence_points(start_date: date, term_days: int, count: int) -> List[date]:
    """Return the unaligned due dates for ``count`` installments."""
    if count == 1:
        return [start_date + timedelta(days=term_days)]
    return [add_months(start_date, k) for k in range(1, count + 1)]


def next_salary_day(on_or_after: date, salary_day: int) -> date:
    """Return the first occurrence of ``salary_day`` on or after a date."""
    candidate = on_day(on_or_after, salary_day)
    if candidate < on_or_after:
        candidate = on_day(add_months(on_or_after.replace(day=1), 1), salary_day)
    return candidate


def build(
    start_date: date,
    term_days: int,
    count: int,
    salary_day: Optional[int] = None,
) -> List[date]:
    """Build the ordered list of installment due dates.

    Parameters
    ----------
    start_date: date
        The day the loan is paid out.
    term_days: int
        Length of the loan in days.
    count: int
        Number of installments to generate.
    salary_day: Optional[int]
        Borrower's pay day; when given, due dates are aligned to it.

    Returns
    -------
    List[date]
        ``count`` strictly increasing dates.
    """
    if term_days <= 0:
        raise InvalidTerm("Term must be positive", term_days=term_days)
    if count < 1:
        raise InvalidTerm("At least one installment is required", count=count)
    validate_salary_day(salary_day)

    points = cadence_points(start_date, term_days, count)
    if salary_day is None:
        dates = points
    else:
        dates = []
        for point in points:
            earliest = point
            if dates and earliest <= dates[-1]:
                earliest = dates[-1] + timedelta(days=1)
            dates.append(next_salary_day(earliest, salary_day))

    maturity = start_date + timedelta(days=term_days)
    overrun = days_between(maturity, dates[-1])
    if overrun > 31:
        # kept as generated; callers may surface this as a warning
        logger.info(
            "Final due date %s is %s days after maturity %s", dates[-1], overrun, maturity
        )
    return dates
