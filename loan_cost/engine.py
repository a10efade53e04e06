"""Core calculation engine for the loan cost calculator.

This module combines the fee, interest and schedule components into a single
``LoanCostSummary``. The calculation is a pure function of its inputs: the
same ``LoanTerms``, ``FeeConfig`` and ``LoanLimits`` always produce an equal
summary, which is what allows the credit agreement PDF, the SMS and the UI to
show identical figures.

Money is rounded in exactly three places: the VAT-inclusive fees, the total
interest, and the per-installment amount. The last installment absorbs the
remainder of dividing the total across installments, so the schedule always
adds up to ``total_repayment`` to the cent.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from . import fees, interest, schedule
from .config import DEFAULT_LIMITS
from .data_models import (
    FeeConfig,
    Installment,
    LoanCostSummary,
    LoanLimits,
    LoanTerms,
    RepaymentSchedule,
)
from .errors import (
    CalculationError,
    InvalidPrincipal,
    InvalidRate,
    InvalidStartDate,
    InvalidTerm,
)
from .utils import is_whole_cents, round_to_cent

logger = logging.getLogger(__name__)


def validate_terms(terms: LoanTerms, limits: LoanLimits = DEFAULT_LIMITS) -> None:
    """Check every field of ``terms`` and raise on the first invalid one."""
    if terms.principal <= 0:
        raise InvalidPrincipal("Principal must be positive", principal=terms.principal)
    if terms.principal > limits.max_principal:
        raise InvalidPrincipal(
            f"Principal cannot exceed {limits.max_principal}", principal=terms.principal
        )
    if not is_whole_cents(terms.principal):
        raise InvalidPrincipal(
            "Principal cannot contain fractions of a cent", principal=terms.principal
        )

    term_days = terms.term_days
    if isinstance(term_days, bool) or not isinstance(term_days, int):
        raise InvalidTerm("Term must be a whole number of days", term_days=term_days)
    if term_days <= 0:
        raise InvalidTerm("Term must be positive", term_days=term_days)
    if term_days > limits.max_term_days:
        raise InvalidTerm(
            f"Term cannot exceed {limits.max_term_days} days", term_days=term_days
        )

    if terms.monthly_rate < 0:
        raise InvalidRate("Monthly rate cannot be negative", monthly_rate=terms.monthly_rate)
    if terms.monthly_rate > limits.max_monthly_rate:
        raise InvalidRate(
            f"Monthly rate cannot exceed {limits.max_monthly_rate}",
            monthly_rate=terms.monthly_rate,
        )

    # datetime is a date subclass but would leak a time into the due dates
    if isinstance(terms.start_date, datetime) or not isinstance(terms.start_date, date):
        raise InvalidStartDate(
            "Start date must be a calendar date", start_date=terms.start_date
        )

    schedule.validate_salary_day(terms.salary_day)


def split_into_installments(total: Decimal, count: int) -> List[Decimal]:
    """Divide ``total`` into ``count`` cent amounts that add up exactly.

    Every installment but the last is ``total / count`` rounded half-up; the
    last one takes whatever remains.
    """
    base = round_to_cent(total / count)
    return [base] * (count - 1) + [total - base * (count - 1)]


def calculate(
    terms: LoanTerms,
    fee_config: FeeConfig,
    limits: Optional[LoanLimits] = None,
) -> LoanCostSummary:
    """Compute the full cost and repayment schedule of a loan.

    Parameters
    ----------
    terms: LoanTerms
        Principal, term, start date, rate and optional salary day.
    fee_config: FeeConfig
        Regulated fee parameters.
    limits: Optional[LoanLimits]
        Maximum term and rate accepted; defaults to ``DEFAULT_LIMITS``.

    Returns
    -------
    LoanCostSummary
        Totals, fee breakdown and installment schedule.

    Raises
    ------
    CalculationError
        One of its subclasses, before any computation takes place, when the
        terms are invalid.
    """
    limits = limits or DEFAULT_LIMITS
    try:
        validate_terms(terms, limits)
    except CalculationError as exc:
        logger.info("Rejected loan terms: %s", exc)
        raise

    fee_breakdown = fees.resolve(terms.principal, terms.term_days, fee_config)
    total_interest = interest.accrue(terms.principal, terms.monthly_rate, terms.term_days)
    count = schedule.number_of_repayments(terms.term_days)
    due_dates = schedule.build(terms.start_date, terms.term_days, count, terms.salary_day)

    total_repayment = (
        terms.principal
        + total_interest
        + fee_breakdown.initiation_fee_incl_vat
        + fee_breakdown.service_fee_incl_vat
    )
    amounts = split_into_installments(total_repayment, count)
    installments = tuple(
        Installment(due_date=due, amount=amount) for due, amount in zip(due_dates, amounts)
    )

    summary = LoanCostSummary(
        principal=terms.principal,
        total_interest=total_interest,
        fee_breakdown=fee_breakdown,
        total_repayment=total_repayment,
        monthly_repayment=amounts[0],
        number_of_repayments=count,
        schedule=RepaymentSchedule(installments=installments),
    )
    logger.debug(
        "Calculated loan cost: principal=%s term_days=%s total_repayment=%s installments=%s",
        terms.principal,
        terms.term_days,
        total_repayment,
        count,
    )
    return summary


class LoanCostCalculator:
    """Public entry point of the calculator.

    The class holds no state; ``LoanCostCalculator.calculate(terms, config)``
    and ``LoanCostCalculator().calculate(terms, config)`` are equivalent.
    """

    calculate = staticmethod(calculate)
    validate = staticmethod(validate_terms)
