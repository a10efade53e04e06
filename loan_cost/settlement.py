"""Early settlement and outstanding balance quotes.

A loan settled before maturity is charged:

* the initiation fee in full;
* the service fee for every started 30-day month the loan was held;
* interest for the days the loan was held.

These are the same formulas the full-term calculation uses, applied to the
number of days elapsed, so a quote taken on the maturity date with nothing
paid equals ``total_repayment``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from . import fees, interest
from .config import DEFAULT_LIMITS
from .data_models import FeeConfig, LoanLimits, LoanTerms, SettlementQuote
from .engine import validate_terms
from .errors import InvalidPayment, InvalidSettlementDate
from .utils import days_between, periods_in_days, round_to_cent, to_decimal

logger = logging.getLogger(__name__)


def _previous_payments(value) -> Decimal:
    paid = to_decimal(value, "previous_payments", InvalidPayment)
    if paid < 0:
        raise InvalidPayment("Previous payments cannot be negative", previous_payments=paid)
    return paid


def _days_since_start(terms: LoanTerms, as_of: date) -> int:
    if isinstance(as_of, datetime) or not isinstance(as_of, date):
        raise InvalidSettlementDate("Date must be a calendar date", settlement_date=as_of)
    if as_of < terms.start_date:
        raise InvalidSettlementDate(
            "Date cannot be before the loan start date",
            settlement_date=as_of,
            start_date=terms.start_date,
        )
    return days_between(terms.start_date, as_of)


def _quote(terms: LoanTerms, fee_config: FeeConfig, as_of: date, days: int, paid: Decimal) -> SettlementQuote:
    initiation = fees.initiation_fee(terms.principal, fee_config)
    service = fees.service_fee(periods_in_days(days), fee_config)
    quote = SettlementQuote(
        settlement_date=as_of,
        days_held=days,
        principal=terms.principal,
        interest=interest.accrue_for_days(terms.principal, terms.monthly_rate, days),
        initiation_fee_incl_vat=fees.with_vat(initiation, fee_config),
        service_fee_incl_vat=fees.with_vat(service, fee_config),
        previous_payments=paid,
    )
    amount_due = max(Decimal("0.00"), quote.gross_amount - paid)
    return replace(quote, amount_due=amount_due)


def early_settlement(
    terms: LoanTerms,
    fee_config: FeeConfig,
    settlement_date: date,
    previous_payments=Decimal("0"),
    limits: Optional[LoanLimits] = None,
) -> SettlementQuote:
    """Quote the amount needed to close the loan on ``settlement_date``.

    Raises
    ------
    InvalidSettlementDate
        If the date is before the start date or after maturity (use the
        full-term ``total_repayment`` instead).
    InvalidPayment
        If ``previous_payments`` is negative.
    """
    validate_terms(terms, limits or DEFAULT_LIMITS)
    paid = _previous_payments(previous_payments)
    days = _days_since_start(terms, settlement_date)
    if days > terms.term_days:
        raise InvalidSettlementDate(
            "Settlement date is after the loan maturity",
            settlement_date=settlement_date,
            term_days=terms.term_days,
        )
    quote = _quote(terms, fee_config, settlement_date, days, paid)
    logger.debug("Early settlement on %s after %s days: %s", settlement_date, days, quote.amount_due)
    return quote


def outstanding_amount(
    terms: LoanTerms,
    fee_config: FeeConfig,
    as_of: date,
    previous_payments=Decimal("0"),
    limits: Optional[LoanLimits] = None,
) -> Decimal:
    """Return what is owed on ``as_of``; accrual stops at maturity."""
    validate_terms(terms, limits or DEFAULT_LIMITS)
    paid = _previous_payments(previous_payments)
    days = min(_days_since_start(terms, as_of), terms.term_days)
    return _quote(terms, fee_config, as_of, days, paid).amount_due


def next_payment_amount(
    terms: LoanTerms,
    fee_config: FeeConfig,
    as_of: date,
    previous_payments=Decimal("0"),
    limits: Optional[LoanLimits] = None,
) -> Decimal:
    """Return the next installment given what has been paid so far.

    The outstanding amount is spread evenly over the 30-day periods left in
    the term. Once the loan has matured the whole outstanding amount is due.
    """
    outstanding = outstanding_amount(terms, fee_config, as_of, previous_payments, limits)
    if outstanding == 0:
        return Decimal("0.00")
    days_remaining = max(0, terms.term_days - days_between(terms.start_date, as_of))
    if days_remaining == 0:
        return outstanding
    periods = periods_in_days(days_remaining)
    return round_to_cent(outstanding / periods)
