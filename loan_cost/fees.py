"""Regulated fee calculation.

Two fees are charged on a loan:

* an initiation fee, ``base + rate * (principal - threshold)`` for the part of
  the principal above the threshold, never more than the configured cap;
* a service fee charged for every started 30-day month of the term, never
  more than the configured cap.

VAT is added to each fee and the result is rounded to the cent once. All
constants come from the ``FeeConfig`` passed in.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from .data_models import FeeBreakdown, FeeConfig
from .errors import InvalidPrincipal, InvalidTerm
from .utils import periods_in_days, round_to_cent

logger = logging.getLogger(__name__)


def initiation_fee(principal: Decimal, fee_config: FeeConfig) -> Decimal:
    """Return the initiation fee excluding VAT."""
    excess = max(Decimal("0"), principal - fee_config.initiation_fee_threshold)
    fee = fee_config.initiation_fee_base + fee_config.initiation_fee_rate * excess
    return min(fee_config.initiation_fee_cap, fee)


def service_fee(months: int, fee_config: FeeConfig) -> Decimal:
    """Return the service fee excluding VAT for ``months`` charged months."""
    return min(fee_config.service_fee_cap, fee_config.service_fee_per_month * months)


def with_vat(amount: Decimal, fee_config: FeeConfig) -> Decimal:
    return round_to_cent(amount * (1 + fee_config.vat_rate))


def resolve(principal: Decimal, term_days: int, fee_config: FeeConfig) -> FeeBreakdown:
    """Compute the fee breakdown for a loan.

    Parameters
    ----------
    principal: Decimal
        The loan amount.
    term_days: int
        Loan term in days; the service fee is charged for
        ``ceil(term_days / 30)`` months.
    fee_config: FeeConfig
        Regulated fee parameters.

    Raises
    ------
    InvalidPrincipal
        If ``principal`` is not positive.
    InvalidTerm
        If ``term_days`` is not positive.
    """
    if principal <= 0:
        raise InvalidPrincipal("Principal must be positive", principal=principal)
    if term_days <= 0:
        raise InvalidTerm("Term must be positive", term_days=term_days)

    months = periods_in_days(term_days)
    initiation = initiation_fee(principal, fee_config)
    service = service_fee(months, fee_config)
    breakdown = FeeBreakdown(
        initiation_fee_excl_vat=initiation,
        initiation_fee_incl_vat=with_vat(initiation, fee_config),
        service_fee_excl_vat=service,
        service_fee_incl_vat=with_vat(service, fee_config),
        service_months=months,
    )
    logger.debug(
        "Resolved fees for principal=%s term_days=%s: initiation=%s service=%s",
        principal,
        term_days,
        breakdown.initiation_fee_incl_vat,
        breakdown.service_fee_incl_vat,
    )
    return breakdown
