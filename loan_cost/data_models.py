"""Data models for the loan cost calculator.

This module defines the dataclasses exchanged with the calculator: the loan
terms supplied by the caller, the injected fee configuration, and the derived
fee breakdown, installments and summary. All of them are frozen so a value
produced for one request can be shared with PDF generation, notifications and
the UI without any of them being able to alter it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional, Tuple

from .errors import InvalidFeeConfig, InvalidPayment, InvalidPrincipal, InvalidRate
from .utils import to_decimal


def _coerce_decimals(instance, names, error) -> None:
    # frozen dataclasses need object.__setattr__ to normalise in __post_init__
    for name in names:
        value = to_decimal(getattr(instance, name), name, error)
        object.__setattr__(instance, name, value)


@dataclass(frozen=True)
class LoanTerms:
    """The inputs of a single calculation request.

    Attributes
    ----------
    principal: Decimal
        The approved loan amount. Must be positive and expressed in whole
        cents.
    term_days: int
        Length of the loan in days.
    start_date: date
        The day the loan is paid out.
    monthly_rate: Decimal
        Simple interest per 30 days as a fraction, e.g. ``Decimal("0.05")``.
    salary_day: Optional[int]
        Day of the month the borrower is paid (1-31). When given, due dates
        are moved onto the borrower's pay day.
    """

    principal: Decimal
    term_days: int
    start_date: date
    monthly_rate: Decimal
    salary_day: Optional[int] = None

    def __post_init__(self) -> None:
        _coerce_decimals(self, ("principal",), InvalidPrincipal)
        _coerce_decimals(self, ("monthly_rate",), InvalidRate)


@dataclass(frozen=True)
class FeeConfig:
    """Regulated fee parameters.

    These values are supplied from configuration (see ``config.py``) rather
    than embedded in the calculation code, so a change in regulation only
    requires a new configuration file.
    """

    initiation_fee_base: Decimal
    initiation_fee_rate: Decimal
    initiation_fee_threshold: Decimal
    initiation_fee_cap: Decimal
    service_fee_per_month: Decimal
    service_fee_cap: Decimal
    vat_rate: Decimal

    def __post_init__(self) -> None:
        _coerce_decimals(self, [f.name for f in fields(self)], InvalidFeeConfig)
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise InvalidFeeConfig(
                    f"Fee setting '{f.name}' cannot be negative",
                    **{f.name: getattr(self, f.name)},
                )

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class LoanLimits:
    """Upper bounds accepted for a loan request."""

    max_term_days: int
    max_monthly_rate: Decimal
    max_principal: Decimal = Decimal("1000000000")

    def __post_init__(self) -> None:
        _coerce_decimals(self, ("max_monthly_rate",), InvalidRate)
        _coerce_decimals(self, ("max_principal",), InvalidPrincipal)


@dataclass(frozen=True)
class FeeBreakdown:
    """Initiation and service fees before and after VAT.

    The excl. VAT figures are kept exact; only the incl. VAT figures are
    rounded to the cent.
    """

    initiation_fee_excl_vat: Decimal
    initiation_fee_incl_vat: Decimal
    service_fee_excl_vat: Decimal
    service_fee_incl_vat: Decimal
    service_months: int

    @property
    def total_fees_incl_vat(self) -> Decimal:
        return self.initiation_fee_incl_vat + self.service_fee_incl_vat


@dataclass(frozen=True)
class Installment:
    due_date: date
    amount: Decimal


@dataclass(frozen=True)
class RepaymentSchedule:
    """Chronologically ordered, non-empty sequence of installments."""

    installments: Tuple[Installment, ...]

    def __iter__(self) -> Iterator[Installment]:
        return iter(self.installments)

    def __len__(self) -> int:
        return len(self.installments)

    def __getitem__(self, index):
        return self.installments[index]

    @property
    def total(self) -> Decimal:
        return sum((i.amount for i in self.installments), Decimal("0"))

    @property
    def first_due_date(self) -> date:
        return self.installments[0].due_date

    @property
    def final_due_date(self) -> date:
        return self.installments[-1].due_date


@dataclass(frozen=True)
class LoanCostSummary:
    """The complete, immutable result of a loan cost calculation."""

    principal: Decimal
    total_interest: Decimal
    fee_breakdown: FeeBreakdown
    total_repayment: Decimal
    monthly_repayment: Decimal
    number_of_repayments: int
    schedule: RepaymentSchedule

    @property
    def total_cost_of_credit(self) -> Decimal:
        """Everything the borrower pays on top of the principal."""
        return self.total_repayment - self.principal

    def total_with_late_fee(self, late_fee) -> Decimal:
        late_fee = to_decimal(late_fee, "late_fee", InvalidPayment)
        if late_fee < 0:
            raise InvalidPayment("Late fee cannot be negative", late_fee=late_fee)
        return self.total_repayment + late_fee


@dataclass(frozen=True)
class SettlementQuote:
    """Amount required to settle a loan on a given day.

    ``days_held`` is the number of days interest and service fees were
    accrued for; ``amount_due`` already has ``previous_payments`` deducted
    and never drops below zero.
    """

    settlement_date: date
    days_held: int
    principal: Decimal
    interest: Decimal
    initiation_fee_incl_vat: Decimal
    service_fee_incl_vat: Decimal
    previous_payments: Decimal
    amount_due: Decimal = field(default=Decimal("0"))

    @property
    def gross_amount(self) -> Decimal:
        return (
            self.principal
            + self.interest
            + self.initiation_fee_incl_vat
            + self.service_fee_incl_vat
        )
