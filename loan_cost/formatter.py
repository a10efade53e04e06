"""Output helpers for the loan cost calculator.

This module renders summaries and schedules as plain text tables for the
terminal and converts them into JSON-ready dictionaries for exports and the
web API. Money is written as a plain decimal string with two places; currency
symbols and locale-aware grouping are left to whoever displays the figures.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List

from .data_models import FeeBreakdown, Installment, LoanCostSummary, SettlementQuote


def money(value: Decimal) -> str:
    return f"{value:.2f}"


def fee_breakdown_to_dict(fees: FeeBreakdown) -> Dict[str, Any]:
    return {
        "initiation_fee_excl_vat": money(fees.initiation_fee_excl_vat),
        "initiation_fee_incl_vat": money(fees.initiation_fee_incl_vat),
        "service_fee_excl_vat": money(fees.service_fee_excl_vat),
        "service_fee_incl_vat": money(fees.service_fee_incl_vat),
        "service_months": fees.service_months,
    }


def schedule_to_list(installments: Iterable[Installment]) -> List[Dict[str, Any]]:
    return [
        {
            "number": number,
            "due_date": entry.due_date.isoformat(),
            "amount": money(entry.amount),
        }
        for number, entry in enumerate(installments, start=1)
    ]


def summary_to_dict(summary: LoanCostSummary) -> Dict[str, Any]:
    """Convert a summary into JSON-serialisable primitives."""
    return {
        "principal": money(summary.principal),
        "total_interest": money(summary.total_interest),
        "fee_breakdown": fee_breakdown_to_dict(summary.fee_breakdown),
        "total_repayment": money(summary.total_repayment),
        "total_cost_of_credit": money(summary.total_cost_of_credit),
        "monthly_repayment": money(summary.monthly_repayment),
        "number_of_repayments": summary.number_of_repayments,
        "schedule": schedule_to_list(summary.schedule),
    }


def settlement_to_dict(quote: SettlementQuote) -> Dict[str, Any]:
    return {
        "settlement_date": quote.settlement_date.isoformat(),
        "days_held": quote.days_held,
        "principal": money(quote.principal),
        "interest": money(quote.interest),
        "initiation_fee_incl_vat": money(quote.initiation_fee_incl_vat),
        "service_fee_incl_vat": money(quote.service_fee_incl_vat),
        "previous_payments": money(quote.previous_payments),
        "amount_due": money(quote.amount_due),
    }


def print_summary(summary: LoanCostSummary) -> None:
    """Print a summary of loan costs in a human-readable format."""
    fees = summary.fee_breakdown
    print("Summary")
    print("-" * 72)
    print(f"Principal              : {money(summary.principal)}")
    print(f"Total interest         : {money(summary.total_interest)}")
    print(
        f"Initiation fee         : {money(fees.initiation_fee_incl_vat)}"
        f" (excl. VAT {money(fees.initiation_fee_excl_vat)})"
    )
    print(
        f"Service fee            : {money(fees.service_fee_incl_vat)}"
        f" (excl. VAT {money(fees.service_fee_excl_vat)}, {fees.service_months} months)"
    )
    print(f"Total cost of credit   : {money(summary.total_cost_of_credit)}")
    print(f"Total repayment        : {money(summary.total_repayment)}")
    print(f"Monthly repayment      : {money(summary.monthly_repayment)}")
    print(f"Number of repayments   : {summary.number_of_repayments}")
    print("-" * 72)


def print_schedule(installments: Iterable[Installment]) -> None:
    """Print the repayment schedule as a simple table."""
    print("\t".join(["No", "Due date", "Amount"]))
    for row in schedule_to_list(installments):
        print("\t".join([str(row["number"]), row["due_date"], row["amount"]]))


def print_settlement(quote: SettlementQuote) -> None:
    print("Settlement")
    print("-" * 72)
    print(f"Settlement date        : {quote.settlement_date.isoformat()}")
    print(f"Days held              : {quote.days_held}")
    print(f"Principal              : {money(quote.principal)}")
    print(f"Interest               : {money(quote.interest)}")
    print(f"Initiation fee         : {money(quote.initiation_fee_incl_vat)}")
    print(f"Service fee            : {money(quote.service_fee_incl_vat)}")
    print(f"Previous payments      : {money(quote.previous_payments)}")
    print(f"Amount due             : {money(quote.amount_due)}")
    print("-" * 72)
