"""Command-line interface for the loan cost calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can quote the full cost and repayment schedule of a loan or
the amount needed to settle it early. Results can be printed to the terminal
or exported to JSON/CSV files.

    loan-cost quote -p 1000 -t 30 -s 2024-03-01 -r 5%
    loan-cost settle -p 3000 -t 90 -s 2024-03-01 -r 0.05 --on 2024-04-10
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

import click

from .config import DEFAULT_FEE_CONFIG, FEE_CONFIG_ENV_VAR, load_fee_config
from .data_models import FeeConfig, LoanCostSummary, LoanTerms
from .engine import calculate
from .errors import CalculationError
from .formatter import (
    money,
    print_schedule,
    print_settlement,
    print_summary,
    settlement_to_dict,
    summary_to_dict,
)
from .settlement import early_settlement
from .utils import decimal_from_str, parse_date

logger = logging.getLogger(__name__)


def parse_amount(value: str) -> Decimal:
    """Parse a money string with optional suffixes.

    Accepts plain numbers ("1500", "1,500.50") and shorthand with ``k``/``m``
    suffixes (e.g., "1.5k" meaning 1500). Returns a Decimal.
    """
    value = value.strip().lower().replace(",", "")
    factor = Decimal("1")
    if value.endswith("k"):
        factor = Decimal("1000")
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal("1000000")
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_rate(value: str) -> Decimal:
    """Parse a monthly rate.

    "5%", "5" and "0.05" all mean five percent. A bare number of 1 or more is
    read as a percentage, so "1" is one percent; use "100%" for a full 1.0.
    """
    value = value.strip()
    percent = value.endswith("%")
    if percent:
        value = value[:-1]
    try:
        rate = decimal_from_str(value)
    except ValueError:
        raise click.BadParameter(f"Invalid rate: {value}")
    # Whole numbers like 1 or 5 are percentages
    if percent or rate >= 1:
        rate = rate / 100
    return rate


def parse_day(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def build_terms_from_options(
    principal: str,
    term_days: int,
    start_date: str,
    rate: str,
    salary_day: Optional[int],
) -> LoanTerms:
    return LoanTerms(
        principal=parse_amount(principal),
        term_days=term_days,
        start_date=parse_day(start_date),
        monthly_rate=parse_rate(rate),
        salary_day=salary_day,
    )


def read_fee_config(path: Optional[str]) -> FeeConfig:
    if not path:
        return DEFAULT_FEE_CONFIG
    logger.debug("Using fee configuration from %s", path)
    return load_fee_config(path)


# error field -> the option the user typed it in
OPTION_FOR_FIELD = {
    "principal": "--principal",
    "term_days": "--term-days",
    "start_date": "--start-date",
    "monthly_rate": "--rate",
    "salary_day": "--salary-day",
    "fee_config": "--fee-config",
    "settlement_date": "--on",
    "previous_payments": "--paid",
}


def bad_parameter(exc: CalculationError) -> click.BadParameter:
    return click.BadParameter(exc.message, param_hint=OPTION_FOR_FIELD.get(exc.field))


def export_to_json(path: Path, summary: LoanCostSummary) -> None:
    """Export summary and schedule to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(summary_to_dict(summary), f, indent=2)


def export_to_csv(path: Path, summary: LoanCostSummary) -> None:
    """Export the schedule to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Number", "Due_Date", "Amount"])
        for number, entry in enumerate(summary.schedule, start=1):
            writer.writerow([number, entry.due_date.isoformat(), money(entry.amount)])


def loan_options(func):
    """Options shared by every command that takes loan terms."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Approved loan amount"),
        click.option("--term-days", "-t", "term_days", required=True, type=int, help="Loan term in days"),
        click.option("--start-date", "-s", "start_date", required=True, help="Payout date (YYYY-MM-DD)"),
        click.option("--rate", "-r", "rate", default="5%", show_default=True, help="Monthly interest rate"),
        click.option("--salary-day", "salary_day", type=int, help="Borrower's pay day of the month (1-31)"),
        click.option(
            "--fee-config",
            "fee_config_path",
            envvar=FEE_CONFIG_ENV_VAR,
            type=click.Path(exists=True, dir_okay=False),
            help=f"JSON fee configuration (defaults to ${FEE_CONFIG_ENV_VAR} or built-in values)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details")
def cli(verbose: bool) -> None:
    """A command-line loan cost and repayment schedule calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def quote(
    principal: str,
    term_days: int,
    start_date: str,
    rate: str,
    salary_day: Optional[int],
    fee_config_path: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print the loan cost summary and repayment schedule."""
    try:
        terms = build_terms_from_options(principal, term_days, start_date, rate, salary_day)
        summary = calculate(terms, read_fee_config(fee_config_path))
    except CalculationError as exc:
        raise bad_parameter(exc)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, summary)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, summary)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
    else:
        print_summary(summary)
        print_schedule(summary.schedule)


@cli.command()
@loan_options
@click.option("--on", "settlement_date", required=True, help="Settlement date (YYYY-MM-DD)")
@click.option("--paid", "paid", default="0", show_default=True, help="Total already repaid")
@click.option("--json", "as_json", is_flag=True, help="Print the quote as JSON")
def settle(
    principal: str,
    term_days: int,
    start_date: str,
    rate: str,
    salary_day: Optional[int],
    fee_config_path: Optional[str],
    settlement_date: str,
    paid: str,
    as_json: bool,
) -> None:
    """Quote the amount needed to settle a loan before maturity."""
    try:
        terms = build_terms_from_options(principal, term_days, start_date, rate, salary_day)
        settlement = early_settlement(
            terms,
            read_fee_config(fee_config_path),
            parse_day(settlement_date),
            parse_amount(paid),
        )
    except CalculationError as exc:
        raise bad_parameter(exc)
    if as_json:
        click.echo(json.dumps(settlement_to_dict(settlement), indent=2))
    else:
        print_settlement(settlement)


if __name__ == "__main__":
    cli()
