"""Shared test fixtures: the worked example fee schedule and loan terms."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from loan_cost.data_models import FeeConfig, LoanTerms


@pytest.fixture
def fee_config() -> FeeConfig:
    return FeeConfig(
        initiation_fee_base=Decimal("165"),
        initiation_fee_rate=Decimal("0.10"),
        initiation_fee_threshold=Decimal("1000"),
        initiation_fee_cap=Decimal("1050"),
        service_fee_per_month=Decimal("60"),
        service_fee_cap=Decimal("500"),
        vat_rate=Decimal("0.15"),
    )


@pytest.fixture
def one_month_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("1000.00"),
        term_days=30,
        start_date=date(2024, 1, 15),
        monthly_rate=Decimal("0.05"),
    )


@pytest.fixture
def three_month_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("1000.00"),
        term_days=90,
        start_date=date(2024, 1, 1),
        monthly_rate=Decimal("0.05"),
    )
