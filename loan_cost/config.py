"""Centralized configuration for the loan cost calculator.

Regulatory fee parameters and request limits live here and nowhere else. The
defaults below are illustrative values modelled on common short-term credit
fee caps; deployments are expected to supply their own JSON document, either
by path or through the ``LOAN_COST_FEE_CONFIG`` environment variable.

A fee configuration document looks like::

    {
        "initiation_fee_base": "165",
        "initiation_fee_rate": "0.10",
        "initiation_fee_threshold": "1000",
        "initiation_fee_cap": "1050",
        "service_fee_per_month": "60",
        "service_fee_cap": "500",
        "vat_rate": "0.15"
    }

Numbers may be given as JSON numbers or strings; strings are preferred as
they survive the round trip without binary rounding.
"""

from __future__ import annotations

import json
import os
from dataclasses import fields
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Optional

from .data_models import FeeConfig, LoanLimits
from .errors import InvalidFeeConfig

FEE_CONFIG_ENV_VAR = "LOAN_COST_FEE_CONFIG"

# =============================================================================
# FEES
# =============================================================================

DEFAULT_FEE_CONFIG = FeeConfig(
    initiation_fee_base=Decimal("165"),
    initiation_fee_rate=Decimal("0.10"),
    initiation_fee_threshold=Decimal("1000"),
    initiation_fee_cap=Decimal("1050"),
    service_fee_per_month=Decimal("60"),
    service_fee_cap=Decimal("500"),
    vat_rate=Decimal("0.15"),
)

# =============================================================================
# REQUEST LIMITS
# =============================================================================

# Five years
DEFAULT_MAX_TERM_DAYS = 1825

# 100% per month
DEFAULT_MAX_MONTHLY_RATE = Decimal("1")

# One billion
DEFAULT_MAX_PRINCIPAL = Decimal("1000000000")

DEFAULT_LIMITS = LoanLimits(
    max_term_days=DEFAULT_MAX_TERM_DAYS,
    max_monthly_rate=DEFAULT_MAX_MONTHLY_RATE,
    max_principal=DEFAULT_MAX_PRINCIPAL,
)


def fee_config_from_dict(
    data: Mapping[str, Any], base: FeeConfig = DEFAULT_FEE_CONFIG
) -> FeeConfig:
    """Build a ``FeeConfig`` from a mapping.

    Keys missing from ``data`` are taken from ``base``. Unknown keys are
    rejected so that a misspelt setting cannot silently fall back to a
    default.
    """
    known = {f.name for f in fields(FeeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidFeeConfig("Unknown fee settings", unknown=unknown)
    values = base.as_dict()
    values.update(data)
    return FeeConfig(**values)


def load_fee_config(path, base: FeeConfig = DEFAULT_FEE_CONFIG) -> FeeConfig:
    """Read a fee configuration from a JSON file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise InvalidFeeConfig(f"Cannot read fee configuration {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidFeeConfig(f"Fee configuration {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidFeeConfig(f"Fee configuration {path} must be a JSON object")
    return fee_config_from_dict(data, base)


def fee_config_from_env(environ: Optional[Mapping[str, str]] = None) -> FeeConfig:
    """Load the fee configuration named by ``LOAN_COST_FEE_CONFIG``.

    Returns the defaults when the variable is unset or empty.
    """
    environ = os.environ if environ is None else environ
    path = environ.get(FEE_CONFIG_ENV_VAR, "").strip()
    if not path:
        return DEFAULT_FEE_CONFIG
    return load_fee_config(path)


def limits_from_dict(data: Mapping[str, Any], base: LoanLimits = DEFAULT_LIMITS) -> LoanLimits:
    max_term_days = data.get("max_term_days", base.max_term_days)
    if isinstance(max_term_days, bool) or not isinstance(max_term_days, int):
        raise InvalidFeeConfig("max_term_days must be a whole number", max_term_days=max_term_days)
    return LoanLimits(
        max_term_days=max_term_days,
        max_monthly_rate=data.get("max_monthly_rate", base.max_monthly_rate),
        max_principal=data.get("max_principal", base.max_principal),
    )
