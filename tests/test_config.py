"""Tests for fee configuration loading."""

import json
from decimal import Decimal

import pytest

from loan_cost.config import (
    DEFAULT_FEE_CONFIG,
    DEFAULT_LIMITS,
    FEE_CONFIG_ENV_VAR,
    fee_config_from_dict,
    fee_config_from_env,
    limits_from_dict,
    load_fee_config,
)
from loan_cost.errors import InvalidFeeConfig, InvalidRate


class TestFeeConfigFromDict:
    def test_overrides_and_defaults(self):
        cfg = fee_config_from_dict({"service_fee_per_month": "69", "vat_rate": 0.15})

        assert cfg.service_fee_per_month == Decimal("69")
        assert cfg.vat_rate == Decimal("0.15")
        assert cfg.initiation_fee_cap == DEFAULT_FEE_CONFIG.initiation_fee_cap

    def test_unknown_key(self):
        with pytest.raises(InvalidFeeConfig) as excinfo:
            fee_config_from_dict({"vat": "0.15"})

        assert excinfo.value.details == {"unknown": ["vat"]}

    def test_negative_value(self):
        with pytest.raises(InvalidFeeConfig):
            fee_config_from_dict({"initiation_fee_cap": "-1"})

    def test_not_a_number(self):
        with pytest.raises(InvalidFeeConfig):
            fee_config_from_dict({"vat_rate": "fifteen"})


class TestLoadFeeConfig:
    def test_reads_json(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text(json.dumps({"initiation_fee_base": "150", "service_fee_cap": 450}))

        cfg = load_fee_config(path)

        assert cfg.initiation_fee_base == Decimal("150")
        assert cfg.service_fee_cap == Decimal("450")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text("{not json")

        with pytest.raises(InvalidFeeConfig):
            load_fee_config(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text("[1, 2]")

        with pytest.raises(InvalidFeeConfig):
            load_fee_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidFeeConfig):
            load_fee_config(tmp_path / "missing.json")


class TestFeeConfigFromEnv:
    def test_unset_uses_defaults(self):
        assert fee_config_from_env({}) == DEFAULT_FEE_CONFIG

    def test_reads_named_file(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text(json.dumps({"vat_rate": "0.16"}))

        cfg = fee_config_from_env({FEE_CONFIG_ENV_VAR: str(path)})

        assert cfg.vat_rate == Decimal("0.16")


class TestLimits:
    def test_defaults(self):
        assert limits_from_dict({}) == DEFAULT_LIMITS

    def test_overrides(self):
        limits = limits_from_dict({"max_term_days": 180, "max_monthly_rate": "0.05"})

        assert limits.max_term_days == 180
        assert limits.max_monthly_rate == Decimal("0.05")

    def test_principal_override(self):
        limits = limits_from_dict({"max_principal": 250000})

        assert limits.max_principal == Decimal("250000")
        assert limits.max_term_days == DEFAULT_LIMITS.max_term_days

    def test_rejects_fractional_term(self):
        with pytest.raises(InvalidFeeConfig):
            limits_from_dict({"max_term_days": 30.5})

    def test_rejects_bad_rate(self):
        with pytest.raises(InvalidRate):
            limits_from_dict({"max_monthly_rate": "high"})
