"""Tests for initiation and service fee resolution."""

from decimal import Decimal

import pytest

from loan_cost.data_models import FeeConfig
from loan_cost.errors import InvalidPrincipal, InvalidTerm
from loan_cost.fees import resolve


class TestInitiationFee:
    def test_at_threshold_only_base_is_charged(self, fee_config):
        fees = resolve(Decimal("1000.00"), 30, fee_config)

        assert fees.initiation_fee_excl_vat == Decimal("165.00")
        assert fees.initiation_fee_incl_vat == Decimal("189.75")

    def test_marginal_rate_above_threshold(self, fee_config):
        fees = resolve(Decimal("5000.00"), 30, fee_config)

        # 165 + 10% of 4000
        assert fees.initiation_fee_excl_vat == Decimal("565.00")
        assert fees.initiation_fee_incl_vat == Decimal("649.75")

    def test_below_threshold_is_not_discounted(self, fee_config):
        fees = resolve(Decimal("300.00"), 30, fee_config)

        assert fees.initiation_fee_excl_vat == Decimal("165")

    @pytest.mark.parametrize("principal", ["10000", "20000", "1000000"])
    def test_capped(self, fee_config, principal):
        fees = resolve(Decimal(principal), 30, fee_config)

        assert fees.initiation_fee_excl_vat == fee_config.initiation_fee_cap
        assert fees.initiation_fee_incl_vat == Decimal("1207.50")


class TestServiceFee:
    def test_one_month(self, fee_config):
        fees = resolve(Decimal("1000"), 30, fee_config)

        assert fees.service_months == 1
        assert fees.service_fee_excl_vat == Decimal("60")
        assert fees.service_fee_incl_vat == Decimal("69.00")

    def test_started_month_is_charged(self, fee_config):
        fees = resolve(Decimal("1000"), 31, fee_config)

        assert fees.service_months == 2
        assert fees.service_fee_incl_vat == Decimal("138.00")

    def test_short_term_charges_one_month(self, fee_config):
        fees = resolve(Decimal("1000"), 5, fee_config)

        assert fees.service_months == 1

    def test_capped(self, fee_config):
        fees = resolve(Decimal("1000"), 365, fee_config)

        assert fees.service_months == 13
        assert fees.service_fee_excl_vat == Decimal("500")
        assert fees.service_fee_incl_vat == Decimal("575.00")


class TestVat:
    def test_rounds_half_up_once(self):
        cfg = FeeConfig(
            initiation_fee_base="0.82",
            initiation_fee_rate="0",
            initiation_fee_threshold="0",
            initiation_fee_cap="100",
            service_fee_per_month="0",
            service_fee_cap="0",
            vat_rate="0.25",
        )
        fees = resolve(Decimal("100"), 30, cfg)

        # 0.82 * 1.25 = 1.025
        assert fees.initiation_fee_incl_vat == Decimal("1.03")

    def test_zero_vat(self, fee_config):
        cfg = FeeConfig(**{**fee_config.as_dict(), "vat_rate": Decimal("0")})
        fees = resolve(Decimal("1000"), 30, cfg)

        assert fees.initiation_fee_incl_vat == fees.initiation_fee_excl_vat

    def test_total_fees(self, fee_config):
        fees = resolve(Decimal("1000"), 30, fee_config)

        assert fees.total_fees_incl_vat == Decimal("258.75")


class TestErrors:
    @pytest.mark.parametrize("principal", ["0", "-1"])
    def test_non_positive_principal(self, fee_config, principal):
        with pytest.raises(InvalidPrincipal):
            resolve(Decimal(principal), 30, fee_config)

    def test_non_positive_term(self, fee_config):
        with pytest.raises(InvalidTerm):
            resolve(Decimal("1000"), 0, fee_config)
