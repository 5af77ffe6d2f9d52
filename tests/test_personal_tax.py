"""Tests for the personal income tax engine."""

from __future__ import annotations

import pytest

from naijatax.config.schema import (
    PersonalTaxConfig,
    ReliefLimits,
    TaxReliefs,
    custom_deduction,
)
from naijatax.taxes.personal import (
    PersonalTaxEngine,
    calculate_rent_relief,
    calculate_standard_reliefs,
    calculate_tax,
    calculate_tax_from_monthly,
    calculate_tax_from_weekly,
)


class TestCalculateTax:
    def test_one_million_no_reliefs(self, personal_engine: PersonalTaxEngine) -> None:
        """0-800k at 0% contributes 0; 800k-1M at 15% contributes 30,000."""
        result = personal_engine.calculate(1_000_000)
        assert result.taxable_income == 1_000_000
        assert result.total_tax == 30_000
        assert result.net_income == 970_000
        assert len(result.tax_per_bracket) == 2
        first, second = result.tax_per_bracket
        assert first.tax == 0.0
        assert second.bracket == "₦800,000 - ₦3,000,000"
        assert second.taxable_amount == 200_000
        assert second.tax == 30_000

    def test_exactly_tax_free_threshold(self, personal_engine: PersonalTaxEngine) -> None:
        result = personal_engine.calculate(800_000)
        assert result.total_tax == 0.0
        assert result.net_income == 800_000

    def test_zero_income(self, personal_engine: PersonalTaxEngine) -> None:
        result = personal_engine.calculate(0)
        assert result.total_tax == 0.0
        assert result.tax_per_bracket == ()
        assert result.effective_tax_rate == 0.0

    def test_reliefs_exceed_income(self, personal_engine: PersonalTaxEngine) -> None:
        """Taxable income floors at zero rather than going negative."""
        result = personal_engine.calculate(100_000, TaxReliefs(pension=500_000))
        assert result.taxable_income == 0.0
        assert result.total_tax == 0.0
        assert result.net_income == 100_000

    def test_negative_income_is_not_rejected(self, personal_engine: PersonalTaxEngine) -> None:
        result = personal_engine.calculate(-10_000)
        assert result.taxable_income == 0.0
        assert result.total_tax == 0.0
        assert result.net_income == -10_000

    def test_named_reliefs_summed(self, personal_engine: PersonalTaxEngine) -> None:
        reliefs = TaxReliefs(
            pension=400_000,
            nhf=125_000,
            nhis=50_000,
            life_insurance=25_000,
            rent_paid=500_000,
        )
        result = personal_engine.calculate(5_000_000, reliefs)
        assert result.pension_relief == 400_000
        assert result.nhf_relief == 125_000
        assert result.nhis_relief == 50_000
        assert result.life_insurance_relief == 25_000
        assert result.rent_relief == pytest.approx(100_000)
        assert result.total_reliefs == pytest.approx(700_000)
        assert result.taxable_income == pytest.approx(4_300_000)
        # 15% on 2.2M + 18% on 1.3M
        assert result.total_tax == pytest.approx(330_000 + 234_000)

    def test_invariants(self, personal_engine: PersonalTaxEngine) -> None:
        reliefs = TaxReliefs(pension=300_000, rent_paid=1_200_000)
        for income in [0, 750_000, 3_500_000, 26_000_000, 80_000_000]:
            result = personal_engine.calculate(income, reliefs)
            assert result.net_income == result.gross_income - result.total_tax
            assert result.total_tax == pytest.approx(sum(b.tax for b in result.tax_per_bracket))
            assert sum(b.taxable_amount for b in result.tax_per_bracket) == pytest.approx(
                result.taxable_income
            )

    def test_monotonic_in_income(self, personal_engine: PersonalTaxEngine) -> None:
        reliefs = TaxReliefs(nhf=60_000, rent_paid=900_000)
        previous = -1.0
        for income in range(0, 70_000_001, 250_000):
            tax = personal_engine.calculate(income, reliefs).total_tax
            assert tax >= previous
            previous = tax

    def test_idempotent(self, personal_engine: PersonalTaxEngine) -> None:
        reliefs = TaxReliefs(
            pension=80_000,
            custom_deductions=(custom_deduction("Gift", 10_000, id="g1"),),
        )
        assert personal_engine.calculate(4_250_000, reliefs) == personal_engine.calculate(
            4_250_000, reliefs
        )

    def test_effective_and_marginal_rate(self, personal_engine: PersonalTaxEngine) -> None:
        result = personal_engine.calculate(1_000_000)
        assert result.effective_tax_rate == pytest.approx(3.0)
        assert result.marginal_rate == 15.0


class TestRentRelief:
    def test_cap_binds(self, personal_engine: PersonalTaxEngine) -> None:
        assert personal_engine.rent_relief(10_000_000) == 200_000

    def test_percentage_binds(self, personal_engine: PersonalTaxEngine) -> None:
        assert personal_engine.rent_relief(500_000) == pytest.approx(100_000)

    def test_module_level(self) -> None:
        assert calculate_rent_relief(10_000_000) == 200_000
        assert calculate_rent_relief(0) == 0.0


class TestCustomDeductions:
    def test_partition_against_income(self, personal_engine: PersonalTaxEngine) -> None:
        """Taxable items add to income; deductible items reduce it."""
        reliefs = TaxReliefs(
            custom_deductions=(
                custom_deduction("Freelance", 100_000, is_taxable=True),
                custom_deduction("Donation", 50_000, is_taxable=False),
            )
        )
        result = personal_engine.calculate(1_000_000, reliefs)
        assert result.custom_deductions_total == 50_000
        assert result.custom_taxable_additions == 100_000
        assert result.total_reliefs == 50_000
        assert result.taxable_income == 1_050_000
        assert len(result.custom_deductions) == 2

    def test_taxable_addition_applied_before_floor(
        self, personal_engine: PersonalTaxEngine
    ) -> None:
        reliefs = TaxReliefs(
            pension=300_000,
            custom_deductions=(custom_deduction("Bonus", 200_000, is_taxable=True),),
        )
        result = personal_engine.calculate(200_000, reliefs)
        assert result.taxable_income == 100_000

    def test_from_dicts(self, personal_engine: PersonalTaxEngine) -> None:
        reliefs = TaxReliefs.model_validate(
            {
                "custom_deductions": [
                    {"kind": "taxable_addition", "id": "a", "name": "Rent income", "amount": 1},
                    {"kind": "deductible", "id": "b", "name": "Tithe", "amount": 3},
                ]
            }
        )
        result = personal_engine.calculate(900_000, reliefs)
        assert result.taxable_income == 899_998


class TestConfigInjection:
    def test_custom_brackets(self, two_band_config: PersonalTaxConfig) -> None:
        engine = PersonalTaxEngine(two_band_config)
        result = engine.calculate(300_000)
        assert result.total_tax == 20_000
        assert result.tax_per_bracket[-1].bracket == "Above ₦100,000"

    def test_custom_rent_rule(self, two_band_config: PersonalTaxConfig) -> None:
        engine = PersonalTaxEngine(two_band_config)
        assert engine.rent_relief(1_000_000) == 50_000
        assert engine.rent_relief(200_000) == pytest.approx(20_000)

    def test_relief_limits_clamp(self, personal_engine: PersonalTaxEngine) -> None:
        config = personal_engine.config.model_copy(
            update={"relief_limits": ReliefLimits(pension=50_000, life_insurance=10_000)}
        )
        result = PersonalTaxEngine(config).calculate(
            2_000_000, TaxReliefs(pension=400_000, life_insurance=30_000, nhf=5_000)
        )
        assert result.pension_relief == 50_000
        assert result.life_insurance_relief == 10_000
        assert result.nhf_relief == 5_000


class TestPeriodWrappers:
    def test_monthly(self, personal_engine: PersonalTaxEngine) -> None:
        """Income and contributions scale by 12; rent is already annual."""
        result = personal_engine.calculate_from_monthly(
            100_000, TaxReliefs(pension=8_000, rent_paid=500_000)
        )
        assert result.gross_income == 1_200_000
        assert result.pension_relief == 96_000
        assert result.rent_relief == pytest.approx(100_000)
        assert result.taxable_income == pytest.approx(1_004_000)
        assert result.total_tax == pytest.approx(30_600)

    def test_weekly(self, personal_engine: PersonalTaxEngine) -> None:
        result = personal_engine.calculate_from_weekly(20_000)
        assert result.gross_income == 1_040_000
        assert result.total_tax == 36_000

    def test_weekly_scales_reliefs_by_52(self, personal_engine: PersonalTaxEngine) -> None:
        result = personal_engine.calculate_from_weekly(
            50_000, TaxReliefs(nhf=1_000, nhis=500, life_insurance=100)
        )
        assert result.nhf_relief == 52_000
        assert result.nhis_relief == 26_000
        assert result.life_insurance_relief == 5_200

    def test_custom_items_not_scaled(self, personal_engine: PersonalTaxEngine) -> None:
        reliefs = TaxReliefs(custom_deductions=(custom_deduction("Levy", 12_000),))
        result = personal_engine.calculate_from_monthly(100_000, reliefs)
        assert result.custom_deductions_total == 12_000

    def test_module_level_wrappers(self) -> None:
        assert calculate_tax(1_000_000).total_tax == 30_000
        assert calculate_tax_from_monthly(100_000).gross_income == 1_200_000
        assert calculate_tax_from_weekly(20_000).gross_income == 1_040_000


class TestStandardReliefs:
    def test_rates(self) -> None:
        reliefs = calculate_standard_reliefs(200_000)
        assert reliefs["pension"] == pytest.approx(16_000)
        assert reliefs["nhf"] == pytest.approx(5_000)

    def test_engine_uses_its_own_rates(self, two_band_config: PersonalTaxConfig) -> None:
        reliefs = PersonalTaxEngine(two_band_config).standard_reliefs(200_000)
        assert reliefs["pension"] == pytest.approx(20_000)
        assert reliefs["nhf"] == pytest.approx(4_000)

    def test_module_function_matches_default_engine(
        self, personal_engine: PersonalTaxEngine
    ) -> None:
        assert calculate_standard_reliefs(150_000) == personal_engine.standard_reliefs(150_000)
