"""Shared test fixtures."""

from __future__ import annotations

import pytest

from naijatax.config.schema import PersonalTaxConfig, StandardContributionRates, TaxBracket
from naijatax.taxes.business import BusinessTaxEngine
from naijatax.taxes.personal import PersonalTaxEngine


@pytest.fixture
def personal_engine() -> PersonalTaxEngine:
    """Engine over the shipped 2026 tables."""
    return PersonalTaxEngine()


@pytest.fixture
def business_engine() -> BusinessTaxEngine:
    """Engine over the shipped 2026 tables."""
    return BusinessTaxEngine()


@pytest.fixture
def two_band_config() -> PersonalTaxConfig:
    """Small hand-checkable table: 0-100k at 0%, above at 10%."""
    return PersonalTaxConfig(
        brackets=(
            TaxBracket(min=0, max=100_000, rate=0),
            TaxBracket(min=100_000, max=None, rate=10),
        ),
        rent_relief_cap=50_000,
        rent_relief_pct=0.10,
        standard_contributions=StandardContributionRates(pension_rate=0.10, nhf_rate=0.02),
    )
