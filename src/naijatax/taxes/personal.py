"""Personal income tax engine (progressive brackets with reliefs)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from naijatax.config.defaults import default_personal_config
from naijatax.config.schema import (
    CustomDeduction,
    PersonalTaxConfig,
    StandardContributionRates,
    TaxReliefs,
)
from naijatax.taxes.brackets import (
    BracketTax,
    annualize,
    apply_brackets,
    capped_rent_relief,
    clamp_relief,
    contribution_amounts,
    marginal_rate,
    partition_custom_deductions,
    periods_per_year,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaxBreakdown:
    """Every intermediate of a personal tax computation (annual figures)."""

    gross_income: float
    pension_relief: float
    nhf_relief: float
    nhis_relief: float
    life_insurance_relief: float
    rent_relief: float
    custom_deductions_total: float
    custom_taxable_additions: float
    custom_deductions: tuple[CustomDeduction, ...]
    total_reliefs: float
    taxable_income: float
    tax_per_bracket: tuple[BracketTax, ...]
    total_tax: float
    net_income: float
    effective_tax_rate: float  # percentage of gross income
    marginal_rate: float  # percentage


class PersonalTaxEngine:
    """Personal income tax under a configurable progressive bracket table.

    The engine holds only its immutable configuration, so one instance can be
    shared freely across threads.
    """

    def __init__(self, config: PersonalTaxConfig | None = None) -> None:
        self._config = config if config is not None else default_personal_config()

    @property
    def config(self) -> PersonalTaxConfig:
        return self._config

    def rent_relief(self, rent_paid: float) -> float:
        """Lower of the rent relief cap or the relief percentage of annual rent."""
        return capped_rent_relief(
            rent_paid, self._config.rent_relief_pct, self._config.rent_relief_cap
        )

    def standard_reliefs(self, basic_salary: float) -> dict[str, float]:
        """Employee pension and NHF at this engine's contribution rates."""
        return contribution_amounts(basic_salary, self._config.standard_contributions)

    def calculate(
        self,
        gross_annual_income: float,
        reliefs: TaxReliefs | None = None,
    ) -> TaxBreakdown:
        """Compute personal income tax for a year.

        1. Clamp each named relief to its limit; compute rent relief.
        2. Split custom items into deductions and taxable additions.
        3. Taxable income = gross - reliefs + taxable additions, floored at 0.
        4. Walk the bracket table.

        Args:
            gross_annual_income: Gross income for the year. Callers validate
                sign; negative values simply produce zero taxable income.
            reliefs: Annual relief amounts. Defaults to none.

        Returns:
            TaxBreakdown with per-bracket attribution.
        """
        if reliefs is None:
            reliefs = TaxReliefs()
        limits = self._config.relief_limits

        pension_relief = clamp_relief(reliefs.pension, limits.pension)
        nhf_relief = clamp_relief(reliefs.nhf, limits.nhf)
        nhis_relief = clamp_relief(reliefs.nhis, limits.nhis)
        life_insurance_relief = clamp_relief(reliefs.life_insurance, limits.life_insurance)
        rent_relief = self.rent_relief(reliefs.rent_paid)

        custom = partition_custom_deductions(reliefs.custom_deductions)

        total_reliefs = (
            pension_relief
            + nhf_relief
            + nhis_relief
            + life_insurance_relief
            + rent_relief
            + custom.deductions
        )
        taxable_income = max(
            0.0, gross_annual_income - total_reliefs + custom.taxable_additions
        )

        total_tax, lines = apply_brackets(taxable_income, self._config.brackets)
        net_income = gross_annual_income - total_tax
        effective = total_tax / gross_annual_income * 100 if gross_annual_income > 0 else 0.0

        logger.debug(
            "Personal tax: gross=%.2f reliefs=%.2f taxable=%.2f tax=%.2f",
            gross_annual_income,
            total_reliefs,
            taxable_income,
            total_tax,
        )

        return TaxBreakdown(
            gross_income=gross_annual_income,
            pension_relief=pension_relief,
            nhf_relief=nhf_relief,
            nhis_relief=nhis_relief,
            life_insurance_relief=life_insurance_relief,
            rent_relief=rent_relief,
            custom_deductions_total=custom.deductions,
            custom_taxable_additions=custom.taxable_additions,
            custom_deductions=tuple(reliefs.custom_deductions),
            total_reliefs=total_reliefs,
            taxable_income=taxable_income,
            tax_per_bracket=tuple(lines),
            total_tax=total_tax,
            net_income=net_income,
            effective_tax_rate=effective,
            marginal_rate=marginal_rate(taxable_income, self._config.brackets),
        )

    def calculate_from_period(
        self,
        income: float,
        period: str,
        reliefs: TaxReliefs | None = None,
    ) -> TaxBreakdown:
        """Annualize per-period income and reliefs, then calculate.

        Rent paid is always an annual figure and custom items are taken as
        entered; neither is scaled.
        """
        if reliefs is None:
            reliefs = TaxReliefs()
        n = periods_per_year(period)
        annual_reliefs = reliefs.model_copy(
            update={
                "pension": reliefs.pension * n,
                "nhf": reliefs.nhf * n,
                "nhis": reliefs.nhis * n,
                "life_insurance": reliefs.life_insurance * n,
            }
        )
        return self.calculate(annualize(income, period), annual_reliefs)

    def calculate_from_monthly(
        self, monthly_income: float, monthly_reliefs: TaxReliefs | None = None
    ) -> TaxBreakdown:
        return self.calculate_from_period(monthly_income, "monthly", monthly_reliefs)

    def calculate_from_weekly(
        self, weekly_income: float, weekly_reliefs: TaxReliefs | None = None
    ) -> TaxBreakdown:
        return self.calculate_from_period(weekly_income, "weekly", weekly_reliefs)


def calculate_standard_reliefs(
    basic_salary: float,
    rates: StandardContributionRates | None = None,
) -> dict[str, float]:
    """Employee pension and NHF contributions as percentages of basic salary.

    Returned amounts are in the same period as ``basic_salary``.
    """
    if rates is None:
        return PersonalTaxEngine().standard_reliefs(basic_salary)
    return contribution_amounts(basic_salary, rates)


# --- Module-level convenience API using the shipped tables ---


def calculate_tax(gross_annual_income: float, reliefs: TaxReliefs | None = None) -> TaxBreakdown:
    """Compute personal tax with the default tables."""
    return PersonalTaxEngine().calculate(gross_annual_income, reliefs)


def calculate_tax_from_monthly(
    monthly_income: float, monthly_reliefs: TaxReliefs | None = None
) -> TaxBreakdown:
    """Compute personal tax from monthly figures with the default tables."""
    return PersonalTaxEngine().calculate_from_monthly(monthly_income, monthly_reliefs)


def calculate_tax_from_weekly(
    weekly_income: float, weekly_reliefs: TaxReliefs | None = None
) -> TaxBreakdown:
    """Compute personal tax from weekly figures with the default tables."""
    return PersonalTaxEngine().calculate_from_weekly(weekly_income, weekly_reliefs)


def calculate_rent_relief(annual_rent_paid: float) -> float:
    return PersonalTaxEngine().rent_relief(annual_rent_paid)
