"""Business tax engine: Company Income Tax, Development Levy, minimum ETR."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from naijatax.config.defaults import default_business_config
from naijatax.config.schema import (
    BusinessTaxConfig,
    BusinessTaxReliefs,
    CustomDeduction,
    StandardContributionRates,
)
from naijatax.taxes.brackets import (
    annualize,
    capped_rent_relief,
    contribution_amounts,
    partition_custom_deductions,
)
from naijatax.utils.exceptions import ClassificationError

logger = logging.getLogger(__name__)


class CompanySize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class BusinessType(str, Enum):
    GENERAL = "general"
    STARTUP = "startup"
    AGRICULTURAL = "agricultural"


def parse_company_size(value: CompanySize | str) -> CompanySize:
    """Coerce a string to CompanySize, rejecting anything unrecognized."""
    try:
        return CompanySize(value)
    except ValueError:
        raise ClassificationError(
            f"Unknown company size: {value!r}. Available: "
            f"{', '.join(s.value for s in CompanySize)}"
        ) from None


def parse_business_type(value: BusinessType | str) -> BusinessType:
    """Coerce a string to BusinessType, rejecting anything unrecognized."""
    try:
        return BusinessType(value)
    except ValueError:
        raise ClassificationError(
            f"Unknown business type: {value!r}. Available: "
            f"{', '.join(t.value for t in BusinessType)}"
        ) from None


@dataclass(frozen=True)
class BusinessTaxBreakdown:
    """Every intermediate of a business tax computation (annual figures)."""

    gross_income: float
    company_size: CompanySize
    business_type: BusinessType
    pension_relief: float
    nhf_relief: float
    nhis_relief: float
    rent_relief: float
    employment_relief: float
    compensation_relief: float
    custom_deductions_total: float
    custom_taxable_additions: float
    custom_deductions: tuple[CustomDeduction, ...]
    total_reliefs: float
    taxable_income: float
    company_income_tax: float
    development_levy: float
    minimum_effective_tax: float  # 0 unless very large
    total_tax: float
    is_small_company_exempt: bool
    is_startup_exempt: bool
    is_agricultural_exempt: bool
    is_very_large: bool
    minimum_etr_applied: bool
    net_income: float
    effective_tax_rate: float  # percentage of gross income


class BusinessTaxEngine:
    """Company tax under the 2026 rules.

    Exemptions:
        - Small company (size ``small`` and within both turnover and fixed
          asset caps): no CIT and no Development Levy.
        - Startup, or agricultural business within its holiday: no CIT, but
          the Development Levy still applies.

    Very large companies pay at least ``minimum_etr_rate`` of taxable income.
    """

    def __init__(self, config: BusinessTaxConfig | None = None) -> None:
        self._config = config if config is not None else default_business_config()

    @property
    def config(self) -> BusinessTaxConfig:
        return self._config

    def is_small_company(self, annual_turnover: float, total_fixed_assets: float = 0.0) -> bool:
        """Both turnover and fixed assets must be within the small-company caps."""
        return (
            annual_turnover <= self._config.small_company_turnover_cap
            and total_fixed_assets <= self._config.small_company_assets_cap
        )

    def is_very_large_company(self, annual_turnover: float) -> bool:
        return annual_turnover >= self._config.very_large_turnover_threshold

    def rent_relief(self, rent_paid: float) -> float:
        return capped_rent_relief(
            rent_paid, self._config.rent_relief_pct, self._config.rent_relief_cap
        )

    def standard_contributions(self, total_employee_salaries: float) -> dict[str, float]:
        """Employer pension and NHF at this engine's contribution rates."""
        return contribution_amounts(
            total_employee_salaries, self._config.standard_contributions
        )

    def in_agricultural_holiday(self, years_since_commencement: float | None) -> bool:
        """Whether an agricultural business is still inside its tax holiday.

        ``None`` means the caller has already confirmed eligibility.
        """
        if years_since_commencement is None:
            return True
        return 0 <= years_since_commencement <= self._config.agricultural_holiday_years

    def calculate(
        self,
        gross_annual_income: float,
        company_size: CompanySize | str,
        business_type: BusinessType | str,
        reliefs: BusinessTaxReliefs | None = None,
        total_fixed_assets: float = 0.0,
        years_since_commencement: float | None = None,
    ) -> BusinessTaxBreakdown:
        """Compute business tax for a year.

        Args:
            gross_annual_income: Annual turnover.
            company_size: Caller's classification; small status is
                cross-checked against the turnover and asset caps.
            business_type: ``general``, ``startup`` or ``agricultural``.
            reliefs: Relief and deduction amounts. Defaults to none.
            total_fixed_assets: Fixed assets, for small-company status.
            years_since_commencement: Years an agricultural business has
                operated. Beyond the holiday length, CIT applies.

        Returns:
            BusinessTaxBreakdown with exemption flags and effective rate.

        Raises:
            ClassificationError: On an unrecognized size or business type.
        """
        cfg = self._config
        size = parse_company_size(company_size)
        btype = parse_business_type(business_type)
        if reliefs is None:
            reliefs = BusinessTaxReliefs()

        # Classification
        is_small_exempt = size is CompanySize.SMALL and self.is_small_company(
            gross_annual_income, total_fixed_assets
        )
        is_startup_exempt = btype is BusinessType.STARTUP
        is_agricultural_exempt = (
            btype is BusinessType.AGRICULTURAL
            and self.in_agricultural_holiday(years_since_commencement)
        )
        is_very_large = self.is_very_large_company(gross_annual_income)

        # Reliefs
        pension_relief = reliefs.pension
        nhf_relief = reliefs.nhf
        nhis_relief = reliefs.nhis
        rent_relief = self.rent_relief(reliefs.rent_paid)
        employment_relief = reliefs.employment_relief_base * cfg.employment_relief_rate
        compensation_relief = reliefs.compensation_relief_base * cfg.compensation_relief_rate
        custom = partition_custom_deductions(reliefs.custom_deductions)

        total_reliefs = (
            pension_relief
            + nhf_relief
            + nhis_relief
            + rent_relief
            + employment_relief
            + compensation_relief
            + custom.deductions
        )
        taxable_income = max(
            0.0, gross_annual_income - total_reliefs + custom.taxable_additions
        )

        if is_small_exempt or is_startup_exempt or is_agricultural_exempt:
            company_income_tax = 0.0
        else:
            company_income_tax = taxable_income * cfg.cit_rate

        # Only small-company status exempts the levy
        if is_small_exempt:
            development_levy = 0.0
        else:
            development_levy = taxable_income * cfg.development_levy_rate

        total_tax = company_income_tax + development_levy

        minimum_effective_tax = 0.0
        minimum_etr_applied = False
        if is_very_large:
            minimum_effective_tax = taxable_income * cfg.minimum_etr_rate
            if total_tax < minimum_effective_tax:
                total_tax = minimum_effective_tax
                minimum_etr_applied = True

        net_income = gross_annual_income - total_tax
        effective = total_tax / gross_annual_income * 100 if gross_annual_income > 0 else 0.0

        logger.debug(
            "Business tax: size=%s type=%s gross=%.2f taxable=%.2f cit=%.2f levy=%.2f total=%.2f",
            size.value,
            btype.value,
            gross_annual_income,
            taxable_income,
            company_income_tax,
            development_levy,
            total_tax,
        )

        return BusinessTaxBreakdown(
            gross_income=gross_annual_income,
            company_size=size,
            business_type=btype,
            pension_relief=pension_relief,
            nhf_relief=nhf_relief,
            nhis_relief=nhis_relief,
            rent_relief=rent_relief,
            employment_relief=employment_relief,
            compensation_relief=compensation_relief,
            custom_deductions_total=custom.deductions,
            custom_taxable_additions=custom.taxable_additions,
            custom_deductions=tuple(reliefs.custom_deductions),
            total_reliefs=total_reliefs,
            taxable_income=taxable_income,
            company_income_tax=company_income_tax,
            development_levy=development_levy,
            minimum_effective_tax=minimum_effective_tax,
            total_tax=total_tax,
            is_small_company_exempt=is_small_exempt,
            is_startup_exempt=is_startup_exempt,
            is_agricultural_exempt=is_agricultural_exempt,
            is_very_large=is_very_large,
            minimum_etr_applied=minimum_etr_applied,
            net_income=net_income,
            effective_tax_rate=effective,
        )

    def calculate_from_period(
        self,
        income: float,
        period: str,
        company_size: CompanySize | str,
        business_type: BusinessType | str,
        reliefs: BusinessTaxReliefs | None = None,
        total_fixed_assets: float = 0.0,
        years_since_commencement: float | None = None,
    ) -> BusinessTaxBreakdown:
        """Annualize per-period turnover, then calculate.

        Business reliefs are entered as annual figures and are not scaled.
        """
        return self.calculate(
            annualize(income, period),
            company_size,
            business_type,
            reliefs,
            total_fixed_assets,
            years_since_commencement,
        )

    def calculate_from_monthly(
        self,
        monthly_income: float,
        company_size: CompanySize | str,
        business_type: BusinessType | str,
        reliefs: BusinessTaxReliefs | None = None,
        total_fixed_assets: float = 0.0,
        years_since_commencement: float | None = None,
    ) -> BusinessTaxBreakdown:
        return self.calculate_from_period(
            monthly_income,
            "monthly",
            company_size,
            business_type,
            reliefs,
            total_fixed_assets,
            years_since_commencement,
        )

    def calculate_from_weekly(
        self,
        weekly_income: float,
        company_size: CompanySize | str,
        business_type: BusinessType | str,
        reliefs: BusinessTaxReliefs | None = None,
        total_fixed_assets: float = 0.0,
        years_since_commencement: float | None = None,
    ) -> BusinessTaxBreakdown:
        return self.calculate_from_period(
            weekly_income,
            "weekly",
            company_size,
            business_type,
            reliefs,
            total_fixed_assets,
            years_since_commencement,
        )


def calculate_standard_business_contributions(
    total_employee_salaries: float,
    rates: StandardContributionRates | None = None,
) -> dict[str, float]:
    """Employer pension and NHF contributions as percentages of payroll."""
    if rates is None:
        return BusinessTaxEngine().standard_contributions(total_employee_salaries)
    return contribution_amounts(total_employee_salaries, rates)


# --- Module-level convenience API using the shipped tables ---


def calculate_business_tax(
    gross_annual_income: float,
    company_size: CompanySize | str,
    business_type: BusinessType | str,
    reliefs: BusinessTaxReliefs | None = None,
    total_fixed_assets: float = 0.0,
    years_since_commencement: float | None = None,
) -> BusinessTaxBreakdown:
    """Compute business tax with the default tables."""
    return BusinessTaxEngine().calculate(
        gross_annual_income,
        company_size,
        business_type,
        reliefs,
        total_fixed_assets,
        years_since_commencement,
    )


def calculate_business_tax_from_monthly(
    monthly_income: float,
    company_size: CompanySize | str,
    business_type: BusinessType | str,
    reliefs: BusinessTaxReliefs | None = None,
    total_fixed_assets: float = 0.0,
    years_since_commencement: float | None = None,
) -> BusinessTaxBreakdown:
    return BusinessTaxEngine().calculate_from_monthly(
        monthly_income,
        company_size,
        business_type,
        reliefs,
        total_fixed_assets,
        years_since_commencement,
    )


def calculate_business_tax_from_weekly(
    weekly_income: float,
    company_size: CompanySize | str,
    business_type: BusinessType | str,
    reliefs: BusinessTaxReliefs | None = None,
    total_fixed_assets: float = 0.0,
    years_since_commencement: float | None = None,
) -> BusinessTaxBreakdown:
    return BusinessTaxEngine().calculate_from_weekly(
        weekly_income,
        company_size,
        business_type,
        reliefs,
        total_fixed_assets,
        years_since_commencement,
    )


def is_small_company(annual_turnover: float, total_fixed_assets: float = 0.0) -> bool:
    return BusinessTaxEngine().is_small_company(annual_turnover, total_fixed_assets)


def is_very_large_company(annual_turnover: float) -> bool:
    return BusinessTaxEngine().is_very_large_company(annual_turnover)


def calculate_business_rent_relief(annual_rent_paid: float) -> float:
    return BusinessTaxEngine().rent_relief(annual_rent_paid)
