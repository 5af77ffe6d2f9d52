"""Pydantic v2 configuration and input models for naijatax."""

from __future__ import annotations

import uuid
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

IncomePeriod = Literal["annual", "monthly", "weekly"]

PERIODS_PER_YEAR: dict[str, int] = {"annual": 1, "monthly": 12, "weekly": 52}


class TaxBracket(BaseModel):
    """A contiguous income range taxed at a single rate."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(ge=0, description="Lower bound in naira (inclusive)")
    max: float | None = Field(
        default=None, description="Upper bound in naira (exclusive); None = no upper limit"
    )
    rate: float = Field(ge=0, le=100, description="Tax rate as a percentage (15 = 15%)")

    @model_validator(mode="after")
    def _validate_bounds(self) -> TaxBracket:
        if self.max is not None and self.max <= self.min:
            raise ValueError(f"bracket max ({self.max}) must be greater than min ({self.min})")
        return self


class ReliefLimits(BaseModel):
    """Maximum allowable amount per named relief. None means no limit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pension: float | None = Field(default=None, ge=0)
    nhf: float | None = Field(default=None, ge=0)
    nhis: float | None = Field(default=None, ge=0)
    life_insurance: float | None = Field(default=None, ge=0)


class StandardContributionRates(BaseModel):
    """Statutory contribution rates applied to basic salary or payroll."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pension_rate: float = Field(ge=0, le=1)
    nhf_rate: float = Field(ge=0, le=1)


class PersonalTaxConfig(BaseModel):
    """Personal income tax parameters: bracket table and relief rules."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    brackets: tuple[TaxBracket, ...] = Field(min_length=1)
    rent_relief_cap: float = Field(ge=0)
    rent_relief_pct: float = Field(ge=0, le=1)
    relief_limits: ReliefLimits = Field(default_factory=ReliefLimits)
    standard_contributions: StandardContributionRates

    @model_validator(mode="after")
    def _validate_brackets(self) -> PersonalTaxConfig:
        first, last = self.brackets[0], self.brackets[-1]
        if first.min != 0:
            raise ValueError(f"first bracket must start at 0, got {first.min}")
        if last.max is not None:
            raise ValueError("last bracket must be unbounded (max: null)")
        for i, (lower, upper) in enumerate(zip(self.brackets, self.brackets[1:])):
            if lower.max is None:
                raise ValueError(f"only the last bracket may be unbounded (bracket {i})")
            if lower.max != upper.min:
                raise ValueError(
                    f"brackets must be contiguous: bracket {i} ends at {lower.max} "
                    f"but bracket {i + 1} starts at {upper.min}"
                )
        return self


class BusinessTaxConfig(BaseModel):
    """Company income tax, levy, and classification thresholds."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    small_company_turnover_cap: float = Field(ge=0)
    small_company_assets_cap: float = Field(ge=0)
    cit_rate: float = Field(ge=0, le=1)
    development_levy_rate: float = Field(ge=0, le=1)
    minimum_etr_rate: float = Field(ge=0, le=1)
    very_large_turnover_threshold: float = Field(ge=0)
    rent_relief_cap: float = Field(ge=0)
    rent_relief_pct: float = Field(ge=0, le=1)
    employment_relief_rate: float = Field(ge=0, le=1)
    compensation_relief_rate: float = Field(ge=0, le=1)
    agricultural_holiday_years: int = Field(ge=0)
    standard_contributions: StandardContributionRates


class TaxTables(BaseModel):
    """Root of a tax table file: one tax year's personal and business rules."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int = Field(ge=2000, le=2100)
    personal: PersonalTaxConfig
    business: BusinessTaxConfig


# --- Custom deductions ---


def _new_id() -> str:
    return uuid.uuid4().hex


class Deductible(BaseModel):
    """A user-defined amount subtracted from taxable income."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["deductible"] = "deductible"
    id: str = Field(default_factory=_new_id)
    name: str = ""
    amount: float = Field(ge=0)

    @property
    def is_taxable(self) -> bool:
        return False


class TaxableAddition(BaseModel):
    """A user-defined taxable item added back to taxable income."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["taxable_addition"] = "taxable_addition"
    id: str = Field(default_factory=_new_id)
    name: str = ""
    amount: float = Field(ge=0)

    @property
    def is_taxable(self) -> bool:
        return True


CustomDeduction = Annotated[Deductible | TaxableAddition, Field(discriminator="kind")]


def custom_deduction(
    name: str,
    amount: float,
    is_taxable: bool = False,
    id: str | None = None,
) -> Deductible | TaxableAddition:
    """Build a custom deduction from the flat ``is_taxable`` flag form.

    Args:
        name: Display name of the item.
        amount: Amount in naira (must be >= 0).
        is_taxable: True if the item is added to taxable income,
            False if it is deducted.
        id: Opaque identifier. A random one is generated if omitted.
    """
    model = TaxableAddition if is_taxable else Deductible
    if id is None:
        return model(name=name, amount=amount)
    return model(id=id, name=name, amount=amount)


# --- Relief inputs ---


class TaxReliefs(BaseModel):
    """Personal relief inputs. All amounts annual unless a period wrapper scales them."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pension: float = Field(default=0.0, ge=0, description="Pension contribution")
    nhf: float = Field(default=0.0, ge=0, description="National Housing Fund contribution")
    nhis: float = Field(default=0.0, ge=0, description="National Health Insurance contribution")
    life_insurance: float = Field(default=0.0, ge=0, description="Life insurance premium")
    rent_paid: float = Field(default=0.0, ge=0, description="Annual rent paid")
    custom_deductions: tuple[CustomDeduction, ...] = Field(default=())


class BusinessTaxReliefs(BaseModel):
    """Business relief and deduction inputs. No life-insurance relief for businesses."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pension: float = Field(default=0.0, ge=0)
    nhf: float = Field(default=0.0, ge=0)
    nhis: float = Field(default=0.0, ge=0)
    rent_paid: float = Field(default=0.0, ge=0, description="Annual rent paid")
    employment_relief_base: float = Field(
        default=0.0, ge=0, description="Salaries of new hires retained 3+ years"
    )
    compensation_relief_base: float = Field(
        default=0.0, ge=0, description="Salary increases, wage awards, transport subsidies"
    )
    custom_deductions: tuple[CustomDeduction, ...] = Field(default=())
