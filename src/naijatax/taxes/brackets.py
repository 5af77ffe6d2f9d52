"""Progressive bracket walk and shared relief primitives."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from naijatax.config.schema import (
    PERIODS_PER_YEAR,
    Deductible,
    StandardContributionRates,
    TaxableAddition,
    TaxBracket,
)
from naijatax.utils.exceptions import ConfigError


@dataclass(frozen=True)
class BracketTax:
    """Tax attributed to the slice of income falling in one bracket."""

    bracket: str
    taxable_amount: float
    rate: float  # percentage
    tax: float


@dataclass(frozen=True)
class CustomDeductionTotals:
    """Custom items split by kind."""

    deductions: float = 0.0
    taxable_additions: float = 0.0


def bracket_label(bracket: TaxBracket) -> str:
    """Human label for a bracket, e.g. ``"₦800,000 - ₦3,000,000"``."""
    if bracket.max is None:
        return f"Above ₦{bracket.min:,.0f}"
    return f"₦{bracket.min:,.0f} - ₦{bracket.max:,.0f}"


def apply_brackets(
    taxable_income: float,
    brackets: Sequence[TaxBracket],
) -> tuple[float, list[BracketTax]]:
    """Compute tax using progressive brackets.

    Each bracket taxes only the slice of income in ``[min, max)``. Lines are
    emitted only for brackets with a nonzero slice.

    Returns:
        Total tax and the per-bracket lines.
    """
    total_tax = 0.0
    lines: list[BracketTax] = []
    if taxable_income <= 0:
        return total_tax, lines
    for bracket in brackets:
        if taxable_income <= bracket.min:
            break
        upper = math.inf if bracket.max is None else bracket.max
        in_bracket = max(0.0, min(taxable_income, upper) - bracket.min)
        tax = in_bracket * bracket.rate / 100
        total_tax += tax
        if in_bracket > 0:
            lines.append(
                BracketTax(
                    bracket=bracket_label(bracket),
                    taxable_amount=in_bracket,
                    rate=bracket.rate,
                    tax=tax,
                )
            )
    return total_tax, lines


def apply_brackets_vectorized(
    taxable_income: NDArray[np.floating[Any]],
    brackets: Sequence[TaxBracket],
) -> NDArray[np.floating[Any]]:
    """Vectorized progressive bracket computation across many incomes."""
    tax: NDArray[np.floating[Any]] = np.zeros_like(taxable_income, dtype=float)
    for bracket in brackets:
        upper = np.inf if bracket.max is None else bracket.max
        in_bracket = np.minimum(taxable_income, upper) - bracket.min
        tax += np.maximum(in_bracket, 0.0) * bracket.rate / 100
    return tax


def marginal_rate(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    """Rate (percentage) of the bracket containing ``taxable_income``."""
    for bracket in brackets:
        if bracket.max is None or taxable_income < bracket.max:
            return float(bracket.rate)
    # Validated tables always end unbounded
    return float(brackets[-1].rate)


def marginal_rate_vectorized(
    taxable_income: NDArray[np.floating[Any]],
    brackets: Sequence[TaxBracket],
) -> NDArray[np.floating[Any]]:
    """Marginal rate (percentage) for each income."""
    floors = np.array([b.min for b in brackets])
    rates = np.array([b.rate for b in brackets], dtype=float)
    idx = np.searchsorted(floors, taxable_income, side="right") - 1
    result: NDArray[np.floating[Any]] = rates[np.clip(idx, 0, len(rates) - 1)]
    return result


def capped_rent_relief(rent_paid: float, pct: float, cap: float) -> float:
    """Lower of ``cap`` or ``pct`` of annual rent paid; zero when no rent."""
    if not rent_paid or rent_paid <= 0:
        return 0.0
    return min(cap, rent_paid * pct)


def contribution_amounts(base: float, rates: StandardContributionRates) -> dict[str, float]:
    """Pension and NHF amounts as fractions of a salary or payroll base."""
    return {"pension": base * rates.pension_rate, "nhf": base * rates.nhf_rate}


def clamp_relief(amount: float, limit: float | None) -> float:
    """Clamp a relief to its configured maximum (None = unbounded)."""
    amount = max(0.0, amount or 0.0)
    if limit is None:
        return amount
    return min(amount, limit)


def partition_custom_deductions(
    items: Iterable[Deductible | TaxableAddition],
) -> CustomDeductionTotals:
    """Sum deductible and taxable custom items separately."""
    deductions = 0.0
    additions = 0.0
    for item in items:
        if item.is_taxable:
            additions += item.amount
        else:
            deductions += item.amount
    return CustomDeductionTotals(deductions=deductions, taxable_additions=additions)


def periods_per_year(period: str) -> int:
    """Number of periods in a year for ``"annual"``, ``"monthly"`` or ``"weekly"``."""
    try:
        return PERIODS_PER_YEAR[period]
    except KeyError:
        raise ConfigError(
            f"Unknown income period: {period!r}. Available: {', '.join(PERIODS_PER_YEAR)}"
        ) from None


def annualize(amount: float, period: str) -> float:
    """Convert a per-period amount to an annual amount."""
    return amount * periods_per_year(period)


def deannualize(amount: float, period: str) -> float:
    """Convert an annual amount to a per-period amount."""
    return amount / periods_per_year(period)


def monthly_to_annual(monthly_amount: float) -> float:
    return annualize(monthly_amount, "monthly")


def annual_to_monthly(annual_amount: float) -> float:
    return deannualize(annual_amount, "monthly")
