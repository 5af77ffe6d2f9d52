"""Tax schedules over income grids and net-to-gross search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from naijatax.config.schema import PersonalTaxConfig, TaxReliefs
from naijatax.taxes.brackets import apply_brackets_vectorized, marginal_rate_vectorized
from naijatax.taxes.personal import PersonalTaxEngine
from naijatax.utils.exceptions import NaijaTaxError


@dataclass
class TaxSchedule:
    """Personal tax evaluated at many gross incomes with fixed reliefs."""

    incomes: NDArray[np.floating[Any]]
    taxable_incomes: NDArray[np.floating[Any]]
    total_tax: NDArray[np.floating[Any]]
    net_income: NDArray[np.floating[Any]]
    effective_rate: NDArray[np.floating[Any]]  # percentage
    marginal_rate: NDArray[np.floating[Any]]  # percentage


@dataclass(frozen=True)
class NetToGrossResult:
    """Result of a gross-income search for a target net income."""

    gross_income: float
    net_income: float
    total_tax: float
    target_net_income: float
    iterations: int


def tax_schedule(
    incomes: ArrayLike,
    config: PersonalTaxConfig | None = None,
    reliefs: TaxReliefs | None = None,
) -> TaxSchedule:
    """Evaluate personal tax across an array of gross annual incomes.

    Reliefs do not depend on income, so they are resolved once with the
    engine's rules and applied to every point.

    Args:
        incomes: Gross annual incomes.
        config: Personal tax configuration. Defaults to the shipped tables.
        reliefs: Annual reliefs applied at every income.

    Returns:
        TaxSchedule with arrays aligned to ``incomes``.
    """
    engine = PersonalTaxEngine(config)
    gross: NDArray[np.floating[Any]] = np.asarray(incomes, dtype=float)

    # Taxable income at zero gross reveals the net relief offset
    base = engine.calculate(0.0, reliefs)
    offset = base.total_reliefs - base.custom_taxable_additions

    taxable = np.maximum(gross - offset, 0.0)
    total_tax = apply_brackets_vectorized(taxable, engine.config.brackets)
    effective = np.divide(total_tax, gross, out=np.zeros_like(gross), where=gross > 0) * 100

    return TaxSchedule(
        incomes=gross,
        taxable_incomes=taxable,
        total_tax=total_tax,
        net_income=gross - total_tax,
        effective_rate=effective,
        marginal_rate=marginal_rate_vectorized(taxable, engine.config.brackets),
    )


def find_income_for_net(
    target_net_income: float,
    config: PersonalTaxConfig | None = None,
    reliefs: TaxReliefs | None = None,
    tolerance: float = 0.01,
    max_iterations: int = 200,
) -> NetToGrossResult:
    """Find the gross annual income that leaves ``target_net_income`` after tax.

    Uses bisection on gross income. Net income is non-decreasing in gross
    income because no bracket rate exceeds 100%.

    Args:
        target_net_income: Desired annual take-home.
        config: Personal tax configuration. Defaults to the shipped tables.
        reliefs: Annual reliefs held fixed during the search.
        tolerance: Convergence tolerance in naira on the gross income.
        max_iterations: Maximum bisection iterations.

    Returns:
        NetToGrossResult with the upper (sufficient) bound after convergence.
    """
    engine = PersonalTaxEngine(config)
    if target_net_income <= 0:
        result = engine.calculate(0.0, reliefs)
        return NetToGrossResult(0.0, result.net_income, result.total_tax, target_net_income, 0)

    top_rate = max(b.rate for b in engine.config.brackets) / 100
    low = target_net_income
    high = target_net_income / (1 - top_rate) if top_rate < 1 else target_net_income * 2
    # Make sure the upper bound is sufficient
    for _ in range(64):
        if engine.calculate(high, reliefs).net_income >= target_net_income:
            break
        high *= 2
    else:
        raise NaijaTaxError(f"No gross income yields a net income of {target_net_income:,.2f}")

    iterations = 0
    while high - low > tolerance and iterations < max_iterations:
        mid = (low + high) / 2
        if engine.calculate(mid, reliefs).net_income >= target_net_income:
            high = mid
        else:
            low = mid
        iterations += 1

    result = engine.calculate(high, reliefs)
    return NetToGrossResult(
        gross_income=high,
        net_income=result.net_income,
        total_tax=result.total_tax,
        target_net_income=target_net_income,
        iterations=iterations,
    )
