"""CLI entry point for naijatax."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from naijatax.config.defaults import default_tables, load_tables
from naijatax.config.schema import (
    BusinessTaxReliefs,
    Deductible,
    TaxableAddition,
    TaxReliefs,
    TaxTables,
    custom_deduction,
)
from naijatax.io.serialize import dump_breakdown
from naijatax.taxes.business import BusinessTaxEngine, BusinessType, CompanySize
from naijatax.taxes.personal import PersonalTaxEngine
from naijatax.utils.exceptions import ConfigError

_PERIOD = click.Choice(["annual", "monthly", "weekly"])

F = TypeVar("F", bound=Callable[..., Any])


def _parse_items(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, float]]:
    items: list[tuple[str, float]] = []
    for raw in values:
        name, sep, amount = raw.rpartition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=AMOUNT, got {raw!r}")
        try:
            value = float(amount.replace(",", ""))
        except ValueError:
            raise click.BadParameter(f"invalid amount in {raw!r}") from None
        if value < 0:
            raise click.BadParameter(f"amount must not be negative in {raw!r}")
        items.append((name.strip(), value))
    return items


def _custom_items(
    deduct: list[tuple[str, float]], taxable: list[tuple[str, float]]
) -> tuple[Deductible | TaxableAddition, ...]:
    return tuple(custom_deduction(n, a, is_taxable=False) for n, a in deduct) + tuple(
        custom_deduction(n, a, is_taxable=True) for n, a in taxable
    )


def _tables(path: Path | None) -> TaxTables:
    if path is None:
        return default_tables()
    try:
        return load_tables(path)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="--tables") from exc


def _write_output(output_path: Path | None, json_str: str) -> None:
    if output_path is not None:
        output_path.write_text(json_str, encoding="utf-8")
        click.echo(f"\nBreakdown written to {output_path}")


_common_options = [
    click.option(
        "--period",
        type=_PERIOD,
        default="annual",
        show_default=True,
        help="Period the income figure covers.",
    ),
    click.option("--pension", type=float, default=0.0, help="Pension contribution."),
    click.option("--nhf", type=float, default=0.0, help="National Housing Fund contribution."),
    click.option("--nhis", type=float, default=0.0, help="Health insurance contribution."),
    click.option("--rent", type=float, default=0.0, help="Annual rent paid."),
    click.option(
        "--deduct",
        multiple=True,
        callback=_parse_items,
        metavar="NAME=AMOUNT",
        help="Custom deductible item (repeatable).",
    ),
    click.option(
        "--taxable",
        multiple=True,
        callback=_parse_items,
        metavar="NAME=AMOUNT",
        help="Custom taxable item added to income (repeatable).",
    ),
    click.option(
        "--tables",
        "tables_path",
        type=click.Path(exists=True, path_type=Path),
        default=None,
        help="Tax table YAML/JSON file. Uses the 2026 tables if omitted.",
    ),
    click.option(
        "--output",
        "output_path",
        type=click.Path(path_type=Path),
        default=None,
        help="Path to write breakdown JSON.",
    ),
]


def common_options(func: F) -> F:
    """Attach the income-period, relief, table and output options."""
    for option in reversed(_common_options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="naijatax")
@click.option("-v", "--verbose", is_flag=True, help="Log calculation details.")
def cli(verbose: bool) -> None:
    """naijatax: Nigerian personal and business income tax calculator."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("income", type=click.FloatRange(min=0))
@common_options
@click.option("--life-insurance", type=float, default=0.0, help="Life insurance premium.")
def personal(
    income: float,
    period: str,
    pension: float,
    nhf: float,
    nhis: float,
    rent: float,
    deduct: list[tuple[str, float]],
    taxable: list[tuple[str, float]],
    tables_path: Path | None,
    output_path: Path | None,
    life_insurance: float,
) -> None:
    """Calculate personal income tax on INCOME."""
    tables = _tables(tables_path)
    try:
        reliefs = TaxReliefs(
            pension=pension,
            nhf=nhf,
            nhis=nhis,
            life_insurance=life_insurance,
            rent_paid=rent,
            custom_deductions=_custom_items(deduct, taxable),
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    result = PersonalTaxEngine(tables.personal).calculate_from_period(income, period, reliefs)

    click.echo(f"Personal income tax ({tables.tax_year}), {period} input")
    click.echo(f"Gross income:    {result.gross_income:,.2f}")
    click.echo(f"Total reliefs:   {result.total_reliefs:,.2f}")
    click.echo(f"Taxable income:  {result.taxable_income:,.2f}")
    for line in result.tax_per_bracket:
        click.echo(f"  {line.bracket} @ {line.rate:g}%: {line.tax:,.2f}")
    click.echo(f"Total tax:       {result.total_tax:,.2f}")
    click.echo(f"Net income:      {result.net_income:,.2f}")
    click.echo(f"Effective rate:  {result.effective_tax_rate:.2f}%")

    _write_output(output_path, dump_breakdown(result))


@cli.command()
@click.argument("income", type=click.FloatRange(min=0))
@click.option(
    "--size",
    "company_size",
    required=True,
    type=click.Choice([s.value for s in CompanySize]),
    help="Company size.",
)
@click.option(
    "--type",
    "business_type",
    default=BusinessType.GENERAL.value,
    show_default=True,
    type=click.Choice([t.value for t in BusinessType]),
    help="Business type.",
)
@click.option("--assets", type=click.FloatRange(min=0), default=0.0, help="Total fixed assets.")
@click.option(
    "--years-since-commencement",
    type=click.FloatRange(min=0),
    default=None,
    help="Years an agricultural business has operated.",
)
@click.option("--employment", type=float, default=0.0, help="Salaries of new hires.")
@click.option("--compensation", type=float, default=0.0, help="Raises and transport subsidies.")
@common_options
def business(
    income: float,
    company_size: str,
    business_type: str,
    assets: float,
    years_since_commencement: float | None,
    employment: float,
    compensation: float,
    period: str,
    pension: float,
    nhf: float,
    nhis: float,
    rent: float,
    deduct: list[tuple[str, float]],
    taxable: list[tuple[str, float]],
    tables_path: Path | None,
    output_path: Path | None,
) -> None:
    """Calculate company income tax and development levy on INCOME."""
    tables = _tables(tables_path)
    try:
        reliefs = BusinessTaxReliefs(
            pension=pension,
            nhf=nhf,
            nhis=nhis,
            rent_paid=rent,
            employment_relief_base=employment,
            compensation_relief_base=compensation,
            custom_deductions=_custom_items(deduct, taxable),
        )
        result = BusinessTaxEngine(tables.business).calculate_from_period(
            income,
            period,
            company_size,
            business_type,
            reliefs,
            total_fixed_assets=assets,
            years_since_commencement=years_since_commencement,
        )
    except (ValueError, ConfigError) as exc:
        raise click.UsageError(str(exc)) from exc

    exemptions = [
        name
        for name, flag in (
            ("small company", result.is_small_company_exempt),
            ("startup", result.is_startup_exempt),
            ("agricultural holiday", result.is_agricultural_exempt),
        )
        if flag
    ]

    click.echo(
        f"Business tax ({tables.tax_year}): {result.company_size.value} "
        f"{result.business_type.value}, {period} input"
    )
    click.echo(f"Gross income:        {result.gross_income:,.2f}")
    click.echo(f"Total reliefs:       {result.total_reliefs:,.2f}")
    click.echo(f"Taxable income:      {result.taxable_income:,.2f}")
    click.echo(f"Company income tax:  {result.company_income_tax:,.2f}")
    click.echo(f"Development levy:    {result.development_levy:,.2f}")
    if result.is_very_large:
        applied = " (applied)" if result.minimum_etr_applied else ""
        click.echo(f"Minimum ETR tax:     {result.minimum_effective_tax:,.2f}{applied}")
    click.echo(f"Total tax:           {result.total_tax:,.2f}")
    click.echo(f"Net income:          {result.net_income:,.2f}")
    click.echo(f"Effective rate:      {result.effective_tax_rate:.2f}%")
    click.echo(f"Exemptions:          {', '.join(exemptions) if exemptions else 'none'}")

    _write_output(output_path, dump_breakdown(result))


if __name__ == "__main__":
    cli()
