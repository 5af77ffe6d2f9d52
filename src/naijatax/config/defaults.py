"""Default tax tables for naijatax (Nigeria Tax Act, effective 2026)."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from naijatax.config.schema import BusinessTaxConfig, PersonalTaxConfig, TaxTables
from naijatax.io.yaml_loader import load_package_yaml, load_yaml
from naijatax.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TABLES_PATH = "taxes/tables/nigeria_2026.yaml"

def parse_tables(data: Any, source: str = "<data>") -> TaxTables:
    """Validate raw table data into a TaxTables model.

    Raises:
        ConfigError: If the data does not describe a valid table set.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping at top level, got {type(data).__name__}")
    try:
        return TaxTables.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{source}: invalid tax tables\n{exc}") from exc


def load_tables(path: Path | str) -> TaxTables:
    """Load and validate a tax table file (YAML, or JSON which YAML also parses).

    Args:
        path: Path to a file with the same shape as the shipped 2026 tables.

    Returns:
        Validated, immutable tax tables.
    """
    path = Path(path)
    tables = parse_tables(load_yaml(path), source=str(path))
    logger.info("Loaded tax tables for %d from %s", tables.tax_year, path)
    return tables


@lru_cache(maxsize=1)
def default_tables() -> TaxTables:
    """Shipped tables, loaded once per process."""
    return parse_tables(load_package_yaml(DEFAULT_TABLES_PATH), source=DEFAULT_TABLES_PATH)


def default_personal_config() -> PersonalTaxConfig:
    """Personal tax configuration from the shipped tables."""
    return default_tables().personal


def default_business_config() -> BusinessTaxConfig:
    """Business tax configuration from the shipped tables."""
    return default_tables().business


# --- Named constants, read from the shipped tables ---

_shipped = default_tables()

TAX_YEAR: int = _shipped.tax_year

RENT_RELIEF_CAP: float = _shipped.personal.rent_relief_cap
RENT_RELIEF_PCT: float = _shipped.personal.rent_relief_pct

SMALL_TURNOVER_CAP: float = _shipped.business.small_company_turnover_cap
SMALL_ASSETS_CAP: float = _shipped.business.small_company_assets_cap
CIT_RATE: float = _shipped.business.cit_rate
DEVELOPMENT_LEVY_RATE: float = _shipped.business.development_levy_rate
MINIMUM_ETR_RATE: float = _shipped.business.minimum_etr_rate
VERY_LARGE_TURNOVER_THRESHOLD: float = _shipped.business.very_large_turnover_threshold
BUSINESS_RENT_RELIEF_CAP: float = _shipped.business.rent_relief_cap
BUSINESS_RENT_RELIEF_PCT: float = _shipped.business.rent_relief_pct
EMPLOYMENT_RELIEF_RATE: float = _shipped.business.employment_relief_rate
COMPENSATION_RELIEF_RATE: float = _shipped.business.compensation_relief_rate
AGRICULTURAL_TAX_HOLIDAY_YEARS: int = _shipped.business.agricultural_holiday_years
