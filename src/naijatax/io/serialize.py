"""Serialization for tax tables and breakdown results."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel

from naijatax.config.defaults import parse_tables
from naijatax.config.schema import Deductible, TaxableAddition, TaxTables
from naijatax.taxes.business import BusinessTaxBreakdown
from naijatax.taxes.personal import TaxBreakdown


def _to_plain(value: Any) -> Any:
    if isinstance(value, (Deductible, TaxableAddition)):
        return {**value.model_dump(), "is_taxable": value.is_taxable}
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def breakdown_to_dict(breakdown: TaxBreakdown | BusinessTaxBreakdown) -> dict[str, Any]:
    """Convert a breakdown to JSON-compatible primitives.

    Enums become their values, custom deductions become dicts, and
    tuples become lists.
    """
    data: dict[str, Any] = _to_plain(breakdown)
    data["mode"] = "business" if isinstance(breakdown, BusinessTaxBreakdown) else "personal"
    return data


def dump_breakdown(breakdown: TaxBreakdown | BusinessTaxBreakdown) -> str:
    """Serialize a breakdown to a JSON string."""
    return json.dumps(breakdown_to_dict(breakdown), indent=2, ensure_ascii=False)


def dump_tables(tables: TaxTables) -> str:
    """Serialize tax tables to a JSON string."""
    return json.dumps(tables.model_dump(), indent=2)


def load_tables_json(json_str: str) -> TaxTables:
    """Deserialize tax tables from a JSON string."""
    return parse_tables(json.loads(json_str), source="<json>")


def compute_tables_hash(tables: TaxTables) -> str:
    """Compute a deterministic SHA-256 hash of a table set.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical tables always produce the same hash.
    """
    canonical = json.dumps(tables.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()
