"""YAML loader for tax table files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from naijatax.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def load_yaml(path: Path | str) -> Any:
    """Load and parse a YAML (or JSON) table file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file is not well-formed YAML.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: malformed YAML: {exc}") from exc


def load_package_yaml(relative_path: str) -> Any:
    """Load a YAML data file shipped inside the package.

    Args:
        relative_path: Path relative to ``src/naijatax/``,
            e.g. ``"taxes/tables/nigeria_2026.yaml"``.
    """
    logger.debug("Loading package data %s", relative_path)
    return load_yaml(PACKAGE_ROOT / relative_path)
