"""Custom exceptions for naijatax."""

from __future__ import annotations


class NaijaTaxError(Exception):
    """Base exception for naijatax."""


class ConfigError(NaijaTaxError):
    """Invalid configuration."""


class ClassificationError(ConfigError):
    """Unrecognized company size or business type."""
