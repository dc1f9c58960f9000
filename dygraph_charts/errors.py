"""
Error taxonomy for the chart-build pipeline.

Every error is raised synchronously at the offending input. None of them is
retried or recovered internally: the caller fixes the input and calls again.
"""
from __future__ import annotations


class DygraphError(ValueError):
    """Base class for all chart-build validation failures."""


class ColumnDetectionError(DygraphError):
    """Raised when a required column (OHLC, trade or signal field) is missing."""


class EncodingError(DygraphError):
    """Raised when a value cannot be converted for the chart (e.g. text in a y column)."""


class RibbonLengthError(DygraphError):
    """Raised when the ribbon color count does not match the table row count."""


class ConfigurationError(DygraphError):
    """Raised for conflicting or malformed chart options."""


class SettingsError(RuntimeError):
    """Raised when the runtime settings file is missing or invalid."""
