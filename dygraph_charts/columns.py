"""
Column resolution: which column is the x-axis and which are y-series.

OHLC detection matches column names by case-insensitive substring
("SPY.Open", "open", "Adj_Close" all match). It is a best-effort heuristic:
callers with unusual naming pass ``y`` explicitly instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import pandas as pd

from .errors import ColumnDetectionError, ConfigurationError

logger = logging.getLogger(__name__)

# dygraphs' candle plotter reads the four series in this order
OHLC_FIELDS = ("open", "high", "low", "close")


@dataclass(frozen=True)
class AxisSelection:
    """
    Resolved axes for one chart.

    Attributes:
        x: Name of the x-axis (time) column
        y: Ordered y-series column names, never containing x
        ohlc: True when y holds the Open/High/Low/Close columns in that order
    """

    x: str
    y: tuple[str, ...]
    ohlc: bool = False

    @property
    def labels(self) -> list[str]:
        return [self.x, *self.y]


def prepare_table(data: Union[pd.DataFrame, pd.Series]) -> pd.DataFrame:
    """
    Turn chart input into a plain table.

    A Series becomes a one-column frame. A DatetimeIndex is moved into the
    first column (named after the index, or "date") so that time-indexed
    price data can be charted without resetting it first.
    """
    if isinstance(data, pd.Series):
        data = data.to_frame()
    if not isinstance(data, pd.DataFrame):
        raise ConfigurationError(
            f"Chart data must be a pandas DataFrame or Series, got {type(data).__name__}"
        )
    if isinstance(data.index, pd.DatetimeIndex):
        name = data.index.name or "date"
        if name in data.columns:
            raise ConfigurationError(
                f"Cannot move DatetimeIndex into column '{name}': column already exists"
            )
        table = data.copy()
        table.index.name = name
        return table.reset_index()
    return data


def detect_ohlc_columns(columns: Sequence[str]) -> dict[str, Optional[str]]:
    """
    Find the first column whose name contains each OHLC indicator.

    Returns:
        Mapping of field ("open", "high", "low", "close") to the matched
        column name, or None when nothing matched.
    """
    found: dict[str, Optional[str]] = {}
    for field_name in OHLC_FIELDS:
        matches = [c for c in columns if field_name in str(c).lower()]
        if len(matches) > 1:
            logger.warning(
                f"⚠️  Several columns look like '{field_name}': {matches}, using '{matches[0]}'"
            )
        found[field_name] = matches[0] if matches else None
    return found


def is_ohlc(table: pd.DataFrame) -> bool:
    """True when all four OHLC columns can be detected by name."""
    return all(v is not None for v in detect_ohlc_columns(list(table.columns)).values())


def resolve_columns(
    table: pd.DataFrame,
    x: Optional[str] = None,
    y: Union[str, Sequence[str], None] = None,
    ohlc: bool = False,
) -> AxisSelection:
    """
    Determine the x column and the y-series columns of a table.

    Args:
        table: Input table (never modified)
        x: x-axis column name; defaults to the first column
        y: y column name(s); defaults to every column except x, in table order
        ohlc: Replace y with the detected Open/High/Low/Close columns

    Returns:
        AxisSelection

    Raises:
        ColumnDetectionError: if a named column does not exist or an OHLC
            column cannot be found
        ConfigurationError: if the table has no columns or y contains x
    """
    columns = list(table.columns)
    if not columns:
        raise ConfigurationError("Cannot chart a table without columns")

    if x is None:
        x = columns[0]
    elif x not in columns:
        raise ColumnDetectionError(f"x column '{x}' not found. Available columns: {columns}")

    if ohlc:
        found = detect_ohlc_columns([c for c in columns if c != x])
        missing = [name for name, col in found.items() if col is None]
        if missing:
            raise ColumnDetectionError(
                f"Missing OHLC column(s) for candlestick chart: {missing}. "
                f"Available columns: {columns}"
            )
        selected = tuple(found[name] for name in OHLC_FIELDS)
        logger.debug(f"OHLC columns detected: {selected}")
        return AxisSelection(x=x, y=selected, ohlc=True)

    if y is None:
        selected = tuple(c for c in columns if c != x)
    else:
        selected = (y,) if isinstance(y, str) else tuple(y)
        unknown = [c for c in selected if c not in columns]
        if unknown:
            raise ColumnDetectionError(f"y column(s) {unknown} not found. Available columns: {columns}")
        if x in selected:
            raise ConfigurationError(f"Column '{x}' cannot be both the x-axis and a y-series")

    if not selected:
        raise ConfigurationError(f"No y-series left to chart besides x column '{x}'")

    return AxisSelection(x=x, y=selected)
