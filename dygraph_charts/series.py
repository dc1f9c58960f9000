"""
Series encoding: project a table onto its resolved axes in the row format
dygraphs reads (``[Date, y1, y2, ...]``).
"""
from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
import pytz

from .columns import AxisSelection
from .errors import ConfigurationError, EncodingError
from .js import date_expression
from .logging_utils import is_debug_mode

logger = logging.getLogger(__name__)

_EPOCH = pd.Timestamp(0, tz="UTC")


@dataclass(frozen=True)
class SeriesRecord:
    """
    A table projected onto an AxisSelection.

    Attributes:
        labels: Column labels, x first
        x_ms: Epoch milliseconds of every row
        rows: One list per row: deferred date expression, then the y values
            (floats, None for gaps)
    """

    labels: tuple[str, ...]
    x_ms: tuple[int, ...]
    rows: tuple[tuple[Any, ...], ...]

    def __len__(self) -> int:
        return len(self.rows)


def _parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse values; several UTC offsets in one column are parsed as UTC."""
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", FutureWarning)
            ts = pd.to_datetime(values)
    except (ValueError, TypeError):
        ts = None
    if ts is None or not pd.api.types.is_datetime64_any_dtype(ts):
        # Mixed offsets raise (pandas >= 3) or come back as objects
        ts = pd.to_datetime(values, utc=True)
    return ts


def to_epoch_ms(values: Any, tz: str = "UTC") -> pd.Series:
    """
    Convert point-in-time values to integer milliseconds since the epoch.

    Naive timestamps are interpreted in ``tz``; aware ones keep their zone,
    and a column mixing UTC offsets (e.g. across a DST switch) is read as UTC.

    Raises:
        EncodingError: if a value cannot be parsed as a timestamp
        ConfigurationError: if tz is not a known timezone
    """
    try:
        zone = pytz.timezone(tz)
    except pytz.UnknownTimeZoneError:
        raise ConfigurationError(f"Unknown timezone '{tz}'") from None

    try:
        ts = _parse_timestamps(pd.Series(values).reset_index(drop=True))
    except (ValueError, TypeError) as e:
        raise EncodingError(f"Cannot convert values to timestamps: {e}") from e

    if ts.isna().any():
        bad = ts[ts.isna()].index.tolist()[:5]
        raise EncodingError(f"Missing or unparseable timestamps at rows {bad}")

    if ts.dt.tz is None:
        ts = ts.dt.tz_localize(zone)

    return ((ts - _EPOCH) // pd.Timedelta(milliseconds=1)).astype("int64")


def _coerce_numeric(column: pd.Series, name: str) -> pd.Series:
    if column.dtype == bool:
        column = column.astype(int)
    elif column.dtype == object:
        column = column.map(lambda v: int(v) if isinstance(v, (bool, np.bool_)) else v)

    try:
        return pd.to_numeric(column, errors="raise").astype(float)
    except (ValueError, TypeError) as e:
        raise EncodingError(f"Column '{name}' contains non-numeric values: {e}") from e


def encode_series(table: pd.DataFrame, selection: AxisSelection, tz: str = "UTC") -> SeriesRecord:
    """
    Encode the selected columns of a table for dygraphs.

    The x column becomes deferred ``new Date(ms)`` expressions, evaluated by
    the browser, and every y column becomes floats (booleans as 0/1, missing
    values as None).

    Args:
        table: Input table
        selection: Resolved axes
        tz: Timezone for naive timestamps

    Returns:
        SeriesRecord with the row count of the table

    Raises:
        EncodingError: for unparseable timestamps or non-numeric y values
    """
    x_ms = to_epoch_ms(table[selection.x], tz=tz)

    y_columns = []
    for name in selection.y:
        values = _coerce_numeric(table[name].reset_index(drop=True), str(name))
        y_columns.append([None if math.isnan(v) else v for v in values.tolist()])

    x_list = x_ms.tolist()
    rows = tuple(
        (date_expression(ms), *values)
        for ms, values in zip(x_list, zip(*y_columns))
    )

    if is_debug_mode():
        logger.debug(
            f"  → Encoded {len(rows)} rows x {len(selection.y)} series, "
            f"gaps per series: {[col.count(None) for col in y_columns]}"
        )

    return SeriesRecord(
        labels=tuple(str(c) for c in selection.labels),
        x_ms=tuple(int(v) for v in x_list),
        rows=rows,
    )
