"""
Arrow annotations for trades and trading signals.

Trades produce an entry and an exit arrow each. Signal columns are scanned
once from top to bottom: gaps carry the last signal forward, repeats of the
same signal are suppressed, and each remaining change is drawn one row later
(the bar on which it could be acted upon).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from .config import ColorPair
from .errors import ColumnDetectionError, ConfigurationError, EncodingError
from .js import JSValue, date_expression, deferred
from .series import to_epoch_ms
from .theme import DEFAULT_THEME, ChartTheme

logger = logging.getLogger(__name__)

ARROW = deferred("Dygraph.Circles.ARROW")
TRADE_COLUMNS = ("Start", "End", "Side", "Base", "PL")
SIGNAL_COLUMNS = ("Date", "Price")
SIDES = ("Long", "Short")


@dataclass(frozen=True)
class AnnotationEntry:
    """One arrow drawn on the chart."""

    series: int
    x: JSValue
    rotation: str
    fill_style: str
    stroke_style: str
    text: str
    canvas: JSValue = ARROW

    def to_option(self) -> dict:
        """Entry in the shape of a dygraphs annotation option."""
        return {
            "series": self.series,
            "x": self.x,
            "canvas": self.canvas,
            "rotation": self.rotation,
            "fillStyle": self.fill_style,
            "strokeStyle": self.stroke_style,
            "text": self.text,
        }


def _require_columns(frame: pd.DataFrame, required: Sequence[str], what: str) -> None:
    missing = [c for c in required if c not in frame.columns]
    if missing:
        raise ColumnDetectionError(
            f"Missing required columns in {what} DataFrame: {missing}. "
            f"Expected columns: {list(required)}"
        )


def _flip(rotation: str) -> str:
    return "down" if rotation == "up" else "up"


def build_from_trades(
    trades: pd.DataFrame,
    theme: ChartTheme = DEFAULT_THEME,
    tz: str = "UTC",
) -> list[AnnotationEntry]:
    """
    Build entry and exit arrows for every trade.

    Args:
        trades: DataFrame with columns [Start, End, Side, Base, PL]; Side is
            "Long" or "Short", PL the trade return as a fraction
        theme: Marker colors
        tz: Timezone for naive timestamps

    Returns:
        Two entries per trade, entry first

    Raises:
        ColumnDetectionError: if a required column is missing
        EncodingError: for an unknown Side or non-numeric Base/PL

    Examples:
        >>> trades = pd.DataFrame({"Start": ["2024-01-02"], "End": ["2024-01-09"],
        ...                        "Side": ["Long"], "Base": [100.0], "PL": [0.05]})
        >>> [e.rotation for e in build_from_trades(trades)]
        ['up', 'down']
    """
    _require_columns(trades, TRADE_COLUMNS, "trades")
    trades = trades.reset_index(drop=True)

    bad_sides = sorted({str(s) for s in trades["Side"] if s not in SIDES})
    if bad_sides:
        raise EncodingError(f"Invalid trade Side values {bad_sides}, expected one of {SIDES}")

    try:
        base = pd.to_numeric(trades["Base"], errors="raise").astype(float)
        pl = pd.to_numeric(trades["PL"], errors="raise").astype(float)
    except (ValueError, TypeError) as e:
        raise EncodingError(f"Trade Base/PL must be numeric: {e}") from e

    start_ms = to_epoch_ms(trades["Start"], tz=tz)
    end_ms = to_epoch_ms(trades["End"], tz=tz)

    entries: list[AnnotationEntry] = []
    for i, side in enumerate(trades["Side"]):
        entry_rotation = "up" if side == "Long" else "down"
        exit_price = base[i] * (1 + pl[i])
        entries.append(
            AnnotationEntry(
                series=1,
                x=date_expression(start_ms[i]),
                rotation=entry_rotation,
                fill_style=theme.entry_fill,
                stroke_style=theme.marker_stroke,
                text=f"<p><strong>Price</strong> {base[i]:.2f}<br></p>",
            )
        )
        entries.append(
            AnnotationEntry(
                series=1,
                x=date_expression(end_ms[i]),
                rotation=_flip(entry_rotation),
                fill_style=theme.win_fill if pl[i] >= 0 else theme.loss_fill,
                stroke_style=theme.marker_stroke,
                text=f"<p><strong>Price</strong> {exit_price:.2f}<br></p>",
            )
        )

    logger.debug(f"Built {len(entries)} trade annotations from {len(trades)} trades")
    return entries


def _signal_value(value: Any, column: str) -> Optional[int]:
    if value is None or (isinstance(value, float) and math.isnan(value)) or value is pd.NA:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise EncodingError(f"Signal column '{column}' contains non-numeric value {value!r}") from None
    if math.isnan(number):
        return None
    if number not in (-1, 0, 1):
        raise EncodingError(f"Signal column '{column}' values must be -1, 0 or 1, got {value!r}")
    return int(number)


def signal_transitions(values: Iterable[Any], column: str = "sig") -> list[tuple[int, int]]:
    """
    Reduce a raw signal column to the arrows it produces.

    One pass carries the last known signal (gaps and leading gaps count as
    that signal, or neutral), keeps a value only where it differs from the
    previous row, and shifts each kept value one row later. A change on the
    final row has no later row and stays on the final row, replacing any
    arrow the previous row already placed there.

    Args:
        values: Signal values in {-1, 0, 1, NaN/None}
        column: Column name used in error messages

    Returns:
        (row, signal) pairs with signal in {-1, 1}, in row order

    Examples:
        >>> signal_transitions([None, None, 1, 1, 1, -1, None, -1, 1])
        [(3, 1), (6, -1), (8, 1)]
    """
    result: list[tuple[int, int]] = []
    last = 0
    pending = 0
    row = -1
    for row, raw in enumerate(values):
        if pending:
            result.append((row, pending))
        value = _signal_value(raw, column)
        current = last if value is None else value
        pending = current if current != last else 0
        last = current
    if pending:
        if result and result[-1][0] == row:
            # the final-row change replaces the arrow lagged onto that row
            result[-1] = (row, pending)
        else:
            result.append((row, pending))
    return result


def _resolve_color_pairs(
    signals: pd.DataFrame,
    count: int,
    color_pairs: Optional[Sequence[Any]],
    theme: ChartTheme,
) -> list[ColorPair]:
    if color_pairs is None:
        color_pairs = signals.attrs.get("colors")
    if color_pairs is None:
        return [ColorPair(theme.signal_up, theme.signal_down)] * count
    pairs = [ColorPair.from_value(p) for p in color_pairs]
    if len(pairs) < count:
        raise ConfigurationError(
            f"{count} signal column(s) but only {len(pairs)} color pair(s) supplied"
        )
    return pairs


def build_from_signals(
    signals: pd.DataFrame,
    color_pairs: Optional[Sequence[Any]] = None,
    theme: ChartTheme = DEFAULT_THEME,
    tz: str = "UTC",
) -> list[AnnotationEntry]:
    """
    Build buy/sell arrows from one or more signal columns.

    Args:
        signals: DataFrame with columns [Date, Price, <signal>...]; every
            other column is a signal column
        color_pairs: Per signal column (up, down) colors, by position; falls
            back to ``signals.attrs["colors"]`` and then to the theme colors
        theme: Marker colors
        tz: Timezone for naive timestamps

    Returns:
        Entries grouped by signal column, in row order within a column

    Raises:
        ColumnDetectionError: if Date/Price or every signal column is missing
        EncodingError: for signal values outside {-1, 0, 1}
        ConfigurationError: if fewer color pairs than signal columns are supplied
    """
    _require_columns(signals, SIGNAL_COLUMNS, "signals")
    signal_columns = [c for c in signals.columns if c not in SIGNAL_COLUMNS]
    if not signal_columns:
        raise ColumnDetectionError("Signals DataFrame needs at least one signal column after Date, Price")

    pairs = _resolve_color_pairs(signals, len(signal_columns), color_pairs, theme)
    signals = signals.reset_index(drop=True)

    x_ms = to_epoch_ms(signals["Date"], tz=tz)
    price = pd.to_numeric(signals["Price"], errors="coerce")

    entries: list[AnnotationEntry] = []
    for column, colors in zip(signal_columns, pairs):
        name = str(column)
        name_line = "" if name == "sig" else f"{name}</br>"
        for row, value in signal_transitions(signals[column].tolist(), name):
            label = "buy" if value == 1 else "sell"
            entries.append(
                AnnotationEntry(
                    series=1,
                    x=date_expression(x_ms[row]),
                    rotation="up" if value == 1 else "down",
                    fill_style=colors.up if value == 1 else colors.down,
                    stroke_style=theme.marker_stroke,
                    text=(
                        f"<p><strong>Price</strong> {price[row]:.2f}</br>"
                        f"{name_line}<strong>signal</strong> {label}</p>"
                    ),
                )
            )

    logger.debug(
        f"Built {len(entries)} signal annotations from {len(signal_columns)} signal column(s)"
    )
    return entries
