"""
Dygraph chart builder.

This module is the entry point of the package. It takes a DataFrame plus
optional ribbon, trade and signal tables and produces an immutable
``DygraphChart``: the dygraphs options tree and the encoded series, with no
knowledge of how the page around it is rendered.
"""
from __future__ import annotations

import functools
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import pandas as pd

from .annotations import AnnotationEntry, build_from_signals, build_from_trades
from .callbacks import annotation_handler_options, candlestick_options, sync_options
from .columns import is_ohlc, prepare_table, resolve_columns
from .config import ChartBuildConfig, RibbonSpec
from .errors import ConfigurationError
from .logging_utils import is_debug_mode, log_chart_build, log_data_preparation
from .options import apply_defaults, merge_options
from .ribbon import build_ribbon, normalize_ribbon
from .series import SeriesRecord, encode_series
from .settings import DygraphSettings, get_settings
from .theme import get_default_theme

logger = logging.getLogger(__name__)

Step = Callable[[dict], dict]

# Options owned by the builder; callers set them through dedicated arguments
RESERVED_OPTIONS = ("file", "ribbonData")


@dataclass(frozen=True)
class DygraphChart:
    """
    A fully built chart, ready to be rendered.

    Attributes:
        chart_id: DOM id of the chart container
        options: dygraphs options tree (may contain deferred JS values)
        series: Encoded data rows
        layout: "chart", or "annotations" when arrows need tooltip styling
        annotations: Annotation entries included in the options
    """

    chart_id: str
    options: dict
    series: SeriesRecord
    layout: str = "chart"
    annotations: tuple[AnnotationEntry, ...] = ()

    @property
    def labels(self) -> tuple[str, ...]:
        return self.series.labels


def _merge_step(options: Optional[Mapping]) -> Step:
    return lambda tree: merge_options(tree, options)


def _check_user_options(options: Mapping, label_count: int, has_annotations: bool) -> None:
    reserved = [k for k in RESERVED_OPTIONS if k in options]
    if reserved:
        raise ConfigurationError(f"Options {reserved} are set by the chart builder and cannot be overridden")
    if has_annotations and "annotations" in options:
        raise ConfigurationError("Pass either trades/signals or an 'annotations' option, not both")
    labels = options.get("labels")
    if labels is not None and len(labels) != label_count:
        raise ConfigurationError(
            f"'labels' needs {label_count} entries (x plus every series), got {len(labels)}"
        )


@log_chart_build
def build_dygraph(
    data: Union[pd.DataFrame, pd.Series],
    x: Optional[str] = None,
    y: Union[str, Sequence[str], None] = None,
    *,
    candlestick: Optional[bool] = None,
    sync: bool = False,
    defaults: bool = True,
    rebase: Union[None, float, str] = None,
    ribbon: Any = None,
    trades: Optional[pd.DataFrame] = None,
    signals: Optional[pd.DataFrame] = None,
    signal_colors: Optional[Sequence[Any]] = None,
    theme_mode: str = "light",
    tz: Optional[str] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    chart_id: Optional[str] = None,
    settings: Optional[DygraphSettings] = None,
    **options: Any,
) -> DygraphChart:
    """
    Build an interactive dygraph chart from a time-series table.

    Args:
        data: Table whose first column (or DatetimeIndex) holds time
        x: x-axis column (default: first column)
        y: y-series column(s) (default: every other column)
        candlestick: Draw OHLC candles; None detects OHLC columns by name
            when y is not given
        sync: React to highlights and zooms of other charts on the page
        defaults: Preload legend styling and right gap defaults
        rebase: Positive base value or "percent" to compare growth rates
        ribbon: Background colors: a color per row, a mapping
            {colors, height, pos} or a RibbonSpec
        trades: DataFrame [Start, End, Side, Base, PL] drawn as arrows
        signals: DataFrame [Date, Price, <signal>...] drawn as arrows
        signal_colors: Per signal column (up, down) colors
        theme_mode: "light" or "dark" marker colors
        tz: Timezone for naive timestamps (default from settings)
        width: Chart width in pixels (default from settings)
        height: Chart height in pixels (default from settings)
        chart_id: DOM id of the chart (default: random)
        settings: Runtime settings (default: get_settings())
        **options: dygraphs options (http://dygraphs.com/options.html);
            they override the defaults

    Returns:
        DygraphChart

    Raises:
        ColumnDetectionError, EncodingError, RibbonLengthError,
        ConfigurationError: for invalid input; nothing is returned partially

    Examples:
        >>> chart = build_dygraph(df, x="date", y=["SPY", "SPY.sma200"],
        ...                       title="SPY", colors=["black", "blue"],
        ...                       legendFollow=True)
        >>> chart.labels
        ('date', 'SPY', 'SPY.sma200')
    """
    settings = settings or get_settings()
    config = ChartBuildConfig(
        candlestick=candlestick,
        sync=sync,
        defaults=defaults,
        rebase=rebase,
        tz=tz or settings.chart.tz,
        width=width,
        height=height,
        theme_mode=theme_mode,
    )
    theme = get_default_theme(config.theme_mode)
    ribbon_spec: Optional[RibbonSpec] = normalize_ribbon(ribbon) if ribbon is not None else None

    with log_data_preparation("Resolving columns"):
        table = prepare_table(data)
        as_candles = config.candlestick
        if as_candles is None:
            as_candles = y is None and is_ohlc(table.drop(columns=[x]) if x in table.columns else table.iloc[:, 1:])
        selection = resolve_columns(table, x=x, y=y, ohlc=as_candles)

    with log_data_preparation(f"Encoding {len(selection.y)} series"):
        record = encode_series(table, selection, tz=config.tz)

    has_annotations = trades is not None or signals is not None
    _check_user_options(options, len(record.labels), has_annotations)

    steps: list[Step] = [
        _merge_step({
            "width": config.width or settings.chart.width,
            "height": config.height or settings.chart.height,
            "labels": list(record.labels),
        }),
    ]
    if config.defaults:
        steps.append(_merge_step(apply_defaults(options, theme)))
    steps.append(_merge_step(options))
    if config.sync:
        steps.append(_merge_step(sync_options()))
    if as_candles:
        steps.append(_merge_step(candlestick_options()))
    if config.rebase is not None:
        steps.append(_merge_step({"rebase": config.rebase}))

    if ribbon_spec is not None:
        with log_data_preparation("Encoding ribbon colors"):
            plan = build_ribbon(ribbon_spec, len(record))
        steps.append(_merge_step(plan.to_options()))

    entries: list[AnnotationEntry] = []
    if trades is not None:
        with log_data_preparation(f"Building trade annotations ({len(trades)} trades)"):
            entries.extend(build_from_trades(trades, theme=theme, tz=config.tz))
    if signals is not None:
        with log_data_preparation("Building signal annotations"):
            entries.extend(build_from_signals(signals, signal_colors, theme=theme, tz=config.tz))
    if has_annotations:
        steps.append(_merge_step({"annotations": [e.to_option() for e in entries]}))
        steps.append(_merge_step(annotation_handler_options()))

    tree = functools.reduce(lambda current, step: step(current), steps, {})

    if is_debug_mode():
        logger.debug(f"  → Folded {len(steps)} option steps, candlestick={as_candles}")

    return DygraphChart(
        chart_id=chart_id or f"dygraph-{uuid.uuid4().hex[:8]}",
        options=tree,
        series=record,
        layout="annotations" if has_annotations else "chart",
        annotations=tuple(entries),
    )
