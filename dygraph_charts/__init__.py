"""
dygraphs.js chart builders for financial time series.

Turns pandas DataFrames (prices, indicators, trades, signals) into dygraphs
option trees and standalone HTML pages. The builders know nothing about the
page or framework that finally displays the chart.
"""
from typing import Any, Protocol

from .annotations import AnnotationEntry, build_from_signals, build_from_trades, signal_transitions
from .chart import DygraphChart, build_dygraph
from .columns import AxisSelection, is_ohlc, prepare_table, resolve_columns
from .config import ChartBuildConfig, ColorPair, RibbonSpec
from .errors import (
    ColumnDetectionError,
    ConfigurationError,
    DygraphError,
    EncodingError,
    RibbonLengthError,
    SettingsError,
)
from .js import JSValue, ValueKind, deferred, literal
from .options import apply_defaults, merge_options
from .render import render_page, to_javascript, write_html, write_layout
from .ribbon import PalettePlan, build_ribbon, canonical_color
from .series import SeriesRecord, encode_series
from .theme import DARK_THEME, DEFAULT_THEME, ChartTheme, get_default_theme

__version__ = "1.0.0"
__all__ = [
    "ChartBuilder",
    # Builders
    "build_dygraph",
    "DygraphChart",
    "resolve_columns",
    "prepare_table",
    "is_ohlc",
    "AxisSelection",
    "encode_series",
    "SeriesRecord",
    "build_ribbon",
    "canonical_color",
    "PalettePlan",
    "build_from_trades",
    "build_from_signals",
    "signal_transitions",
    "AnnotationEntry",
    "merge_options",
    "apply_defaults",
    # Tagged values
    "JSValue",
    "ValueKind",
    "deferred",
    "literal",
    # Rendering
    "to_javascript",
    "render_page",
    "write_html",
    "write_layout",
    # Configs
    "ChartBuildConfig",
    "ColorPair",
    "RibbonSpec",
    # Themes
    "ChartTheme",
    "DEFAULT_THEME",
    "DARK_THEME",
    "get_default_theme",
    # Errors
    "DygraphError",
    "ColumnDetectionError",
    "EncodingError",
    "RibbonLengthError",
    "ConfigurationError",
    "SettingsError",
]


class ChartBuilder(Protocol):
    """
    Protocol for chart builder implementations.

    Chart builders take domain data (DataFrames, configs) and produce an
    immutable chart object for a renderer.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """
        Build and return a chart.

        Returns:
            Renderer-specific chart object (e.g. DygraphChart)
        """
        ...
