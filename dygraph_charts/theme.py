"""
Theme definitions for annotation markers and legend styling.

Provides predefined color schemes used by the annotation builder and the
option defaults.
"""
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ChartTheme:
    """
    Immutable color theme for chart decorations.

    Attributes:
        entry_fill: Fill color of trade entry arrows
        win_fill: Fill color of exit arrows for trades with P&L >= 0
        loss_fill: Fill color of exit arrows for losing trades
        marker_stroke: Outline color of every arrow
        signal_up: Default fill of buy signal arrows
        signal_down: Default fill of sell signal arrows
        legend_background: Background of the floating legend (use rgba for transparency)
    """

    # Trades
    entry_fill: str
    win_fill: str
    loss_fill: str

    # All markers
    marker_stroke: str

    # Signals
    signal_up: str
    signal_down: str

    # Legend
    legend_background: str


# Predefined theme: Light background (default, matches dygraphs' own look)
DEFAULT_THEME = ChartTheme(
    entry_fill="white",
    win_fill="green",
    loss_fill="red",
    marker_stroke="black",
    signal_up="green",
    signal_down="red",
    legend_background="rgba(255, 255, 255, 0.5)",
)


# Predefined theme: Dark background
DARK_THEME = ChartTheme(
    entry_fill="#e0e0e0",
    win_fill="#00d26a",
    loss_fill="#ff4d4d",
    marker_stroke="#888888",
    signal_up="#00d26a",
    signal_down="#ff4d4d",
    legend_background="rgba(43, 43, 43, 0.6)",
)


def get_default_theme(mode: Literal["light", "dark"] = "light") -> ChartTheme:
    """
    Get the predefined theme for the specified mode.

    Args:
        mode: Theme mode ("light" or "dark")

    Returns:
        ChartTheme instance

    Raises:
        ValueError: If mode is not "light" or "dark"

    Examples:
        >>> get_default_theme("light").entry_fill
        'white'
    """
    if mode == "light":
        return DEFAULT_THEME
    elif mode == "dark":
        return DARK_THEME
    else:
        raise ValueError(f"Invalid theme mode: {mode}. Must be 'light' or 'dark'")
