"""
Type-safe configuration models for dygraph chart builds.

All configurations use frozen dataclasses for immutability and are validated
on construction.
"""
from dataclasses import dataclass
from numbers import Real
from typing import Any, Literal, Mapping, Optional, Sequence, Union

import pytz

from .errors import ConfigurationError

# Type aliases for better readability
Rebase = Union[None, float, Literal["percent"]]


@dataclass(frozen=True)
class RibbonSpec:
    """
    Background ribbon drawn behind the series.

    Attributes:
        colors: One color per table row (CSS names or hex strings)
        height: Ribbon height relative to the canvas, in [0, 1]
        position: Ribbon offset from the bottom of the canvas, in [0, 1]
    """

    colors: tuple = ()
    height: float = 1.0
    position: float = 0.0

    def __post_init__(self):
        """Validate configuration values."""
        if isinstance(self.colors, str):
            raise ConfigurationError(
                "Ribbon colors must be a sequence with one color per row, got a single string"
            )
        object.__setattr__(self, "colors", tuple(self.colors))

        for name in ("height", "position"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ConfigurationError(f"Ribbon {name} must be a number, got {value!r}")
            if not 0 <= value <= 1:
                raise ConfigurationError(f"Ribbon {name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class ColorPair:
    """Fill colors for buy (up) and sell (down) signal arrows."""

    up: str = "green"
    down: str = "red"

    @classmethod
    def from_value(cls, value: Any) -> "ColorPair":
        """
        Build a ColorPair from a ColorPair, an {"up", "down"} mapping or a
        two-item (up, down) sequence.
        """
        if isinstance(value, ColorPair):
            return value
        if isinstance(value, Mapping):
            missing = {"up", "down"} - set(value)
            if missing:
                raise ConfigurationError(f"Signal color pair is missing {sorted(missing)}: {value!r}")
            return cls(up=value["up"], down=value["down"])
        if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
            return cls(up=value[0], down=value[1])
        raise ConfigurationError(
            f"Signal color pair must be a mapping with 'up'/'down' or an (up, down) pair, got {value!r}"
        )


@dataclass(frozen=True)
class ChartBuildConfig:
    """
    Flags that steer one chart build.

    Attributes:
        candlestick: Draw OHLC candles (None = detect from column names)
        sync: Synchronise highlight and zoom with other charts on the page
        defaults: Preload option defaults (legend styling, right gap)
        rebase: Positive base value or "percent" for relative-performance charts
        tz: Timezone assumed for naive timestamps
        width: Chart width in pixels (None = from settings)
        height: Chart height in pixels (None = from settings)
        theme_mode: Light or dark marker theme
    """

    candlestick: Optional[bool] = None
    sync: bool = False
    defaults: bool = True
    rebase: Rebase = None
    tz: str = "UTC"
    width: Optional[int] = None
    height: Optional[int] = None
    theme_mode: Literal["light", "dark"] = "light"

    def __post_init__(self):
        """Validate configuration values."""
        if self.rebase is not None:
            if isinstance(self.rebase, str):
                if self.rebase != "percent":
                    raise ConfigurationError(
                        f"Invalid rebase '{self.rebase}', must be a positive number or 'percent'"
                    )
            elif isinstance(self.rebase, bool) or not isinstance(self.rebase, Real) or self.rebase <= 0:
                raise ConfigurationError(
                    f"Invalid rebase {self.rebase!r}, must be a positive number or 'percent'"
                )

        try:
            pytz.timezone(self.tz)
        except pytz.UnknownTimeZoneError:
            raise ConfigurationError(f"Unknown timezone '{self.tz}'") from None

        for name in ("width", "height"):
            value = getattr(self, name)
            if value is None:
                continue
            if value < 100:
                raise ConfigurationError(f"Chart {name} must be >= 100px, got {value}")
            if value > 5000:
                raise ConfigurationError(f"Chart {name} must be <= 5000px, got {value}")

        valid_modes = ("light", "dark")
        if self.theme_mode not in valid_modes:
            raise ConfigurationError(
                f"Invalid theme_mode '{self.theme_mode}', must be one of {valid_modes}"
            )
