"""
Background ribbon encoding.

A ribbon colors the chart background per row. dygraphs receives a palette of
distinct colors plus one palette index per row, which keeps the payload small
for long runs of the same color.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

import pandas as pd
from matplotlib import colors as mcolors

from .config import RibbonSpec
from .errors import ConfigurationError, RibbonLengthError

logger = logging.getLogger(__name__)

# Spellings of "no color", drawn as a white band
_COLOR_ALIASES = {
    "transparent": "#FFFFFF",
    "none": "#FFFFFF",
}


@dataclass(frozen=True)
class PalettePlan:
    """
    Ribbon colors split into a palette and per-row palette indices.

    Attributes:
        palette: Distinct canonical colors in first-occurrence order
        indices: 0-based palette slot of every row
        height: Ribbon height relative to the canvas
        position: Ribbon offset relative to the canvas
    """

    palette: tuple[str, ...]
    indices: tuple[int, ...]
    height: float = 1.0
    position: float = 0.0

    def colors(self) -> list[str]:
        """Canonical color of every row."""
        return [self.palette[i] for i in self.indices]

    def to_options(self) -> dict:
        """dygraphs options carrying the ribbon."""
        return {
            "ribbonData": list(self.indices),
            "ribbon": {
                "palette": list(self.palette),
                "height": self.height,
                "position": self.position,
            },
        }


def canonical_color(color: Any) -> str:
    """
    Normalize a color name or hex string to upper-case ``#RRGGBB``.

    Examples:
        >>> canonical_color("lightgreen")
        '#90EE90'
        >>> canonical_color("#90ee90")
        '#90EE90'

    Raises:
        ConfigurationError: if the color is not recognised
    """
    key = str(color).strip()
    alias = _COLOR_ALIASES.get(key.lower())
    if alias is not None:
        return alias
    try:
        return mcolors.to_hex(key, keep_alpha=False).upper()
    except ValueError:
        raise ConfigurationError(f"Invalid color: {color!r}") from None


def normalize_ribbon(value: Union[RibbonSpec, Mapping, Sequence[str]]) -> RibbonSpec:
    """
    Accept a RibbonSpec, a mapping ``{colors, height, pos|position}`` or a
    bare color sequence (full height, bottom position).
    """
    if isinstance(value, RibbonSpec):
        return value
    if isinstance(value, Mapping):
        unknown = set(value) - {"colors", "height", "pos", "position"}
        if unknown:
            raise ConfigurationError(f"Unknown ribbon keys: {sorted(unknown)}")
        if "pos" in value and "position" in value:
            raise ConfigurationError("Ribbon takes either 'pos' or 'position', not both")
        colors = value.get("colors")
        return RibbonSpec(
            colors=() if colors is None else tuple(colors),
            height=value.get("height", 1.0),
            position=value.get("position", value.get("pos", 0.0)),
        )
    if isinstance(value, (str, bytes)):
        raise ConfigurationError("Ribbon colors must be a sequence with one color per row")
    return RibbonSpec(colors=tuple(value))


def build_ribbon(spec: RibbonSpec, row_count: int) -> PalettePlan:
    """
    Encode ribbon colors as a palette plus per-row indices.

    Palette order is the order in which colors first appear, so the same
    input always produces the same palette.

    Args:
        spec: Ribbon colors, height and position
        row_count: Number of rows of the charted table

    Returns:
        PalettePlan

    Raises:
        RibbonLengthError: if the color count differs from row_count
        ConfigurationError: if a color is not recognised
    """
    if len(spec.colors) != row_count:
        raise RibbonLengthError(
            f"Ribbon colors length {len(spec.colors)} not equal to data length {row_count}"
        )

    canonical = [canonical_color(c) for c in spec.colors]
    codes, uniques = pd.factorize(pd.Series(canonical, dtype=object), sort=False)

    logger.debug(f"Ribbon palette: {len(uniques)} colors for {row_count} rows")

    return PalettePlan(
        palette=tuple(str(c) for c in uniques),
        indices=tuple(int(i) for i in codes),
        height=float(spec.height),
        position=float(spec.position),
    )
