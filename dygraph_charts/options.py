"""
Options tree merging.

Every build step produces a small options mapping; the chart builder folds
them together with ``merge_options``. Inputs are never modified.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import numpy as np
import pandas as pd

from .errors import ConfigurationError
from .js import JSValue
from .theme import DEFAULT_THEME, ChartTheme

logger = logging.getLogger(__name__)

# Extra room right of the last point so it can be highlighted
DEFAULT_RIGHT_GAP = 20


def _as_list(value: Any) -> list:
    """dygraphs only accepts an array for ``colors``."""
    if value is None:
        return []
    if isinstance(value, (str, JSValue)):
        return [value]
    if isinstance(value, Mapping):
        raise ConfigurationError(f"Option 'colors' must be a color or a list of colors, got {value!r}")
    if isinstance(value, (list, tuple, set, np.ndarray, pd.Series, pd.Index)):
        return list(value)
    return [value]


def _check_mapping(options: Any, position: int) -> Mapping:
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Options override #{position} must be a mapping, got {type(options).__name__}"
        )
    bad_keys = [k for k in options if not isinstance(k, str)]
    if bad_keys:
        raise ConfigurationError(f"Option names must be strings, got {bad_keys}")
    return options


def _merge_two(base: Mapping, override: Mapping) -> dict:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_two(current, _check_mapping(value, 0))
        elif isinstance(value, Mapping):
            merged[key] = _merge_two({}, _check_mapping(value, 0))
        else:
            merged[key] = value
    return merged


def merge_options(base: Optional[Mapping], *overrides: Optional[Mapping]) -> dict:
    """
    Merge option mappings left to right.

    Later mappings win key by key; nested mappings are merged recursively so
    no sibling key is lost. ``colors`` is always returned as a list.

    Args:
        base: Starting options (None = empty)
        *overrides: Mappings applied in order (None entries are skipped)

    Returns:
        New options dict

    Raises:
        ConfigurationError: if an override is not a mapping or has
            non-string keys, or if colors is a mapping

    Examples:
        >>> merge_options({"colors": "red"}, {})
        {'colors': ['red']}
        >>> merge_options({"a": {"x": 1}}, {"a": {"y": 2}})
        {'a': {'x': 1, 'y': 2}}
    """
    merged = _merge_two({}, _check_mapping(base or {}, 0))
    for position, override in enumerate(overrides, start=1):
        if override is None:
            continue
        merged = _merge_two(merged, _check_mapping(override, position))

    if "colors" in merged:
        merged["colors"] = _as_list(merged["colors"])
    return merged


def apply_defaults(user_options: Mapping, theme: ChartTheme = DEFAULT_THEME) -> dict:
    """
    Default options for the keys the caller left unset.

    - A translucent, click-through legend when ``legendFollow`` is set
    - ``rightGap`` so the right-most point stays easy to highlight

    Args:
        user_options: Options supplied by the caller
        theme: Theme providing the legend background

    Returns:
        Defaults to merge *before* the user options
    """
    defaults: dict = {}

    if user_options.get("legendFollow"):
        defaults["labelsDivStyles"] = {
            "pointerEvents": "none",
            "backgroundColor": theme.legend_background,
        }

    if "rightGap" not in user_options:
        defaults["rightGap"] = DEFAULT_RIGHT_GAP

    if defaults:
        logger.debug(f"Option defaults applied: {sorted(defaults)}")
    return defaults
