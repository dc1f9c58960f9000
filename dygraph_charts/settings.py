"""
Runtime settings for chart output.

Settings come from one YAML file, looked up in this order:

1. ``config_path`` passed to ``load_settings``
2. ``DYGRAPH_CONFIG`` environment variable
3. the first existing entry of ``DEFAULT_CONFIG_PATHS``

Example file::

    chart:
      width: 1024
      height: 400
      tz: America/New_York
    assets:
      dygraph_js: /static/dygraph.min.js
      dygraph_css: /static/dygraph.min.css
      extra_js: [/static/synchronizer.js]
    output:
      dir: ~/charts

``DYGRAPH_OUTPUT_DIR`` overrides ``output.dir``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from .errors import SettingsError

DEFAULT_CONFIG_PATHS = (
    Path.home() / ".config" / "dygraph_charts" / "settings.yaml",
    Path.cwd() / "config" / "dygraph_charts.yaml",
)

DEFAULT_DYGRAPH_JS = "https://cdnjs.cloudflare.com/ajax/libs/dygraph/2.2.1/dygraph.min.js"
DEFAULT_DYGRAPH_CSS = "https://cdnjs.cloudflare.com/ajax/libs/dygraph/2.2.1/dygraph.min.css"


@dataclass(frozen=True)
class ChartDefaults:
    width: int
    height: int
    tz: str


@dataclass(frozen=True)
class AssetSettings:
    dygraph_js: str
    dygraph_css: str
    extra_js: tuple[str, ...]


@dataclass(frozen=True)
class DygraphSettings:
    config_path: Path | None
    chart: ChartDefaults
    assets: AssetSettings
    output_dir: Path | None


def _int_setting(section: Mapping[str, Any], key: str, default: int) -> int:
    raw = section.get(key.split(".")[-1])
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise SettingsError(f"{key} must be an integer, got: {raw!r}") from None


def _optional_dir(raw: Any) -> Path | None:
    if raw is None or not str(raw).strip():
        return None
    return Path(str(raw)).expanduser()


def _locate_config(config_path: str | Path | None, search_paths: Iterable[Path] | None) -> Path | None:
    if config_path:
        return Path(config_path).expanduser()
    from_env = os.getenv("DYGRAPH_CONFIG", "").strip()
    if from_env:
        return Path(from_env).expanduser()
    candidates = DEFAULT_CONFIG_PATHS if search_paths is None else tuple(search_paths)
    return next((p for p in candidates if p.exists()), None)


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        raise SettingsError(f"settings file not found: {path}")
    try:
        loaded = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise SettingsError(f"invalid YAML in {path}: {e}") from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise SettingsError(f"settings file must contain a mapping: {path}")
    return loaded


def load_settings(
    *,
    config_path: str | Path | None = None,
    search_paths: Iterable[Path] | None = None,
) -> DygraphSettings:
    path = _locate_config(config_path, search_paths)
    raw = _read_yaml(path) if path is not None else {}

    chart = raw.get("chart") or {}
    assets = raw.get("assets") or {}
    output = raw.get("output") or {}

    extra_js = assets.get("extra_js") or ()
    if isinstance(extra_js, str):
        extra_js = (extra_js,)

    return DygraphSettings(
        config_path=path,
        chart=ChartDefaults(
            width=_int_setting(chart, "chart.width", 800),
            height=_int_setting(chart, "chart.height", 400),
            tz=str(chart.get("tz") or "UTC"),
        ),
        assets=AssetSettings(
            dygraph_js=str(assets.get("dygraph_js") or DEFAULT_DYGRAPH_JS),
            dygraph_css=str(assets.get("dygraph_css") or DEFAULT_DYGRAPH_CSS),
            extra_js=tuple(str(s) for s in extra_js),
        ),
        output_dir=_optional_dir(os.getenv("DYGRAPH_OUTPUT_DIR") or output.get("dir")),
    )


_SETTINGS: DygraphSettings | None = None


def get_settings() -> DygraphSettings:
    """Settings loaded once per process; see ``reset_settings_for_tests``."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reset_settings_for_tests() -> None:
    global _SETTINGS
    _SETTINGS = None
