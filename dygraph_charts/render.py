"""
Serialise built charts to JavaScript and write standalone HTML pages.

Literal values are JSON-encoded with plotly's encoder (numpy/pandas scalars,
NaN as null); deferred values are spliced in verbatim.
"""
from __future__ import annotations

import json
import logging
import tempfile
from html import escape
from pathlib import Path
from string import Template
from typing import Any, Mapping, Optional, Sequence, Union

from plotly.utils import PlotlyJSONEncoder

from .chart import DygraphChart
from .errors import ConfigurationError
from .js import JSValue
from .settings import DygraphSettings, get_settings

logger = logging.getLogger(__name__)

_PAGE_TMPL = Template("""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>${title}</title>
<link rel="stylesheet" href="${css_url}">
<script src="${js_url}"></script>
${extra_scripts}
<style>
.dygraph-chart{margin:10px auto}
.bubble{position:absolute;z-index:10;padding:4px 8px;background:#fff;border:1px solid #333;border-radius:4px;font:12px sans-serif;pointer-events:none}
</style>
</head>
<body>
${containers}
<script>
var gs = [];
var blockRedraw = false;
${charts}
</script>
</body>
</html>
""")

_CONTAINER_TMPL = Template(
    '<div id="${chart_id}" class="dygraph-chart ${layout}" style="width:${width}px;height:${height}px"></div>'
)

_CHART_TMPL = Template(
    'gs.push(new Dygraph(document.getElementById(${chart_id}), ${data}, ${options}));'
)


def _literal(value: Any) -> str:
    # "</" would end the surrounding <script> block
    return json.dumps(value, cls=PlotlyJSONEncoder).replace("</", "<\\/")


def to_javascript(value: Any) -> str:
    """
    Serialise an options tree (or any part of it) to JavaScript source.

    Examples:
        >>> to_javascript({"x": deferred("new Date(0)"), "y": [1.5, None]})
        '{"x":new Date(0),"y":[1.5,null]}'
    """
    if isinstance(value, JSValue):
        return value.value if value.is_deferred else _literal(value.value)
    if isinstance(value, Mapping):
        items = (f"{_literal(str(k))}:{to_javascript(v)}" for k, v in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(to_javascript(v) for v in value) + "]"
    return _literal(value)


def chart_script(chart: DygraphChart) -> str:
    """JavaScript statement creating one chart and registering it in ``gs``."""
    return _CHART_TMPL.substitute(
        chart_id=_literal(chart.chart_id),
        data=to_javascript(chart.series.rows),
        options=to_javascript(chart.options),
    )


def render_page(
    charts: Sequence[DygraphChart],
    title: str = "dygraph",
    settings: Optional[DygraphSettings] = None,
) -> str:
    """Render one HTML page holding every chart, in order."""
    settings = settings or get_settings()
    containers = "\n".join(
        _CONTAINER_TMPL.substitute(
            chart_id=escape(chart.chart_id, quote=True),
            layout=chart.layout,
            width=chart.options.get("width", settings.chart.width),
            height=chart.options.get("height", settings.chart.height),
        )
        for chart in charts
    )
    extra_scripts = "\n".join(
        f'<script src="{escape(src, quote=True)}"></script>' for src in settings.assets.extra_js
    )
    return _PAGE_TMPL.substitute(
        title=escape(title),
        css_url=escape(settings.assets.dygraph_css, quote=True),
        js_url=escape(settings.assets.dygraph_js, quote=True),
        extra_scripts=extra_scripts,
        containers=containers,
        charts="\n".join(chart_script(chart) for chart in charts),
    )


def _output_path(path: Union[str, Path, None], settings: DygraphSettings) -> Path:
    if path is not None:
        return Path(path)
    if settings.output_dir is not None:
        settings.output_dir.mkdir(parents=True, exist_ok=True)
        out_dir = Path(tempfile.mkdtemp(prefix="dygraph_", dir=settings.output_dir))
    else:
        out_dir = Path(tempfile.mkdtemp(prefix="dygraph_"))
    return out_dir / "index.html"


def write_layout(
    charts: Sequence[DygraphChart],
    path: Union[str, Path, None] = None,
    title: str = "dygraph",
    settings: Optional[DygraphSettings] = None,
) -> Path:
    """
    Write several charts to one HTML page.

    Args:
        charts: Charts in display order; charts built with sync=True follow
            each other's highlight and zoom
        path: Target file (default: index.html in a fresh temporary directory)
        title: Page title
        settings: Runtime settings (default: get_settings())

    Returns:
        Path of the written file
    """
    if not charts:
        raise ConfigurationError("write_layout needs at least one chart")
    settings = settings or get_settings()
    target = _output_path(path, settings)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_page(charts, title=title, settings=settings), encoding="utf-8")
    logger.info(f"📝 Wrote {len(charts)} chart(s) to {target}")
    return target


def write_html(
    chart: DygraphChart,
    path: Union[str, Path, None] = None,
    title: Optional[str] = None,
    settings: Optional[DygraphSettings] = None,
) -> Path:
    """Write a single chart to an HTML page and return its path."""
    page_title = title or str(chart.options.get("title") or "dygraph")
    return write_layout([chart], path=path, title=page_title, settings=settings)
