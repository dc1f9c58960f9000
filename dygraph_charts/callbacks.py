"""
JavaScript snippets passed as deferred option values.

The synchronisation callbacks rely on two page-level globals created by the
HTML layout: ``gs`` (every chart on the page) and ``blockRedraw``.
"""
from __future__ import annotations

from .js import deferred

CANDLE_PLOTTER = deferred("Dygraph.Plotters.candlePlotter")

_HIGHLIGHT = """
function(e, x, pts, row) {
  for (var j = 0; j < gs.length; j++) {
    gs[j].setSelection(row);
  }
}
"""

_UNHIGHLIGHT = """
function(e, x, pts, row) {
  for (var j = 0; j < gs.length; j++) {
    gs[j].clearSelection();
  }
}
"""

# y-axis is deliberately not synchronised
_DRAW = """
function(me, initial) {
  if (blockRedraw || initial) return;
  blockRedraw = true;
  var range = me.xAxisRange();
  for (var j = 0; j < gs.length; j++) {
    if (gs[j] == me) continue;
    gs[j].updateOptions({dateWindow: range});
  }
  blockRedraw = false;
}
"""

_BUBBLE_ID = "'bubble' + dg.maindiv_.id + '-' + ann.series + '-' + ann.xval"

_MOUSE_OVER = f"""
function(ann, point, dg, event) {{
  var bubble = document.createElement('div');
  bubble.className = 'bubble';
  bubble.id = {_BUBBLE_ID};
  bubble.innerHTML = ann.text;
  bubble.style.top = point.canvasy + 'px';
  bubble.style.left = point.canvasx + 'px';
  dg.graphDiv.appendChild(bubble);
  ann.div.title = '';
}}
"""

_MOUSE_OUT = f"""
function(ann, point, dg, event) {{
  var bubble = document.getElementById({_BUBBLE_ID});
  if (bubble && bubble.parentNode) {{
    bubble.parentNode.removeChild(bubble);
  }}
}}
"""


def candlestick_options() -> dict:
    """Draw the four OHLC series as candles."""
    return {"plotter": CANDLE_PLOTTER}


def sync_options() -> dict:
    """Mirror highlight and x-axis zoom across every chart on the page."""
    return {
        "highlightCallback": deferred(_HIGHLIGHT),
        "unhighlightCallback": deferred(_UNHIGHLIGHT),
        "drawCallback": deferred(_DRAW),
    }


def annotation_handler_options() -> dict:
    """Show annotation text in a bubble while the pointer is over an arrow."""
    return {
        "annotationMouseOverHandler": deferred(_MOUSE_OVER),
        "annotationMouseOutHandler": deferred(_MOUSE_OUT),
    }
