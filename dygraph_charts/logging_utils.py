"""
Build logging for dygraph_charts.

``log_chart_build`` wraps a chart builder and ``log_data_preparation`` wraps
one step inside it. Both report timing and failures; the detailed input and
step traces only appear in debug mode (``DYGRAPH_DEBUG=true`` or
``set_debug_mode(True)``).
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

logger = logging.getLogger(__name__)

BuilderT = TypeVar("BuilderT", bound=Callable[..., Any])

_DEBUG_MODE = os.getenv("DYGRAPH_DEBUG", "false").strip().lower() in ("true", "1", "yes", "on")


def set_debug_mode(enabled: bool) -> None:
    """
    Switch debug logging on or off for every ``dygraph_charts`` logger.

    Examples:
        >>> set_debug_mode(True)
        🔧 Dygraph debug mode: ON ✓
    """
    global _DEBUG_MODE
    _DEBUG_MODE = bool(enabled)

    logging.getLogger("dygraph_charts").setLevel(logging.DEBUG if enabled else logging.INFO)
    logger.info(f"🔧 Dygraph debug mode: {'ON ✓' if enabled else 'OFF'}")


def is_debug_mode() -> bool:
    return _DEBUG_MODE


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _frame_summary(frame: Any) -> str:
    names = [str(c) for c in frame.columns]
    shown = ", ".join(names[:10])
    if len(names) > 10:
        shown += f", ... ({len(names)} total)"
    return f"shape={frame.shape}, cols=[{shown}]"


def _trace_inputs(args: tuple, kwargs: dict) -> None:
    labelled = [(f"arg[{i}]", a) for i, a in enumerate(args)] + list(kwargs.items())
    for label, value in labelled:
        if hasattr(value, "columns") and hasattr(value, "shape"):
            logger.debug(f"  → DataFrame {label}: {_frame_summary(value)}")


def log_chart_build(builder: BuilderT) -> BuilderT:
    """
    Log a chart builder call: start, duration, series and annotation counts.

    Failures are logged with their duration and re-raised unchanged. In debug
    mode the DataFrame inputs and the resulting option keys are traced too.

    Usage:
        @log_chart_build
        def build_dygraph(data, x=None, y=None, **options):
            ...
    """
    name = builder.__name__

    @functools.wraps(builder)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger.info(f"📊 Building chart: {name}")
        if _DEBUG_MODE:
            _trace_inputs(args, kwargs)

        started = time.perf_counter()
        try:
            chart = builder(*args, **kwargs)
        except Exception as exc:
            logger.error(
                f"❌ Chart build failed: {name} "
                f"({_elapsed_ms(started):.1f}ms, {type(exc).__name__}: {exc})"
            )
            if _DEBUG_MODE:
                logger.exception("  📋 Full traceback:")
            else:
                logger.error("  💡 Hint: Set DYGRAPH_DEBUG=true for full traceback")
            raise

        series = len(getattr(chart, "labels", ())[1:]) or "?"
        annotations = len(getattr(chart, "annotations", ()))
        logger.info(
            f"✅ Chart built: {name} "
            f"({_elapsed_ms(started):.1f}ms, {series} series, {annotations} annotations)"
        )
        if _DEBUG_MODE and hasattr(chart, "options"):
            logger.debug(f"  → Option keys: {sorted(chart.options)[:15]}")
        return chart

    return wrapper  # type: ignore


@contextmanager
def log_data_preparation(description: str) -> Iterator[None]:
    """
    Time one build step; log it in debug mode and always log its failure.

    Usage:
        with log_data_preparation("Encoding ribbon colors"):
            plan = build_ribbon(spec, len(record))
    """
    if _DEBUG_MODE:
        logger.debug(f"🔄 {description}...")
    started = time.perf_counter()
    try:
        yield
    except Exception as exc:
        logger.error(f"  ✗ {description} failed ({_elapsed_ms(started):.1f}ms): {exc}")
        raise
    if _DEBUG_MODE:
        logger.debug(f"  ✓ {description} ({_elapsed_ms(started):.1f}ms)")
