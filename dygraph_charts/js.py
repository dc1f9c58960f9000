"""
Tagged option values.

dygraphs options mix plain JSON values with JavaScript the browser has to
evaluate (date constructors, plotters, callbacks). Instead of marking code
with magic string delimiters, code is wrapped in a ``JSValue`` whose kind is
``DEFERRED``. Plain Python values are always literals.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """How the renderer must emit a value."""
    LITERAL = "literal"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class JSValue:
    """
    A value tagged with how it must be emitted.

    Attributes:
        kind: LITERAL values are JSON-encoded, DEFERRED values are emitted
            verbatim as JavaScript source.
        value: The literal value, or the JavaScript source for DEFERRED.
    """

    kind: ValueKind
    value: Any

    def __post_init__(self):
        if self.kind is ValueKind.DEFERRED and not isinstance(self.value, str):
            raise TypeError(
                f"Deferred expressions must be JavaScript source strings, "
                f"got {type(self.value).__name__}"
            )

    @property
    def is_deferred(self) -> bool:
        return self.kind is ValueKind.DEFERRED


def deferred(code: str) -> JSValue:
    """Wrap JavaScript source that the browser evaluates at render time."""
    return JSValue(ValueKind.DEFERRED, code.strip())


def literal(value: Any) -> JSValue:
    """Explicitly mark a value as plain JSON."""
    return JSValue(ValueKind.LITERAL, value)


def date_expression(epoch_ms: int) -> JSValue:
    """Deferred ``new Date(ms)`` constructor for one timestamp."""
    return deferred(f"new Date({int(epoch_ms)})")
