"""Coordinate, value and label formatting for SVG output."""

from __future__ import annotations

import math
from typing import Optional

ELLIPSIS = "..."


def fmt_coord(v: float) -> str:
    """Format an SVG coordinate with up to six decimals, trailing zeros dropped."""
    if not math.isfinite(v):
        return "0"
    s = f"{v:.6f}".rstrip("0").rstrip(".")
    if s in ("-0", ""):
        return "0"
    return s


def fmt_value(x: Optional[float]) -> str:
    """Display form of a data value: integral values without a fraction."""
    if x is None:
        return "0"
    try:
        fx = float(x)
    except (TypeError, ValueError):
        return str(x)
    if math.isnan(fx) or math.isinf(fx):
        return "0"
    if fx.is_integer():
        return f"{int(fx)}"
    return f"{fx:.6g}"


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(x):
        return 0
    if x < 0:
        return -int(math.floor(-x + 0.5))
    return int(math.floor(x + 0.5))


def truncate(text: str, length: int = 30) -> str:
    """Shorten ``text`` to ``length`` characters, ending in an ellipsis."""
    text = str(text)
    if len(text) <= length:
        return text
    keep = max(0, length - len(ELLIPSIS))
    return text[:keep] + ELLIPSIS
