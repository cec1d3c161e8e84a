"""Radial displacement of exploded wedges."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List, Sequence

from ..config import PieConfig
from .wedges import RADIANS, Point, Wedge

logger = logging.getLogger(__name__)


def expansion_offset(bisector_angle: float, gap: float) -> Point:
    """Translation moving a wedge ``gap`` units outward along its bisector."""
    rad = bisector_angle * RADIANS
    return math.sin(rad) * gap, -math.cos(rad) * gap


def should_expand(wedge: Wedge, max_value: float, config: PieConfig) -> bool:
    if wedge.full_circle:
        return False
    return config.expanded or (config.expand_greatest and wedge.value == max_value)


def apply_expansion(wedges: Sequence[Wedge], config: PieConfig) -> List[Wedge]:
    """Return the wedges with their expansion offsets filled in.

    Every wedge moves when the chart is ``expanded``; with
    ``expand_greatest`` only the wedge(s) holding the largest value do.
    A full-circle wedge never moves.
    """
    if not config.any_expansion or not wedges:
        return list(wedges)
    max_value = max(w.value for w in wedges)
    out = []
    for wedge in wedges:
        if should_expand(wedge, max_value, config):
            wedge = replace(
                wedge, offset=expansion_offset(wedge.bisector_angle, config.expand_gap)
            )
            logger.debug("expanding %r by %s", wedge.label, wedge.offset)
        out.append(wedge)
    return out
