"""Wedge geometry for pie charts.

Angles run clockwise from 12 o'clock. Every wedge is measured in percent
of the grand total and converted to degrees at 3.6 degrees per percent;
wedges are laid out in category order, each starting where the previous
one ended.

Points are expressed in the pie's own box, whose top-left corner is the
origin, so the center sits at ``(radius, radius)``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .format_utils import fmt_coord

logger = logging.getLogger(__name__)

RADIANS = math.pi / 180
DEGREES_PER_PERCENT = 3.6
SINGLE_CATEGORY_EPSILON = 1e-5
SPLIT_BORDER_GAP = 2

Point = Tuple[float, float]


def percent_of(value: float, total: float) -> float:
    """Share of ``value`` in ``total`` as a percentage; 0 when total is 0."""
    if total == 0:
        return 0.0
    return 100.0 * value / total


def is_full_circle(percent: float) -> bool:
    """True when a wedge covers the whole pie (to three decimals)."""
    return round(percent, 3) == 100.0


def point_on_circle(radius: float, angle_deg: float, distance: Optional[float] = None) -> Point:
    """Point at ``distance`` from the pie center along ``angle_deg``."""
    if distance is None:
        distance = radius
    rad = angle_deg * RADIANS
    return radius + math.sin(rad) * distance, radius - math.cos(rad) * distance


def arc_path(radius: float, start: Point, end: Point, large_arc: bool) -> str:
    c = fmt_coord(radius)
    return (
        f"M {c},{c} "
        f"L {fmt_coord(start[0])},{fmt_coord(start[1])} "
        f"A {c},{c} 0 {int(large_arc)},1 {fmt_coord(end[0])},{fmt_coord(end[1])} "
        f"Z"
    )


def border_arc_path(radius: float, start: Point, end: Point, large_arc: bool) -> str:
    r = fmt_coord(radius)
    return (
        f"M {fmt_coord(start[0])},{fmt_coord(start[1])} "
        f"A {r},{r} 0 {int(large_arc)},1 {fmt_coord(end[0])},{fmt_coord(end[1])}"
    )


@dataclass
class Wedge:
    """Geometry of one category's slice.

    Attributes:
        index: Category index; also the color index.
        label: Category name.
        value: Aggregated value of the category.
        percent: Share of the grand total (0 when the total is 0).
        start_angle: Start angle in degrees, clockwise from 12 o'clock.
        sweep: Angular size in degrees.
        radius: Pie radius.
        color: Fill color assigned to the category.
        full_circle: The wedge is the whole pie and is drawn as a circle.
        start: Arc start point.
        end: Arc end point.
        border_start: Split-border start point.
        border_end: Split-border end point.
        offset: Expansion translation, ``(0, 0)`` when not expanded.
    """

    index: int
    label: str
    value: float
    percent: float
    start_angle: float
    sweep: float
    radius: float
    color: str
    full_circle: bool
    start: Point
    end: Point
    border_start: Point
    border_end: Point
    offset: Point = (0.0, 0.0)

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep

    @property
    def bisector_angle(self) -> float:
        return self.start_angle + self.sweep / 2

    @property
    def large_arc(self) -> bool:
        return self.percent >= 50

    @property
    def expanded(self) -> bool:
        return self.offset != (0.0, 0.0)

    @property
    def path(self) -> str:
        return arc_path(self.radius, self.start, self.end, self.large_arc)

    @property
    def border_path(self) -> str:
        return border_arc_path(
            self.radius + SPLIT_BORDER_GAP, self.border_start, self.border_end, self.large_arc
        )

    @property
    def transform(self) -> Optional[str]:
        if not self.expanded:
            return None
        return f"translate( {fmt_coord(self.offset[0])} {fmt_coord(self.offset[1])} )"


def compute_wedges(
    labels: Sequence[str],
    totals: Sequence[float],
    radius: float,
    palette: Optional[Callable[[int], str]] = None,
) -> List[Wedge]:
    """Lay out one wedge per category, in label order.

    Args:
        labels: Category names; their count decides the single-category case.
        totals: Aggregated value per category, same length as ``labels``.
        radius: Pie radius.
        palette: Maps a category index to its color.

    Returns:
        Wedges in category order. A zero grand total yields zero-sweep
        wedges rather than an error.
    """
    values = np.asarray(totals, dtype=np.float64)
    if len(values) != len(labels):
        raise ValueError(
            f"expected {len(labels)} totals, one per category, got {len(values)}"
        )
    total = float(values.sum())
    single = len(labels) == 1

    wedges: List[Wedge] = []
    prev_percent = 0.0
    for idx, label in enumerate(labels):
        value = float(values[idx])
        percent = percent_of(value, total)
        start_angle = prev_percent * DEGREES_PER_PERCENT
        end_angle = (prev_percent + percent) * DEGREES_PER_PERCENT

        start = point_on_circle(radius, start_angle)
        end = point_on_circle(radius, end_angle)
        border_start = point_on_circle(radius, start_angle, radius + SPLIT_BORDER_GAP)
        border_end = point_on_circle(radius, end_angle, radius + SPLIT_BORDER_GAP)
        if single:
            # a zero-length arc would otherwise close on itself
            end = (end[0] - SINGLE_CATEGORY_EPSILON, end[1])
            border_end = (border_end[0] - SINGLE_CATEGORY_EPSILON, border_end[1])

        full = is_full_circle(percent)
        if full:
            logger.debug("category %r covers the whole pie; drawing a circle", label)

        wedges.append(
            Wedge(
                index=idx,
                label=label,
                value=value,
                percent=percent,
                start_angle=start_angle,
                sweep=percent * DEGREES_PER_PERCENT,
                radius=radius,
                color=palette(idx) if palette else "none",
                full_circle=full,
                start=start,
                end=end,
                border_start=border_start,
                border_end=border_end,
            )
        )
        prev_percent += percent
    return wedges
