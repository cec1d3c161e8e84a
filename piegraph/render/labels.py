"""Data labels drawn on the pie."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..config import DrawingSurface, PieConfig
from .format_utils import fmt_value, round_half_up, truncate
from .wedges import Point, Wedge, point_on_circle

LABEL_CLASS = "dataPointLabel"
LABEL_MAX_CHARS = 30
LABEL_DROP = 20


@dataclass
class LabelPlacement:
    """Where and what to write for one wedge.

    ``anchor`` is the point on the wedge's rim at its bisector, moved with
    the wedge when it is expanded. ``position`` is where the text node is
    actually placed: centered below the pie.
    """

    text: str
    anchor: Point
    position: Point


def label_text(wedge: Wedge, config: PieConfig) -> str:
    """Compose the label: name, then ``[value]``, then ``NN%``.

    Each part is controlled by its own flag; with every flag off the label
    is an empty string.
    """
    label = ""
    if config.show_key_data_labels:
        label += truncate(wedge.label, LABEL_MAX_CHARS)
    if config.show_actual_values:
        label += " [" + fmt_value(wedge.value) + "]"
    if config.show_percent:
        label += " " + str(round_half_up(wedge.percent)) + "%"
    return label


def label_anchor(wedge: Wedge) -> Point:
    x, y = point_on_circle(wedge.radius, wedge.bisector_angle)
    dx, dy = wedge.offset
    return x + dx, y + dy


def place_label(wedge: Wedge, config: PieConfig) -> Optional[LabelPlacement]:
    """Label for ``wedge``, or None when labels are off or the wedge is empty."""
    if not config.show_data_labels or wedge.value == 0:
        return None
    r = wedge.radius
    return LabelPlacement(
        text=label_text(wedge, config),
        anchor=label_anchor(wedge),
        position=(r, r * 2 + LABEL_DROP),
    )


def draw_label(
    surface: DrawingSurface, parent: Any, wedge: Wedge, config: PieConfig
) -> Optional[Any]:
    placement = place_label(wedge, config)
    if placement is None:
        return None
    x, y = placement.position
    return surface.add_text(
        parent,
        x,
        y,
        placement.text,
        {"class": LABEL_CLASS, "stroke": "none", "stroke-width": "2"},
    )
