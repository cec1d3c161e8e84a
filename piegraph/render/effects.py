"""Depth layers, drop shadow and split border for pie wedges.

A pie is drawn into three groups, back to front:

- background: blurred shadow copies, offset by ``shadow_offset`` plus any
  expansion offset,
- midground: solid white copies that hide the shadow behind each wedge,
- foreground: the wedges themselves (and their labels).

Background and midground stay empty when the shadow is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..config import DrawingSurface, PieConfig
from .format_utils import fmt_coord
from .wedges import Wedge

DROPSHADOW_ID = "dropshadow"
BLUR_STD_DEVIATION = 4
SHADOW_FILL = "#ccc"
CLEAR_FILL = "#fff"
SPLIT_STROKE = "#fff"
WEDGE_CLASS = "fill-color"


@dataclass
class Layers:
    background: Any
    midground: Any
    foreground: Any


@dataclass
class WedgeShapes:
    """Nodes emitted for one wedge."""

    wedge: Any
    border: Optional[Any] = None
    shadow: Optional[Any] = None
    clear: Optional[Any] = None


def add_shadow_filter(surface: DrawingSurface) -> Any:
    """Register the shared Gaussian-blur filter used by every shadow."""
    return surface.add_def(
        "filter",
        {"id": DROPSHADOW_ID, "width": "1.2", "height": "1.2"},
        children=[
            ("feGaussianBlur", {"stdDeviation": BLUR_STD_DEVIATION, "result": "blur"})
        ],
    )


def create_layers(surface: DrawingSurface, parent: Any) -> Layers:
    # document order is paint order, so the back layer comes first
    background = surface.add_group(parent, {"class": "background"})
    midground = surface.add_group(parent, {"class": "midground"})
    foreground = surface.add_group(parent, {"class": "foreground"})
    return Layers(background, midground, foreground)


def _translate(dx: float, dy: float) -> str:
    return f"translate( {fmt_coord(dx)} {fmt_coord(dy)} )"


def draw_full_circle(
    surface: DrawingSurface, layers: Layers, wedge: Wedge, config: PieConfig
) -> WedgeShapes:
    r = wedge.radius
    shapes = WedgeShapes(
        wedge=surface.add_circle(
            layers.foreground,
            r,
            r,
            r,
            {"fill": wedge.color, "stroke": "none", "stroke-width": 1},
        )
    )
    if config.show_shadow:
        shapes.shadow = surface.add_circle(
            layers.background,
            r,
            r,
            r,
            {
                "filter": f"url(#{DROPSHADOW_ID})",
                "fill": SHADOW_FILL,
                "stroke": "none",
                "transform": _translate(config.shadow_offset, config.shadow_offset),
            },
        )
        shapes.clear = surface.add_circle(
            layers.midground, r, r, r, {"fill": CLEAR_FILL, "stroke": "none"}
        )
    return shapes


def draw_arc_wedge(
    surface: DrawingSurface, layers: Layers, wedge: Wedge, config: PieConfig
) -> WedgeShapes:
    path = wedge.path
    attrs = {
        "stroke": SPLIT_STROKE if config.show_split else "none",
        "stroke-width": 3,
        "fill": wedge.color,
        "class": WEDGE_CLASS,
    }
    if wedge.expanded:
        attrs["transform"] = wedge.transform
    shapes = WedgeShapes(wedge=surface.add_path(layers.foreground, path, attrs))

    if config.show_split:
        # outline only; invisible unless a stylesheet gives it a stroke
        shapes.border = surface.add_path(
            layers.foreground,
            wedge.border_path,
            {"fill": "none", "stroke-width": 2, "stroke": "none"},
        )

    if config.show_shadow:
        tx, ty = wedge.offset
        shapes.shadow = surface.add_path(
            layers.background,
            path,
            {
                "filter": f"url(#{DROPSHADOW_ID})",
                "fill": SHADOW_FILL,
                "stroke": "none",
                "transform": _translate(tx + config.shadow_offset, ty + config.shadow_offset),
            },
        )
        clear_attrs = {"fill": CLEAR_FILL, "stroke": "none"}
        if wedge.expanded:
            clear_attrs["transform"] = wedge.transform
        shapes.clear = surface.add_path(layers.midground, path, clear_attrs)
    return shapes


def draw_wedge(
    surface: DrawingSurface, layers: Layers, wedge: Wedge, config: PieConfig
) -> WedgeShapes:
    """Emit a wedge and its decorations into the three layers."""
    if wedge.full_circle:
        return draw_full_circle(surface, layers, wedge, config)
    return draw_arc_wedge(surface, layers, wedge, config)
