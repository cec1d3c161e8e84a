"""Stylesheet emitted with every pie."""

from __future__ import annotations

from typing import Sequence

from .format_utils import fmt_value

_PIE_CSS = """\
.dataPointLabel, .dataPointLabelBackground, .dataPointPopup{{
  fill: #000000;
  text-anchor:middle;
  font-size: {font_size}px;
  font-family: "Arial", sans-serif;
  font-weight: normal;
}}

.dataPointLabelBackground{{
  stroke: #ffffff;
  stroke-width: 2;
}}

.dataPointPopup{{
  fill: #000000;
  visibility: hidden;
  stroke-width: 2;
}}
.fill-color{{
  opacity: 0.8;
}}
.fill-color + path + text {{
  opacity: 0;
}}
.fill-color:hover{{
  opacity: 1;
}}
.fill-color:hover + path  + text{{
  opacity: 1;
}}
.fill-color:hover + path {{
  stroke: #ccc;
}}
"""

_KEY_CSS = """\
.keyText{
  fill: #000000;
  font-family: "Arial", sans-serif;
  font-weight: normal;
}
"""


def pie_css(datapoint_font_size: float) -> str:
    """Label typography and the hover rules that reveal a wedge's label.

    Hovering a wedge raises its opacity, strokes its split border and
    shows the label that follows the border in document order.
    """
    return _PIE_CSS.format(font_size=fmt_value(datapoint_font_size))


def item_color(idx: int, color: str) -> str:
    return f".key{idx + 1},.fill{idx + 1}{{ fill: {color}; stroke: none; stroke-width: 1px; }}"


def items_color(colors: Sequence[str]) -> str:
    return "\n".join(item_color(idx, c) for idx, c in enumerate(colors))


def full_css(datapoint_font_size: float, colors: Sequence[str]) -> str:
    return pie_css(datapoint_font_size) + _KEY_CSS + items_color(colors) + "\n"
