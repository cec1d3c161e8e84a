"""Pie chart assembly.

`PieGraph` owns the category labels and the aggregated totals of every
series added to it, and draws the pie onto any object implementing
`piegraph.config.DrawingSurface`. `burn` wraps the whole thing in an
`SvgCanvas` and returns a standalone SVG document.

Example:
    >>> graph = PieGraph(["Jan", "Feb", "Mar"], show_percent=True)
    >>> graph.add_data([12, 45, 21], title="Sales 2002")
    >>> svg = graph.burn()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence

import numpy as np

from .aggregate import SeriesTotals
from .config import CanvasConfig, ConfigurationError, DrawingSurface, PieConfig
from .render.effects import Layers, WedgeShapes, add_shadow_filter, create_layers, draw_wedge
from .render.expansion import apply_expansion
from .render.format_utils import fmt_coord
from .render.keys import build_keys
from .render.labels import draw_label
from .render.styles import full_css
from .render.svg_tree import SvgCanvas
from .render.wedges import Wedge, compute_wedges

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd  # type: ignore

SHADOW_ALLOWANCE = 10


@dataclass
class Chart:
    """A rendered pie: the SVG document and the stylesheet embedded in it."""

    svg: str
    css: str

    def save_svg(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.svg)

    def save_css(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.css)

    def save(self, path: str) -> None:
        """Save the SVG (``.svg``) or the stylesheet (``.css``) by extension.

        Raises:
            ValueError: If the extension is neither ``.svg`` nor ``.css``.
        """
        ext = os.path.splitext(path)[1].lower()
        if ext == ".svg":
            self.save_svg(path)
        elif ext == ".css":
            self.save_css(path)
        else:
            raise ValueError(f"Unknown extension for Chart.save(): {ext}")

    def _repr_svg_(self) -> str:  # pragma: no cover - visual
        return self.svg


@dataclass
class PieLayout:
    diameter: float
    radius: float
    x_offset: float
    y_offset: float

    @property
    def transform(self) -> str:
        return f"translate( {fmt_coord(self.x_offset)} {fmt_coord(self.y_offset)} )"


@dataclass
class PieDrawing:
    """Everything `PieGraph.draw_data` put on the surface."""

    group: Any
    layers: Layers
    layout: PieLayout
    wedges: List[Wedge]
    shapes: List[WedgeShapes] = field(default_factory=list)
    labels: List[Any] = field(default_factory=list)


def _validate_fields(fields: Optional[Sequence[str]]) -> List[str]:
    if fields is None or isinstance(fields, (str, bytes)):
        raise ConfigurationError("fields was not supplied or is empty")
    labels = list(fields)
    if not labels:
        raise ConfigurationError("fields was not supplied or is empty")
    for label in labels:
        if not isinstance(label, str):
            raise ConfigurationError(f"field labels must be strings, got {label!r}")
    return labels


class PieGraph:
    """A pie chart over a fixed set of categories.

    Args:
        fields: Category labels, in drawing order. Required and non-empty.
        config: Pie options; built from ``options`` when omitted.
        canvas: Frame options used by `burn`.
        **options: Any `PieConfig` field, e.g. ``expanded=True``.

    Raises:
        ConfigurationError: If ``fields`` is missing or empty, or an option
            is unknown or invalid.
    """

    def __init__(
        self,
        fields: Sequence[str],
        config: Optional[PieConfig] = None,
        canvas: Optional[CanvasConfig] = None,
        **options: Any,
    ):
        self.fields = _validate_fields(fields)
        if config is not None and options:
            raise ConfigurationError("pass either a PieConfig or keyword options, not both")
        self.config = config or PieConfig.from_mapping(options)
        self.canvas_config = canvas or CanvasConfig()
        self.logger = self.config.get_logger(__name__)
        self._totals = SeriesTotals(len(self.fields))

    # --- data ------------------------------------------------------------

    @property
    def totals(self) -> np.ndarray:
        return self._totals.values

    @property
    def titles(self) -> List[Optional[str]]:
        return list(self._totals.titles)

    @property
    def grand_total(self) -> float:
        return self._totals.grand_total

    def add_data(self, data: Iterable[Any], title: Optional[str] = None) -> np.ndarray:
        """Add a series; the pie shows the per-category sums of all series.

        Null entries (``None``, ``NaN``, ``pd.NA``) count as 0. A short series leaves the
        remaining categories unchanged.

        Returns:
            The aggregated totals after the merge.
        """
        return self._totals.add(list(data), title=title)

    def add_frame(self, frame: "pd.DataFrame", label_column: Optional[str] = None) -> None:
        """Add each numeric column of a pandas DataFrame as a series.

        Rows are matched to categories by ``label_column`` when given
        (labels absent from the frame get nothing), otherwise by position.
        """
        if not hasattr(frame, "select_dtypes"):
            raise TypeError("add_frame expects a pandas DataFrame")
        if label_column is not None:
            if label_column not in frame.columns:
                raise KeyError(f"label column {label_column!r} not found")
            frame = frame.set_index(frame[label_column].astype(str)).drop(
                columns=[label_column]
            )
            frame = frame.groupby(level=0, sort=False).sum(numeric_only=True)
            frame = frame.reindex(self.fields)
        numeric = frame.select_dtypes(include="number")
        for name in numeric.columns:
            self.add_data(numeric[name].tolist(), title=str(name))

    # --- axes ------------------------------------------------------------

    def x_labels(self) -> List[str]:
        return [""]

    def y_labels(self) -> List[str]:
        return [""]

    # --- geometry --------------------------------------------------------

    def layout(self, graph_width: float, graph_height: float) -> PieLayout:
        cfg = self.config
        diameter = min(graph_width, graph_height)
        if cfg.any_expansion:
            diameter -= cfg.expand_gap
        if cfg.show_data_labels:
            diameter -= cfg.datapoint_font_size
        if cfg.show_shadow:
            diameter -= SHADOW_ALLOWANCE
        diameter = max(0.0, float(diameter))
        x_offset = (graph_width - diameter) / 2
        y_offset = graph_height - diameter
        if cfg.show_shadow:
            y_offset -= SHADOW_ALLOWANCE
        return PieLayout(diameter, diameter / 2.0, x_offset, y_offset)

    def wedges(self, radius: float, palette=None) -> List[Wedge]:
        """Wedge geometry for the current totals, expansion applied."""
        wedges = compute_wedges(self.fields, self.totals, radius, palette)
        return apply_expansion(wedges, self.config)

    def draw_data(
        self,
        surface: DrawingSurface,
        parent: Any = None,
        layers: Optional[Layers] = None,
    ) -> PieDrawing:
        """Draw the pie onto ``surface``.

        Without ``layers`` a translated pie group holding fresh background,
        midground and foreground groups is created under ``parent``. With
        ``layers`` the shapes go straight into the caller's groups, which
        the caller positions; ``PieDrawing.group`` is then None.
        """
        cfg = self.config
        layout = self.layout(surface.graph_width, surface.graph_height)
        group = None
        if layers is None:
            group = surface.add_group(
                parent, {"class": "pie", "transform": layout.transform}
            )
            layers = create_layers(surface, group)
        add_shadow_filter(surface)

        total = self.grand_total
        if total == 0:
            self.logger.warning("pie has a zero grand total; all wedges are empty")

        wedges = self.wedges(layout.radius, surface.palette)
        drawing = PieDrawing(group=group, layers=layers, layout=layout, wedges=wedges)
        for wedge in wedges:
            drawing.shapes.append(draw_wedge(surface, layers, wedge, cfg))
            label = draw_label(surface, layers.foreground, wedge, cfg)
            if label is not None:
                drawing.labels.append(label)

        self.logger.info(
            "drew pie: %d categories, grand total %s, radius %.1f",
            len(wedges),
            total,
            layout.radius,
        )
        return drawing

    # --- key and style ---------------------------------------------------

    def keys(self) -> List[str]:
        return build_keys(self.fields, self.totals, self.config)

    def get_css(self, surface: Optional[DrawingSurface] = None) -> str:
        palette = surface.palette if surface is not None else SvgCanvas(self.canvas_config).palette
        colors = [palette(i) for i in range(len(self.fields))]
        return full_css(self.config.datapoint_font_size, colors)

    # --- output ----------------------------------------------------------

    def render(self) -> Chart:
        canvas = SvgCanvas(self.canvas_config)
        canvas.reserve_legend(self.keys())
        self.draw_data(canvas)
        canvas.draw_legend()
        css = self.get_css(canvas)
        return Chart(svg=canvas.to_svg(css), css=css)

    def burn(self) -> str:
        """Return the complete SVG document."""
        return self.render().svg
