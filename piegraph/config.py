from __future__ import annotations

"""Configuration for pie rendering.

Separated from `piegraph.graph` so the render sub-package can depend on the
option types and on the drawing-surface protocol without importing the
orchestrator.
"""

import logging
import numbers
from dataclasses import dataclass, field, fields
from typing import (
    Any,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)


class ConfigurationError(ValueError):
    """Raised when a chart is built with missing or invalid configuration."""


_BOOL_OPTIONS = (
    "show_split",
    "show_shadow",
    "show_data_labels",
    "show_actual_values",
    "show_percent",
    "show_key_data_labels",
    "show_key_actual_values",
    "show_key_percent",
    "expanded",
    "expand_greatest",
)
_NON_NEGATIVE_OPTIONS = ("shadow_offset", "expand_gap")


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass
class PieConfig:
    """Options understood by the pie engine.

    Attributes:
        show_split: Stroke wedges in white and emit the split-border outline.
        show_shadow: Draw the blurred drop shadow and its clearing layer.
        shadow_offset: Distance of the shadow from the pie, in user units.
        show_data_labels: Emit a text label for every non-zero wedge.
        show_actual_values: Append the raw value, in brackets, to data labels.
        show_percent: Append the rounded percentage to data labels.
        show_key_data_labels: Start data labels with the category name.
        show_key_actual_values: Append the raw value to legend entries.
        show_key_percent: Append the rounded percentage to legend entries.
        expanded: Explode every wedge away from the center.
        expand_greatest: Explode only the wedge(s) holding the largest value.
        expand_gap: Explosion distance, in user units.
        datapoint_font_size: Font size of data labels, in px.
        logger: Logger used by the engine; defaults to the module logger.
        log_level: Level applied to ``logger`` when one is supplied.
    """

    show_split: bool = True
    show_shadow: bool = True
    shadow_offset: float = 10

    show_data_labels: bool = False
    show_actual_values: bool = False
    show_percent: bool = True

    show_key_data_labels: bool = True
    show_key_actual_values: bool = True
    show_key_percent: bool = False

    expanded: bool = False
    expand_greatest: bool = False
    expand_gap: float = 10

    datapoint_font_size: float = 12

    # Logging
    logger: Optional[logging.Logger] = field(default=None, repr=False, compare=False)
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        for name in _BOOL_OPTIONS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"{name} must be a bool, got {type(value).__name__}"
                )
        for name in _NON_NEGATIVE_OPTIONS:
            value = getattr(self, name)
            if not _is_real(value) or value < 0:
                raise ConfigurationError(
                    f"{name} must be a non-negative number, got {value!r}"
                )
        if not _is_real(self.datapoint_font_size) or self.datapoint_font_size <= 0:
            raise ConfigurationError(
                f"datapoint_font_size must be a positive number, got {self.datapoint_font_size!r}"
            )
        if self.logger is not None:
            self.logger.setLevel(self.log_level)

    @property
    def any_expansion(self) -> bool:
        return self.expanded or self.expand_greatest

    def get_logger(self, name: str) -> logging.Logger:
        return self.logger or logging.getLogger(name)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "PieConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown pie option(s): {', '.join(unknown)}")
        return cls(**dict(options))


DEFAULT_PALETTE = (
    "#4ea3f1",
    "#8ac926",
    "#ffca3a",
    "#ff595e",
    "#6a4c93",
    "#1982c4",
    "#f4a261",
    "#2a9d8f",
    "#e76f51",
    "#8d99ae",
)


@dataclass
class CanvasConfig:
    """Frame options for the drawing surface that hosts the pie.

    Attributes:
        width: Document width in px.
        height: Document height in px.
        border_left: Margin between the document edge and the plot area.
        border_right: Margin to the right of the plot area (and legend).
        border_top: Margin above the plot area.
        border_bottom: Margin below the plot area.
        show_legend: Draw the key box to the right of the plot.
        legend_font_size: Font size of key entries, in px.
        title: Optional document title, rendered as ``<title>``.
        palette: Colors assigned to categories by index (cycled).
    """

    width: int = 500
    height: int = 300
    border_left: int = 10
    border_right: int = 10
    border_top: int = 10
    border_bottom: int = 10
    show_legend: bool = True
    legend_font_size: int = 12
    title: Optional[str] = None
    palette: Sequence[str] = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not _is_real(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
        for name in ("border_left", "border_right", "border_top", "border_bottom"):
            value = getattr(self, name)
            if not _is_real(value) or value < 0:
                raise ConfigurationError(
                    f"{name} must be a non-negative number, got {value!r}"
                )
        if not self.palette:
            raise ConfigurationError("palette must contain at least one color")


@runtime_checkable
class DrawingSurface(Protocol):
    """Capabilities the pie engine needs from its host document.

    Any object exposing these members can receive a pie. The engine never
    touches anything else on the surface, so frame concerns (document size,
    legend, serialization) stay with the implementation.
    """

    graph_width: float
    graph_height: float
    config: CanvasConfig

    def palette(self, index: int) -> str: ...

    def add_group(self, parent: Any = None, attrs: Optional[Mapping[str, Any]] = None) -> Any: ...

    def add_path(self, parent: Any, d: str, attrs: Optional[Mapping[str, Any]] = None) -> Any: ...

    def add_circle(
        self,
        parent: Any,
        cx: float,
        cy: float,
        r: float,
        attrs: Optional[Mapping[str, Any]] = None,
    ) -> Any: ...

    def add_text(
        self,
        parent: Any,
        x: float,
        y: float,
        text: str,
        attrs: Optional[Mapping[str, Any]] = None,
    ) -> Any: ...

    def add_def(
        self,
        tag: str,
        attrs: Optional[Mapping[str, Any]] = None,
        children: Sequence[Tuple[str, Mapping[str, Any]]] = (),
    ) -> Any: ...
