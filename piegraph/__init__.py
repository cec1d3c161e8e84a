"""piegraph package exports.

Preferred high-level API:
    from piegraph import PieGraph, PieConfig, CanvasConfig
"""

__version__ = "0.1.0"

from .aggregate import merge_series
from .config import CanvasConfig, ConfigurationError, DrawingSurface, PieConfig
from .graph import Chart, PieGraph
from .render.effects import Layers
from .render.svg_tree import SvgCanvas

__all__ = [
    "CanvasConfig",
    "Chart",
    "ConfigurationError",
    "DrawingSurface",
    "Layers",
    "PieConfig",
    "PieGraph",
    "SvgCanvas",
    "merge_series",
    "__version__",
]
