"""Rendering components for pie charts."""

from .svg_tree import SvgCanvas, SvgNode
from .wedges import Wedge, compute_wedges

__all__ = ["SvgCanvas", "SvgNode", "Wedge", "compute_wedges"]
