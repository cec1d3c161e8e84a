"""In-memory SVG drawing tree and the document frame that hosts a pie."""

from __future__ import annotations

import html as _html
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..config import CanvasConfig
from .format_utils import fmt_coord

SVG_NS = "http://www.w3.org/2000/svg"


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return fmt_coord(value)
    return str(value)


class SvgNode:
    """A single element of the drawing tree.

    Attributes keep insertion order so serialized output is stable.
    """

    def __init__(
        self,
        tag: str,
        attrs: Optional[Mapping[str, Any]] = None,
        text: Optional[str] = None,
    ):
        self.tag = tag
        self.attrs: Dict[str, str] = {}
        self.children: List[SvgNode] = []
        self.text = text
        for k, v in (attrs or {}).items():
            self.set(k, v)

    def set(self, name: str, value: Any) -> None:
        self.attrs[name] = _attr_value(value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrs.get(name, default)

    def add_element(
        self,
        tag: str,
        attrs: Optional[Mapping[str, Any]] = None,
        text: Optional[str] = None,
    ) -> "SvgNode":
        child = SvgNode(tag, attrs, text)
        self.children.append(child)
        return child

    def iter(self, tag: Optional[str] = None) -> Iterator["SvgNode"]:
        """Depth-first walk over this node and its descendants."""
        if tag is None or self.tag == tag:
            yield self
        for child in self.children:
            yield from child.iter(tag)

    def find(self, tag: str) -> Optional["SvgNode"]:
        return next(self.iter(tag), None)

    def to_svg(self, indent: int = 0) -> str:
        pad = "  " * indent
        attrs = "".join(
            f' {k}="{_html.escape(v, quote=True)}"' for k, v in self.attrs.items()
        )
        if not self.children and self.text is None:
            return f"{pad}<{self.tag}{attrs}/>"
        if not self.children:
            return f"{pad}<{self.tag}{attrs}>{_html.escape(self.text, quote=False)}</{self.tag}>"
        inner = "\n".join(c.to_svg(indent + 1) for c in self.children)
        text = _html.escape(self.text, quote=False) if self.text else ""
        return f"{pad}<{self.tag}{attrs}>{text}\n{inner}\n{pad}</{self.tag}>"

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"SvgNode({self.tag!r}, {self.attrs!r}, children={len(self.children)})"


class SvgCanvas:
    """Document frame implementing the ``DrawingSurface`` protocol.

    Owns the ``<svg>`` root, the ``<defs>`` block, a plot group translated
    inside the borders and an optional key box to its right.
    """

    SWATCH_SIZE = 10
    LEGEND_PAD = 10
    CHAR_WIDTH_RATIO = 0.6

    def __init__(self, config: Optional[CanvasConfig] = None):
        self.config = config or CanvasConfig()
        cfg = self.config
        self.root = SvgNode(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": cfg.width,
                "height": cfg.height,
                "viewBox": f"0 0 {cfg.width} {cfg.height}",
            },
        )
        if cfg.title:
            self.root.add_element("title", text=cfg.title)
        self.defs = self.root.add_element("defs")
        self.style = self.root.add_element("style", {"type": "text/css"})
        self.plot = self.root.add_element(
            "g",
            {
                "class": "plot",
                "transform": f"translate( {cfg.border_left} {cfg.border_top} )",
            },
        )
        self._legend: List[str] = []
        self.legend_width = 0.0

    # --- plot area -------------------------------------------------------

    @property
    def graph_width(self) -> float:
        cfg = self.config
        return max(0.0, float(cfg.width - cfg.border_left - cfg.border_right) - self.legend_width)

    @property
    def graph_height(self) -> float:
        cfg = self.config
        return max(0.0, float(cfg.height - cfg.border_top - cfg.border_bottom))

    def palette(self, index: int) -> str:
        colors = self.config.palette
        return colors[index % len(colors)]

    # --- drawing primitives ---------------------------------------------

    def add_group(
        self, parent: Optional[SvgNode] = None, attrs: Optional[Mapping[str, Any]] = None
    ) -> SvgNode:
        return (parent or self.plot).add_element("g", attrs)

    def add_path(
        self, parent: SvgNode, d: str, attrs: Optional[Mapping[str, Any]] = None
    ) -> SvgNode:
        return parent.add_element("path", {"d": d, **dict(attrs or {})})

    def add_circle(
        self,
        parent: SvgNode,
        cx: float,
        cy: float,
        r: float,
        attrs: Optional[Mapping[str, Any]] = None,
    ) -> SvgNode:
        return parent.add_element("circle", {"cx": cx, "cy": cy, "r": r, **dict(attrs or {})})

    def add_text(
        self,
        parent: SvgNode,
        x: float,
        y: float,
        text: str,
        attrs: Optional[Mapping[str, Any]] = None,
    ) -> SvgNode:
        return parent.add_element("text", {"x": x, "y": y, **dict(attrs or {})}, text=text)

    def add_def(
        self,
        tag: str,
        attrs: Optional[Mapping[str, Any]] = None,
        children: Sequence[Tuple[str, Mapping[str, Any]]] = (),
    ) -> SvgNode:
        """Add a definition once; a second call with the same id returns the first.

        ``children`` are (tag, attrs) pairs nested inside the new definition.
        """
        def_id = (attrs or {}).get("id")
        if def_id is not None:
            for node in self.defs.children:
                if node.get("id") == str(def_id):
                    return node
        node = self.defs.add_element(tag, attrs)
        for child_tag, child_attrs in children:
            node.add_element(child_tag, child_attrs)
        return node

    # --- frame -----------------------------------------------------------

    def reserve_legend(self, entries: Sequence[str]) -> None:
        """Set aside room on the right for one key row per entry."""
        self._legend = list(entries) if self.config.show_legend else []
        if not self._legend:
            self.legend_width = 0.0
            return
        longest = max(len(e) for e in self._legend)
        text_width = longest * self.config.legend_font_size * self.CHAR_WIDTH_RATIO
        self.legend_width = self.SWATCH_SIZE + 2 * self.LEGEND_PAD + text_width

    def draw_legend(self) -> Optional[SvgNode]:
        if not self._legend:
            return None
        cfg = self.config
        row_height = max(self.SWATCH_SIZE, cfg.legend_font_size) + 5
        x0 = self.graph_width + self.LEGEND_PAD
        group = self.add_group(self.plot, {"class": "legend"})
        for idx, entry in enumerate(self._legend):
            y = idx * row_height
            group.add_element(
                "rect",
                {
                    "x": float(x0),
                    "y": float(y),
                    "width": self.SWATCH_SIZE,
                    "height": self.SWATCH_SIZE,
                    "class": f"key{idx + 1}",
                },
            )
            self.add_text(
                group,
                float(x0 + self.SWATCH_SIZE + 5),
                float(y + self.SWATCH_SIZE),
                entry,
                {"class": "keyText", "font-size": cfg.legend_font_size},
            )
        return group

    def to_svg(self, css: Optional[str] = None) -> str:
        self.style.text = css or None
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + self.root.to_svg() + "\n"
