"""Tests for pie assembly and output."""

import logging

import pytest

from piegraph import (
    CanvasConfig,
    ConfigurationError,
    DrawingSurface,
    Layers,
    PieConfig,
    PieGraph,
    SvgCanvas,
)


def _canvas():
    return SvgCanvas(CanvasConfig(show_legend=False))


class DictSurface:
    """Drawing surface whose nodes are plain dicts."""

    graph_width = 480
    graph_height = 280

    def __init__(self):
        self.config = CanvasConfig()
        self.root = self._node("svg")
        self.defs = []

    @staticmethod
    def _node(tag, attrs=None):
        return {"tag": tag, "attrs": dict(attrs or {}), "children": []}

    def _add(self, parent, tag, attrs):
        node = self._node(tag, attrs)
        (parent or self.root)["children"].append(node)
        return node

    def palette(self, index):
        return self.config.palette[index % len(self.config.palette)]

    def add_group(self, parent=None, attrs=None):
        return self._add(parent, "g", attrs)

    def add_path(self, parent, d, attrs=None):
        return self._add(parent, "path", {"d": d, **dict(attrs or {})})

    def add_circle(self, parent, cx, cy, r, attrs=None):
        return self._add(parent, "circle", {"cx": cx, "cy": cy, "r": r, **dict(attrs or {})})

    def add_text(self, parent, x, y, text, attrs=None):
        node = self._add(parent, "text", {"x": x, "y": y, **dict(attrs or {})})
        node["text"] = text
        return node

    def add_def(self, tag, attrs=None, children=()):
        for node in self.defs:
            if node["attrs"].get("id") == (attrs or {}).get("id"):
                return node
        node = self._node(tag, attrs)
        node["children"] = [self._node(t, a) for t, a in children]
        self.defs.append(node)
        return node


class TestConstruction:
    """Test required labels and options."""

    def test_missing_fields(self):
        with pytest.raises(ConfigurationError):
            PieGraph(None)

    def test_empty_fields(self):
        with pytest.raises(ConfigurationError, match="empty"):
            PieGraph([])

    def test_string_is_not_a_label_list(self):
        with pytest.raises(ConfigurationError):
            PieGraph("ABC")

    def test_non_string_label(self):
        with pytest.raises(ConfigurationError):
            PieGraph(["A", 2])

    def test_keyword_options(self):
        """Keyword options build the config."""
        graph = PieGraph(["A"], expanded=True, expand_gap=4)
        assert graph.config.expanded is True
        assert graph.config.expand_gap == 4

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError):
            PieGraph(["A"], explode=True)

    def test_config_and_options_conflict(self):
        with pytest.raises(ConfigurationError):
            PieGraph(["A"], config=PieConfig(), expanded=True)

    def test_no_axis_labels(self):
        graph = PieGraph(["A"])
        assert graph.x_labels() == [""]
        assert graph.y_labels() == [""]


class TestAddData:
    """Test series aggregation through the graph."""

    def test_sums_series(self):
        """Multiple series display their per-category sums."""
        graph = PieGraph(list("ABCD"))
        graph.add_data([1, 2, 3, 4])
        graph.add_data([2, 3, 5, 9])
        assert graph.totals.tolist() == [3, 5, 8, 13]

    def test_nulls_and_titles(self):
        graph = PieGraph(list("ABCD"))
        graph.add_data([1, 2, 3, None], title="first")
        totals = graph.add_data([None, None, None, 4], title="second")
        assert totals.tolist() == [1, 2, 3, 4]
        assert graph.titles == ["first", "second"]
        assert graph.grand_total == 10


class TestLayout:
    """Test pie sizing inside the plot area."""

    def test_default_layout(self):
        """Diameter is the short side minus the shadow allowance."""
        layout = PieGraph(["A"]).layout(480, 280)
        assert layout.diameter == 270
        assert layout.radius == 135
        assert layout.x_offset == 105
        assert layout.y_offset == 0

    def test_layout_reductions(self):
        """Expansion and data labels shrink the pie too."""
        graph = PieGraph(
            ["A"], expanded=True, show_data_labels=True, show_shadow=False
        )
        layout = graph.layout(480, 280)
        assert layout.diameter == 280 - 10 - 12
        assert layout.y_offset == 280 - layout.diameter


class TestDrawData:
    """Test drawing onto a surface."""

    def test_two_wedges(self):
        graph = PieGraph(["A", "B"])
        graph.add_data([25, 75])
        drawing = graph.draw_data(_canvas())
        assert [w.percent for w in drawing.wedges] == pytest.approx([25, 75])
        paths = [s.wedge for s in drawing.shapes]
        assert all(p.tag == "path" for p in paths)
        assert paths[1].get("d") == drawing.wedges[1].path
        assert " 0 1,1 " in paths[1].get("d")
        assert drawing.group.get("transform") == "translate( 105 0 )"

    def test_single_category_circle(self):
        """A single category at 100% renders as a circle."""
        graph = PieGraph(["A"])
        graph.add_data([10])
        drawing = graph.draw_data(_canvas())
        assert drawing.shapes[0].wedge.tag == "circle"
        assert not list(drawing.layers.foreground.iter("path"))

    def test_zero_total_does_not_raise(self, caplog):
        """An all-zero chart draws degenerate wedges and logs a warning."""
        graph = PieGraph(["A", "B"])
        with caplog.at_level(logging.WARNING, logger="piegraph.graph"):
            drawing = graph.draw_data(_canvas())
        assert [w.percent for w in drawing.wedges] == [0.0, 0.0]
        assert "zero grand total" in caplog.text

    def test_single_category_zero_total_epsilon(self):
        """The single-category nudge shows up in the drawn path."""
        drawing = PieGraph(["A"]).draw_data(_canvas())
        assert "134.99999" in drawing.shapes[0].wedge.get("d")

    def test_data_labels(self):
        """Labels follow each wedge's border in the foreground."""
        graph = PieGraph(["A", "B", "C"], show_data_labels=True)
        graph.add_data([1, 0, 3])
        drawing = graph.draw_data(_canvas())
        assert [t.text for t in drawing.labels] == ["A 25%", "C 75%"]
        fg = drawing.layers.foreground.children
        first = fg.index(drawing.shapes[0].wedge)
        assert fg[first + 1] is drawing.shapes[0].border
        assert fg[first + 2] is drawing.labels[0]
        r = drawing.layout.radius
        assert drawing.labels[0].get("x") == f"{r:g}"
        assert drawing.labels[0].get("y") == f"{r * 2 + 20:g}"

    def test_shadow_disabled(self):
        graph = PieGraph(["A", "B"], show_shadow=False)
        graph.add_data([1, 2])
        drawing = graph.draw_data(_canvas())
        assert drawing.layers.background.children == []
        assert drawing.layers.midground.children == []

    def test_expand_greatest(self):
        graph = PieGraph(["A", "B"], expand_greatest=True)
        graph.add_data([25, 75])
        drawing = graph.draw_data(_canvas())
        assert drawing.shapes[0].wedge.get("transform") is None
        assert drawing.shapes[1].wedge.get("transform") is not None

    def test_expanded_shifts_every_wedge(self):
        graph = PieGraph(list("ABC"), expanded=True)
        graph.add_data([1, 2, 3])
        drawing = graph.draw_data(_canvas())
        assert all(s.wedge.get("transform") for s in drawing.shapes)

    def test_custom_surface(self):
        """A surface unrelated to SvgCanvas can host the pie."""
        surface = DictSurface()
        assert isinstance(surface, DrawingSurface)
        graph = PieGraph(["A", "B"])
        graph.add_data([1, 3])
        drawing = graph.draw_data(surface)

        # wedge + split border per category in front, one shadow and clear each behind
        assert [n["tag"] for n in drawing.layers.foreground["children"]] == ["path"] * 4
        assert len(drawing.layers.background["children"]) == 2
        assert len(drawing.layers.midground["children"]) == 2
        assert drawing.group["attrs"]["class"] == "pie"

        assert len(surface.defs) == 1
        flt = surface.defs[0]
        assert flt["attrs"]["id"] == "dropshadow"
        assert [c["tag"] for c in flt["children"]] == ["feGaussianBlur"]

    def test_custom_surface_filter_defined_once(self):
        surface = DictSurface()
        graph = PieGraph(["A", "B"])
        graph.add_data([1, 3])
        graph.draw_data(surface)
        graph.draw_data(surface)
        assert len(surface.defs) == 1

    def test_caller_supplied_layers(self):
        """Shapes go into the caller's groups and no pie group is created."""
        canvas = _canvas()
        holder = canvas.add_group(canvas.plot, {"class": "mine"})
        layers = Layers(
            canvas.add_group(holder, {"class": "back"}),
            canvas.add_group(holder, {"class": "middle"}),
            canvas.add_group(holder, {"class": "front"}),
        )
        graph = PieGraph(["A", "B", "C"], show_split=False)
        graph.add_data([1, 2, 3])
        drawing = graph.draw_data(canvas, layers=layers)

        assert drawing.group is None
        assert drawing.layers is layers
        assert canvas.plot.children == [holder]
        assert all(g.get("class") != "pie" for g in canvas.root.iter("g"))
        assert [s.wedge for s in drawing.shapes] == layers.foreground.children
        assert [s.shadow for s in drawing.shapes] == layers.background.children
        assert [s.clear for s in drawing.shapes] == layers.midground.children


class TestOutput:
    """Test keys, CSS and the final document."""

    def test_keys(self):
        graph = PieGraph(["A", "B"], show_key_percent=True)
        graph.add_data([25, 75])
        assert graph.keys() == ["A [25] 25%", "B [75] 75%"]

    def test_css_colors(self):
        graph = PieGraph(["A", "B"])
        css = graph.get_css()
        assert ".key1,.fill1{ fill: #4ea3f1;" in css
        assert ".key2,.fill2{ fill: #8ac926;" in css
        assert "font-size: 12px;" in css

    def test_burn(self):
        graph = PieGraph(["Jan", "Feb", "Mar"])
        graph.add_data([12, 45, 21], title="Sales 2002")
        svg = graph.burn()
        assert svg.startswith("<?xml")
        assert 'id="dropshadow"' in svg
        assert 'stdDeviation="4"' in svg
        assert 'class="fill-color"' in svg
        assert "Jan [12]" in svg
        assert ".fill-color:hover" in svg

    def test_burn_zero_total(self):
        """Rendering an empty chart never fails."""
        svg = PieGraph(["A", "B"], show_key_percent=True).burn()
        assert "A [0] 0%" in svg

    def test_expansion_off_matches_baseline(self):
        """Explicitly disabling expansion gives the default chart."""
        base = PieGraph(["A", "B"])
        base.add_data([1, 3])
        off = PieGraph(["A", "B"], expanded=False, expand_greatest=False)
        off.add_data([1, 3])
        assert base.burn() == off.burn()

    def test_save(self, tmp_path):
        graph = PieGraph(["A", "B"])
        graph.add_data([1, 2])
        chart = graph.render()
        chart.save(str(tmp_path / "pie.svg"))
        chart.save(str(tmp_path / "pie.css"))
        assert (tmp_path / "pie.svg").read_text(encoding="utf-8") == chart.svg
        assert (tmp_path / "pie.css").read_text(encoding="utf-8") == chart.css
        with pytest.raises(ValueError):
            chart.save(str(tmp_path / "pie.png"))


class TestAddFrame:
    """Test pandas input."""

    def test_by_label_column(self):
        pd = pytest.importorskip("pandas")
        df = pd.DataFrame(
            {"cat": ["C", "A", "B"], "s1": [5, 1, None], "s2": [None, 3, 2]}
        )
        graph = PieGraph(["A", "B", "C", "D"])
        graph.add_frame(df, label_column="cat")
        assert graph.totals.tolist() == [4, 2, 5, 0]
        assert graph.titles == ["s1", "s2"]

    def test_by_position(self):
        pd = pytest.importorskip("pandas")
        df = pd.DataFrame({"name": ["x", "y"], "v": [1, 2]})
        graph = PieGraph(["A", "B", "C"])
        graph.add_frame(df)
        assert graph.totals.tolist() == [1, 2, 0]

    def test_nullable_integer_column(self):
        """Missing values in an Int64 column count as 0."""
        pd = pytest.importorskip("pandas")
        df = pd.DataFrame({"v": pd.array([1, None, 3], dtype="Int64")})
        graph = PieGraph(["A", "B", "C"])
        graph.add_frame(df)
        assert graph.totals.tolist() == [1, 0, 3]

    def test_add_data_with_pandas_na(self):
        pd = pytest.importorskip("pandas")
        graph = PieGraph(["A", "B"])
        assert graph.add_data([1, pd.NA]).tolist() == [1, 0]

    def test_missing_label_column(self):
        pd = pytest.importorskip("pandas")
        graph = PieGraph(["A"])
        with pytest.raises(KeyError):
            graph.add_frame(pd.DataFrame({"v": [1]}), label_column="cat")

    def test_not_a_frame(self):
        with pytest.raises(TypeError):
            PieGraph(["A"]).add_frame([1, 2])
