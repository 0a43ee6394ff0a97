"""
Unit tests for Bokeh and SVG drawing surfaces
"""

import math

from bokeh.models import Legend, LegendItem

from linetrace.base import extend_legend_items, surface_figure
from linetrace.lines import Bindings, linechart
from linetrace.surface import BokehSurface, SvgSurface

RECORDS = [{"a": 1, "b": 2}, {"a": 2, "b": 5}]
BINDINGS = Bindings(traces=("a", "b"))


def _label_text(item):
    """Plain text of a Bokeh LegendItem label"""
    label = item.label
    if isinstance(label, dict):
        return label.get("value")
    return getattr(label, "value", label)


def test_bokeh_surface_glyphs():
    surface = linechart(RECORDS, BINDINGS)
    fig = surface.fig
    assert isinstance(surface, BokehSurface)
    assert (fig.width, fig.height) == (900, 600)
    assert (fig.x_range.start, fig.x_range.end) == (0, 900)
    assert (fig.y_range.start, fig.y_range.end) == (600, 0)

    line, = fig.select(name="line_b")
    assert list(line.data_source.data["x"]) == [40.0, 760.0]
    assert list(line.data_source.data["y"]) == [430.0, 40.0]

    markers, = fig.select(name="markers_b")
    assert markers.glyph.size == 4
    assert markers.glyph.fill_color == line.glyph.line_color


def test_bokeh_surface_legend():
    fig = linechart(RECORDS, BINDINGS).fig
    legend, = fig.select(type=Legend)
    assert [_label_text(item) for item in legend.items] == ["a", "b"]

    for item in legend.items:
        line, = fig.select(name="line_" + _label_text(item))
        swatch, = item.renderers
        assert swatch.glyph.fill_color == line.glyph.line_color
        # Legend swatches draw nothing in the plot.
        assert list(swatch.data_source.data["x"]) == []


def test_extend_legend_items_reuses_legend():
    fig = surface_figure()
    first = extend_legend_items(fig, [LegendItem(label="a")], spacing=2)
    second = extend_legend_items(fig, [LegendItem(label="b")], spacing=9)
    assert second is first
    assert len(fig.select(type=Legend)) == 1
    assert [_label_text(item) for item in first.items] == ["a", "b"]
    # Legend settings come from the first call only.
    assert first.spacing == 2


def test_bokeh_grid_beneath_series():
    fig = linechart(RECORDS, BINDINGS).fig
    line, = fig.select(name="line_a")
    grid = [renderer for renderer in fig.renderers
            if getattr(renderer.glyph, "line_color", None) == "#e0e0e0"]
    assert len(grid) == 2
    assert {renderer.level for renderer in grid} == {"underlay"}
    assert line.level == "glyph"


def test_bokeh_surface_skips_nan_markers():
    surface = BokehSurface()
    surface.draw_circles([(1, 2), (math.nan, 3), (4, 5)], 2, "red", name="m")
    markers, = surface.fig.select(name="m")
    assert list(markers.data_source.data["x"]) == [1, 4]


def test_svg_surface_document():
    surface = linechart(RECORDS, BINDINGS, surface=SvgSurface())
    root = surface.root
    assert (root.get("width"), root.get("height")) == ("900", "600")

    paths = [node for node in root.iter("path") if node.get("class") == "line"]
    assert [path.get("id") for path in paths] == ["line_a", "line_b"]
    assert paths[1].get("d") == "M40,430L760,40"

    circles = list(root.iter("circle"))
    assert len(circles) == 4
    assert {circle.get("r") for circle in circles} == {"2"}

    legend, = [node for node in root.iter("g") if node.get("class") == "legendOrdinal"]
    assert legend.get("transform") == "translate(800,20)"
    swatches = [rect.get("fill") for rect in legend.iter("rect")]
    assert swatches == [path.get("stroke") for path in paths]
    assert [text.text for text in legend.iter("text")] == ["a", "b"]

    texts = [text.text for text in root.iter("text")]
    assert "x" in texts  # Fallback x axis title.
    assert surface.to_string().startswith("<svg")


def test_svg_grid_beneath_series():
    root = linechart(RECORDS, BINDINGS, surface=SvgSurface()).root
    children = [node.get("class") for node in root]
    assert sorted(children[:2]) == ["bottom grid", "left grid"]
    assert children.index("bottom axis") > children.index("line")
    grid_strokes = {line.get("stroke") for node in root[:2] for line in node.iter("line")}
    assert grid_strokes == {"#e0e0e0"}


def test_svg_path_breaks_at_nan():
    surface = SvgSurface()
    path = surface.draw_path([(0, 0), (math.nan, 1), (2, 2), (3, 3)], "red")
    assert path.get("d") == "M0,0M2,2L3,3"


def test_svg_save(tmp_path):
    surface = linechart(RECORDS, BINDINGS, surface=SvgSurface())
    saved = surface.save(tmp_path / "chart.html")
    assert saved.suffix == ".svg"
    assert saved.read_text(encoding="utf-8") == surface.to_string()


def test_backends_agree():
    bokeh_fig = linechart(RECORDS, BINDINGS).fig
    svg_root = linechart(RECORDS, BINDINGS, surface=SvgSurface()).root

    markers, = bokeh_fig.select(name="markers_a")
    bokeh_xy = list(zip(markers.data_source.data["x"], markers.data_source.data["y"]))
    svg_group, = [node for node in svg_root.iter("g") if node.get("class") == "markers_a"]
    svg_xy = [(float(c.get("cx")), float(c.get("cy"))) for c in svg_group.iter("circle")]
    assert svg_xy == bokeh_xy
