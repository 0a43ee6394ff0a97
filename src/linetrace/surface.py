"""
surface
-------
Drawing surfaces that line charts can be rendered onto

A surface provides a few drawing primitives in pixel coordinates, with x
increasing to the right and y increasing downwards.  Chart code only uses
these primitives, so any vector graphics backend can be supported by
subclassing `RenderingSurface`.

Classes
-------
RenderingSurface
    Abstract base class defining the drawing primitives

BokehSurface
    Draw onto a Bokeh Figure, for standalone interactive HTML

SvgSurface
    Build a static SVG document

Constants
---------
LEGEND_STYLE
    Fixed layout settings for ordinal legends
"""

#%%

from abc import ABC, abstractmethod
import math
from pathlib import Path
import xml.etree.ElementTree as ET

from bokeh.models import LegendItem

# Internal imports.
from linetrace.base import extend_legend_items, surface_figure
from linetrace.scales import AXIS_STYLE, axis_geometry

#%%

# Fixed layout settings for ordinal legends.
LEGEND_STYLE = dict(
    swatch_size = 15,
    padding = 2,  # Between entries.
    label_offset = 10,  # From swatch to label.
    font_family = "Arial, Helvetica",
    font_size = "10px",
)

_SVG_NS = "http://www.w3.org/2000/svg"

# Map SVG style text anchors and baselines to Bokeh equivalents.
_BOKEH_ALIGN = {"start": "left", "middle": "center", "end": "right"}
_SVG_BASELINE = {"top": "hanging", "middle": "middle", "alphabetic": "alphabetic"}


def _is_drawable(x, y):
    return not (math.isnan(x) or math.isnan(y))

#%%

class RenderingSurface(ABC):
    """
    Abstract base class for drawing surfaces

    Coordinates are pixels from the top left corner of the surface.
    Subclasses implement the primitives; `render_axis()` is built on
    `draw_segments()` and `draw_text()` unless overridden.
    """

    @abstractmethod
    def set_size(self, width, height):
        """Set the overall size of the surface, in pixels"""

    def append_group(self, name, underlay=False):
        """
        Return a surface for drawing a named group of nodes

        An `underlay` group is drawn beneath everything else on the
        surface, whenever it is added.  Surfaces without grouping return
        themselves.
        """
        return self

    @abstractmethod
    def draw_path(self, points, color, name=None):
        """
        Draw one connected line through (x, y) points, in the order given

        Points with a NaN coordinate break the line.
        """

    @abstractmethod
    def draw_circles(self, points, radius, color, name=None):
        """Draw a filled circle centred on each (x, y) point"""

    @abstractmethod
    def draw_segments(self, segments, color, width=1):
        """Draw straight line segments given as (x0, y0, x1, y1) tuples"""

    @abstractmethod
    def draw_text(self, x, y, text, anchor="middle", baseline="alphabetic",
                  font_size=AXIS_STYLE["font_size"]):
        """
        Draw text at (x, y)

        `anchor` is "start", "middle" or "end"; `baseline` is "top",
        "middle" or "alphabetic".
        """

    @abstractmethod
    def render_legend(self, entries, position):
        """
        Draw an ordinal legend of (label, color) entries

        The top left corner of the legend is at `position`.
        """

    def render_axis(self, scale, orient, offset, grid_length, tick_count=10):
        """
        Draw an axis for a scale, with tick marks, gridlines and labels

        Parameters
        ----------
        scale : LinearScale
            Scale whose range runs along the axis.
        orient : str
            "bottom" or "left".
        offset : float
            Position of the axis line: y for "bottom", x for "left".
        grid_length : float
            Length of gridlines, drawn from the axis into the plot.
        tick_count : int, default 10
            Approximate number of ticks.
        """
        axis = axis_geometry(scale, orient, offset, grid_length, tick_count)
        # Gridlines go beneath the plotted series.
        grid = self.append_group(f"{orient} grid", underlay=True)
        grid.draw_segments(axis.grid, AXIS_STYLE["grid_stroke"])
        group = self.append_group(f"{orient} axis")
        group.draw_segments([axis.domain_line, *axis.ticks],
                            AXIS_STYLE["stroke"],
                            width=AXIS_STYLE["stroke_width"])
        for x, y, text, anchor, baseline in axis.labels:
            group.draw_text(x, y, text, anchor=anchor, baseline=baseline)
        return axis

#%%

class BokehSurface(RenderingSurface):
    """
    Draw onto a Bokeh Figure, for standalone interactive HTML

    The figure's data space is the pixel space of the surface (see
    `surface_figure()`), so glyphs land exactly where an SVG backend would
    put them.

    Parameters
    ----------
    fig : Bokeh Figure, optional
        Figure made by `surface_figure()`.  A new one is created if not
        given.
    level : str, optional
        Bokeh render level for glyphs drawn by this surface, such as
        "underlay".  Defaults to the usual glyph level.

    Examples
    --------
    from bokeh.io import show
    surface = BokehSurface()
    surface.draw_path([(40, 560), (760, 40)], "#1f77b4", name="line_gva")
    show(surface.fig)
    """

    def __init__(self, fig=None, level=None):
        self.fig = surface_figure() if fig is None else fig
        self.level = level
        self._glyph_kwargs = {} if level is None else dict(level=level)

    def set_size(self, width, height):
        self.fig.width = int(width)
        self.fig.height = int(height)
        self.fig.x_range.end = width
        self.fig.y_range.start = height  # Top down.

    def append_group(self, name, underlay=False):
        if underlay:
            return BokehSurface(self.fig, level="underlay")
        return self

    def draw_path(self, points, color, name=None):
        xs = [x for x, _ in points]
        ys = [y for _, y in points]
        # Bokeh leaves a gap wherever a coordinate is NaN.
        return self.fig.line(x=xs, y=ys, line_color=color, line_width=1,
                             name=name, **self._glyph_kwargs)

    def draw_circles(self, points, radius, color, name=None):
        points = [(x, y) for x, y in points if _is_drawable(x, y)]
        return self.fig.scatter(
            x=[x for x, _ in points],
            y=[y for _, y in points],
            marker="circle",
            size=2 * radius,  # Diameter in screen units.
            fill_color=color,
            line_color=None,
            name=name,
            **self._glyph_kwargs)

    def draw_segments(self, segments, color, width=1):
        segments = list(segments)
        return self.fig.segment(
            x0=[s[0] for s in segments],
            y0=[s[1] for s in segments],
            x1=[s[2] for s in segments],
            y1=[s[3] for s in segments],
            line_color=color,
            line_width=width,
            **self._glyph_kwargs)

    def draw_text(self, x, y, text, anchor="middle", baseline="alphabetic",
                  font_size=AXIS_STYLE["font_size"]):
        return self.fig.text(
            x=[x], y=[y], text=[text],
            text_align=_BOKEH_ALIGN[anchor],
            text_baseline=baseline,
            text_font=AXIS_STYLE["font_family"],
            text_font_size=font_size,
            text_color=AXIS_STYLE["stroke"],
            **self._glyph_kwargs)

    def render_legend(self, entries, position):
        size = LEGEND_STYLE["swatch_size"]
        spacing = LEGEND_STYLE["padding"]

        # Legend glyphs come from renderers without data, so nothing is
        # drawn in the plot itself.
        items = []
        for label, color in entries:
            swatch = self.fig.scatter(x=[], y=[], marker="square", size=size,
                                      fill_color=color, line_color=None,
                                      name=f"legend_{label}")
            items.append(LegendItem(label=label, renderers=[swatch]))

        # Absolute legend location is the bottom left corner, measured
        # upwards from the bottom of the figure.
        x, y = position
        legend_height = len(items) * size + max(len(items) - 1, 0) * spacing
        return extend_legend_items(
            self.fig,
            items=items,
            location=(x, self.fig.height - y - legend_height),
            glyph_width=size,
            glyph_height=size,
            spacing=spacing,
            padding=0,
            margin=0,
            label_standoff=LEGEND_STYLE["label_offset"],
            label_text_font=LEGEND_STYLE["font_family"],
            label_text_font_size=LEGEND_STYLE["font_size"],
            border_line_color=None,
            background_fill_alpha=0.0,  # Transparent.
        )

#%%

class SvgSurface(RenderingSurface):
    """
    Build a static SVG document

    Nodes are appended to an `xml.etree.ElementTree` element.  Groups made
    by `append_group()` share the same document.

    Examples
    --------
    surface = SvgSurface()
    surface.set_size(900, 600)
    surface.draw_circles([(40, 560)], 2, "#1f77b4")
    surface.save("chart.svg")
    """

    def __init__(self, _root=None, _node=None):
        if _root is None:
            _root = ET.Element("svg", xmlns=_SVG_NS)
        self.root = _root
        self.node = _root if _node is None else _node

    def set_size(self, width, height):
        self.root.set("width", _fmt(width))
        self.root.set("height", _fmt(height))

    def append_group(self, name, underlay=False):
        if underlay:
            # First child of the document, so drawn before anything else.
            group = ET.Element("g", {"class": name})
            self.root.insert(0, group)
        else:
            group = ET.SubElement(self.node, "g", {"class": name})
        return SvgSurface(_root=self.root, _node=group)

    def draw_path(self, points, color, name=None):
        # Start a new subpath after any point that cannot be drawn.
        commands = []
        pen_down = False
        for x, y in points:
            if not _is_drawable(x, y):
                pen_down = False
                continue
            commands.append(("L" if pen_down else "M") + f"{_fmt(x)},{_fmt(y)}")
            pen_down = True
        attrs = {"class": "line", "d": "".join(commands),
                 "fill": "none", "stroke": color}
        if name is not None:
            attrs["id"] = name
        return ET.SubElement(self.node, "path", attrs)

    def draw_circles(self, points, radius, color, name=None):
        group = self.append_group("markers" if name is None else name)
        for x, y in points:
            if _is_drawable(x, y):
                ET.SubElement(group.node, "circle", {
                    "class": "data-circle",
                    "r": _fmt(radius),
                    "cx": _fmt(x), "cy": _fmt(y),
                    "fill": color})
        return group.node

    def draw_segments(self, segments, color, width=1):
        for x0, y0, x1, y1 in segments:
            ET.SubElement(self.node, "line", {
                "x1": _fmt(x0), "y1": _fmt(y0),
                "x2": _fmt(x1), "y2": _fmt(y1),
                "stroke": color,
                "stroke-width": _fmt(width),
                "shape-rendering": AXIS_STYLE["shape_rendering"]})

    def draw_text(self, x, y, text, anchor="middle", baseline="alphabetic",
                  font_size=AXIS_STYLE["font_size"]):
        node = ET.SubElement(self.node, "text", {
            "x": _fmt(x), "y": _fmt(y),
            "text-anchor": anchor,
            "dominant-baseline": _SVG_BASELINE[baseline],
            "font-family": AXIS_STYLE["font_family"],
            "font-size": font_size})
        node.text = str(text)
        return node

    def render_legend(self, entries, position):
        size = LEGEND_STYLE["swatch_size"]
        x, y = position
        legend = self.append_group("legendOrdinal")
        legend.node.set("transform", f"translate({_fmt(x)},{_fmt(y)})")
        for i, (label, color) in enumerate(entries):
            cell = legend.append_group("cell")
            cell.node.set("transform",
                          f"translate(0,{_fmt(i * (size + LEGEND_STYLE['padding']))})")
            ET.SubElement(cell.node, "rect", {
                "class": "swatch",
                "width": _fmt(size), "height": _fmt(size),
                "fill": color})
            cell.draw_text(size + LEGEND_STYLE["label_offset"], size / 2, label,
                           anchor="start", baseline="middle",
                           font_size=LEGEND_STYLE["font_size"])
        return legend.node

    def to_string(self):
        """Return the SVG document as text"""
        return ET.tostring(self.root, encoding="unicode")

    def save(self, path):
        """
        Write the SVG document to a file

        Filename suffix is coerced to 'svg'.
        """
        path = Path(path).with_suffix(".svg")
        path.write_text(self.to_string(), encoding="utf-8")
        return path


def _fmt(value):
    """Format a number for an SVG attribute"""
    return f"{float(value):.6g}"
