"""
Draw line charts of one or more numeric series

Records are mapped to series points, scales are fitted to the points, and
lines, markers, axes and a legend are drawn onto a `RenderingSurface`.
Every draw starts from scratch, so redrawing with the same inputs gives
the same picture.

Classes
-------
Bindings
    Fields bound to the x axis and to the plotted traces
LineChartConfig
    Size and color settings for one chart
SeriesPoint
    One record mapped to an x value and a value for each trace

Functions
---------
bind_dimensions
    Check field names against data columns and bind them to chart dimensions
draw
    Draw a line chart of mapped points onto a surface
linechart
    Map records and draw a line chart, if any traces are bound
map_records
    Map records to series points
render_axes
    Draw bottom and left axes with gridlines, and the x axis title
render_legend
    Draw a color legend with one entry per trace
render_series
    Draw a line and markers for each trace
"""

#%%

from collections import namedtuple
from collections.abc import Mapping
import math
import numbers
import warnings

import pandas as pd

# Internal imports.
from ..base import DEFAULT_PALETTE, color_mapper
from ..dutils import NonNumericWarning, non_numeric, to_number
from ..scales import build_scales
from ..surface import BokehSurface

#%%

CHART_TITLE = "Line chart"
CHART_DESCRIPTION = ("Line charts display information as a series of data points"
                     " called 'markers' connected by straight line segments")
CHART_CATEGORY = "Other"

# Declared chart dimensions.  A field bound to `traces` is required.
DIMENSIONS = {
    "x": dict(title="X Axis", types=(float,), required=0, multiple=False),
    "traces": dict(title="Y Axis", types=(float,), required=1, multiple=True),
}

# Title under the x axis when no x field is bound.
X_FALLBACK_TITLE = "x"
# Distance from the x axis line down to the x axis title.
X_TITLE_OFFSET = 35
# Distance from the top of the surface down to the legend.
LEGEND_Y_OFFSET = 20

#%%

SeriesPoint = namedtuple("SeriesPoint", ["x", "y"])
SeriesPoint.__doc__ = """
One record mapped to an x value and a value for each trace

`x` is a number and `y` maps trace names to numbers.
"""


class Bindings(namedtuple("Bindings", ["x", "traces", "x_title"],
                          defaults=[None, (), None])):
    """
    Fields bound to the x axis and to the plotted traces

    Parameters
    ----------
    x : str, optional
        Field plotted along the horizontal axis.  If not given, records are
        plotted against their position.
    traces : tuple of str
        Fields plotted as lines, in selection order.
    x_title : str, optional
        Declared title of the x field, shown under the x axis.  Defaults to
        the name of the x field.
    """

    __slots__ = ()

    @property
    def x_label(self):
        if self.x is None:
            return None
        return self.x if self.x_title is None else self.x_title


_CONFIG_DEFAULTS = dict(
    width = 800,
    height = 600,
    margin = 40,
    marker_radius = 2,
    legend_width = 100,
    color_scale = DEFAULT_PALETTE,
)


class LineChartConfig(namedtuple("LineChartConfig", list(_CONFIG_DEFAULTS),
                                 defaults=list(_CONFIG_DEFAULTS.values()))):
    """
    Size and color settings for one chart

    Parameters
    ----------
    width, height : number, default 800, 600
        Size of the plot, in pixels, not counting the legend.
    margin : number, default 40
        Space on each side of the plotted area.
    marker_radius : number, default 2
        Radius of the circle drawn at each point.
    legend_width : number, default 100
        Space reserved to the right of the plot for the legend.
    color_scale : str, sequence, mapping or callable, default "Category10_10"
        Colors for traces; see `base.color_mapper()`.
    """

    __slots__ = ()

    @classmethod
    def from_mapping(cls, mapping=None, **kwargs):
        """
        Make validated config from a mapping, such as parsed YAML

        Keyword arguments override entries in `mapping`.

        Raises
        ------
        ValueError
            If `mapping` is not a mapping, has unknown keys, or has
            invalid values.

        Examples
        --------
        LineChartConfig.from_mapping(yaml.safe_load("{width: 900}"))
        """
        if mapping is None:
            mapping = {}
        if not isinstance(mapping, Mapping):
            raise ValueError(f"chart options should be a mapping, not {type(mapping).__name__}")
        options = {**mapping, **kwargs}

        unknown = [key for key in options if key not in cls._fields]
        if unknown:
            raise ValueError(f"unknown chart options {unknown}, expected some of {list(cls._fields)}")
        return cls(**options).validated()

    def validated(self):
        """
        Return self, after checking sizes are non-negative numbers
        """
        for field in ("width", "height", "margin", "marker_radius", "legend_width"):
            value = getattr(self, field)
            if (not isinstance(value, numbers.Real) or isinstance(value, bool)
                    or not value >= 0):
                raise ValueError(f"{field} should be a non-negative number, not {value!r}")
        return self

#%%

def bind_dimensions(columns, x=None, traces=None, x_title=None):
    """
    Check field names against data columns and bind them to chart dimensions

    Parameters
    ----------
    columns : sequence of str
        Names of fields available in the data.
    x : str, optional
        Field for the horizontal axis.
    traces : str or list of str
        Fields to plot as lines.
    x_title : str, optional
        Title to show under the x axis.

    Returns
    -------
    `Bindings`, or None if no trace is given.

    Raises
    ------
    ValueError
        If a field is not among `columns`.
    """
    columns = list(columns)
    if isinstance(traces, str):
        # Wrap single trace in list, for convenience.
        traces = [traces]
    traces = [] if traces is None else list(traces)

    named = ([] if x is None else [x]) + traces
    missing = [name for name in named if name not in columns]
    if missing:
        raise ValueError(f"fields {missing} not found in data columns {columns}")

    if len(traces) < DIMENSIONS["traces"]["required"]:
        return None
    return Bindings(x=x, traces=tuple(traces), x_title=x_title)


def _column(frame, name):
    """Values of a field, or missing values if there is no such field"""
    if name in frame.columns:
        return frame[name]
    return pd.Series([None] * len(frame.index), index=frame.index, dtype=object)


def map_records(records, x=None, traces=None):
    """
    Map records to series points

    Parameters
    ----------
    records : DataFrame or sequence of mappings
        One record per point, in plotting order.
    x : str, optional
        Field to use for x values.  If not given, the position of each
        record (0, 1, ...) is used.
    traces : str or list of str
        Fields to use for y values.

    Returns
    -------
    List of `SeriesPoint`, one per record in the same order, or None if
    no traces are given.  Values that are not numbers become NaN, with a
    `NonNumericWarning`.

    Examples
    --------
    map_records([{"a": 1, "b": 2}, {"a": 2, "b": 5}], traces=["b"])
    # [SeriesPoint(x=0, y={'b': 2.0}), SeriesPoint(x=1, y={'b': 5.0})]
    """

    if isinstance(traces, str):
        # Wrap single trace in list, for convenience.
        traces = [traces]
    traces = [] if traces is None else list(traces)
    if not traces:
        # Nothing to draw.
        return None

    if isinstance(records, pd.DataFrame):
        frame = records
    else:
        frame = pd.DataFrame(list(records))

    # Coerce each field used once, noting fields with non-numeric values.
    fields = list(dict.fromkeys(([] if x is None else [x]) + traces))
    values = {}
    non_numeric_fields = []
    for field in fields:
        raw = _column(frame, field)
        coerced = to_number(raw)
        if non_numeric(raw, coerced).any():
            non_numeric_fields.append(field)
        values[field] = coerced.to_numpy()

    if non_numeric_fields:
        warnings.warn(NonNumericWarning(
            f"non-numeric values in {non_numeric_fields} are plotted as NaN"),
            stacklevel=2)

    points = [
        SeriesPoint(
            x=i if x is None else float(values[x][i]),
            y={trace: float(values[trace][i]) for trace in traces}
        ) \
        for i in range(len(frame.index))
    ]
    return points

#%%

def render_series(surface, points, traces, x_scale, y_scale, color_of,
                  marker_radius):
    """
    Draw a line and markers for each trace

    Each line joins the points in the order given, not sorted by x.

    Returns
    -------
    dict mapping trace names to (line, markers) as returned by the
    surface.
    """

    drawn = {}
    for trace in traces:
        coords = [(x_scale(point.x), y_scale(point.y.get(trace, math.nan)))
                  for point in points]
        color = color_of(trace)
        line = surface.draw_path(coords, color, name=f"line_{trace}")
        markers = surface.draw_circles(coords, marker_radius, color,
                                       name=f"markers_{trace}")
        drawn[trace] = (line, markers)
    return drawn


def render_axes(surface, x_scale, y_scale, config, x_title=None):
    """
    Draw bottom and left axes with gridlines, and the x axis title

    Gridlines span the plotted area.  The title is `x_title`, or
    `X_FALLBACK_TITLE` if no x field is bound.
    """

    margin = config.margin
    surface.render_axis(y_scale, "left", offset=margin,
                        grid_length=config.width - 2 * margin)
    surface.render_axis(x_scale, "bottom", offset=config.height - margin,
                        grid_length=config.height - 2 * margin)
    surface.draw_text(config.width / 2,
                      config.height - margin + X_TITLE_OFFSET,
                      X_FALLBACK_TITLE if x_title is None else x_title,
                      anchor="middle")


def render_legend(surface, traces, color_of, position):
    """
    Draw a color legend with one entry per trace

    Returns
    -------
    List of (label, color) legend entries.
    """

    entries = [(trace, color_of(trace)) for trace in traces]
    surface.render_legend(entries, position)
    return entries


def draw(surface, points, bindings, config=None):
    """
    Draw a line chart of mapped points onto a surface

    Parameters
    ----------
    surface : RenderingSurface
        Surface to draw on.  It is resized to fit the plot and legend.
    points : list of SeriesPoint
        Output of `map_records()`.
    bindings : Bindings
        Fields bound to the chart; traces are drawn in this order.
    config : LineChartConfig, optional
        Defaults to `LineChartConfig()`.

    Returns
    -------
    (x_scale, y_scale) used for the chart.

    Raises
    ------
    ValueError
        If `points` is None, as when no traces are bound.
    """

    if points is None:
        raise ValueError("no data to draw, bind at least one trace")
    config = (LineChartConfig() if config is None else config).validated()
    traces = list(bindings.traces)
    margin = config.margin

    surface.set_size(config.width + config.legend_width, config.height)
    x_scale, y_scale = build_scales(
        points,
        x_range=(margin, config.width - margin),
        y_range=(config.height - margin, margin)  # Top down.
    )
    color_of = color_mapper(traces, config.color_scale)

    render_series(surface, points, traces, x_scale, y_scale, color_of,
                  config.marker_radius)
    render_axes(surface, x_scale, y_scale, config, bindings.x_label)
    render_legend(surface, traces, color_of,
                  position=(config.width, LEGEND_Y_OFFSET))
    return x_scale, y_scale


def linechart(records, bindings, config=None, surface=None):
    """
    Map records and draw a line chart, if any traces are bound

    Parameters
    ----------
    records : DataFrame or sequence of mappings
        Data to plot.
    bindings : Bindings
        Fields bound to the chart.
    config : LineChartConfig, optional
        Defaults to `LineChartConfig()`.
    surface : RenderingSurface, optional
        Defaults to a new `BokehSurface`.

    Returns
    -------
    The surface drawn on, or None if no traces are bound.

    Examples
    --------
    from bokeh.io import show
    data = pd.DataFrame(dict(year=[2001, 2002, 2003],
                             gva=[100, 105, 110],
                             hours=[100, 102, 105]))
    surface = linechart(data, Bindings(x="year", traces=("gva", "hours")))
    show(surface.fig)
    """

    points = map_records(records, bindings.x, bindings.traces)
    if points is None:
        return None
    if surface is None:
        surface = BokehSurface()
    draw(surface, points, bindings, config)
    return surface
