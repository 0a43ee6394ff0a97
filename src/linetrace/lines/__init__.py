"""
Make line charts of one or more numeric series

This sub-package provides a module that can be imported as a Python
module, and a command line interface entry point.


Application program interface
-----------------------------
>>> import linetrace.lines

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
figlines
    Make Bokeh figure with a line chart of tabular data
linechart
    Map records and draw a line chart, if any traces are bound
map_records
    Map records to series points
render_axes, render_legend, render_series
    Draw parts of a line chart


Command line interface
----------------------
> python -m linetrace.lines --help
"""

# Export names from .lines.lines.
from .lines import (Bindings, LineChartConfig, SeriesPoint,
                    bind_dimensions, draw, linechart, map_records,
                    render_axes, render_legend, render_series)
from .xplines import figlines

__all__ = ["Bindings", "LineChartConfig", "SeriesPoint",
           "bind_dimensions", "draw", "figlines", "linechart", "map_records",
           "render_axes", "render_legend", "render_series"]
