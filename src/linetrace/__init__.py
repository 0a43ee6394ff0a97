"""
The linetrace package contains tools to draw line charts of tabular data.

A line chart shows one or more numeric series ("traces") as lines
joining markers, plotted against a numeric horizontal axis variable or
against record position.  The charts include a bottom and a left axis with
gridlines, and a color legend.

Charts are drawn through a small set of drawing primitives, so the same
chart can be rendered as a standalone HTML document with the
[Bokeh](https://bokeh.org) visualization library, or as a static SVG file.

Command line interface entrypoints
----------------------------------
lines
    Create a line chart showing one or more numeric series from a csv file.


Modules (exported by the package)
---------------------------------
base
    Miscellaneous helper functions, including color mapping and Bokeh
    figure setup.

dutils
    Miscellaneous data manipulation helpers.

lines
    Map records to series points and draw line charts.

scales
    Linear scales mapping data values to pixel coordinates.

surface
    Drawing surfaces that line charts can be rendered onto.
"""

from . import (base, dutils, scales, surface)
# Export API modules within sub-packages.
from .lines import lines

# Suppress code analysis warnings of unused imports;
#   see https://stackoverflow.com/a/31079085/16327476.
__all__ = ["base", "dutils",
           "lines",
           "scales", "surface"]
