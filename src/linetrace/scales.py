"""
scales
------
Linear scales mapping data values to pixel coordinates

Classes
-------
LinearScale
    Map a numeric domain linearly onto a pixel range

AxisGeometry
    Segments and labels making up one chart axis

Functions
---------
axis_geometry
    Calculate tick marks, gridlines and labels for an axis

build_scales
    Make x and y scales spanning a list of series points

Constants
---------
AXIS_STYLE
    Fixed visual settings shared by all axes
"""

#%%

from collections import namedtuple
import math

# Internal imports.
from linetrace.dutils import nan_extent

#%%

# Fixed visual settings shared by all axes.
AXIS_STYLE = dict(
    stroke = "#000000",
    stroke_width = 1,
    shape_rendering = "crispEdges",
    font_family = "Arial, Helvetica",
    font_size = "10px",
    tick_size = 6,
    tick_padding = 3,
    grid_stroke = "#e0e0e0",
)

# Thresholds for choosing 10, 5, 2 or 1 as a tick step multiplier.
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

#%%

def _tick_spec(start, stop, count):
    """
    Integer bounds and increment for round tick values

    Returns (i1, i2, inc).  If `inc` is positive, ticks are `i * inc`;
    if negative, ticks are `i / -inc`, which avoids floating point error
    for fractional steps.  Returns None if the step between ticks is too
    large or too small to represent as a float.
    """
    step = (stop - start) / max(0, count)
    if not math.isfinite(step) or step <= 0:
        return None
    power = math.floor(math.log10(step))
    try:
        error = step / 10.0 ** power
        factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
        if power < 0:
            inc = 10.0 ** -power / factor
        else:
            inc = 10.0 ** power * factor
    except (OverflowError, ZeroDivisionError):
        return None
    if not math.isfinite(inc):
        return None
    if power < 0:
        i1 = round(start * inc)
        i2 = round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        i1 = round(start / inc)
        i2 = round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    return i1, i2, inc


class LinearScale():
    """
    Map a numeric domain linearly onto a pixel range

    Calling the scale with a data value returns the pixel coordinate.
    A degenerate domain (both ends equal) maps every value to the middle
    of the range.  NaN maps to NaN.

    Parameters
    ----------
    domain : (float, float)
        Data values mapped to the ends of `range`.
    range : (float, float)
        Pixel coordinates.  The range may decrease, as for a vertical axis
        on a surface whose y coordinates run from top to bottom.

    Examples
    --------
    x_scale = LinearScale((0, 10), (40, 760))
    x_scale(5)
    # 400.0
    y_scale = LinearScale((0, 10), (560, 40))
    y_scale(10)
    # 40.0
    """

    def __init__(self, domain, range):
        d0, d1 = domain
        r0, r1 = range
        self.domain = (float(d0), float(d1))
        self.range = (float(r0), float(r1))

    def __call__(self, value):
        d0, d1 = self.domain
        r0, r1 = self.range
        value = float(value)
        if math.isnan(value):
            return math.nan
        span = d1 - d0
        if span == 0:
            t = 0.5
        elif math.isinf(span):
            # Halve everything so the span of finite ends stays finite.
            t = (value / 2 - d0 / 2) / (d1 / 2 - d0 / 2)
        else:
            t = (value - d0) / span
        return r0 + t * (r1 - r0)

    def __eq__(self, other):
        return (isinstance(other, LinearScale)
                and self.domain == other.domain
                and self.range == other.range)

    def __repr__(self):
        return f"LinearScale(domain={self.domain}, range={self.range})"

    @property
    def is_degenerate(self):
        d0, d1 = self.domain
        return d0 == d1 or not (math.isfinite(d0) and math.isfinite(d1))

    def ticks(self, count=10):
        """
        Round values within the domain, roughly `count` of them

        Tick steps are 1, 2 or 5 times a power of ten.  A degenerate
        domain gives the single domain value, and a domain that is not
        finite gives no ticks.
        """
        start, stop = self.domain
        if not (math.isfinite(start) and math.isfinite(stop)):
            return []
        if start == stop or count <= 0:
            return [start]
        reverse = stop < start
        if reverse:
            start, stop = stop, start
        spec = _tick_spec(start, stop, count)
        if spec is None:
            # No representable step, so treat as degenerate.
            return [self.domain[0]]
        i1, i2, inc = spec
        if i2 < i1:
            return []
        if inc < 0:
            ticks = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
        else:
            ticks = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
        ticks = [float(tick) for tick in ticks]
        return ticks[::-1] if reverse else ticks

    def tick_step(self, count=10):
        """
        Distance between adjacent ticks, or None for a degenerate domain
        """
        start, stop = sorted(self.domain)
        if self.is_degenerate or count <= 0:
            return None
        spec = _tick_spec(start, stop, count)
        if spec is None:
            return None
        inc = spec[2]
        return 1 / -inc if inc < 0 else inc

    def tick_format(self, count=10):
        """
        Return a function formatting tick values

        Decimal places follow the tick step, and thousands are separated
        by commas, e.g. "1,500" or "0.25".
        """
        step = self.tick_step(count)
        if step is None:
            # Single tick, so no step to follow.
            return lambda value: f"{value:,g}"
        precision = max(0, -math.floor(math.log10(step)))

        def formatter(value):
            if value == 0:
                # Avoid showing negative zero.
                value = 0.0
            return f"{value:,.{precision}f}"

        return formatter


def build_scales(points, x_range, y_range):
    """
    Make x and y scales spanning a list of series points

    The y domain is shared by all traces, spanning every trace value of
    every point.  NaN values are skipped.

    Parameters
    ----------
    points : list of SeriesPoint
        Points with a numeric `x` and a mapping `y` from trace names to
        numbers.
    x_range, y_range : (float, float)
        Pixel ranges for the x and y scales.

    Returns
    -------
    (x_scale, y_scale) tuple of `LinearScale`.
    """
    x_domain = nan_extent(point.x for point in points)
    y_domain = nan_extent(value for point in points for value in point.y.values())
    return LinearScale(x_domain, x_range), LinearScale(y_domain, y_range)

#%%

AxisGeometry = namedtuple(
    "AxisGeometry",
    ["orient", "domain_line", "ticks", "grid", "labels"])
AxisGeometry.__doc__ = """
Segments and labels making up one chart axis

Segments are (x0, y0, x1, y1) tuples in surface pixels.  Labels are
(x, y, text, anchor, baseline) tuples.
"""


def axis_geometry(scale, orient, offset, grid_length, tick_count=10,
                  style=AXIS_STYLE):
    """
    Calculate tick marks, gridlines and labels for an axis

    Parameters
    ----------
    scale : LinearScale
        Scale whose range runs along the axis.
    orient : str
        "bottom" for a horizontal axis with labels below, or "left" for a
        vertical axis with labels to its left.
    offset : float
        Pixel position of the axis line: y for "bottom", x for "left".
    grid_length : float
        Length of gridlines, drawn from the axis into the plot.
    tick_count : int, default 10
        Approximate number of ticks.

    Returns
    -------
    `AxisGeometry`.
    """

    assert orient in ("bottom", "left"), f"orient should be 'bottom' or 'left', not {orient}"
    tick_size = style["tick_size"]
    label_offset = tick_size + style["tick_padding"]
    fmt = scale.tick_format(tick_count)
    r0, r1 = scale.range

    ticks, grid, labels = [], [], []
    for value in scale.ticks(tick_count):
        pos = scale(value)
        if orient == "bottom":
            ticks.append((pos, offset, pos, offset + tick_size))
            grid.append((pos, offset, pos, offset - grid_length))
            labels.append((pos, offset + label_offset, fmt(value), "middle", "top"))
        else:
            ticks.append((offset, pos, offset - tick_size, pos))
            grid.append((offset, pos, offset + grid_length, pos))
            labels.append((offset - label_offset, pos, fmt(value), "end", "middle"))

    if orient == "bottom":
        domain_line = (r0, offset, r1, offset)
    else:
        domain_line = (offset, r0, offset, r1)
    return AxisGeometry(orient, domain_line, ticks, grid, labels)
