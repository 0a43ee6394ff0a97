"""
base
----
Miscellaneous helpers for line charts

Functions
---------
color_mapper
    Return a function mapping trace names to colors

extend_legend_items
    Create legend items and add to a Bokeh figure's legend

set_output_file
    Set Bokeh output file for standalone application

surface_figure
    Create an empty Bokeh Figure whose data space is measured in pixels

variables_cmap
    Map variable names to colors

Constants
---------
DEFAULT_PALETTE
    Name of Bokeh palette used when no color scale is given
"""

#%%

from bokeh import palettes
from bokeh.io import output_file
from bokeh.models import Legend, Range1d
from bokeh.plotting import figure

from collections.abc import Mapping
from pathlib import Path

# Imports from this package.
from linetrace.dutils import dict_fill

#%%

# Name of Bokeh palette used when no color scale is given.
DEFAULT_PALETTE = "Category10_10"

#%%

def color_mapper(traces, color_scale=None):
    """
    Return a function mapping trace names to colors

    The mapping is fixed when `color_mapper()` is called, so the same color
    is used for a trace wherever it is drawn.

    Parameters
    ----------
    traces : list of str
        Trace names, in the order they were selected.  Colors are assigned
        in this order.
    color_scale : str, sequence, mapping or callable, optional
        Named Bokeh palette, sequence of colors (recycled as needed), mapping
        from trace names to colors, or function of a trace name.  Traces
        missing from a mapping get colors from `DEFAULT_PALETTE`.  Defaults
        to `DEFAULT_PALETTE`.

    Returns
    -------
    Function of one trace name returning a color.  Raises `KeyError` for
    names not in `traces`.

    Examples
    --------
    color_of = color_mapper(["gva", "jobs"])
    color_of("jobs")
    # '#ff7f0e'
    """
    traces = list(traces)
    if color_scale is None:
        color_scale = DEFAULT_PALETTE

    if isinstance(color_scale, Mapping):
        color_map = variables_cmap(traces, DEFAULT_PALETTE)
        color_map.update({trace: color_scale[trace] for trace in traces
                          if trace in color_scale})
    elif callable(color_scale):
        color_map = {trace: color_scale(trace) for trace in traces}
    else:
        color_map = variables_cmap(traces, color_scale)

    def color_of(trace):
        return color_map[trace]

    return color_of


def extend_legend_items(fig, items, **kwargs):
    """
    Add legend items to figure

    Extends the legend items of a Bokeh figure, creating a legend if the
    figure does not have one yet.

    Parameters
    ----------
    fig : Bokeh Figure
        Figure to add legend items to.
    items : list of LegendItem
        Will be added to the figure's legend items.
    kwargs : mapping, optional
        Keyword arguments passed to `Legend()` if
        `fig` does not already have a legend.

    Returns
    -------
    The figure's Bokeh `Legend`.
    """

    if len(fig.legend):
        legend = fig.legend[0]
    else:
        legend = Legend(**kwargs)
        fig.add_layout(legend, place="center")

    legend.items.extend(items)
    return legend


def set_output_file(outfile, title):
    """
    Set Bokeh output file for standalone application

    Filename suffix is coerced to 'html'

    Examples
    --------
    set_output_file(args.save or args.datafile, "lines: sales")
    """

    outfile = Path(outfile).with_suffix(".html").as_posix()
    output_file(outfile, title=title, mode='inline')


def surface_figure(width=800, height=600, **kwargs):
    """
    Make empty Bokeh Figure whose data space is measured in pixels

    The x range runs from 0 at the left edge to `width`, and the y range
    runs from 0 at the top edge to `height`, so glyph coordinates are
    screen pixels as for an SVG canvas.  The figure has no Bokeh axes,
    grid, toolbar or border.

    Parameters
    ----------
    width, height : int
        Size of the figure, in pixels.
    kwargs : mapping, optional
        Override default figure options.

    Returns
    -------
    Bokeh `Figure`.
    """

    fopts = dict(
        width = width,
        height = height,
        x_range = Range1d(0, width),
        y_range = Range1d(height, 0),  # Top down.
        x_axis_location = None,
        y_axis_location = None,
        min_border = 0,
        outline_line_color = None,
        background_fill_color = "#ffffff",
        toolbar_location = None,
        tools = "",
    )
    # Fold in explicit options to override others.
    fopts.update(kwargs)
    fig = figure(**fopts)
    fig.grid.visible = False
    return fig


def variables_cmap(variables, palette):
    """
    Map variables to colors

    If there are more variables than colors in the palette,
    colors are recycled.

    Parameters
    ----------
    variables: str or list[str]
        Variable name or list of names.
    palette: str or array
        Named palette from Bokeh.palettes, or array of colors.

    Returns
    -------
    dict mapping variable names to colors.

    Raises
    ------
    ValueError
        If `palette` names no Bokeh palette, or has no colors.
    """

    if isinstance(variables, str):
        # Wrap simple string in a list, for convenience.
        variables = [variables]
    n_data_series = len(variables)

    if isinstance(palette, str):
        # Access named palette from bokeh.palettes.
        try:
            palette = getattr(palettes, palette)
        except AttributeError:
            raise ValueError(f"unknown Bokeh palette '{palette}'") from None

    if isinstance(palette, dict):
        # Extract color palette from palette dict, by number of colors needed.
        last_palette = list(palette.values())[-1]
        palette = palette.get(n_data_series, last_palette)

    if len(palette) == 0:
        raise ValueError("palette has no colors")

    # Map variables to palette colors, recycling colors as needed.
    color_map = dict_fill(keys=variables, values=palette)
    return color_map
