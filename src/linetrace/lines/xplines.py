"""
Make standalone line charts for tabular data.

When run from the command line, `xplines` reads data from a `csv` file and
creates an HTML document (or a static SVG file) that displays a line chart.

    In the `csv` file, the first row of data defines column names.
    The file should include:
        - optionally, a numeric column to plot along the horizontal axis,
          and
        - one or more numeric columns to be plotted as lines.

    If no horizontal axis column is named, values are plotted against their
    row position.  The chart shows one line for each value column, with a
    marker at each data point and a legend to the right of the plot.

Functions
---------
figlines
    Make Bokeh figure with a line chart of tabular data


Command line interface
----------------------
usage: python -m linetrace.lines [-h] [-x X] [-l LINES [LINES ...]]
                                 [-g ARGS] [-t SAVE] [--svg] [-s]
                                 datafile

Line charts display information as a series of data points called 'markers'
connected by straight line segments

positional arguments:
  datafile              File (CSV) with data series

optional arguments:
  -h, --help            show this help message and exit
  -x X                  Variable for horizontal axis (default: row position)
  -l LINES [LINES ...], --lines LINES [LINES ...]
                        Variables to show as lines (default: all other
                        columns)
  -g ARGS, --args ARGS  Chart options, specified as YAML mapping
  -t SAVE, --save SAVE  Name of .html or .svg to save, if different from
                        the datafile base
  --svg                 Save static .svg instead of interactive .html
  -s, --show            Show interactive .html
"""

#%%
from bokeh.io import save, show
from bokeh.layouts import layout
from bokeh.models.widgets import Div

import argparse
import pandas as pd
from pathlib import Path
import sys
import yaml

# Internal imports.
from linetrace.lines.lines import (CHART_DESCRIPTION, LineChartConfig,
                                   bind_dimensions, linechart)
from linetrace.base import set_output_file, surface_figure
from linetrace.surface import BokehSurface, SvgSurface

#%%

def _parse_args(argv=None):
    """
    Parse command line arguments

    Returns
    -------
    `argparse.Namespace` object

    Examples
    --------
    args = _parse_args()
    data = pd.read_csv(args.datafile)

    Resources
    ---------
    [argparse — Parser for command-line options, arguments and sub-commands](https://docs.python.org/3/library/argparse.html#dest)
    """
    # Check command line arguments.
    parser = argparse.ArgumentParser(
        prog="python -m linetrace.lines",
        description=CHART_DESCRIPTION
    )
    parser.add_argument("datafile",
                        help="File (CSV) with data series")
    parser.add_argument("-x", type=str,
                        help="Variable for horizontal axis (default: row position)")
    parser.add_argument("-l", "--lines",
                        nargs="+", type=str,
                        help="Variables to show as lines (default: all other columns)")
    parser.add_argument("-g", "--args",
                        type=str,
                        help="Chart options, specified as YAML mapping")

    parser.add_argument("-t", "--save", type=str,
                        help="Name of .html or .svg to save, if different from the datafile base")
    parser.add_argument("--svg", action="store_true",
                        help="Save static .svg instead of interactive .html")

    parser.add_argument("-s", "--show", action="store_true",
                        help="Show interactive .html")

    args = parser.parse_args(argv)

    # Unpack YAML args into dict of chart options.
    args.args = {} if args.args is None else yaml.safe_load(args.args)
    return(args)


#%%

def figlines(data, *,
             x=None,
             lines=None,
             config=None,
             x_title=None,
             **kwargs):
    """
    Make Bokeh figure with a line chart of tabular data

    Parameters
    ----------
    data : DataFrame
        Including columns to be plotted, which are named in other parameters.
    x : str, optional
        Name of column to plot along the horizontal axis.  If not given,
        rows are plotted against their position.
    lines : list of str
        Names of columns to plot as lines.
    config : LineChartConfig or mapping, optional
        Chart size and color options.
    x_title : str, optional
        Title under the horizontal axis, if different from `x`.
    kwargs : mapping
        Keyword arguments passed to `surface_figure()`.

    Returns
    -------
    Bokeh figure, or None if no lines are given.
    """

    if not isinstance(config, LineChartConfig):
        config = LineChartConfig.from_mapping(config)

    bindings = bind_dimensions(data.columns, x=x, traces=lines,
                               x_title=x_title)
    if bindings is None:
        return None

    surface = BokehSurface(surface_figure(**kwargs))
    linechart(data, bindings, config, surface)
    return surface.fig


#%%

def main(argv=None):
    args = _parse_args(argv)

    data = pd.read_csv(args.datafile, dtype=str)

    lines = args.lines
    if lines is None:
        # Plot every column except the horizontal axis variable.
        lines = [column for column in data.columns if column != args.x]

    config = LineChartConfig.from_mapping(args.args)
    bindings = bind_dimensions(data.columns, x=args.x, traces=lines)
    if bindings is None:
        sys.exit("no data series to plot, name some with --lines")

    outfile = args.save or args.datafile
    if args.svg:
        surface = linechart(data, bindings, config, SvgSurface())
        surface.save(outfile)
        return None

    title = "lines: " + Path(args.datafile).stem

    # Configure output file for interactive html.
    set_output_file(
        outfile,
        title = title
    )

    surface = linechart(data, bindings, config, BokehSurface())

    # Make app that shows chart.
    app = layout([
        Div(text="<h1>" + title),  # Show title as level 1 heading.
        [surface.fig]
    ])

    if args.show:
        show(app)  # Save file and display in web browser.
    else:
        save(app)  # Save file.


if __name__ == "__main__":
    sys.exit(main())
