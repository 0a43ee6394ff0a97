"""
Configure unit tests for linetrace

Acknowledgements
----------------
Helpers and helpers() are informed by:
    https://stackoverflow.com/a/42156088/16327476
"""

import os
import pathlib
import pytest
import subprocess
import sys

from linetrace.surface import RenderingSurface


def package_root(test_file):
    """Return package root from a unit test `__file__` attribute"""
    return pathlib.Path(test_file, '../..').resolve()


def package_src(test_file):
    """Return full pathname to linetrace src folder"""
    return package_root(test_file) / "src"


def data_file(test_file, fname):
    """Return full pathname to sample data"""
    return package_root(test_file) / "data" / fname


class Helpers:
    """
    Class containing unit test helper functions
    """

    def __init__(self, test_file):
        """
        Parameters
        ----------
        test_file: str
            `__file__` attribute of the unit test script

        Examples
        --------
        # In unit test:
        def test_mytest(helper_class):
            helpers = helper_class(__file__)
            helpers.data_file("sales.csv")
        """

        self.test_file = test_file


    @property
    def package_src(self):
        return package_src(self.test_file)


    def data_file(self, fname):
        return data_file(self.test_file, fname)


    def run_script(self, *, module, options=[], data=None, show=False):
        """
        Run module as a script, returning the process exit status
        """
        # Use -s option to show a figure after creating it.
        OPTION_SHOW = "-s"

        if data is None:
            data = []
        elif isinstance(data, str):
            data = [data]

        # Make path to each named data file.
        data = [self.data_file(fname).as_posix() for fname in data]

        if isinstance(options, str):
            # Split option string into list of options.
            options = str.split(options)

        cli_options = data.copy()
        cli_options.extend(options)

        if show and OPTION_SHOW not in options:
            # Use -s option to show the figure after creating it.
            cli_options.append(OPTION_SHOW)

        # Make new environment with PYTHONPATH to our package.
        child_pythonpath = self.package_src.as_posix()
        if "PYTHONPATH" in os.environ:
            # Include current PYTHON_PATH.
            child_pythonpath = os.pathsep.join([
                child_pythonpath,
                os.environ["PYTHONPATH"]
            ])
        child_environ = os.environ.copy()
        child_environ["PYTHONPATH"] = child_pythonpath

        # Run python as a sub-process, directed to our module.
        return_code = subprocess.call([sys.executable,
                                       "-m", module,
                                       *cli_options,
                                      ],
                                      env=child_environ)
        return return_code


class RecordingSurface(RenderingSurface):
    """
    Surface that records what is drawn, for checking chart geometry

    Attributes
    ----------
    size : (width, height) or None
    paths, circles : list of dict
        With keys "points", "color", "name" (and "radius" for circles).
    texts : list of dict
        With keys "x", "y", "text", "anchor".
    axes : list of AxisGeometry
    legends : list of dict
        With keys "entries" and "position".
    """

    def __init__(self):
        self.size = None
        self.groups = []
        self.paths = []
        self.circles = []
        self.segments = []
        self.texts = []
        self.axes = []
        self.legends = []

    def set_size(self, width, height):
        self.size = (width, height)

    def append_group(self, name, underlay=False):
        self.groups.append(name)
        return self

    def draw_path(self, points, color, name=None):
        path = dict(points=list(points), color=color, name=name)
        self.paths.append(path)
        return path

    def draw_circles(self, points, radius, color, name=None):
        circles = dict(points=list(points), radius=radius, color=color, name=name)
        self.circles.append(circles)
        return circles

    def draw_segments(self, segments, color, width=1):
        self.segments.extend(segments)

    def draw_text(self, x, y, text, anchor="middle", baseline="alphabetic",
                  font_size="10px"):
        self.texts.append(dict(x=x, y=y, text=text, anchor=anchor))

    def render_axis(self, scale, orient, offset, grid_length, tick_count=10):
        axis = super().render_axis(scale, orient, offset, grid_length, tick_count)
        self.axes.append(axis)
        return axis

    def render_legend(self, entries, position):
        self.legends.append(dict(entries=list(entries), position=position))


@pytest.fixture
def helper_class():
    """
    To use helper function `XX`, in a test_*.py do this:
        ```
        def test_with_help(helper_class):
            helper_class(__file__).XX()
        ```
    """
    return Helpers


@pytest.fixture
def surface():
    """Fresh `RecordingSurface` for each test"""
    return RecordingSurface()
