"""
dutils
---------
Miscellaneous data manipulation helpers

Classes
-------
NonNumericWarning
    Issued when data values are not numbers and are plotted as NaN.

Functions
---------
dict_fill
    Map keys to values, recycling values as necessary.

nan_extent
    Minimum and maximum of numbers, skipping NaN.

non_numeric
    Flag values that are present but not numeric.

to_number
    Coerce values to float, with non-numeric values becoming NaN.
"""

#%%

from itertools import cycle

import numpy as np
import pandas as pd

#%%

# Extent used when there is nothing to measure.
EMPTY_EXTENT = (0.0, 0.0)


def dict_fill(keys, values):
    """
    Map keys to values, recycling values as necessary
    """

    return dict(zip(keys, cycle(values)))


def to_number(values):
    """
    Coerce values to float, with non-numeric values becoming NaN

    Parameters
    ----------
    values : scalar, sequence or Series
        Raw values, typically strings read from a `csv` file or numbers.

    Returns
    -------
    Series of float, with the same index as `values` if `values` is a
    Series.

    Examples
    --------
    list(to_number(["1", "2.5", "n/a", None]))
    # [1.0, 2.5, nan, nan]
    """
    if np.isscalar(values) or values is None:
        # Wrap single value, for convenience.
        values = [values]
    values = pd.Series(values, dtype=object)
    if len(values) == 0:
        return pd.Series([], index=values.index, dtype=float)

    # Map booleans to 0 or 1 before coercing everything else.
    values = values.map(lambda v: int(v) if isinstance(v, (bool, np.bool_)) else v)
    return pd.to_numeric(values, errors="coerce").astype(float)


def non_numeric(values, coerced=None):
    """
    Flag values that are present but not numeric

    Parameters
    ----------
    values : sequence or Series
        Raw values.
    coerced : Series, optional
        Result of `to_number(values)`, if already calculated.

    Returns
    -------
    Boolean Series, True where a non-missing value coerces to NaN.
    """
    values = pd.Series(values, dtype=object)
    if coerced is None:
        coerced = to_number(values)
    return values.notna().to_numpy() & coerced.isna().to_numpy()


def nan_extent(values):
    """
    Minimum and maximum of numbers, skipping NaN

    Returns `EMPTY_EXTENT` if there are no numbers other than NaN.

    Examples
    --------
    nan_extent([3, float("nan"), 1])
    # (1.0, 3.0)
    nan_extent([])
    # (0.0, 0.0)
    """
    values = np.asarray(list(values), dtype=float)
    values = values[~np.isnan(values)]
    if values.size == 0:
        return EMPTY_EXTENT
    return (float(values.min()), float(values.max()))


class NonNumericWarning(UserWarning):
    """
    Issued when data values are not numbers and are plotted as NaN
    """
