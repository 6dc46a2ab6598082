"""Column validation, group filtering and paired-observation extraction."""

from collections.abc import Mapping

import pandas as pd
from pandas.api.types import is_numeric_dtype

from ..exceptions import (
    InsufficientDataError, NonNumericColumnError, UnknownColumnError, UnknownGroupError
)


def as_dataframe(data):
    """
    Coerce a dataset to a DataFrame.

    Parameters
    ----------
    data : pd.DataFrame or sequence of dict
        Table of rows; each row maps attribute name to value

    Returns
    -------
    pd.DataFrame
        The dataset (DataFrames are returned as-is, not copied)

    Examples
    --------
    >>> df = as_dataframe([{'x': 1, 'g': 'a'}, {'x': 2, 'g': 'b'}])
    >>> list(df.columns)
    ['x', 'g']
    """
    if isinstance(data, pd.DataFrame):
        df = data
    elif isinstance(data, Mapping):
        raise TypeError("Expected a DataFrame or a sequence of row mappings, got a single mapping")
    else:
        df = pd.DataFrame(list(data))

    if df.empty:
        raise InsufficientDataError("Dataset is empty")

    return df


def require_columns(df, columns):
    """Raise UnknownColumnError if any of ``columns`` is missing from ``df``."""
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise UnknownColumnError(missing, df.columns)


def require_numeric(df, columns):
    """Raise NonNumericColumnError if any of ``columns`` is not numeric."""
    require_columns(df, columns)
    for col in columns:
        if not is_numeric_dtype(df[col]):
            raise NonNumericColumnError(
                f"Column '{col}' must be numeric, got dtype {df[col].dtype}"
            )


def numeric_columns(df):
    """
    Names of numeric columns, in column order.

    Examples
    --------
    >>> df = pd.DataFrame({'a': [1.0], 'b': ['x'], 'c': [2]})
    >>> numeric_columns(df)
    ['a', 'c']
    """
    return [col for col in df.columns if is_numeric_dtype(df[col])]


def categorical_columns(df):
    """Names of non-numeric columns, in column order."""
    return [col for col in df.columns if not is_numeric_dtype(df[col])]


def ordered_group_labels(df, group_col):
    """
    Ordered labels of the groups present in ``group_col``.

    Categorical columns keep their category order; other columns are
    ordered by first appearance. Missing labels are excluded.

    Parameters
    ----------
    df : pd.DataFrame
        Dataset
    group_col : str
        Grouping attribute

    Returns
    -------
    list
        Group labels

    Examples
    --------
    >>> df = pd.DataFrame({'g': ['b', 'a', 'b', None]})
    >>> ordered_group_labels(df, 'g')
    ['b', 'a']
    """
    require_columns(df, [group_col])
    series = df[group_col]

    if isinstance(series.dtype, pd.CategoricalDtype):
        present = set(series.dropna().unique())
        return [label for label in series.cat.categories if label in present]

    return list(pd.unique(series.dropna()))


def filter_by_group(df, group_col, group_value):
    """
    Rows where ``group_col`` equals ``group_value``.

    Raises
    ------
    UnknownGroupError
        If ``group_value`` is not in the domain of ``group_col``
    InsufficientDataError
        If ``group_value`` is a declared category with no rows
    """
    require_columns(df, [group_col])
    series = df[group_col]
    subset = df[series == group_value]

    if subset.empty:
        if isinstance(series.dtype, pd.CategoricalDtype) and group_value in series.cat.categories:
            raise InsufficientDataError(f"Group {group_value!r} of {group_col} has no rows")
        raise UnknownGroupError(group_col, group_value)

    return subset


def filter_by_groups(df, group_col, group_values=None):
    """
    Rows whose ``group_col`` is one of ``group_values``.

    Used for category filtering in plots; None keeps every group.
    Unknown labels raise UnknownGroupError.
    """
    require_columns(df, [group_col])
    if group_values is None:
        return df

    known = set(ordered_group_labels(df, group_col))
    for value in group_values:
        if value not in known:
            raise UnknownGroupError(group_col, value)

    return df[df[group_col].isin(list(group_values))]


def paired_observations(df, x_col, y_col):
    """
    Extract complete (x, y) pairs.

    Parameters
    ----------
    df : pd.DataFrame
        Dataset
    x_col, y_col : str
        Numeric attributes

    Returns
    -------
    tuple of ndarray
        (x, y) as float arrays with rows missing either value dropped

    Examples
    --------
    >>> df = pd.DataFrame({"x": [1.0, None, 3.0], "y": [2.0, 5.0, None]})
    >>> x, y = paired_observations(df, 'x', 'y')
    >>> len(x)
    1
    """
    require_numeric(df, [x_col, y_col])
    pairs = df[[x_col, y_col]].dropna()
    return pairs[x_col].to_numpy(dtype=float), pairs[y_col].to_numpy(dtype=float)
