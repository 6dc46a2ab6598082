"""Pairwise correlation analysis between numeric attributes."""

from collections.abc import Mapping

import numpy as np
import pandas as pd
from scipy.stats import pearsonr

from ..data_processing.dataset import (
    as_dataframe, numeric_columns, ordered_group_labels, paired_observations,
    require_numeric
)
from ..exceptions import InsufficientDataError, UndefinedCorrelationError
from ..utils.settings import (
    DEFAULT_CORRELATION_METHOD, DEFAULT_TOP_K, DISPLAY_DECIMALS, MIN_PAIRED_OBSERVATIONS
)


CORRELATION_METHODS = ('pearson', 'spearman', 'kendall')
LONG_COLUMNS = ['attr1', 'attr2', 'value']


def compute_pearson_correlation(x, y):
    """
    Compute Pearson correlation coefficient and p-value.

    Parameters
    ----------
    x : array-like
        First variable
    y : array-like
        Second variable

    Returns
    -------
    tuple of float
        (correlation_coefficient, p_value), both NaN when fewer than two
        complete pairs remain

    Examples
    --------
    >>> x = np.array([1, 2, 3, 4, 5])
    >>> y = np.array([2, 4, 6, 8, 10])
    >>> r, p = compute_pearson_correlation(x, y)
    >>> abs(r - 1.0) < 1e-10  # Perfect positive correlation
    True
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if x.shape != y.shape:
        raise ValueError(f"x and y must have the same shape, got {x.shape} and {y.shape}")

    # Remove NaN values
    mask = ~(np.isnan(x) | np.isnan(y))
    x_clean = x[mask]
    y_clean = y[mask]

    if len(x_clean) < MIN_PAIRED_OBSERVATIONS:
        return np.nan, np.nan

    r, p_value = pearsonr(x_clean, y_clean)
    return float(r), float(p_value)


def _zero_variance_columns(df, columns):
    return [col for col in columns if df[col].dropna().nunique() <= 1]


def compute_correlation_matrix(data, columns=None, method=DEFAULT_CORRELATION_METHOD,
                               min_periods=MIN_PAIRED_OBSERVATIONS, on_undefined='nan'):
    """
    Compute correlation matrix for multiple numeric variables.

    Parameters
    ----------
    data : pd.DataFrame, dict or sequence of dict
        Dataset. A dict maps variable names to arrays; a sequence is
        read as rows.
    columns : list of str, optional
        Variables to correlate. Defaults to every numeric column.
    method : str
        'pearson', 'spearman' or 'kendall'
    min_periods : int
        Minimum number of paired observations per variable pair
    on_undefined : str
        'nan' keeps NaN rows/columns (and diagonal) for zero-variance
        variables; 'raise' raises UndefinedCorrelationError instead

    Returns
    -------
    pd.DataFrame
        Symmetric correlation matrix with variable names as index/columns

    Examples
    --------
    >>> data = {
    ...     'var1': np.array([1, 2, 3, 4]),
    ...     'var2': np.array([2, 4, 6, 8]),
    ...     'var3': np.array([1, 3, 5, 7])
    ... }
    >>> corr_matrix = compute_correlation_matrix(data)
    >>> round(float(corr_matrix.loc['var1', 'var2']), 10)  # High correlation
    1.0
    """
    if method not in CORRELATION_METHODS:
        raise ValueError(f"Method must be one of {list(CORRELATION_METHODS)}")
    if on_undefined not in ('nan', 'raise'):
        raise ValueError("on_undefined must be 'nan' or 'raise'")
    if min_periods < MIN_PAIRED_OBSERVATIONS:
        raise ValueError(f"min_periods must be at least {MIN_PAIRED_OBSERVATIONS}")

    if isinstance(data, Mapping):
        df = as_dataframe(pd.DataFrame(data))
    else:
        df = as_dataframe(data)

    if columns is None:
        columns = numeric_columns(df)
    else:
        columns = list(columns)
        require_numeric(df, columns)

    if len(columns) < 2:
        raise InsufficientDataError(
            f"Need at least 2 numeric columns for a correlation matrix, got {columns}"
        )

    counts = df[columns].notna().sum()
    sparse = [col for col in columns if counts[col] < min_periods]
    if sparse:
        raise InsufficientDataError(
            f"Column(s) {sparse} have fewer than {min_periods} non-missing observations"
        )

    undefined = _zero_variance_columns(df, columns)
    if undefined and on_undefined == 'raise':
        raise UndefinedCorrelationError(undefined)

    values = df[columns].astype(float).corr(method=method, min_periods=min_periods).to_numpy()

    # Mirror the upper triangle so the matrix is exactly symmetric
    values = np.triu(values) + np.triu(values, 1).T
    values = np.clip(values, -1.0, 1.0)

    diagonal = np.array([np.nan if col in undefined else 1.0 for col in columns])
    np.fill_diagonal(values, diagonal)

    return pd.DataFrame(values, index=columns, columns=columns)


def find_undefined_attributes(corr_matrix):
    """
    Variables whose correlation is undefined (NaN diagonal).

    Examples
    --------
    >>> m = compute_correlation_matrix({'a': [1, 2, 3], 'b': [5, 5, 5]})
    >>> find_undefined_attributes(m)
    ['b']
    """
    diagonal = np.diag(corr_matrix.to_numpy())
    return [name for name, value in zip(corr_matrix.columns, diagonal) if np.isnan(value)]


def correlation_matrix_to_long(corr_matrix, include_diagonal=False, unique_pairs=False):
    """
    Convert a correlation matrix to long format.

    Parameters
    ----------
    corr_matrix : pd.DataFrame
        Square correlation matrix
    include_diagonal : bool
        Keep self pairs (attr, attr)
    unique_pairs : bool
        Keep only one of (a, b) / (b, a), the one in upper-triangle order

    Returns
    -------
    pd.DataFrame
        Columns attr1, attr2, value in row-major matrix order

    Examples
    --------
    >>> m = compute_correlation_matrix({'a': [1, 2, 3], 'b': [3, 2, 1]})
    >>> correlation_matrix_to_long(m, unique_pairs=True).shape
    (1, 3)
    """
    names = list(corr_matrix.columns)
    if list(corr_matrix.index) != names:
        raise ValueError("Correlation matrix must have identical index and columns")

    values = corr_matrix.to_numpy()
    rows = []

    for i, var1 in enumerate(names):
        for j, var2 in enumerate(names):
            if i == j and not include_diagonal:
                continue
            if unique_pairs and j < i:
                continue
            rows.append((var1, var2, values[i, j]))

    return pd.DataFrame(rows, columns=LONG_COLUMNS)


def long_to_correlation_matrix(long_df, diagonal=1.0):
    """
    Rebuild a correlation matrix from its long format.

    Variables are ordered by first appearance. Pairs present in only
    one orientation are mirrored. Self pairs present in the table are
    used as-is; missing ones are filled with ``diagonal``.

    Parameters
    ----------
    long_df : pd.DataFrame
        Table with columns attr1, attr2, value
    diagonal : float
        Value for self pairs absent from the table

    Returns
    -------
    pd.DataFrame
        Square correlation matrix
    """
    missing = [col for col in LONG_COLUMNS if col not in long_df.columns]
    if missing:
        raise ValueError(f"Long-format table is missing column(s) {missing}")

    names = []
    for var1, var2 in zip(long_df['attr1'], long_df['attr2']):
        for name in (var1, var2):
            if name not in names:
                names.append(name)

    position = {name: k for k, name in enumerate(names)}
    n = len(names)
    values = np.full((n, n), np.nan)
    seen = np.zeros((n, n), dtype=bool)

    for var1, var2, value in long_df[LONG_COLUMNS].itertuples(index=False):
        i, j = position[var1], position[var2]
        values[i, j] = value
        seen[i, j] = True

    # Fill the other orientation for tables holding unique pairs only
    mirror = ~seen & seen.T
    values[mirror] = values.T[mirror]
    seen |= mirror

    for k in range(n):
        if not seen[k, k]:
            values[k, k] = diagonal

    return pd.DataFrame(values, index=names, columns=names)


def top_correlations(corr_matrix, k=DEFAULT_TOP_K, absolute=True):
    """
    Strongest distinct variable pairs.

    Parameters
    ----------
    corr_matrix : pd.DataFrame
        Square correlation matrix
    k : int
        Number of pairs to return
    absolute : bool
        Rank by |r| (True) or by signed r, descending (False)

    Returns
    -------
    pd.DataFrame
        Columns attr1, attr2, value; undefined (NaN) pairs excluded
    """
    if k < 1:
        raise ValueError("k must be a positive integer")

    pairs = correlation_matrix_to_long(corr_matrix, unique_pairs=True).dropna(subset=['value'])
    key = pairs['value'].abs() if absolute else pairs['value']
    order = key.sort_values(ascending=False, kind='mergesort').index

    return pairs.loc[order].head(k).reset_index(drop=True)


def correlation_heatmap_data(corr_matrix, decimals=DISPLAY_DECIMALS, hover=True):
    """
    Heatmap payload for a charting library.

    Parameters
    ----------
    corr_matrix : pd.DataFrame
        Square correlation matrix
    decimals : int
        Rounding applied to the cell values
    hover : bool
        Include per-cell hover strings

    Returns
    -------
    dict
        {'x': column names, 'y': row names, 'z': rounded cells as nested
        lists (None where undefined), 'text': hover strings (if hover)}

    Examples
    --------
    >>> m = compute_correlation_matrix({'a': [1, 2, 3], 'b': [1, 2, 4]})
    >>> correlation_heatmap_data(m)['z'][0]
    [1.0, 0.98]
    """
    rounded = corr_matrix.round(decimals)
    z = [[None if np.isnan(value) else float(value) for value in row]
         for row in rounded.to_numpy()]

    payload = {
        'x': list(corr_matrix.columns),
        'y': list(corr_matrix.index),
        'z': z,
    }

    if hover:
        payload['text'] = [
            [f"{row_name} vs {col_name}: "
             + ("undefined" if value is None else f"{value:.{decimals}f}")
             for col_name, value in zip(payload['x'], row)]
            for row_name, row in zip(payload['y'], z)
        ]

    return payload


def analyze_group_correlations(data, group_col, x_col, y_col):
    """
    Pearson correlation of two attributes within each group.

    Parameters
    ----------
    data : pd.DataFrame or sequence of dict
        Dataset
    group_col : str
        Grouping attribute
    x_col, y_col : str
        Numeric attributes

    Returns
    -------
    dict
        Maps each group label (in group order) to
        {'r': float, 'p_value': float, 'n': int}

    Examples
    --------
    >>> df = pd.DataFrame({'g': ['a'] * 3, 'x': [1, 2, 3], 'y': [3, 2, 1]})
    >>> round(analyze_group_correlations(df, 'g', 'x', 'y')['a']['r'], 6)
    -1.0
    """
    df = as_dataframe(data)
    results = {}

    for label in ordered_group_labels(df, group_col):
        x, y = paired_observations(df[df[group_col] == label], x_col, y_col)
        r, p_value = compute_pearson_correlation(x, y)
        results[label] = {
            'r': r,
            'p_value': p_value,
            'n': len(x)
        }

    return results


def create_correlation_table(group_correlations, x_col, y_col, decimals=DISPLAY_DECIMALS):
    """
    Format per-group correlations as a display table.

    Parameters
    ----------
    group_correlations : dict
        Output of analyze_group_correlations
    x_col, y_col : str
        Names used for the pair label
    decimals : int
        Rounding of the coefficient

    Returns
    -------
    pd.DataFrame
        Columns Group, Pair, Pearson Correlation, N

    Examples
    --------
    >>> table = create_correlation_table({'a': {'r': 0.991, 'p_value': 0.01, 'n': 5}}, 'x', 'y')
    >>> table.loc[0, 'Pearson Correlation']
    '0.99'
    """
    rows = []

    for group, corr in group_correlations.items():
        r = corr['r']
        rows.append({
            'Group': group,
            'Pair': f"{x_col}-{y_col}",
            'Pearson Correlation': 'undefined' if np.isnan(r) else f"{r:.{decimals}f}",
            'N': corr['n']
        })

    return pd.DataFrame(rows, columns=['Group', 'Pair', 'Pearson Correlation', 'N'])
