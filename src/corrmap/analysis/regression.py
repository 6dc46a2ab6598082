"""Per-group linear regression with Pearson correlation summaries."""

import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_squared_error, r2_score
from tqdm import tqdm

from .correlation import compute_pearson_correlation
from ..data_processing.dataset import (
    as_dataframe, filter_by_group, ordered_group_labels, paired_observations,
    require_columns, require_numeric
)
from ..exceptions import InsufficientDataError, UndefinedCorrelationError
from ..utils.settings import (
    DISPLAY_DECIMALS, LEGEND_LABEL_FORMAT, MIN_PAIRED_OBSERVATIONS, N_LINE_POINTS
)


def fit_linear_regression(x_data, y_data):
    """
    Fit an ordinary least-squares line of y on x.

    Parameters
    ----------
    x_data : array-like
        Predictor values
    y_data : array-like
        Response values

    Returns
    -------
    sklearn.linear_model.LinearRegression
        Fitted model

    Examples
    --------
    >>> model = fit_linear_regression([1, 2, 3], [2, 4, 6])
    >>> round(float(model.coef_[0]), 6)
    2.0
    """
    X = np.asarray(x_data, dtype=float).reshape(-1, 1)
    y = np.asarray(y_data, dtype=float)

    if len(X) < MIN_PAIRED_OBSERVATIONS:
        raise InsufficientDataError(
            f"Need at least {MIN_PAIRED_OBSERVATIONS} observations to fit a line, got {len(X)}"
        )
    if np.ptp(X) == 0:
        raise InsufficientDataError("Cannot fit a line: all x values are identical")

    model = LinearRegression()
    model.fit(X, y)

    return model


def evaluate_regression(model, X_test, y_test):
    """
    Evaluate regression model performance.

    Parameters
    ----------
    model : sklearn.linear_model.LinearRegression
        Trained model
    X_test : array-like
        Test predictor values
    y_test : array-like
        Test response values

    Returns
    -------
    dict
        Dictionary containing:
        - 'mse': Mean squared error
        - 'rmse': Root mean squared error
        - 'r2': R² score
        - 'predictions': Model predictions
    """
    X_test = np.asarray(X_test, dtype=float).reshape(-1, 1)
    y_test = np.asarray(y_test, dtype=float)

    y_pred = model.predict(X_test)

    mse = mean_squared_error(y_test, y_pred)
    rmse = np.sqrt(mse)
    r2 = r2_score(y_test, y_pred)

    return {
        'mse': mse,
        'rmse': rmse,
        'r2': r2,
        'predictions': y_pred
    }


class RegressionSummary:
    """
    Fitted line and Pearson coefficient for one group.

    Attributes
    ----------
    group : object
        Group label
    line_x, line_y : ndarray
        Points of the fitted line, evenly spaced over the group's x range
    r : float
        Unrounded Pearson coefficient
    slope, intercept : float
        Fitted line parameters
    n_observations : int
        Number of complete (x, y) pairs used
    """

    def __init__(self, group, line_x, line_y, r, slope, intercept, n_observations):
        self.group = group
        self.line_x = line_x
        self.line_y = line_y
        self.r = r
        self.slope = slope
        self.intercept = intercept
        self.n_observations = n_observations

    @property
    def coefficient(self):
        """Pearson coefficient rounded for display."""
        # Adding 0.0 turns -0.0 into 0.0
        return round(self.r, DISPLAY_DECIMALS) + 0.0

    @property
    def points(self):
        """Line points as a list of (x, y) tuples."""
        return list(zip(self.line_x.tolist(), self.line_y.tolist()))

    @property
    def legend_label(self):
        """Legend text of the form "<group> (r = <coefficient>)"."""
        return LEGEND_LABEL_FORMAT.format(group=self.group, r=self.coefficient)

    def to_dict(self):
        """Flat record (without line points) for tabular output."""
        return {
            'group': self.group,
            'r': self.r,
            'coefficient': self.coefficient,
            'slope': self.slope,
            'intercept': self.intercept,
            'n_observations': self.n_observations,
            'x_min': float(self.line_x[0]),
            'x_max': float(self.line_x[-1]),
            'legend_label': self.legend_label
        }

    def __repr__(self):
        return (f"RegressionSummary(group={self.group!r}, r={self.coefficient}, "
                f"slope={self.slope:.4g}, intercept={self.intercept:.4g}, "
                f"n={self.n_observations})")


class GroupedRegressionSummarizer:
    """
    Per-group linear regression of one numeric attribute on another.

    For every group of ``group_col`` the summarizer fits an OLS line of
    ``y_col`` on ``x_col``, samples it over the group's observed x range
    and computes the group's Pearson coefficient. Every call recomputes
    from the dataset; nothing is cached.

    Parameters
    ----------
    data : pd.DataFrame or sequence of dict
        Dataset
    group_col : str
        Grouping (categorical) attribute
    x_col, y_col : str
        Numeric attributes
    n_points : int
        Number of sampled points per fitted line

    Examples
    --------
    >>> rows = [{'x': 1, 'y': 2, 'g': 'a'}, {'x': 2, 'y': 4, 'g': 'a'},
    ...         {'x': 3, 'y': 6, 'g': 'a'}]
    >>> summary = GroupedRegressionSummarizer(rows, 'g', 'x', 'y').summarize('a')
    >>> summary.legend_label
    'a (r = 1.00)'
    """

    def __init__(self, data, group_col, x_col, y_col, n_points=N_LINE_POINTS):
        if n_points < 2:
            raise ValueError("n_points must be at least 2")

        self.data = as_dataframe(data)
        require_columns(self.data, [group_col, x_col, y_col])
        require_numeric(self.data, [x_col, y_col])

        self.group_col = group_col
        self.x_col = x_col
        self.y_col = y_col
        self.n_points = n_points

    @property
    def group_labels(self):
        """Ordered group labels; the order used by summarize_all."""
        return ordered_group_labels(self.data, self.group_col)

    def summarize(self, group_value):
        """
        Fit and summarize a single group.

        Parameters
        ----------
        group_value : object
            Label of the group

        Returns
        -------
        RegressionSummary

        Raises
        ------
        UnknownGroupError
            If ``group_value`` is not a label of ``group_col``
        InsufficientDataError
            If the group is empty or has fewer than two complete (x, y) pairs,
            or all of them share one x value
        UndefinedCorrelationError
            If y is constant within the group
        """
        subset = filter_by_group(self.data, self.group_col, group_value)
        x, y = paired_observations(subset, self.x_col, self.y_col)

        if len(x) < MIN_PAIRED_OBSERVATIONS:
            raise InsufficientDataError(
                f"Group {group_value!r} has {len(x)} complete ({self.x_col}, {self.y_col}) "
                f"pair(s); need at least {MIN_PAIRED_OBSERVATIONS}"
            )

        model = fit_linear_regression(x, y)

        if np.ptp(y) == 0:
            raise UndefinedCorrelationError([self.y_col])

        line_x = np.linspace(x.min(), x.max(), self.n_points)
        line_y = model.predict(line_x.reshape(-1, 1))

        r, _ = compute_pearson_correlation(x, y)

        return RegressionSummary(
            group=group_value,
            line_x=line_x,
            line_y=line_y,
            r=float(np.clip(r, -1.0, 1.0)),
            slope=float(model.coef_[0]),
            intercept=float(model.intercept_),
            n_observations=len(x)
        )

    def summarize_all(self, skip_insufficient=False, verbose=False):
        """
        Summarize every group, in group_labels order.

        Parameters
        ----------
        skip_insufficient : bool
            Omit groups raising InsufficientDataError instead of propagating
        verbose : bool
            Show progress and skipped groups

        Returns
        -------
        list of RegressionSummary
        """
        labels = self.group_labels
        summaries = []

        for label in (tqdm(labels, desc="Groups") if verbose else labels):
            try:
                summaries.append(self.summarize(label))
            except InsufficientDataError as e:
                if not skip_insufficient:
                    raise
                if verbose:
                    print(f"  WARNING: Skipping group {label!r}: {e}")

        return summaries


def summarize_group(data, group_col, x_col, y_col, group_value, n_points=N_LINE_POINTS):
    """
    Regression summary of one group.

    Shortcut for ``GroupedRegressionSummarizer(...).summarize(group_value)``.
    """
    summarizer = GroupedRegressionSummarizer(data, group_col, x_col, y_col, n_points=n_points)
    return summarizer.summarize(group_value)
