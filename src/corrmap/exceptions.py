"""Exceptions raised by the analysis functions."""


class AnalysisError(ValueError):
    """Base class for invalid analysis inputs."""


class InsufficientDataError(AnalysisError):
    """Too few non-missing paired observations to correlate or fit a line."""


class UndefinedCorrelationError(InsufficientDataError):
    """Correlation requested over a zero-variance attribute."""

    def __init__(self, attributes):
        self.attributes = list(attributes)
        super().__init__(
            f"Correlation undefined for zero-variance attribute(s): {self.attributes}"
        )


class UnknownGroupError(AnalysisError):
    """Requested group label does not occur in the grouping attribute."""

    def __init__(self, group_col, group_value):
        self.group_col = group_col
        self.group_value = group_value
        super().__init__(f"No rows with {group_col} == {group_value!r}")


class UnknownColumnError(AnalysisError):
    """Requested attribute is not a column of the dataset."""

    def __init__(self, missing, available):
        self.missing = list(missing)
        super().__init__(
            f"Column(s) {self.missing} not found in dataset. Available: {list(available)}"
        )


class NonNumericColumnError(AnalysisError):
    """Attribute used as a regression/correlation variable is not numeric."""


class DatasetNotFoundError(AnalysisError):
    """Unknown built-in dataset name."""
