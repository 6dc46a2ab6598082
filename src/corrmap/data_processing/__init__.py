"""Dataset loading, validation and filtering."""

from .loader import (
    list_builtin_datasets,
    load_iris_dataset,
    load_builtin_dataset,
    load_csv_dataset
)
from .dataset import (
    as_dataframe,
    require_columns,
    require_numeric,
    numeric_columns,
    categorical_columns,
    ordered_group_labels,
    filter_by_group,
    filter_by_groups,
    paired_observations
)

__all__ = [
    'list_builtin_datasets',
    'load_iris_dataset',
    'load_builtin_dataset',
    'load_csv_dataset',
    'as_dataframe',
    'require_columns',
    'require_numeric',
    'numeric_columns',
    'categorical_columns',
    'ordered_group_labels',
    'filter_by_group',
    'filter_by_groups',
    'paired_observations'
]
