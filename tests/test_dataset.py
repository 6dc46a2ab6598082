"""
Dataset Loading, Filtering and Configuration Tests
"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from corrmap.data_processing import (
    as_dataframe, categorical_columns, filter_by_group, filter_by_groups,
    list_builtin_datasets, load_builtin_dataset, load_csv_dataset, load_iris_dataset,
    numeric_columns, ordered_group_labels, paired_observations, require_columns
)
from corrmap.exceptions import (
    DatasetNotFoundError, InsufficientDataError, UnknownColumnError, UnknownGroupError
)
from corrmap.utils import DEFAULT_CONFIG, load_config, merge_config


@pytest.fixture
def df():
    return pd.DataFrame({
        'g': ['b', 'a', 'b', None, 'c'],
        'x': [1.0, 2.0, 3.0, 4.0, np.nan],
        'y': [2, 3, 4, 5, 6],
    })


def test_iris_dataset():
    iris = load_iris_dataset()

    assert iris.shape == (150, 5)
    assert list(iris.columns) == [
        'sepal_length', 'sepal_width', 'petal_length', 'petal_width', 'species'
    ]
    assert ordered_group_labels(iris, 'species') == ['setosa', 'versicolor', 'virginica']
    assert (iris['species'].value_counts() == 50).all()


def test_builtin_iris_is_offline():
    iris = load_builtin_dataset(' Iris ')

    assert len(iris) == 150


def test_unknown_builtin_dataset():
    with pytest.raises(DatasetNotFoundError):
        load_builtin_dataset('not-a-dataset')


def test_list_builtin_datasets():
    names = list_builtin_datasets()

    assert names[0] == 'iris'
    assert 'diamonds' in names


def test_csv_dataset(tmp_path, df):
    path = tmp_path / 'data.csv'
    df.to_csv(path, index=False)

    loaded = load_csv_dataset(str(path))

    assert list(loaded.columns) == ['g', 'x', 'y']
    assert len(loaded) == 5


def test_csv_dataset_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv_dataset(str(tmp_path / 'missing.csv'))


def test_as_dataframe():
    rows = [{'x': 1, 'g': 'a'}, {'x': 2, 'g': 'b'}]

    result = as_dataframe(rows)

    assert list(result.columns) == ['x', 'g']
    assert len(result) == 2

    with pytest.raises(InsufficientDataError):
        as_dataframe([])

    with pytest.raises(TypeError):
        as_dataframe({'x': 1})


def test_column_types(df):
    assert numeric_columns(df) == ['x', 'y']
    assert categorical_columns(df) == ['g']


def test_require_columns(df):
    require_columns(df, ['g', 'x'])

    with pytest.raises(UnknownColumnError) as excinfo:
        require_columns(df, ['g', 'z'])

    assert excinfo.value.missing == ['z']


def test_group_labels_first_appearance(df):
    assert ordered_group_labels(df, 'g') == ['b', 'a', 'c']


def test_filter_by_group(df):
    subset = filter_by_group(df, 'g', 'b')

    assert subset['x'].tolist() == [1.0, 3.0]

    with pytest.raises(UnknownGroupError):
        filter_by_group(df, 'g', 'z')


def test_filter_by_groups(df):
    assert len(filter_by_groups(df, 'g')) == 5
    assert filter_by_groups(df, 'g', ['a', 'c'])['g'].tolist() == ['a', 'c']

    with pytest.raises(UnknownGroupError):
        filter_by_groups(df, 'g', ['a', 'z'])


def test_paired_observations(df):
    x, y = paired_observations(df, 'x', 'y')

    assert x.dtype == float
    assert x.tolist() == [1.0, 2.0, 3.0, 4.0]
    assert y.tolist() == [2.0, 3.0, 4.0, 5.0]


def test_default_config():
    config = load_config()

    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG
    assert config['regression']['n_points'] == 100


def test_load_config_merges_defaults(tmp_path):
    path = tmp_path / 'parameters.yaml'
    path.write_text(
        "dataset:\n"
        "  name: tips\n"
        "regression:\n"
        "  group_col: day\n"
        "  x_col: total_bill\n"
        "  y_col: tip\n"
    )

    config = load_config(path)

    assert config['dataset'] == {'name': 'tips', 'csv_path': None}
    assert config['regression']['group_col'] == 'day'
    assert config['regression']['n_points'] == 100
    assert config['correlation']['method'] == 'pearson'


def test_repository_config_loads():
    config = load_config(Path(__file__).parent.parent / 'config' / 'parameters.yaml')

    assert config['dataset']['name'] == 'iris'
    assert config['correlation']['on_undefined'] == 'nan'


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'missing.yaml')

    path = tmp_path / 'list.yaml'
    path.write_text("- a\n- b\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_merge_config_does_not_modify_base():
    base = {'a': {'b': 1, 'c': 2}, 'd': 3}

    merged = merge_config(base, {'a': {'c': 5}, 'd': None})

    assert merged == {'a': {'b': 1, 'c': 5}, 'd': None}
    assert base == {'a': {'b': 1, 'c': 2}, 'd': 3}
