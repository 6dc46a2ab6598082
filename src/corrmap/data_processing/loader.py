"""Functions for loading built-in and CSV tabular datasets."""

import os

import pandas as pd
import seaborn as sns
from sklearn.datasets import load_iris

from ..exceptions import DatasetNotFoundError


IRIS_COLUMNS = {
    'sepal length (cm)': 'sepal_length',
    'sepal width (cm)': 'sepal_width',
    'petal length (cm)': 'petal_length',
    'petal width (cm)': 'petal_width',
}

# Example datasets fetched (and cached) by seaborn
SEABORN_DATASETS = (
    'tips',
    'diamonds',
    'penguins',
    'mpg',
    'titanic',
    'car_crashes',
)


def list_builtin_datasets():
    """
    List dataset names accepted by load_builtin_dataset.

    Examples
    --------
    >>> 'iris' in list_builtin_datasets()
    True
    """
    return ['iris', *SEABORN_DATASETS]


def load_iris_dataset():
    """
    Load the iris dataset bundled with scikit-learn.

    Returns
    -------
    pd.DataFrame
        150 rows with columns sepal_length, sepal_width, petal_length,
        petal_width and species ('setosa', 'versicolor', 'virginica')

    Examples
    --------
    >>> df = load_iris_dataset()
    >>> df.shape
    (150, 5)
    """
    bunch = load_iris(as_frame=True)
    df = bunch.frame.rename(columns=IRIS_COLUMNS)
    df['species'] = [str(bunch.target_names[t]) for t in df.pop('target')]
    return df


def load_builtin_dataset(name, data_home=None):
    """
    Load a built-in example dataset by name.

    Parameters
    ----------
    name : str
        'iris' (offline, scikit-learn) or one of SEABORN_DATASETS
    data_home : str, optional
        Cache directory passed to seaborn.load_dataset

    Returns
    -------
    pd.DataFrame
        The dataset
    """
    name = name.strip().lower()

    if name == 'iris':
        return load_iris_dataset()

    if name not in SEABORN_DATASETS:
        raise DatasetNotFoundError(
            f"Unknown dataset '{name}'. Must be one of {list_builtin_datasets()}"
        )

    try:
        return sns.load_dataset(name, data_home=data_home)
    except ValueError as e:
        raise DatasetNotFoundError(str(e)) from e


def load_csv_dataset(file_path, **read_kwargs):
    """
    Load a dataset from a CSV file.

    Parameters
    ----------
    file_path : str
        Path to the CSV file
    **read_kwargs
        Forwarded to pd.read_csv

    Returns
    -------
    pd.DataFrame
        The dataset
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Dataset file not found: {file_path}")

    return pd.read_csv(file_path, **read_kwargs)
