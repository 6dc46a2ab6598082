"""Loading of YAML analysis configuration."""

import copy
from pathlib import Path

import yaml

from .settings import DEFAULT_CORRELATION_METHOD, DEFAULT_TOP_K, N_LINE_POINTS


DEFAULT_CONFIG = {
    'dataset': {
        'name': 'iris',
        'csv_path': None,
    },
    'correlation': {
        'columns': None,
        'method': DEFAULT_CORRELATION_METHOD,
        'on_undefined': 'nan',
        'top_k': DEFAULT_TOP_K,
        'absolute': True,
    },
    'regression': {
        'group_col': 'species',
        'x_col': 'sepal_length',
        'y_col': 'petal_length',
        'n_points': N_LINE_POINTS,
        'skip_insufficient': False,
    },
    'plots': {
        'enabled': True,
        'scatter_hue': 'species',
    },
    'output_dir': 'results',
}


def merge_config(base, override):
    """
    Recursively merge ``override`` into a copy of ``base``.

    Parameters
    ----------
    base : dict
        Default values
    override : dict or None
        User supplied values; nested dicts are merged key by key

    Returns
    -------
    dict
        Merged configuration

    Examples
    --------
    >>> merge_config({'a': {'b': 1, 'c': 2}}, {'a': {'c': 3}})
    {'a': {'b': 1, 'c': 3}}
    """
    merged = copy.deepcopy(base)
    if not override:
        return merged

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_config(config_path=None):
    """
    Load configuration from a YAML file, filling gaps from DEFAULT_CONFIG.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML file. If None, the defaults are returned.

    Returns
    -------
    dict
        Configuration dictionary
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        user_config = yaml.safe_load(f) or {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(user_config).__name__}")

    return merge_config(DEFAULT_CONFIG, user_config)
