"""Utility functions for configuration handling."""

from .config import DEFAULT_CONFIG, load_config, merge_config

__all__ = [
    'DEFAULT_CONFIG',
    'load_config',
    'merge_config'
]
