"""Visualization modules for correlation and regression figures."""

from .analysis_plots import (
    plot_correlation_heatmap,
    plot_scatter_matrix,
    plot_grouped_regression,
    plot_group_filter,
    plot_top_correlations
)

__all__ = [
    'plot_correlation_heatmap',
    'plot_scatter_matrix',
    'plot_grouped_regression',
    'plot_group_filter',
    'plot_top_correlations'
]
