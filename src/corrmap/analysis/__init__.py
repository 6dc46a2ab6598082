"""Analysis modules for correlation and regression."""

from .correlation import (
    compute_pearson_correlation,
    compute_correlation_matrix,
    find_undefined_attributes,
    correlation_matrix_to_long,
    long_to_correlation_matrix,
    top_correlations,
    correlation_heatmap_data,
    analyze_group_correlations,
    create_correlation_table
)
from .regression import (
    fit_linear_regression,
    evaluate_regression,
    RegressionSummary,
    GroupedRegressionSummarizer,
    summarize_group
)

__all__ = [
    'compute_pearson_correlation',
    'compute_correlation_matrix',
    'find_undefined_attributes',
    'correlation_matrix_to_long',
    'long_to_correlation_matrix',
    'top_correlations',
    'correlation_heatmap_data',
    'analyze_group_correlations',
    'create_correlation_table',
    'fit_linear_regression',
    'evaluate_regression',
    'RegressionSummary',
    'GroupedRegressionSummarizer',
    'summarize_group'
]
