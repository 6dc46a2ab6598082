"""
Central constants for the correlation/regression analyses.
"""

# Regression line sampling
N_LINE_POINTS = 100  # Evenly spaced x values per fitted line

# Display
DISPLAY_DECIMALS = 2  # Rounding for coefficients and heatmap cells
LEGEND_LABEL_FORMAT = "{group} (r = {r:.2f})"

# Correlation
MIN_PAIRED_OBSERVATIONS = 2
DEFAULT_CORRELATION_METHOD = 'pearson'
DEFAULT_TOP_K = 5

# Figures
FIGURE_DPI = 300
HEATMAP_CMAP = 'coolwarm'
FONT_FAMILY = 'serif'
FONT_SIZE = 14

# Output file names written by the pipeline script
OUTPUT_FILES = {
    'matrix': 'correlation_matrix.csv',
    'long': 'correlation_long.csv',
    'top': 'top_correlations.csv',
    'regression': 'regression_summaries.csv',
    'heatmap': 'correlation_heatmap.png',
    'scatter_matrix': 'scatter_matrix.png',
    'regression_plot': 'grouped_regression.png',
}
