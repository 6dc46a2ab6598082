"""Analysis visualization functions.

This module contains functions for creating analysis plots:
- Correlation heatmaps
- Scatter matrices
- Per-group regression plots (with category filtering)
- Strongest-pair bar charts
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib
import seaborn as sns

from ..analysis.regression import GroupedRegressionSummarizer
from ..data_processing.dataset import filter_by_groups, numeric_columns, require_columns
from ..utils.settings import DISPLAY_DECIMALS, FIGURE_DPI, FONT_FAMILY, FONT_SIZE, HEATMAP_CMAP

# Set publication-quality defaults
matplotlib.rcParams['font.family'] = FONT_FAMILY
matplotlib.rcParams['font.size'] = FONT_SIZE


def plot_correlation_heatmap(corr_matrix, title='Correlation Matrix', annot=True,
                             decimals=DISPLAY_DECIMALS, save_path=None):
    """
    Create correlation heatmap.

    Parameters
    ----------
    corr_matrix : pd.DataFrame
        Square correlation matrix
    title : str
        Figure title
    annot : bool
        Write the rounded coefficient in each cell
    decimals : int
        Decimals of the annotations
    save_path : str, optional
        Path to save the figure

    Returns
    -------
    fig, ax : matplotlib figure and axis objects
    """
    n = len(corr_matrix.columns)
    size = max(6, 1.2 * n)

    fig, ax = plt.subplots(figsize=(size + 2, size))
    sns.heatmap(corr_matrix, annot=annot, fmt=f'.{decimals}f', cmap=HEATMAP_CMAP,
                center=0, square=True, linewidths=1, cbar_kws={"shrink": 0.8},
                ax=ax, vmin=-1, vmax=1)

    ax.set_title(title, fontsize=16)

    if save_path:
        plt.savefig(save_path, dpi=FIGURE_DPI, bbox_inches='tight')

    return fig, ax


def plot_scatter_matrix(df, columns=None, hue=None, save_path=None):
    """
    Create scatter matrix of numeric variables.

    Parameters
    ----------
    df : pd.DataFrame
        Dataset
    columns : list of str, optional
        Variables to plot (default: all numeric columns)
    hue : str, optional
        Categorical column used for coloring
    save_path : str, optional
        Path to save the figure

    Returns
    -------
    fig, axes : matplotlib figure and 2D array of axes
    """
    if columns is None:
        columns = [col for col in numeric_columns(df) if col != hue]
    require_columns(df, list(columns) + ([hue] if hue else []))

    grid = sns.pairplot(df, vars=list(columns), hue=hue, diag_kind='kde',
                        plot_kws={'s': 20, 'alpha': 0.7})

    if save_path:
        grid.savefig(save_path, dpi=FIGURE_DPI, bbox_inches='tight')

    return grid.figure, grid.axes


def plot_grouped_regression(df, summaries, group_col, x_col, y_col, title=None,
                            save_path=None):
    """
    Scatter plot per group with fitted regression lines.

    Parameters
    ----------
    df : pd.DataFrame
        Dataset
    summaries : list of RegressionSummary
        One summary per group to draw
    group_col : str
        Grouping attribute
    x_col, y_col : str
        Numeric attributes
    title : str, optional
        Figure title
    save_path : str, optional
        Path to save the figure

    Returns
    -------
    fig, ax : matplotlib figure and axis objects
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    palette = sns.color_palette(n_colors=max(len(summaries), 1))

    for color, summary in zip(palette, summaries):
        subset = df[df[group_col] == summary.group]

        # Plot actual data points
        ax.scatter(subset[x_col], subset[y_col], s=40, alpha=0.6, color=color,
                   edgecolors='black', linewidths=0.5, zorder=3)

        ax.plot(summary.line_x, summary.line_y, '-', color=color, linewidth=2,
                label=summary.legend_label, zorder=2)

    ax.grid(True, alpha=0.3, zorder=1)

    ax.set_xlabel(x_col, fontsize=14)
    ax.set_ylabel(y_col, fontsize=14)
    ax.set_title(title or f'{y_col} vs {x_col} by {group_col}', fontsize=16)
    if summaries:
        ax.legend(fontsize=12, title=group_col)

    if save_path:
        plt.savefig(save_path, dpi=FIGURE_DPI, bbox_inches='tight')

    return fig, ax


def plot_group_filter(df, group_col, x_col, y_col, selected_groups=None, save_path=None):
    """
    Grouped regression plot restricted to selected categories.

    Parameters
    ----------
    df : pd.DataFrame
        Dataset
    group_col : str
        Grouping attribute
    x_col, y_col : str
        Numeric attributes
    selected_groups : list, optional
        Group labels to show (default: all groups)
    save_path : str, optional
        Path to save the figure

    Returns
    -------
    fig, ax : matplotlib figure and axis objects
    """
    subset = filter_by_groups(df, group_col, selected_groups)
    summaries = GroupedRegressionSummarizer(subset, group_col, x_col, y_col).summarize_all()

    return plot_grouped_regression(subset, summaries, group_col, x_col, y_col,
                                   save_path=save_path)


def plot_top_correlations(top_pairs, title='Strongest Correlations', save_path=None):
    """
    Bar chart of the strongest variable pairs.

    Parameters
    ----------
    top_pairs : pd.DataFrame
        Output of top_correlations (attr1, attr2, value)
    title : str
        Figure title
    save_path : str, optional
        Path to save the figure

    Returns
    -------
    fig, ax : matplotlib figure and axis objects
    """
    fig, ax = plt.subplots(figsize=(12, 6))

    labels = [f'{a} / {b}' for a, b in zip(top_pairs['attr1'], top_pairs['attr2'])]
    values = top_pairs['value'].to_numpy()
    colors = np.where(values >= 0, 'steelblue', 'indianred')

    x_pos = np.arange(len(labels))
    bars = ax.bar(x_pos, values, color=colors, alpha=0.7, edgecolor='black')

    # Add value labels on bars
    for bar, val in zip(bars, values):
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width()/2., height,
                f'{val:.{DISPLAY_DECIMALS}f}', ha='center',
                va='bottom' if val >= 0 else 'top', fontsize=10)

    ax.axhline(0, color='black', linewidth=1)
    ax.set_ylim(-1.1, 1.1)
    ax.set_ylabel('Correlation Coefficient', fontsize=14)
    ax.set_title(title, fontsize=16)
    ax.set_xticks(x_pos)
    ax.set_xticklabels(labels, rotation=45, ha='right')
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=FIGURE_DPI, bbox_inches='tight')

    return fig, ax
