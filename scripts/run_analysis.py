#!/usr/bin/env python
"""
Correlation & Regression Analysis Runner

This script runs the exploratory analysis on one dataset:
    01. Load the dataset (built-in name or CSV path)
    02. Compute the correlation matrix and its long format
    03. Extract the strongest variable pairs
    04. Summarize the per-group linear regressions
    05. Generate the heatmap, scatter matrix and regression figures

Usage:
    python run_analysis.py --config config/parameters.yaml
    python run_analysis.py --config config/parameters.yaml --dataset tips \
        --group-col day --x-col total_bill --y-col tip
    python run_analysis.py --config config/parameters.yaml --no-plots
"""

import argparse
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from corrmap.analysis import (
    compute_correlation_matrix, correlation_matrix_to_long, find_undefined_attributes,
    top_correlations, analyze_group_correlations, create_correlation_table,
    GroupedRegressionSummarizer
)
from corrmap.data_processing import load_builtin_dataset, load_csv_dataset
from corrmap.exceptions import AnalysisError
from corrmap.utils import load_config
from corrmap.utils.settings import OUTPUT_FILES


def load_dataset(dataset_config):
    """Load the dataset named in the configuration."""
    if dataset_config.get('csv_path'):
        print(f"Loading dataset from {dataset_config['csv_path']}...")
        return load_csv_dataset(dataset_config['csv_path'])

    print(f"Loading built-in dataset '{dataset_config['name']}'...")
    return load_builtin_dataset(dataset_config['name'])


def run_correlation_step(df, corr_config, output_dir):
    """Compute and save the correlation matrix, long table and top pairs."""
    print(f"\n{'='*60}")
    print("STEP: Correlation Matrix")
    print(f"{'='*60}")

    corr_matrix = compute_correlation_matrix(
        df,
        columns=corr_config['columns'],
        method=corr_config['method'],
        on_undefined=corr_config['on_undefined']
    )
    print(f"  Variables: {list(corr_matrix.columns)}")

    undefined = find_undefined_attributes(corr_matrix)
    if undefined:
        print(f"  WARNING: Correlation undefined for zero-variance column(s) {undefined}")

    top_pairs = top_correlations(corr_matrix, k=corr_config['top_k'],
                                 absolute=corr_config['absolute'])
    print("  Strongest pairs:")
    for row in top_pairs.itertuples(index=False):
        print(f"    {row.attr1} / {row.attr2}: {row.value:.2f}")

    corr_matrix.to_csv(output_dir / OUTPUT_FILES['matrix'])
    correlation_matrix_to_long(corr_matrix).to_csv(output_dir / OUTPUT_FILES['long'], index=False)
    top_pairs.to_csv(output_dir / OUTPUT_FILES['top'], index=False)

    return corr_matrix


def run_regression_step(df, reg_config, output_dir):
    """Summarize per-group regressions and save them."""
    print(f"\n{'='*60}")
    print("STEP: Grouped Regression")
    print(f"{'='*60}")

    columns = [reg_config['group_col'], reg_config['x_col'], reg_config['y_col']]
    missing = [col for col in columns if col not in df.columns]
    if missing:
        print(f"  WARNING: Regression column(s) {missing} not found; skipping grouped regression")
        return None

    summarizer = GroupedRegressionSummarizer(
        df, reg_config['group_col'], reg_config['x_col'], reg_config['y_col'],
        n_points=reg_config['n_points']
    )
    print(f"  Groups: {summarizer.group_labels}")

    summaries = summarizer.summarize_all(
        skip_insufficient=reg_config['skip_insufficient'], verbose=True
    )
    for summary in summaries:
        print(f"    {summary.legend_label}: y = {summary.slope:.3f}x + {summary.intercept:.3f}")

    table = create_correlation_table(
        analyze_group_correlations(df, reg_config['group_col'],
                                   reg_config['x_col'], reg_config['y_col']),
        reg_config['x_col'], reg_config['y_col']
    )
    print(table.to_string(index=False))

    pd.DataFrame([s.to_dict() for s in summaries]).to_csv(
        output_dir / OUTPUT_FILES['regression'], index=False
    )

    return summaries


def run_plot_step(df, corr_matrix, summaries, config, output_dir):
    """Generate and save all figures."""
    from corrmap.visualization import (
        plot_correlation_heatmap, plot_scatter_matrix, plot_grouped_regression
    )

    print(f"\n{'='*60}")
    print("STEP: Figures")
    print(f"{'='*60}")

    reg_config = config['regression']
    hue = config['plots']['scatter_hue']
    if hue not in df.columns:
        print(f"  WARNING: Scatter hue column '{hue}' not found; plotting without hue")
        hue = None

    fig, _ = plot_correlation_heatmap(corr_matrix, save_path=output_dir / OUTPUT_FILES['heatmap'])
    plt.close(fig)

    fig, _ = plot_scatter_matrix(df, columns=list(corr_matrix.columns), hue=hue,
                                 save_path=output_dir / OUTPUT_FILES['scatter_matrix'])
    plt.close(fig)

    if summaries is not None:
        fig, _ = plot_grouped_regression(df, summaries, reg_config['group_col'],
                                         reg_config['x_col'], reg_config['y_col'],
                                         save_path=output_dir / OUTPUT_FILES['regression_plot'])
        plt.close(fig)

    print(f"  ✓ Figures saved to {output_dir}")


def main(args):
    """Run the full analysis."""
    print(f"\n{'#'*60}")
    print("# CORRELATION & REGRESSION ANALYSIS")
    print(f"{'#'*60}\n")

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    if args.dataset:
        config['dataset'] = {'name': args.dataset, 'csv_path': None}
    if args.output_dir:
        config['output_dir'] = args.output_dir
    for key in ('group_col', 'x_col', 'y_col'):
        if getattr(args, key):
            config['regression'][key] = getattr(args, key)

    output_dir = Path(config['output_dir'])
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        df = load_dataset(config['dataset'])
        print(f"✓ Dataset loaded: {len(df)} rows, {len(df.columns)} columns")

        corr_matrix = run_correlation_step(df, config['correlation'], output_dir)
        summaries = run_regression_step(df, config['regression'], output_dir)

        if config['plots']['enabled'] and not args.no_plots:
            run_plot_step(df, corr_matrix, summaries, config, output_dir)
        else:
            print("\nSkipping figures")
    except (AnalysisError, FileNotFoundError) as e:
        print(f"\nERROR: {e}")
        return 1

    print(f"\n{'='*60}")
    print(f"✓ Results saved to {output_dir}")
    print(f"{'='*60}\n")

    return 0


def build_parser():
    parser = argparse.ArgumentParser(description='Correlation and grouped regression analysis')
    parser.add_argument('--config', type=str, default='config/parameters.yaml',
                       help='Path to configuration file')
    parser.add_argument('--dataset', type=str, default=None,
                       help='Built-in dataset name (overrides the configuration)')
    parser.add_argument('--output-dir', type=str, default=None,
                       help='Output directory for tables and figures')
    parser.add_argument('--group-col', type=str, default=None,
                       help='Grouping column for the regression (overrides the configuration)')
    parser.add_argument('--x-col', type=str, default=None,
                       help='Regression x column (overrides the configuration)')
    parser.add_argument('--y-col', type=str, default=None,
                       help='Regression y column (overrides the configuration)')
    parser.add_argument('--no-plots', action='store_true',
                       help='Skip figure generation')
    return parser


if __name__ == '__main__':
    args = build_parser().parse_args()
    sys.exit(main(args))
