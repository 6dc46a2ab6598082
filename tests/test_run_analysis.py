"""
End-to-end tests of the analysis runner script on iris and on a CSV dataset.
"""

import importlib.util
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).parent.parent


@pytest.fixture(scope='module')
def run_analysis():
    spec = importlib.util.spec_from_file_location('run_analysis', ROOT / 'scripts' / 'run_analysis.py')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def make_args(run_analysis, *argv):
    return run_analysis.build_parser().parse_args(list(argv))


def test_tables_without_plots(run_analysis, tmp_path):
    args = make_args(run_analysis, '--config', str(ROOT / 'config' / 'parameters.yaml'),
                     '--output-dir', str(tmp_path), '--no-plots')

    assert run_analysis.main(args) == 0

    matrix = pd.read_csv(tmp_path / 'correlation_matrix.csv', index_col=0)
    summaries = pd.read_csv(tmp_path / 'regression_summaries.csv')
    top = pd.read_csv(tmp_path / 'top_correlations.csv')
    long_df = pd.read_csv(tmp_path / 'correlation_long.csv')

    assert list(matrix.columns) == ['sepal_length', 'sepal_width', 'petal_length', 'petal_width']
    assert summaries['group'].tolist() == ['setosa', 'versicolor', 'virginica']
    assert summaries['legend_label'].str.match(r'^\w+ \(r = -?\d\.\d\d\)$').all()
    assert len(top) == 5
    assert len(long_df) == 12
    assert not (tmp_path / 'correlation_heatmap.png').exists()


def test_full_run_with_figures(run_analysis, tmp_path):
    args = make_args(run_analysis, '--config', str(ROOT / 'config' / 'parameters.yaml'),
                     '--output-dir', str(tmp_path))

    assert run_analysis.main(args) == 0

    for name in ['correlation_heatmap.png', 'scatter_matrix.png', 'grouped_regression.png']:
        assert (tmp_path / name).exists()


def test_missing_config(run_analysis, tmp_path):
    args = make_args(run_analysis, '--config', str(tmp_path / 'missing.yaml'))

    assert run_analysis.main(args) == 1


def test_missing_regression_columns_skip_step(run_analysis, tmp_path):
    config_path = tmp_path / 'parameters.yaml'
    config_path.write_text(
        "regression:\n"
        "  group_col: colour\n"
        f"output_dir: {tmp_path / 'out'}\n"
    )
    args = make_args(run_analysis, '--config', str(config_path), '--no-plots')

    assert run_analysis.main(args) == 0
    assert (tmp_path / 'out' / 'correlation_matrix.csv').exists()
    assert not (tmp_path / 'out' / 'regression_summaries.csv').exists()


def test_unknown_dataset_reports_error(run_analysis, tmp_path):
    args = make_args(run_analysis, '--config', str(ROOT / 'config' / 'parameters.yaml'),
                     '--dataset', 'not-a-dataset', '--output-dir', str(tmp_path), '--no-plots')

    assert run_analysis.main(args) == 1


@pytest.fixture
def bill_csv(tmp_path):
    path = tmp_path / 'bills.csv'
    pd.DataFrame({
        'total_bill': [10.0, 20.0, 30.0, 15.0, 25.0, 35.0, 12.0, 18.0],
        'tip': [1.5, 3.0, 4.2, 2.0, 3.9, 5.5, 1.0, 2.9],
        'day': ['Sat', 'Sat', 'Sat', 'Sun', 'Sun', 'Sun', 'Fri', 'Fri'],
    }).to_csv(path, index=False)
    return path


def write_csv_config(tmp_path, csv_path):
    config_path = tmp_path / 'bills.yaml'
    config_path.write_text(
        "dataset:\n"
        f"  csv_path: {csv_path}\n"
        f"output_dir: {tmp_path / 'out'}\n"
    )
    return config_path


def test_csv_dataset_without_regression_block(run_analysis, tmp_path, bill_csv):
    config_path = write_csv_config(tmp_path, bill_csv)
    args = make_args(run_analysis, '--config', str(config_path), '--no-plots')

    assert run_analysis.main(args) == 0

    matrix = pd.read_csv(tmp_path / 'out' / 'correlation_matrix.csv', index_col=0)

    assert list(matrix.columns) == ['total_bill', 'tip']
    assert not (tmp_path / 'out' / 'regression_summaries.csv').exists()


def test_regression_column_overrides(run_analysis, tmp_path, bill_csv):
    config_path = write_csv_config(tmp_path, bill_csv)
    args = make_args(run_analysis, '--config', str(config_path), '--no-plots',
                     '--group-col', 'day', '--x-col', 'total_bill', '--y-col', 'tip')

    assert run_analysis.main(args) == 0

    summaries = pd.read_csv(tmp_path / 'out' / 'regression_summaries.csv')

    assert summaries['group'].tolist() == ['Sat', 'Sun', 'Fri']
    assert (summaries['n_observations'] == [3, 3, 2]).all()
