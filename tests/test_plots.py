"""
Figure Generation Tests

Runs every plotting function on the iris dataset with the Agg backend.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from corrmap.analysis import (
    GroupedRegressionSummarizer, compute_correlation_matrix, top_correlations
)
from corrmap.data_processing import load_iris_dataset
from corrmap.exceptions import UnknownGroupError
from corrmap.visualization import (
    plot_correlation_heatmap, plot_group_filter, plot_grouped_regression,
    plot_scatter_matrix, plot_top_correlations
)


@pytest.fixture
def iris():
    return load_iris_dataset()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def legend_texts(ax):
    return [text.get_text() for text in ax.get_legend().get_texts()]


def test_correlation_heatmap(iris, tmp_path):
    corr = compute_correlation_matrix(iris)
    save_path = tmp_path / 'heatmap.png'

    fig, ax = plot_correlation_heatmap(corr, title='Iris', save_path=save_path)

    assert ax.get_title() == 'Iris'
    assert save_path.exists()


def test_scatter_matrix(iris, tmp_path):
    save_path = tmp_path / 'scatter.png'

    fig, axes = plot_scatter_matrix(iris, hue='species', save_path=save_path)

    assert axes.shape == (4, 4)
    assert save_path.exists()


def test_scatter_matrix_subset(iris):
    fig, axes = plot_scatter_matrix(iris, columns=['sepal_length', 'petal_length'])

    assert axes.shape == (2, 2)


def test_grouped_regression(iris, tmp_path):
    summaries = GroupedRegressionSummarizer(
        iris, 'species', 'sepal_length', 'petal_length'
    ).summarize_all()
    save_path = tmp_path / 'regression.png'

    fig, ax = plot_grouped_regression(iris, summaries, 'species', 'sepal_length',
                                      'petal_length', save_path=save_path)

    assert legend_texts(ax) == [s.legend_label for s in summaries]
    assert len(ax.get_lines()) == 3
    assert save_path.exists()


def test_group_filter(iris):
    fig, ax = plot_group_filter(iris, 'species', 'sepal_length', 'petal_length',
                                selected_groups=['virginica', 'setosa'])

    labels = legend_texts(ax)

    assert len(labels) == 2
    assert labels[0].startswith('setosa (r = ')
    assert labels[1].startswith('virginica (r = ')


def test_group_filter_unknown_group(iris):
    with pytest.raises(UnknownGroupError):
        plot_group_filter(iris, 'species', 'sepal_length', 'petal_length',
                          selected_groups=['rose'])


def test_top_correlations_plot(iris):
    top = top_correlations(compute_correlation_matrix(iris), k=3)

    fig, ax = plot_top_correlations(top)

    assert len(ax.patches) == 3
    assert ax.get_xticklabels()[0].get_text() == f"{top.loc[0, 'attr1']} / {top.loc[0, 'attr2']}"
