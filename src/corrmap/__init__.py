"""
Grouped Correlation & Regression Analysis Package

This package provides tools for exploratory analysis of tabular datasets:
pairwise correlation matrices, heatmap and scatter-matrix figures, and
per-group linear regression summaries with Pearson coefficients.
"""

__version__ = "1.0.0"
__author__ = "Serhat Tadik"
