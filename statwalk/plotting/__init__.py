"""
Plotting utilities for the walkthrough.

All plotting functions accept precomputed tables or fitted models and do not
perform statistical calculations of their own beyond evaluating the fitted
line.

Modules:
    bar_charts:
        One bar per category of a grouping column, height = row count or an
        aggregate of a numeric measure.

    regression_plots:
        Predictor vs. response scatterplot with the model's fitted line and
        an optional confidence band for the mean response.

    style:
        Shared rcParams, axis helpers and multi-format save.
"""

from .bar_charts import aggregate_by_category, plot_category_counts
from .regression_plots import plot_scatter_with_fit
from .style import save_figure, set_global_style

__all__ = [
    "aggregate_by_category",
    "plot_category_counts",
    "plot_scatter_with_fit",
    "save_figure",
    "set_global_style",
]
