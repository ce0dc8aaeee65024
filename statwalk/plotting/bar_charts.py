"""Render grouped bar charts of a categorical field."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from ..errors import require_columns
from .style import (
    COLORS,
    FIG_SIZES,
    add_info_box,
    clean_axis,
    sanitize_filename,
    save_figure,
    set_axis_labels,
    set_global_style,
)

logger = logging.getLogger(__name__)

AGGREGATIONS = ("count", "sum", "mean", "median")


def aggregate_by_category(
    df: pd.DataFrame,
    category: str,
    measure: Optional[str] = None,
    agg: str = "count",
) -> pd.Series:
    """Aggregate a table into one value per category.

    Args:
        df (pandas.DataFrame): Input table.
        category (str): Column whose distinct values define the groups.
        measure (str, optional): Numeric column to aggregate. ``None`` counts
            rows per category and ignores ``agg``.
        agg (str, optional): One of ``"count"``, ``"sum"``, ``"mean"`` or
            ``"median"``. Defaults to ``"count"``.

    Returns:
        pandas.Series: Aggregated value per category, indexed by category and
        sorted in descending order (ties keep first-appearance order).

    Raises:
        NotFound: If ``category`` or ``measure`` is not a column.
        ValueError: If ``agg`` is unknown.
        TypeError: If ``measure`` is not numeric and ``agg`` is not
            ``"count"``.

    Note:
        Rows with a missing category are dropped. Categories without any
        observation are omitted, including unused levels of a pandas
        ``Categorical``.
    """
    if agg not in AGGREGATIONS:
        raise ValueError(f"Unknown aggregation {agg!r}. Expected one of {AGGREGATIONS}.")
    require_columns(df, [category] if measure is None else [category, measure])

    grouped = df.dropna(subset=[category]).groupby(category, sort=False, observed=True)
    if measure is None:
        values = grouped.size()
        name = "count"
    else:
        if agg != "count" and not pd.api.types.is_numeric_dtype(df[measure]):
            raise TypeError(f"Column {measure!r} must be numeric to compute {agg}.")
        values = grouped[measure].agg(agg)
        name = f"{agg}({measure})"

    values = values[values.index.notna()]
    order = np.argsort(-values.to_numpy(dtype=float), kind="stable")
    out = values.iloc[order]
    out.name = name
    if isinstance(out.index, pd.CategoricalIndex):
        out.index = out.index.astype(object)
    return out


def plot_category_counts(
    df: pd.DataFrame,
    category: str,
    measure: Optional[str] = None,
    agg: str = "count",
    output_dir: str = "output",
    filename: Optional[str] = None,
    formats: Sequence[str] = ("png",),
) -> str:
    """Render one bar per category and save the figure.

    Args:
        df (pandas.DataFrame): Input table.
        category (str): Categorical grouping column.
        measure (str, optional): Numeric column to aggregate; ``None`` counts
            rows.
        agg (str, optional): Aggregation, see :func:`aggregate_by_category`.
        output_dir (str, optional): Directory for the figure files.
        filename (str, optional): File stem. Defaults to
            ``"bar_<category>"``.
        formats (Sequence[str], optional): Figure formats to write in addition
            to PNG.

    Returns:
        str: Path to the saved PNG file.
    """
    values = aggregate_by_category(df, category, measure=measure, agg=agg)

    set_global_style()
    os.makedirs(output_dir, exist_ok=True)

    labels = [str(v) for v in values.index]
    fig, ax = plt.subplots(figsize=FIG_SIZES["wide" if len(labels) > 6 else "single"])
    try:
        if labels:
            positions = np.arange(len(labels))
            bars = ax.bar(
                positions, values.to_numpy(dtype=float), color=COLORS["bar"], width=0.7
            )
            ax.set_xticks(positions)
            if len(labels) > 4:
                ax.set_xticklabels(labels, rotation=30, ha="right")
            else:
                ax.set_xticklabels(labels)
            if measure is None:
                ax.bar_label(bars, fmt="%d", padding=2, fontsize=10)
        else:
            logger.warning(
                "Column %r has no observed categories; saving an empty chart", category
            )
            ax.set_xticks([])
            ax.text(
                0.5, 0.5, "No observations",
                transform=ax.transAxes, ha="center", va="center",
            )

        if measure is None:
            y_label = "Count"
        else:
            y_label = f"{agg.capitalize()} of {measure}"
        set_axis_labels(ax, x=category.replace("_", " "), y=y_label)
        clean_axis(ax, grid_axis="y", nbins_x=None)
        add_info_box(ax, f"n = {int(df[category].notna().sum())}")

        stem = filename or f"bar_{category}"
        png_path = save_figure(
            fig, os.path.join(output_dir, sanitize_filename(stem)), formats=formats
        )
    finally:
        plt.close(fig)

    logger.info("Saved bar chart of %s to %s", category, png_path)
    return str(png_path)
