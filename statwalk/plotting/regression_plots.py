"""Render the predictor/response scatterplot with the fitted OLS line.

The line is always evaluated from the model's own intercept and slope so the
figure shows exactly the fit reported in the coefficient and ANOVA tables.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..stats.regression import LinearModel, predict
from .style import (
    COLORS,
    FIG_SIZES,
    STYLE,
    add_info_box,
    clean_axis,
    sanitize_filename,
    save_figure,
    set_axis_labels,
    set_global_style,
)

logger = logging.getLogger(__name__)


def plot_scatter_with_fit(
    model: LinearModel,
    output_dir: str = "output",
    band: bool = True,
    level: float = 0.95,
    filename: Optional[str] = None,
    formats: Sequence[str] = ("png",),
) -> str:
    """Plot the model's data points with its fitted regression line.

    Args:
        model (LinearModel): Fitted model; supplies the points and the line.
        output_dir (str, optional): Directory for the figure files.
        band (bool, optional): Shade the confidence band for the mean
            response. Defaults to ``True``.
        level (float, optional): Confidence level of the band.
        filename (str, optional): File stem. Defaults to
            ``"scatter_<response>_vs_<predictor>"``.
        formats (Sequence[str], optional): Figure formats to write in addition
            to PNG.

    Returns:
        str: Path to the saved PNG file.

    Note:
        The plotted line is ``intercept + slope * x`` over the observed range
        of ``x``; no smoother is refitted.
    """
    set_global_style()
    os.makedirs(output_dir, exist_ok=True)

    x = np.asarray(model.x, dtype=float)
    y = np.asarray(model.y, dtype=float)
    xgrid = np.linspace(float(np.min(x)), float(np.max(x)), 200)
    line = predict(model, xgrid, interval="confidence" if band else None, level=level)

    fig, ax = plt.subplots(figsize=FIG_SIZES["single"])
    try:
        if band:
            ax.fill_between(
                line["x"],
                line["lwr"],
                line["upr"],
                color=COLORS["band"],
                alpha=STYLE.ALPHA_BAND * 4,
                linewidth=0,
                label=f"{100 * level:g}% CI (mean)",
            )
        ax.scatter(
            x,
            y,
            s=28,
            color=COLORS["points"],
            alpha=STYLE.ALPHA_POINTS,
            zorder=3,
            label="Observations",
        )
        ax.plot(
            line["x"],
            line["fit"],
            color=COLORS["fit"],
            linewidth=STYLE.LINEWIDTH,
            zorder=4,
            label="OLS fit",
        )

        set_axis_labels(ax, x=model.predictor, y=model.response)
        clean_axis(ax, grid_axis="both")
        add_info_box(
            ax,
            f"$\\hat{{y}} = {model.intercept:.4g} {'+' if model.slope >= 0 else '-'} "
            f"{abs(model.slope):.4g}\\,x$\n$R^2 = {model.rsquared:.3f}$, n = {model.n}",
            loc="upper right",
        )
        ax.legend(loc="lower left")

        stem = filename or f"scatter_{model.response}_vs_{model.predictor}"
        png_path = save_figure(
            fig, os.path.join(output_dir, sanitize_filename(stem)), formats=formats
        )
    finally:
        plt.close(fig)

    logger.info("Saved scatterplot for %s to %s", model.formula, png_path)
    return str(png_path)
