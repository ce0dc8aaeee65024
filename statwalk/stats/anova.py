"""Analysis-of-variance table for a fitted linear model."""

from __future__ import annotations

import numpy as np
import pandas as pd
from scipy.stats import f as f_dist

from .regression import LinearModel

ANOVA_COLUMNS = ["Df", "Sum Sq", "Mean Sq", "F value", "Pr(>F)"]
RESIDUAL_ROW = "Residuals"


def anova_table(model: LinearModel) -> pd.DataFrame:
    """Decompose the model's variance into regression and residual parts.

    Args:
        model (LinearModel): Fitted model.

    Returns:
        pandas.DataFrame: Rows ``<predictor>`` and ``"Residuals"`` with
        columns ``Df``, ``Sum Sq``, ``Mean Sq``, ``F value`` and ``Pr(>F)``.
        The residual row has NaN F value and p-value.

    Note:
        Df are ``p - 1`` and ``n - p`` and sum to ``n - 1``; the sums of
        squares add up to the total sum of squares. With a single predictor
        the F value equals the squared slope t statistic.

    References:
        Sequential (type I) analysis of variance for linear models.
    """
    ms_reg = model.ess / model.df_model
    ms_res = model.ssr / model.df_resid
    if ms_res > 0:
        f_value = ms_reg / ms_res
    else:
        f_value = np.inf if ms_reg > 0 else np.nan
    p_value = np.nan
    if not np.isnan(f_value):
        p_value = float(f_dist.sf(f_value, model.df_model, model.df_resid))

    table = pd.DataFrame(
        [
            [model.df_model, model.ess, ms_reg, f_value, p_value],
            [model.df_resid, model.ssr, ms_res, np.nan, np.nan],
        ],
        index=pd.Index([model.predictor, RESIDUAL_ROW], name="term"),
        columns=ANOVA_COLUMNS,
    )
    table["Df"] = table["Df"].astype(int)
    table.attrs["response"] = model.response
    return table
