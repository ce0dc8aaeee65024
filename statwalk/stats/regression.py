"""Provide the simple linear model used throughout the walkthrough.

This module supports:
- ordinary least-squares fits of one numeric response on one numeric
  predictor,
- coefficient confidence intervals, and
- fitted values with a confidence band for the mean response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pandas as pd
from scipy.stats import f as f_dist
from scipy.stats import t as student_t

from ..errors import InsufficientData, SingularDesign, require_columns

logger = logging.getLogger(__name__)

INTERCEPT = "(Intercept)"
MIN_POINTS = 3


def _readonly(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class LinearModel:
    """A fitted simple linear regression ``response ~ predictor``.

    Instances are created by :func:`fit_linear_model` and never modified
    afterwards; array fields are read-only.

    Attributes:
        formula: ``"<response> ~ <predictor>"``.
        response, predictor: Column names in ``data``.
        data: The table the model was fitted on.
        x, y: Complete-case predictor and response values used in the fit.
        params: ``[intercept, slope]``.
        bse: Standard errors of ``params``.
        tvalues, pvalues: t statistics and two-sided p-values of ``params``.
        fitted, residuals: Fitted values and residuals, aligned with ``x``.
        n: Number of observations used.
        df_model: Regression degrees of freedom (``p - 1``).
        df_resid: Residual degrees of freedom (``n - p``).
        ssr: Residual sum of squares.
        ess: Explained (regression) sum of squares.
        tss: Total sum of squares about the mean of ``y``.
        sigma: Residual standard error, ``sqrt(ssr / df_resid)``.
        rsquared, rsquared_adj: Coefficient of determination and its
            degrees-of-freedom adjusted form. NaN when ``y`` is constant.
        fvalue, f_pvalue: Overall F statistic and its p-value. NaN when ``y``
            is constant.
        cov_params: ``sigma**2 * (X'X)^-1``, 2 x 2.
    """

    formula: str
    response: str
    predictor: str
    data: pd.DataFrame = field(repr=False, compare=False)
    x: np.ndarray = field(repr=False, compare=False)
    y: np.ndarray = field(repr=False, compare=False)
    params: np.ndarray = field(compare=False)
    bse: np.ndarray = field(compare=False)
    tvalues: np.ndarray = field(repr=False, compare=False)
    pvalues: np.ndarray = field(repr=False, compare=False)
    fitted: np.ndarray = field(repr=False, compare=False)
    residuals: np.ndarray = field(repr=False, compare=False)
    cov_params: np.ndarray = field(repr=False, compare=False)
    n: int = 0
    df_model: int = 1
    df_resid: int = 0
    ssr: float = float("nan")
    ess: float = float("nan")
    tss: float = float("nan")
    sigma: float = float("nan")
    rsquared: float = float("nan")
    rsquared_adj: float = float("nan")
    fvalue: float = float("nan")
    f_pvalue: float = float("nan")

    @property
    def intercept(self) -> float:
        return float(self.params[0])

    @property
    def slope(self) -> float:
        return float(self.params[1])

    @property
    def terms(self) -> list:
        """Coefficient names: ``["(Intercept)", <predictor>]``."""
        return [INTERCEPT, self.predictor]

    def coefficients(self) -> pd.DataFrame:
        """Return the coefficient table (estimate, SE, t value, p-value)."""
        return pd.DataFrame(
            {
                "Estimate": self.params,
                "Std. Error": self.bse,
                "t value": self.tvalues,
                "Pr(>|t|)": self.pvalues,
            },
            index=pd.Index(self.terms, name="term"),
        )


def _numeric_column(df: pd.DataFrame, name: str) -> np.ndarray:
    col = df[name]
    if pd.api.types.is_bool_dtype(col) or not pd.api.types.is_numeric_dtype(col):
        raise TypeError(f"Column {name!r} must be numeric, got dtype {col.dtype}.")
    return col.to_numpy(dtype=float, na_value=np.nan)


def fit_linear_model(
    df: pd.DataFrame, response: str, predictor: str, min_points: int = MIN_POINTS
) -> LinearModel:
    """Fit ``response ~ predictor`` by ordinary least squares.

    Args:
        df (pandas.DataFrame): Table holding both columns.
        response (str): Numeric response column.
        predictor (str): Numeric predictor column.
        min_points (int, optional): Minimum number of complete observations
            required. Defaults to ``3``.

    Returns:
        LinearModel: The fitted model.

    Raises:
        NotFound: If either column is absent.
        TypeError: If either column is not numeric.
        InsufficientData: If fewer than ``min_points`` complete observations
            remain after dropping missing values.
        SingularDesign: If the predictor has zero variance.

    Note:
        Coefficients come from a QR decomposition of the design matrix
        ``[1, x - mean(x)]``, shifted back to an intercept at ``x = 0``, so
        predictors with a large offset (timestamps, years) stay well
        conditioned. Standard errors come from ``sigma**2 * (X'X)^-1``.
        Rows where either value is missing or non-finite are dropped before
        fitting.

    References:
        Ordinary least squares linear regression.
    """
    require_columns(df, [response, predictor])
    x_all = _numeric_column(df, predictor)
    y_all = _numeric_column(df, response)

    mask = np.isfinite(x_all) & np.isfinite(y_all)
    dropped = int(len(mask) - mask.sum())
    if dropped:
        logger.warning(
            "Dropped %d incomplete row(s) before fitting %s ~ %s",
            dropped, response, predictor,
        )
    x = x_all[mask]
    y = y_all[mask]
    n = int(len(x))
    if n < min_points:
        raise InsufficientData(
            f"Need at least {min_points} complete observations to fit "
            f"{response} ~ {predictor}, got {n}."
        )

    xbar = float(np.mean(x))
    xc = x - xbar
    ssxx = float(np.sum(xc**2))
    # Spread below rounding noise at the predictor's magnitude counts as none.
    tol = n * (8.0 * np.finfo(float).eps * float(np.max(np.abs(x)))) ** 2
    if ssxx <= tol:
        raise SingularDesign(
            f"Predictor {predictor!r} has no variation; {response} ~ {predictor} "
            "is undefined."
        )

    # Fit on the centered predictor, then shift the intercept back to x = 0.
    X = np.column_stack([np.ones(n), xc])
    q, r = np.linalg.qr(X)
    params_c = np.linalg.solve(r, q.T @ y)
    fitted = X @ params_c
    shift = np.array([[1.0, -xbar], [0.0, 1.0]])
    params = shift @ params_c

    resid = y - fitted
    p = X.shape[1]
    df_resid = n - p
    df_model = p - 1

    ssr = float(np.sum(resid**2))
    tss = float(np.sum((y - np.mean(y)) ** 2))
    ess = max(tss - ssr, 0.0)
    mse = ssr / df_resid
    sigma = float(np.sqrt(mse))

    r_inv = np.linalg.inv(r)
    cov = shift @ (mse * (r_inv @ r_inv.T)) @ shift.T
    bse = np.sqrt(np.diag(cov))

    with np.errstate(divide="ignore", invalid="ignore"):
        tvalues = np.where(bse > 0, params / bse, np.sign(params) * np.inf)
    tvalues = np.where(np.isnan(tvalues), 0.0, tvalues)
    pvalues = 2.0 * student_t.sf(np.abs(tvalues), df_resid)

    if tss > 0:
        rsquared = 1.0 - ssr / tss
        rsquared_adj = 1.0 - (1.0 - rsquared) * (n - 1) / df_resid
        fvalue = (ess / df_model) / mse if mse > 0 else np.inf
        f_pvalue = float(f_dist.sf(fvalue, df_model, df_resid))
    else:
        logger.warning("Response %r is constant; R^2 and F are undefined", response)
        rsquared = rsquared_adj = fvalue = f_pvalue = np.nan

    logger.info(
        "Fitted %s ~ %s on %d observations: intercept=%.6g slope=%.6g R^2=%.4f",
        response, predictor, n, params[0], params[1], rsquared,
    )

    return LinearModel(
        formula=f"{response} ~ {predictor}",
        response=response,
        predictor=predictor,
        data=df,
        x=_readonly(x),
        y=_readonly(y),
        params=_readonly(params),
        bse=_readonly(bse),
        tvalues=_readonly(tvalues),
        pvalues=_readonly(pvalues),
        fitted=_readonly(fitted),
        residuals=_readonly(resid),
        cov_params=_readonly(cov),
        n=n,
        df_model=df_model,
        df_resid=df_resid,
        ssr=ssr,
        ess=float(ess),
        tss=tss,
        sigma=sigma,
        rsquared=float(rsquared),
        rsquared_adj=float(rsquared_adj),
        fvalue=float(fvalue),
        f_pvalue=float(f_pvalue),
    )


def _check_level(level: float) -> float:
    level = float(level)
    if not 0.0 < level < 1.0:
        raise ValueError(f"Confidence level must be in (0, 1), got {level!r}")
    return level


def _percent_label(fraction: float) -> str:
    return f"{100.0 * fraction:g} %"


def confidence_intervals(model: LinearModel, level: float = 0.95) -> pd.DataFrame:
    """Compute t-based confidence intervals for the model coefficients.

    Args:
        model (LinearModel): Fitted model.
        level (float, optional): Confidence level in ``(0, 1)``. Defaults to
            ``0.95``.

    Returns:
        pandas.DataFrame: One row per term, with lower and upper bound columns
        labelled by their tail percentages (``"2.5 %"``, ``"97.5 %"`` at the
        default level).

    Raises:
        ValueError: If ``level`` is outside ``(0, 1)``.

    Note:
        Interval = estimate +/- t(1 - alpha/2, n - p) * SE. The interval always
        contains the estimate; on noiseless data its width is zero.
    """
    level = _check_level(level)
    alpha = 1.0 - level
    t_crit = float(student_t.ppf(1.0 - alpha / 2.0, model.df_resid))
    half = t_crit * model.bse
    return pd.DataFrame(
        {
            _percent_label(alpha / 2.0): model.params - half,
            _percent_label(1.0 - alpha / 2.0): model.params + half,
        },
        index=pd.Index(model.terms, name="term"),
    )


def predict(
    model: LinearModel,
    x=None,
    interval: Optional[str] = None,
    level: float = 0.95,
) -> pd.DataFrame:
    """Evaluate the fitted line, optionally with a mean-response band.

    Args:
        model (LinearModel): Fitted model.
        x (array-like, optional): Predictor values. Defaults to the values the
            model was fitted on.
        interval (str, optional): ``None`` for fitted values only or
            ``"confidence"`` to add ``lwr``/``upr`` bounds for the mean
            response.
        level (float, optional): Confidence level of the band.

    Returns:
        pandas.DataFrame: Columns ``x``, ``fit`` and, with an interval,
        ``lwr`` and ``upr``.

    Raises:
        ValueError: If ``interval`` is not supported or ``level`` is invalid.
    """
    x_new = model.x if x is None else np.asarray(x, dtype=float).ravel()
    xbar = float(np.mean(model.x))
    dx = x_new - xbar
    fit = float(np.mean(model.y)) + model.slope * dx
    out = pd.DataFrame({"x": x_new, "fit": fit})
    if interval is None:
        return out
    if interval != "confidence":
        raise ValueError(f"Unsupported interval {interval!r}; use 'confidence'.")

    level = _check_level(level)
    t_crit = float(student_t.ppf(0.5 + level / 2.0, model.df_resid))
    ssxx = float(np.sum((model.x - xbar) ** 2))
    var_mean = model.sigma**2 * (1.0 / model.n + dx**2 / ssxx)
    half = t_crit * np.sqrt(var_mean)
    out["lwr"] = fit - half
    out["upr"] = fit + half
    return out
