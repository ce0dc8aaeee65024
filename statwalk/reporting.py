"""Format summaries and model tables as plain-text reports.

This module is used after the numerical steps to render console/report text
and tidy result tables. Nothing here computes statistics beyond reading them
off a fitted model.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import pandas as pd

from .stats.regression import LinearModel

SIGNIF_CODES = ((0.001, "***"), (0.01, "**"), (0.05, "*"), (0.1, "."))


def format_estimate(value: float, error: float, fallback_digits: int = 6) -> str:
    """Format an estimate to the decimal places implied by its standard error.

    The decimals are those that show the standard error to two significant
    figures, so ``format_estimate(30.0989, 1.634)`` gives ``"30.1"`` and
    ``format_estimate(-0.06823, 0.01012)`` gives ``"-0.068"``.

    Args:
        value (float): Point estimate.
        error (float): Its standard error.
        fallback_digits (int, optional): Significant digits used when the
            error is not usable, including one below floating-point noise at
            the magnitude of ``value`` (for example on noiseless data).

    Returns:
        str: The formatted estimate.
    """
    value = float(value)
    se = abs(float(error))
    noise = np.sqrt(np.finfo(float).eps) * max(abs(value), 1.0)
    if not np.isfinite(se) or se <= noise:
        return f"{value:.{fallback_digits}g}"
    ndigits = max(0, 1 - int(np.floor(np.log10(se))))
    return f"{value:.{ndigits}f}"


def significance_stars(p_value: float) -> str:
    """Return the R-style significance code for a p-value."""
    if not np.isfinite(p_value):
        return ""
    for cutoff, stars in SIGNIF_CODES:
        if p_value < cutoff:
            return stars
    return ""


def _format_p(p_value: float) -> str:
    if not np.isfinite(p_value):
        return ""
    if p_value < 2e-16:
        return "<2e-16"
    return f"{p_value:.3g}"


def tidy(model: LinearModel) -> pd.DataFrame:
    """Return one row per coefficient: term, estimate, std_error, statistic, p_value."""
    coefs = model.coefficients()
    return pd.DataFrame(
        {
            "term": coefs.index.to_list(),
            "estimate": coefs["Estimate"].to_numpy(),
            "std_error": coefs["Std. Error"].to_numpy(),
            "statistic": coefs["t value"].to_numpy(),
            "p_value": coefs["Pr(>|t|)"].to_numpy(),
        }
    )


def glance(model: LinearModel) -> pd.DataFrame:
    """Return a one-row table of model-level fit statistics."""
    return pd.DataFrame(
        [
            {
                "formula": model.formula,
                "r_squared": model.rsquared,
                "adj_r_squared": model.rsquared_adj,
                "sigma": model.sigma,
                "statistic": model.fvalue,
                "p_value": model.f_pvalue,
                "df": model.df_model,
                "df_residual": model.df_resid,
                "nobs": model.n,
            }
        ]
    )


def _fmt_stat(value: Any) -> str:
    if isinstance(value, (float, np.floating)):
        return f"{value:.4g}"
    if isinstance(value, pd.Timestamp):
        return value.strftime("%Y-%m-%d %H:%M")
    return str(value)


def format_table_summary(summary: Dict[str, Any], title: str = "") -> str:
    """Render a :func:`statwalk.stats.summarize_table` result as text.

    Each column gets one block: quartiles and mean for numeric columns,
    range for datetimes, most frequent values for everything else.
    """
    lines = []
    if title:
        lines.append(title)
    lines.append(f"{summary['n_rows']} rows x {summary['n_columns']} columns")
    for name, stats in summary["columns"].items():
        head = f"  {name} [{stats['kind']}]"
        if stats["missing"]:
            head += f"  (missing: {stats['missing']})"
        lines.append(head)
        if stats["empty"]:
            lines.append("      (empty)")
            continue
        if stats["kind"] == "numeric":
            keys = [("Min.", "min"), ("1st Qu.", "q1"), ("Median", "median"),
                    ("Mean", "mean"), ("3rd Qu.", "q3"), ("Max.", "max")]
        elif stats["kind"] == "datetime":
            keys = [("Min.", "min"), ("Median", "median"), ("Max.", "max")]
        else:
            keys = []
        if keys:
            lines.append(
                "      " + "  ".join(f"{label}: {_fmt_stat(stats[k])}" for label, k in keys)
            )
        else:
            parts = [f"{value}: {count}" for value, count in stats["top"].items()]
            if stats["other"]:
                parts.append(f"(Other): {stats['other']}")
            lines.append(f"      {stats['n_unique']} distinct; " + ", ".join(parts))
    return "\n".join(lines)


def format_model_summary(model: LinearModel) -> str:
    """Render a regression summary in the layout of R's ``summary(lm(...))``."""
    q = np.percentile(model.residuals, [0, 25, 50, 75, 100])
    lines = [
        f"Call: lm({model.formula})",
        "",
        "Residuals:",
        "    Min      1Q  Median      3Q     Max",
        " ".join(f"{v:7.4g}" for v in q),
        "",
        "Coefficients:",
        f"{'':14s}{'Estimate':>12s}{'Std. Error':>12s}{'t value':>10s}{'Pr(>|t|)':>12s}",
    ]
    for term, est, se, t_val, p_val in zip(
        model.terms, model.params, model.bse, model.tvalues, model.pvalues
    ):
        lines.append(
            f"{term:14s}{format_estimate(est, se):>12s}{se:>12.4g}{t_val:>10.3f}"
            f"{_format_p(p_val):>12s} {significance_stars(p_val)}"
        )
    lines += [
        "---",
        "Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1",
        "",
        f"Residual standard error: {model.sigma:.4g} on {model.df_resid} degrees of freedom",
        f"Multiple R-squared: {model.rsquared:.4f},\tAdjusted R-squared: {model.rsquared_adj:.4f}",
        f"F-statistic: {model.fvalue:.4g} on {model.df_model} and {model.df_resid} DF,  "
        f"p-value: {_format_p(model.f_pvalue)}",
    ]
    return "\n".join(lines)


def format_confidence_intervals(ci: pd.DataFrame) -> str:
    """Render a confidence-interval table as fixed-width text."""
    return ci.to_string(float_format=lambda v: f"{v:.6g}")


def format_anova_table(table: pd.DataFrame) -> str:
    """Render an ANOVA table with R-style p-values and significance codes."""
    shown = table.copy()
    stars = shown["Pr(>F)"].map(significance_stars)
    shown["Pr(>F)"] = shown["Pr(>F)"].map(_format_p)
    shown["F value"] = shown["F value"].map(lambda v: "" if np.isnan(v) else f"{v:.4g}")
    shown[""] = stars
    return "Analysis of Variance Table\n\nResponse: {}\n{}".format(
        table.attrs.get("response", ""),
        shown.to_string(float_format=lambda v: f"{v:.5g}"),
    )
