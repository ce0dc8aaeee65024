"""Per-column descriptive statistics for a table, in the spirit of R's ``summary()``."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import pandas as pd

DEFAULT_MAX_LEVELS = 6


def _column_kind(series: pd.Series) -> str:
    if pd.api.types.is_bool_dtype(series):
        return "categorical"
    if pd.api.types.is_numeric_dtype(series):
        return "numeric"
    if pd.api.types.is_datetime64_any_dtype(series):
        return "datetime"
    return "categorical"


def _numeric_summary(values: pd.Series) -> Dict[str, Any]:
    clean = values.dropna().to_numpy(dtype=float)
    q1, median, q3 = np.percentile(clean, [25, 50, 75])
    return {
        "min": float(np.min(clean)),
        "q1": float(q1),
        "median": float(median),
        "mean": float(np.mean(clean)),
        "q3": float(q3),
        "max": float(np.max(clean)),
    }


def _datetime_summary(values: pd.Series) -> Dict[str, Any]:
    clean = values.dropna()
    return {
        "min": clean.min(),
        "median": clean.median(),
        "max": clean.max(),
    }


def _categorical_summary(values: pd.Series, max_levels: int) -> Dict[str, Any]:
    counts = values.dropna().astype(str).value_counts()
    top = counts.head(max_levels)
    return {
        "n_unique": int(len(counts)),
        "top": {str(k): int(v) for k, v in top.items()},
        "other": int(counts.iloc[max_levels:].sum()),
    }


def summarize_column(series: pd.Series, max_levels: int = DEFAULT_MAX_LEVELS) -> Dict[str, Any]:
    """Summarize one column with statistics suited to its type.

    Args:
        series (pandas.Series): Column values.
        max_levels (int, optional): Most-frequent values listed for
            categorical columns. Defaults to ``6``.

    Returns:
        dict[str, Any]: Always contains ``kind`` (``"numeric"``,
        ``"datetime"`` or ``"categorical"``), ``count`` (non-missing values),
        ``missing`` and ``empty``. Numeric columns add ``min``, ``q1``,
        ``median``, ``mean``, ``q3``, ``max``; datetime columns add ``min``,
        ``median``, ``max``; categorical columns add ``n_unique``, ``top``
        (value -> count) and ``other`` (rows outside ``top``).

    Note:
        A column with no non-missing values is reported with ``empty=True``
        and no statistics rather than raising.
    """
    kind = _column_kind(series)
    count = int(series.notna().sum())
    out: Dict[str, Any] = {
        "kind": kind,
        "count": count,
        "missing": int(len(series) - count),
        "empty": count == 0,
    }
    if count == 0:
        return out

    if kind == "numeric":
        out.update(_numeric_summary(series))
    elif kind == "datetime":
        out.update(_datetime_summary(series))
    else:
        out.update(_categorical_summary(series, max_levels))
    return out


def summarize_table(df: pd.DataFrame, max_levels: int = DEFAULT_MAX_LEVELS) -> Dict[str, Any]:
    """Compute descriptive statistics for every column of a table.

    Args:
        df (pandas.DataFrame): Table to summarize.
        max_levels (int, optional): Passed to :func:`summarize_column`.

    Returns:
        dict[str, Any]: ``n_rows`` (equal to ``len(df)``), ``n_columns`` and
        ``columns`` mapping each column name to its summary, in table order.
    """
    return {
        "n_rows": int(len(df)),
        "n_columns": int(df.shape[1]),
        "columns": {
            str(col): summarize_column(df[col], max_levels=max_levels)
            for col in df.columns
        },
    }


def summary_frame(summary: Dict[str, Any]) -> pd.DataFrame:
    """Flatten a :func:`summarize_table` result into one row per column.

    Categorical ``top`` values are rendered as ``"value (count)"`` joined by
    ``"; "`` so the frame can be exported to CSV.
    """
    rows = []
    for name, stats in summary["columns"].items():
        row = {"column": name}
        for key, value in stats.items():
            if key == "top":
                value = "; ".join(f"{k} ({v})" for k, v in value.items())
            row[key] = value
        rows.append(row)
    columns = [
        "column", "kind", "count", "missing", "empty",
        "min", "q1", "median", "mean", "q3", "max",
        "n_unique", "top", "other",
    ]
    return pd.DataFrame.from_records(rows).reindex(columns=columns)
