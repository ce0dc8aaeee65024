"""
Statistical routines for the walkthrough.

This subpackage provides the numerical steps of the walkthrough. All
functions operate on pandas tables and numpy arrays; nothing here plots or
prints.

Modules:
    descriptive:
        Per-column summary statistics (counts, quartiles, means, value
        frequencies).

    regression:
        Simple linear regression by ordinary least squares, coefficient
        confidence intervals, and fitted values with a mean-response band.

    anova:
        Analysis-of-variance table for a fitted model.

Design Principle:
    This subpackage has no dependencies on plotting/ or reporting modules.
"""

from .anova import anova_table
from .descriptive import summarize_column, summarize_table, summary_frame
from .regression import LinearModel, confidence_intervals, fit_linear_model, predict

__all__ = [
    "anova_table",
    "summarize_column",
    "summarize_table",
    "summary_frame",
    "LinearModel",
    "confidence_intervals",
    "fit_linear_model",
    "predict",
]
