"""
Runs the workshop walkthrough from dataset loading to the ANOVA table.
"""

# Steps, each run exactly once and in order:
# 1) Load the incident table.
# 2) Summarize every column.
# 3) Bar chart of incidents per category.
# 4) Fit response ~ predictor on the vehicle table.
# 5) Confidence intervals for the coefficients.
# 6) Scatterplot with the fitted line.
# 7) ANOVA table.
# The fitted model from step 4 is shared read-only by steps 5-7.

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from .config import WalkthroughConfig
from .data_loading import load_dataset
from .output import save_results
from .plotting import aggregate_by_category, plot_category_counts, plot_scatter_with_fit
from .reporting import (
    format_anova_table,
    format_confidence_intervals,
    format_model_summary,
    format_table_summary,
)
from .stats import anova_table, confidence_intervals, fit_linear_model, summarize_table

logger = logging.getLogger(__name__)


@contextmanager
def _timed(step):
    start = time.time()
    logger.info("Step: %s", step)
    yield
    logger.info("%s completed in %.2f seconds", step, time.time() - start)


def run_walkthrough(config: Optional[WalkthroughConfig] = None, echo: bool = True) -> Dict[str, Any]:
    """Run all walkthrough steps and return their artifacts.

    Args:
        config (WalkthroughConfig, optional): Settings; defaults to
            ``WalkthroughConfig()``.
        echo (bool, optional): Print each text report to stdout as it is
            produced. Defaults to ``True``.

    Returns:
        dict[str, Any]: ``incidents`` and ``vehicles`` (tables), ``summary``,
        ``category_values`` (aggregated bar heights), ``bar_chart`` (PNG
        path), ``model``, ``confidence_intervals``, ``scatter_plot`` (PNG
        path), ``anova``, ``report`` (combined text) and ``files`` (paths of
        saved tables).

    Raises:
        NotFound, InsufficientData, SingularDesign: From the failing step; the
        remaining steps are not run.
    """
    config = config or WalkthroughConfig()
    results: Dict[str, Any] = {}
    sections = []

    def emit(text):
        sections.append(text)
        if echo:
            print(text)
            print()

    with _timed("load incident data"):
        incidents = load_dataset(config.incident_dataset)
        results["incidents"] = incidents

    with _timed("summarize incident data"):
        summary = summarize_table(incidents)
        results["summary"] = summary
        emit(format_table_summary(summary, title=f"Summary of {config.incident_dataset}"))

    with _timed("bar chart"):
        results["category_values"] = aggregate_by_category(
            incidents, config.category_column, measure=config.measure_column, agg=config.agg
        )
        results["bar_chart"] = plot_category_counts(
            incidents,
            config.category_column,
            measure=config.measure_column,
            agg=config.agg,
            output_dir=config.output_dir,
            formats=config.figure_formats,
        )

    with _timed("fit linear model"):
        vehicles = load_dataset(config.vehicle_dataset)
        results["vehicles"] = vehicles
        model = fit_linear_model(vehicles, config.response, config.predictor)
        results["model"] = model
        emit(format_model_summary(model))

    with _timed("confidence intervals"):
        ci = confidence_intervals(model, level=config.confidence_level)
        results["confidence_intervals"] = ci
        emit(format_confidence_intervals(ci))

    with _timed("scatterplot with fit"):
        results["scatter_plot"] = plot_scatter_with_fit(
            model,
            output_dir=config.output_dir,
            level=config.confidence_level,
            formats=config.figure_formats,
        )

    with _timed("ANOVA"):
        table = anova_table(model)
        results["anova"] = table
        emit(format_anova_table(table))

    results["report"] = "\n\n".join(sections)
    results["files"] = save_results(results, config.output_dir)
    return results
