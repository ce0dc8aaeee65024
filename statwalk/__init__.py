"""
A small statistical-modeling walkthrough.

Loads a bundled crime-incident table, summarizes it, charts incidents per
location category, then fits and inspects a simple linear model on the
classic vehicle table.

Modules:
    - data_loading: Bundled datasets, CSV loading, census geography codes.
    - stats: Summary statistics, OLS fit, confidence intervals, ANOVA.
    - plotting: Bar chart and scatterplot-with-fit figures.
    - reporting: Plain-text reports and tidy model tables.
    - walkthrough: Runs every step in order.
"""

__version__ = "1.0.0"

from .config import WalkthroughConfig
from .data_loading import (
    geoid,
    list_datasets,
    load_dataset,
    load_table,
    normalize_fips_codes,
    validate_geographic_hierarchy,
)
from .errors import InsufficientData, NotFound, SingularDesign, StatwalkError
from .plotting import aggregate_by_category, plot_category_counts, plot_scatter_with_fit
from .reporting import glance, tidy
from .stats import (
    LinearModel,
    anova_table,
    confidence_intervals,
    fit_linear_model,
    predict,
    summarize_table,
)
from .walkthrough import run_walkthrough

__all__ = [
    # Configuration and errors
    "WalkthroughConfig",
    "StatwalkError",
    "NotFound",
    "InsufficientData",
    "SingularDesign",
    # Data loading
    "list_datasets",
    "load_dataset",
    "load_table",
    "normalize_fips_codes",
    "validate_geographic_hierarchy",
    "geoid",
    # Statistics
    "summarize_table",
    "LinearModel",
    "fit_linear_model",
    "confidence_intervals",
    "predict",
    "anova_table",
    "tidy",
    "glance",
    # Plotting
    "aggregate_by_category",
    "plot_category_counts",
    "plot_scatter_with_fit",
    # Walkthrough
    "run_walkthrough",
]
