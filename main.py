#!/usr/bin/env python3
"""
Main script for running the statistics walkthrough.
"""

# Walkthrough overview (README-style):
# 1) Load the bundled 2015 homicide sample and summarize every column.
# 2) Bar chart of incidents per location category.
# 3) Fit mpg ~ hp on the vehicle table, print the model summary.
# 4) 95% confidence intervals, scatterplot with the fitted line, ANOVA.
# 5) Export tables, figures and report.txt to the output directory.

import argparse
import logging
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from statwalk.config import DEFAULT_LOG_FILE, WalkthroughConfig
from statwalk.errors import StatwalkError
from statwalk.walkthrough import run_walkthrough


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for the walkthrough."""
    defaults = WalkthroughConfig()
    parser = argparse.ArgumentParser(
        description="Summary statistics, bar chart, linear model, intervals and ANOVA."
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help=f"Output directory (default: {defaults.output_dir}).",
    )
    parser.add_argument(
        "--category",
        default=None,
        help=f"Grouping column for the bar chart (default: {defaults.category_column}).",
    )
    parser.add_argument(
        "--measure",
        default=None,
        help="Numeric column aggregated per category (default: count rows).",
    )
    parser.add_argument(
        "--agg",
        default=None,
        choices=["count", "sum", "mean", "median"],
        help="Aggregation applied to --measure.",
    )
    parser.add_argument(
        "--response",
        default=None,
        help=f"Response column of the linear model (default: {defaults.response}).",
    )
    parser.add_argument(
        "--predictor",
        default=None,
        help=f"Predictor column of the linear model (default: {defaults.predictor}).",
    )
    parser.add_argument(
        "--level",
        type=float,
        default=None,
        help=f"Confidence level (default: {defaults.confidence_level}).",
    )
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help=f"Log file path (default: {DEFAULT_LOG_FILE}).",
    )
    return parser


def main(argv=None):
    """Main execution function."""
    args = _build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(args.log_file, mode="w"),
        ],
    )

    start_time = time.time()
    logging.info("Initializing statistics walkthrough")

    try:
        config = WalkthroughConfig(log_file=args.log_file).with_overrides(
            output_dir=args.output_dir,
            category_column=args.category,
            measure_column=args.measure,
            agg=args.agg,
            response=args.response,
            predictor=args.predictor,
            confidence_level=args.level,
        )
    except ValueError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    try:
        results = run_walkthrough(config)
    except (StatwalkError, TypeError, ValueError) as exc:
        logging.error("Walkthrough aborted: %s", exc)
        return 1

    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    logging.info("Walkthrough completed successfully")
    logging.info("Generated output files:")
    logging.info("  - Bar chart: %s", results["bar_chart"])
    logging.info("  - Scatterplot: %s", results["scatter_plot"])
    for name, path in results["files"].items():
        logging.info("  - %s: %s", name, path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
