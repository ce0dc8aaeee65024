"""Write walkthrough result tables and the text report to disk.

This module is the output boundary between in-memory results and files in
the output directory.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from .reporting import glance, tidy
from .stats.descriptive import summary_frame

logger = logging.getLogger(__name__)


def save_results(results: Dict[str, Any], output_dir: str = "output") -> Dict[str, str]:
    """Save summary, coefficient, interval and ANOVA tables plus the report.

    Args:
        results (dict): Output of :func:`statwalk.walkthrough.run_walkthrough`
            with keys ``summary``, ``model``, ``confidence_intervals``,
            ``anova`` and ``report``. Missing keys are skipped.
        output_dir (str): Directory where files are written.

    Returns:
        dict[str, str]: Mapping of artifact name to written path.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths: Dict[str, str] = {}

    if "summary" in results:
        path = os.path.join(output_dir, "summary.csv")
        summary_frame(results["summary"]).to_csv(path, index=False)
        paths["summary"] = path

    if "model" in results:
        path = os.path.join(output_dir, "coefficients.csv")
        tidy(results["model"]).to_csv(path, index=False)
        paths["coefficients"] = path

        path = os.path.join(output_dir, "model_fit.csv")
        glance(results["model"]).to_csv(path, index=False)
        paths["model_fit"] = path

    if "confidence_intervals" in results:
        path = os.path.join(output_dir, "confidence_intervals.csv")
        results["confidence_intervals"].to_csv(path)
        paths["confidence_intervals"] = path

    if "anova" in results:
        path = os.path.join(output_dir, "anova.csv")
        results["anova"].to_csv(path)
        paths["anova"] = path

    if "report" in results:
        path = os.path.join(output_dir, "report.txt")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(results["report"])
            fh.write("\n")
        paths["report"] = path

    for name, path in paths.items():
        logger.info("Saved %s to %s", name, path)
    return paths
