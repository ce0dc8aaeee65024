"""Walkthrough configuration."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

from .schema import INCIDENT, VEHICLE

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_LOG_FILE = "walkthrough.log"


@dataclass(frozen=True)
class WalkthroughConfig:
    """Settings for one run of the walkthrough.

    Attributes:
        incident_dataset: Bundled dataset identifier for the incident table.
        category_column: Categorical column grouped in the bar chart.
        measure_column: Numeric column aggregated per category. ``None``
            counts rows instead.
        agg: Aggregation applied to ``measure_column``.
        vehicle_dataset: Bundled dataset identifier for the regression table.
        response: Response column of the linear model.
        predictor: Predictor column of the linear model.
        confidence_level: Level for coefficient intervals and the plotted
            mean-response band.
        output_dir: Directory receiving figures, CSV tables and the report.
        figure_formats: File formats written for each figure.
        log_file: Log file written by ``main.py``.
    """

    incident_dataset: str = "homicides15"
    category_column: str = INCIDENT.location_category
    measure_column: Optional[str] = None
    agg: str = "count"
    vehicle_dataset: str = "mtcars"
    response: str = VEHICLE.mpg
    predictor: str = VEHICLE.hp
    confidence_level: float = 0.95
    output_dir: str = DEFAULT_OUTPUT_DIR
    figure_formats: Tuple[str, ...] = ("png",)
    log_file: str = DEFAULT_LOG_FILE

    def __post_init__(self):
        if not 0.0 < float(self.confidence_level) < 1.0:
            raise ValueError(
                f"confidence_level must be in (0, 1), got {self.confidence_level!r}"
            )

    def with_overrides(self, **overrides) -> "WalkthroughConfig":
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)
