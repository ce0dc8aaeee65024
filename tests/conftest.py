"""Pytest configuration for repository-relative imports."""

import os
import sys

import matplotlib

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def line_df():
    """Noiseless y = 2x + 1."""
    return pd.DataFrame({"x": [1.0, 2.0, 3.0, 4.0, 5.0], "y": [3.0, 5.0, 7.0, 9.0, 11.0]})


@pytest.fixture
def noisy_df():
    return pd.DataFrame(
        {
            "x": [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0],
            "y": [2.9, 5.3, 6.8, 9.4, 10.7, 13.2, 15.1, 16.8],
        }
    )
