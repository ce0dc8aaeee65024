"""
Loads the bundled example tables and handles census geography codes.
"""

# Geography codes (FIPS state/county, census tract, block group, block) are
# identifiers, not quantities: they are read as strings and kept zero-padded
# to their fixed widths so "06" (California) never collapses to 6.

import logging
import os
from typing import Dict, List

import numpy as np
import pandas as pd

from .errors import NotFound, require_columns
from .schema import FIPS_WIDTHS, GEOID_LEVELS, INCIDENT, INCIDENT_DATE_COLUMNS

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")

DATASETS: Dict[str, Dict] = {
    "homicides15": {
        "file": "homicides15.csv",
        "description": "Sample of 2015 homicide incident records with census geography.",
        "dtype": {col: str for col in FIPS_WIDTHS},
        "parse_dates": list(INCIDENT_DATE_COLUMNS),
    },
    "mtcars": {
        "file": "mtcars.csv",
        "description": "Motor Trend 1974 road tests: fuel economy and design of 32 cars.",
        "dtype": {"model": str},
        "parse_dates": [],
    },
}


def list_datasets() -> Dict[str, str]:
    """Return bundled dataset identifiers mapped to a one-line description."""
    return {name: info["description"] for name, info in DATASETS.items()}


def load_dataset(name):
    """Load a bundled dataset by identifier.

    Args:
        name (str): Dataset identifier, one of :func:`list_datasets`.

    Returns:
        pd.DataFrame: The dataset, one row per observation.

    Raises:
        NotFound: If ``name`` is not a bundled dataset.
    """
    info = DATASETS.get(name)
    if info is None:
        raise NotFound(
            f"Unknown dataset {name!r}. Known datasets: {sorted(DATASETS)}"
        )

    path = os.path.join(DATA_DIR, info["file"])
    df = pd.read_csv(path, dtype=info["dtype"], parse_dates=info["parse_dates"])
    if any(col in df.columns for col in FIPS_WIDTHS):
        df = normalize_fips_codes(df)
    logger.info("Loaded dataset %s: %d rows x %d columns", name, *df.shape)
    return df


def load_table(filepath):
    """
    Load an arbitrary CSV file, keeping geography codes as strings.

    Args:
        filepath (str): Path to the CSV file.

    Returns:
        pd.DataFrame: Loaded DataFrame.

    Raises:
        NotFound: If the file does not exist.
    """
    if not os.path.exists(filepath):
        raise NotFound(f"No such file: {filepath}")

    header = pd.read_csv(filepath, nrows=0).columns
    dtype = {col: str for col in FIPS_WIDTHS if col in header}
    parse_dates = [col for col in INCIDENT_DATE_COLUMNS if col in header]
    df = pd.read_csv(filepath, dtype=dtype, parse_dates=parse_dates)
    if dtype:
        df = normalize_fips_codes(df)
    return df


def _pad_code(value, width):
    if pd.isna(value):
        return np.nan
    text = str(value).strip()
    # Integers that passed through a float column come back as "31.0".
    if text.endswith(".0") and text[:-2].isdigit():
        text = text[:-2]
    return text.zfill(width)


def normalize_fips_codes(df):
    """Return a copy of ``df`` with geography codes as zero-padded strings.

    Columns named in ``FIPS_WIDTHS`` that are present are converted; other
    columns are untouched. Codes that arrive as numbers (``31``, ``31.0``) are
    padded to their fixed width (``"031"``). Missing codes stay missing.
    """
    out = df.copy()
    for col, width in FIPS_WIDTHS.items():
        if col in out.columns:
            out[col] = out[col].map(lambda v, w=width: _pad_code(v, w)).astype(object)
    return out


def validate_geographic_hierarchy(df) -> None:
    """Check that geography codes are well-formed and properly nested.

    Every present code column must hold digit strings of its fixed width, and
    each block must lie inside its block group: the first digit of a census
    block code is the block-group number.

    Args:
        df (pd.DataFrame): Incident table with geography columns.

    Raises:
        NotFound: If none of the geography columns are present.
        ValueError: If a code has the wrong width or non-digit characters, or
            a block does not belong to its block group. The message names up
            to five offending row labels.
    """
    present = [col for col in FIPS_WIDTHS if col in df.columns]
    if not present:
        raise NotFound(
            f"No geography columns found; expected any of {list(FIPS_WIDTHS)}"
        )

    problems: List[str] = []
    for col in present:
        width = FIPS_WIDTHS[col]
        codes = df[col].dropna().astype(str)
        bad = codes[~(codes.str.fullmatch(r"\d+") & (codes.str.len() == width))]
        if not bad.empty:
            problems.append(
                f"{col}: {len(bad)} code(s) not {width}-digit strings "
                f"(rows {list(bad.index[:5])})"
            )

    if INCIDENT.block in df.columns and INCIDENT.block_group in df.columns:
        both = df[[INCIDENT.block, INCIDENT.block_group]].dropna().astype(str)
        outside = both[both[INCIDENT.block].str[0] != both[INCIDENT.block_group]]
        if not outside.empty:
            problems.append(
                f"{len(outside)} block(s) outside their block group "
                f"(rows {list(outside.index[:5])})"
            )

    if problems:
        raise ValueError("Invalid geography codes: " + "; ".join(problems))


def geoid(df, level):
    """Build the concatenated census GEOID for each row at ``level``.

    Args:
        df (pd.DataFrame): Table with zero-padded geography code columns.
        level (str): One of ``"state"``, ``"county"``, ``"tract"``,
            ``"block_group"`` or ``"block"``.

    Returns:
        pd.Series: GEOID strings (2, 5, 11, 12 or 15 characters), missing
        where any component is missing.

    Raises:
        NotFound: If ``level`` is unknown or a needed column is absent.
    """
    parts = GEOID_LEVELS.get(level)
    if parts is None:
        raise NotFound(
            f"Unknown geography level {level!r}. Known levels: {list(GEOID_LEVELS)}"
        )
    require_columns(df, parts)

    codes = df[list(parts)].astype(object)
    complete = codes.notna().all(axis=1)
    out = pd.Series(np.nan, index=df.index, dtype=object)
    if complete.any():
        out[complete] = codes[complete].astype(str).agg("".join, axis=1)
    return out
