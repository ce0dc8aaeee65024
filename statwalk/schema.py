"""Define standardized column names for the bundled tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class IncidentColumns:
    """Container for incident-table column labels.

    Attributes:
        date_start: Earliest possible time the incident occurred.
        date_single: Midpoint between ``date_start`` and ``date_end``. Used as
            the single best estimate of the incident time.
        date_end: Latest possible time the incident occurred.
        location_category: Coarse location descriptor (``residence``,
            ``street``, ...). Default grouping column for the bar chart.
        fips_state, fips_county, tract, block_group, block: Nested census
            geography codes. Stored as zero-padded strings; a county code such
            as ``"031"`` is not the number 31.
    """

    uid: str = "uid"
    city: str = "city_name"
    offense_type: str = "offense_type"
    date_start: str = "date_start"
    date_single: str = "date_single"
    date_end: str = "date_end"
    longitude: str = "longitude"
    latitude: str = "latitude"
    location_type: str = "location_type"
    location_category: str = "location_category"
    fips_state: str = "fips_state"
    fips_county: str = "fips_county"
    tract: str = "tract"
    block_group: str = "block_group"
    block: str = "block"


@dataclass(frozen=True)
class VehicleColumns:
    """Default response and predictor columns of the vehicle table.

    Attributes:
        mpg: Fuel efficiency in miles per (US) gallon.
        hp: Gross horsepower.
    """

    mpg: str = "mpg"
    hp: str = "hp"


INCIDENT = IncidentColumns()
VEHICLE = VehicleColumns()

# Ordered from the outermost geography inward. Each code is a fixed-width
# digit string.
FIPS_WIDTHS: Dict[str, int] = {
    INCIDENT.fips_state: 2,
    INCIDENT.fips_county: 3,
    INCIDENT.tract: 6,
    INCIDENT.block_group: 1,
    INCIDENT.block: 4,
}

GEOID_LEVELS: Dict[str, Tuple[str, ...]] = {
    "state": (INCIDENT.fips_state,),
    "county": (INCIDENT.fips_state, INCIDENT.fips_county),
    "tract": (INCIDENT.fips_state, INCIDENT.fips_county, INCIDENT.tract),
    "block_group": (
        INCIDENT.fips_state,
        INCIDENT.fips_county,
        INCIDENT.tract,
        INCIDENT.block_group,
    ),
    # The block code already starts with its block-group digit.
    "block": (
        INCIDENT.fips_state,
        INCIDENT.fips_county,
        INCIDENT.tract,
        INCIDENT.block,
    ),
}

INCIDENT_DATE_COLUMNS: Tuple[str, ...] = (
    INCIDENT.date_start,
    INCIDENT.date_single,
    INCIDENT.date_end,
)
