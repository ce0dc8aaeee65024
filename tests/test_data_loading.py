import dataclasses

import numpy as np
import pandas as pd
import pytest

from statwalk.data_loading import (
    geoid,
    list_datasets,
    load_dataset,
    load_table,
    normalize_fips_codes,
    validate_geographic_hierarchy,
)
from statwalk.errors import NotFound
from statwalk.schema import INCIDENT, VEHICLE


def test_list_datasets_names_bundled_tables():
    names = list_datasets()
    assert set(names) == {"homicides15", "mtcars"}
    assert all(isinstance(desc, str) and desc for desc in names.values())


def test_load_mtcars_shape_and_types():
    df = load_dataset("mtcars")
    assert df.shape == (32, 12)
    assert pd.api.types.is_numeric_dtype(df["mpg"])
    assert pd.api.types.is_numeric_dtype(df["hp"])
    assert df.loc[df["model"] == "Mazda RX4", "hp"].iloc[0] == 110


def test_schema_columns_exist_in_bundled_tables():
    vehicles = load_dataset("mtcars")
    for column in dataclasses.astuple(VEHICLE):
        assert pd.api.types.is_numeric_dtype(vehicles[column]), column
    incidents = load_dataset("homicides15")
    assert set(dataclasses.astuple(INCIDENT)) <= set(incidents.columns)


def test_load_incidents_keeps_fips_as_padded_strings():
    df = load_dataset("homicides15")
    assert len(df) == 60
    for col, width in {
        "fips_state": 2,
        "fips_county": 3,
        "tract": 6,
        "block_group": 1,
        "block": 4,
    }.items():
        assert df[col].map(type).eq(str).all(), col
        assert df[col].str.len().eq(width).all(), col
    # California's state code keeps its leading zero.
    assert "06" in set(df["fips_state"])


def test_load_incidents_parses_dates():
    df = load_dataset("homicides15")
    for col in ("date_start", "date_single", "date_end"):
        assert pd.api.types.is_datetime64_any_dtype(df[col])
    assert (df["date_start"] <= df["date_single"]).all()
    assert (df["date_single"] <= df["date_end"]).all()


def test_bundled_incident_geography_is_valid():
    validate_geographic_hierarchy(load_dataset("homicides15"))


def test_unknown_dataset_raises_not_found():
    with pytest.raises(NotFound, match="no_such_dataset"):
        load_dataset("no_such_dataset")


def test_not_found_is_a_lookup_error():
    with pytest.raises(LookupError):
        load_dataset("crimes_of_the_future")


def test_load_table_missing_file(tmp_path):
    with pytest.raises(NotFound):
        load_table(str(tmp_path / "missing.csv"))


def test_load_table_pads_codes_from_csv(tmp_path):
    path = tmp_path / "incidents.csv"
    path.write_text(
        "uid,fips_state,fips_county,tract,block_group,block\n"
        "1,6,37,8400,1,1002\n"
        "2,17,031,000059,2,2010\n"
    )
    df = load_table(str(path))
    assert df["fips_state"].tolist() == ["06", "17"]
    assert df["fips_county"].tolist() == ["037", "031"]
    assert df["tract"].tolist() == ["008400", "000059"]


def test_normalize_fips_codes_from_numbers():
    df = pd.DataFrame({"fips_state": [6, 17], "fips_county": [37.0, np.nan], "other": [1, 2]})
    out = normalize_fips_codes(df)
    assert out["fips_state"].tolist() == ["06", "17"]
    assert out["fips_county"].iloc[0] == "037"
    assert pd.isna(out["fips_county"].iloc[1])
    assert out["other"].tolist() == [1, 2]
    # Input is not modified.
    assert df["fips_state"].tolist() == [6, 17]


def test_validate_hierarchy_rejects_block_outside_group():
    df = pd.DataFrame(
        {
            "fips_state": ["17", "17"],
            "fips_county": ["031", "031"],
            "tract": ["000059", "000059"],
            "block_group": ["1", "2"],
            "block": ["1001", "3001"],
        }
    )
    with pytest.raises(ValueError, match="outside their block group"):
        validate_geographic_hierarchy(df)


def test_validate_hierarchy_rejects_wrong_width():
    df = pd.DataFrame({"fips_state": ["6"], "fips_county": ["037"]})
    with pytest.raises(ValueError, match="fips_state"):
        validate_geographic_hierarchy(df)


def test_validate_hierarchy_needs_geography_columns():
    with pytest.raises(NotFound):
        validate_geographic_hierarchy(pd.DataFrame({"a": [1]}))


def test_geoid_levels():
    df = pd.DataFrame(
        {
            "fips_state": ["06", "17"],
            "fips_county": ["037", "031"],
            "tract": ["008400", None],
            "block_group": ["1", "2"],
            "block": ["1002", "2010"],
        }
    )
    assert geoid(df, "state").tolist() == ["06", "17"]
    assert geoid(df, "county").tolist() == ["06037", "17031"]
    tracts = geoid(df, "tract")
    assert tracts.iloc[0] == "06037008400"
    assert pd.isna(tracts.iloc[1])
    assert geoid(df, "block_group").iloc[0] == "060370084001"
    assert geoid(df, "block").iloc[0] == "060370084001002"
    assert len(geoid(df, "block").iloc[0]) == 15


def test_geoid_unknown_level():
    df = pd.DataFrame({"fips_state": ["06"]})
    with pytest.raises(NotFound):
        geoid(df, "zip")
