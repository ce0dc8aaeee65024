import numpy as np
import pandas as pd
import pytest

from statwalk.data_loading import load_dataset
from statwalk.stats.descriptive import summarize_column, summarize_table, summary_frame


def test_row_count_matches_table():
    for name in ("homicides15", "mtcars"):
        df = load_dataset(name)
        summary = summarize_table(df)
        assert summary["n_rows"] == len(df)
        assert summary["n_columns"] == df.shape[1]
        assert list(summary["columns"]) == list(df.columns)


def test_numeric_column_statistics():
    stats = summarize_column(pd.Series([1.0, 2.0, 3.0, 4.0, np.nan]))
    assert stats["kind"] == "numeric"
    assert stats["count"] == 4
    assert stats["missing"] == 1
    assert stats["min"] == 1.0
    assert stats["max"] == 4.0
    assert stats["mean"] == pytest.approx(2.5)
    assert stats["median"] == pytest.approx(2.5)
    assert stats["q1"] == pytest.approx(1.75)
    assert stats["q3"] == pytest.approx(3.25)


def test_categorical_column_truncates_levels():
    values = pd.Series(list("aaaabbbccd") + ["e", "f", "g", None])
    stats = summarize_column(values, max_levels=3)
    assert stats["kind"] == "categorical"
    assert stats["n_unique"] == 7
    assert stats["top"] == {"a": 4, "b": 3, "c": 2}
    assert stats["other"] == 4
    assert stats["missing"] == 1


def test_geography_codes_are_categorical():
    df = load_dataset("homicides15")
    summary = summarize_table(df)
    assert summary["columns"]["fips_county"]["kind"] == "categorical"
    assert summary["columns"]["latitude"]["kind"] == "numeric"
    assert summary["columns"]["date_single"]["kind"] == "datetime"


def test_datetime_column_statistics():
    s = pd.to_datetime(pd.Series(["2015-01-01", "2015-03-01", "2015-02-01"]))
    stats = summarize_column(s)
    assert stats["kind"] == "datetime"
    assert stats["min"] == pd.Timestamp("2015-01-01")
    assert stats["max"] == pd.Timestamp("2015-03-01")
    assert stats["median"] == pd.Timestamp("2015-02-01")


def test_bool_column_is_categorical():
    stats = summarize_column(pd.Series([True, False, True]))
    assert stats["kind"] == "categorical"
    assert stats["top"] == {"True": 2, "False": 1}


def test_empty_table_reports_empty_columns():
    df = pd.DataFrame({"a": pd.Series([], dtype=float), "b": pd.Series([], dtype=object)})
    summary = summarize_table(df)
    assert summary["n_rows"] == 0
    for stats in summary["columns"].values():
        assert stats["empty"] is True
        assert stats["count"] == 0


def test_all_missing_column_is_empty():
    stats = summarize_column(pd.Series([np.nan, np.nan]))
    assert stats["empty"] is True
    assert stats["missing"] == 2
    assert "mean" not in stats


def test_summary_frame_one_row_per_column():
    df = pd.DataFrame({"x": [1, 2, 3], "g": ["a", "b", "a"]})
    frame = summary_frame(summarize_table(df))
    assert frame["column"].tolist() == ["x", "g"]
    assert frame.loc[0, "mean"] == pytest.approx(2.0)
    assert frame.loc[1, "top"] == "a (2); b (1)"
