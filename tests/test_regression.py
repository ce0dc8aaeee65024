import numpy as np
import pandas as pd
import pytest

from statwalk.data_loading import load_dataset
from statwalk.errors import InsufficientData, NotFound, SingularDesign
from statwalk.stats.regression import confidence_intervals, fit_linear_model, predict


def test_perfect_line_recovers_coefficients(line_df):
    model = fit_linear_model(line_df, "y", "x")
    assert model.slope == pytest.approx(2.0)
    assert model.intercept == pytest.approx(1.0)
    assert model.rsquared == pytest.approx(1.0)
    assert model.n == 5
    assert model.df_resid == 3
    assert model.formula == "y ~ x"


def test_perfect_line_interval_has_zero_width(line_df):
    model = fit_linear_model(line_df, "y", "x")
    ci = confidence_intervals(model)
    lower, upper = ci.loc["x", "2.5 %"], ci.loc["x", "97.5 %"]
    assert upper - lower == pytest.approx(0.0, abs=1e-9)
    assert lower == pytest.approx(2.0)


def test_mtcars_mpg_on_hp_matches_reference_values():
    model = fit_linear_model(load_dataset("mtcars"), "mpg", "hp")
    assert model.intercept == pytest.approx(30.09886, rel=1e-5)
    assert model.slope == pytest.approx(-0.06823, rel=1e-3)
    assert model.bse[0] == pytest.approx(1.63392, rel=1e-4)
    assert model.bse[1] == pytest.approx(0.01012, rel=1e-3)
    assert model.rsquared == pytest.approx(0.6024, abs=1e-4)
    assert model.rsquared_adj == pytest.approx(0.5892, abs=1e-4)
    assert model.sigma == pytest.approx(3.863, abs=1e-3)
    assert model.fvalue == pytest.approx(45.46, abs=1e-2)
    assert model.f_pvalue == pytest.approx(1.788e-07, rel=1e-2)
    assert model.df_model == 1
    assert model.df_resid == 30


def test_mtcars_confidence_intervals_match_reference_values():
    model = fit_linear_model(load_dataset("mtcars"), "mpg", "hp")
    ci = confidence_intervals(model, level=0.95)
    assert list(ci.columns) == ["2.5 %", "97.5 %"]
    assert list(ci.index) == ["(Intercept)", "hp"]
    assert ci.loc["(Intercept)", "2.5 %"] == pytest.approx(26.76195, rel=1e-5)
    assert ci.loc["(Intercept)", "97.5 %"] == pytest.approx(33.43577, rel=1e-5)
    assert ci.loc["hp", "2.5 %"] == pytest.approx(-0.08889, rel=1e-3)
    assert ci.loc["hp", "97.5 %"] == pytest.approx(-0.04756, rel=1e-3)


@pytest.mark.parametrize("level", [0.5, 0.9, 0.95, 0.99])
def test_interval_contains_estimate(noisy_df, level):
    model = fit_linear_model(noisy_df, "y", "x")
    ci = confidence_intervals(model, level=level)
    for term, estimate in zip(model.terms, model.params):
        assert ci.loc[term].iloc[0] <= estimate <= ci.loc[term].iloc[1]


def test_wider_level_gives_wider_interval(noisy_df):
    model = fit_linear_model(noisy_df, "y", "x")
    narrow = confidence_intervals(model, level=0.8)
    wide = confidence_intervals(model, level=0.99)
    assert (wide.iloc[:, 1] - wide.iloc[:, 0] > narrow.iloc[:, 1] - narrow.iloc[:, 0]).all()
    assert list(narrow.columns) == ["10 %", "90 %"]


@pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 1.5])
def test_invalid_level_raises(noisy_df, level):
    model = fit_linear_model(noisy_df, "y", "x")
    with pytest.raises(ValueError):
        confidence_intervals(model, level=level)


def test_too_few_observations():
    df = pd.DataFrame({"x": [1.0, 2.0], "y": [1.0, 3.0]})
    with pytest.raises(InsufficientData):
        fit_linear_model(df, "y", "x")


def test_missing_rows_count_against_minimum():
    df = pd.DataFrame({"x": [1.0, 2.0, np.nan, 4.0], "y": [1.0, 3.0, 5.0, np.nan]})
    with pytest.raises(InsufficientData):
        fit_linear_model(df, "y", "x")


def test_incomplete_rows_are_dropped(noisy_df):
    padded = pd.concat(
        [noisy_df, pd.DataFrame({"x": [np.nan, 9.0], "y": [1.0, np.nan]})],
        ignore_index=True,
    )
    model = fit_linear_model(padded, "y", "x")
    reference = fit_linear_model(noisy_df, "y", "x")
    assert model.n == len(noisy_df)
    np.testing.assert_allclose(model.params, reference.params)


def test_constant_predictor_is_singular():
    df = pd.DataFrame({"x": [3.0, 3.0, 3.0, 3.0], "y": [1.0, 2.0, 3.0, 4.0]})
    with pytest.raises(SingularDesign):
        fit_linear_model(df, "y", "x")


def test_large_offset_predictor_fits():
    # Epoch-second timestamps: mean ~1.7e9, spread of a few seconds.
    steps = np.arange(10, dtype=float)
    wobble = 0.01 * (-1.0) ** steps
    df = pd.DataFrame({"x": 1.7e9 + steps, "y": 2.0 * steps + 1.0 + wobble})
    model = fit_linear_model(df, "y", "x")

    assert model.slope == pytest.approx(2.0, rel=1e-3)
    assert model.rsquared > 0.999
    np.testing.assert_allclose(model.fitted, df["y"], atol=0.05)

    out = predict(model, [1.7e9 + 4.5], interval="confidence")
    assert out.loc[0, "fit"] == pytest.approx(10.0, abs=0.05)
    assert out.loc[0, "lwr"] < out.loc[0, "fit"] < out.loc[0, "upr"]


def test_constant_large_offset_predictor_is_singular():
    df = pd.DataFrame({"x": [1.7e9] * 5, "y": [1.0, 2.0, 3.0, 4.0, 5.0]})
    with pytest.raises(SingularDesign):
        fit_linear_model(df, "y", "x")


def test_errors_are_value_errors():
    df = pd.DataFrame({"x": [3.0, 3.0, 3.0], "y": [1.0, 2.0, 3.0]})
    with pytest.raises(ValueError):
        fit_linear_model(df, "y", "x")


def test_missing_column_raises_not_found(line_df):
    with pytest.raises(NotFound, match="weight"):
        fit_linear_model(line_df, "y", "weight")


def test_non_numeric_column_raises_type_error():
    df = pd.DataFrame({"x": ["a", "b", "c"], "y": [1.0, 2.0, 3.0]})
    with pytest.raises(TypeError):
        fit_linear_model(df, "y", "x")


def test_constant_response_has_undefined_r_squared():
    df = pd.DataFrame({"x": [1.0, 2.0, 3.0, 4.0], "y": [5.0, 5.0, 5.0, 5.0]})
    model = fit_linear_model(df, "y", "x")
    assert model.slope == pytest.approx(0.0, abs=1e-12)
    assert model.intercept == pytest.approx(5.0)
    assert np.isnan(model.rsquared)
    assert np.isnan(model.fvalue)


def test_model_is_read_only(line_df):
    model = fit_linear_model(line_df, "y", "x")
    with pytest.raises(ValueError):
        model.params[0] = 10.0
    with pytest.raises(AttributeError):
        model.n = 10


def test_f_equals_squared_slope_t(noisy_df):
    model = fit_linear_model(noisy_df, "y", "x")
    assert model.fvalue == pytest.approx(model.tvalues[1] ** 2)
    assert model.f_pvalue == pytest.approx(model.pvalues[1])


def test_coefficient_table(noisy_df):
    table = fit_linear_model(noisy_df, "y", "x").coefficients()
    assert list(table.index) == ["(Intercept)", "x"]
    assert list(table.columns) == ["Estimate", "Std. Error", "t value", "Pr(>|t|)"]


def test_predict_fitted_values(line_df):
    model = fit_linear_model(line_df, "y", "x")
    out = predict(model, [0.0, 10.0])
    np.testing.assert_allclose(out["fit"], [1.0, 21.0])
    assert list(out.columns) == ["x", "fit"]


def test_predict_band_is_narrowest_at_mean(noisy_df):
    model = fit_linear_model(noisy_df, "y", "x")
    xbar = float(np.mean(model.x))
    out = predict(model, [xbar - 3.0, xbar, xbar + 3.0], interval="confidence")
    width = (out["upr"] - out["lwr"]).to_numpy()
    assert width[1] < width[0]
    assert width[1] < width[2]
    assert ((out["lwr"] <= out["fit"]) & (out["fit"] <= out["upr"])).all()


def test_predict_rejects_unknown_interval(line_df):
    model = fit_linear_model(line_df, "y", "x")
    with pytest.raises(ValueError):
        predict(model, interval="prediction")
