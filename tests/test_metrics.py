"""Tests for descriptive statistics and inference"""

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from envstats.errors import InvalidInput
from envstats.metrics.descriptive import summaries_to_frame, summarize, summarize_by_group
from envstats.metrics.inference import (
    correlation_matrix,
    levene_test,
    one_way_anova,
    pearson_correlation,
    shapiro_test,
    t_confidence_interval,
    welch_t_test,
)


@pytest.fixture
def two_groups() -> pd.DataFrame:
    rng = np.random.default_rng(123)
    return pd.DataFrame({
        "length": np.concatenate([rng.normal(520, 40, 40), rng.normal(700, 45, 40)]),
        "habitat": ["Seagrass"] * 40 + ["Reef"] * 40,
    })


@pytest.fixture
def three_groups() -> pd.DataFrame:
    rng = np.random.default_rng(230)
    return pd.DataFrame({
        "site": ["A"] * 30 + ["B"] * 30 + ["C"] * 30,
        "value": np.concatenate([rng.normal(27, 2, 30), rng.normal(26, 2.5, 30), rng.normal(25, 1.8, 30)]),
    })


def test_summarize_known_values():
    """Summary of 1..5."""
    summary = summarize(np.array([1, 2, 3, 4, 5]))

    assert summary.n == 5
    assert summary.mean == pytest.approx(3.0)
    assert summary.median == pytest.approx(3.0)
    assert summary.sd == pytest.approx(np.sqrt(2.5))
    assert summary.var == pytest.approx(2.5)
    assert (summary.min, summary.max) == (1.0, 5.0)
    assert (summary.q25, summary.q75) == (2.0, 4.0)
    assert summary.skewness == pytest.approx(0.0)


def test_skewness_sign():
    """Right-skewed data have positive moment skewness."""
    summary = summarize(np.array([1.0, 1.0, 1.0, 2.0, 10.0]))
    x = np.array([1.0, 1.0, 1.0, 2.0, 10.0])
    m2 = np.mean((x - x.mean()) ** 2)
    m3 = np.mean((x - x.mean()) ** 3)
    assert summary.skewness > 0
    assert summary.skewness == pytest.approx(m3 / m2 ** 1.5)


def test_summarize_empty():
    """Empty input is rejected."""
    with pytest.raises(InvalidInput):
        summarize(np.array([]))


def test_summarize_by_group_order(two_groups):
    """Groups keep order of appearance."""
    summaries = summarize_by_group(two_groups, "length", "habitat")
    assert list(summaries) == ["Seagrass", "Reef"]
    assert summaries["Reef"].mean > summaries["Seagrass"].mean

    frame = summaries_to_frame(summaries, index_name="habitat")
    assert frame.index.name == "habitat"
    assert list(frame.index) == ["Seagrass", "Reef"]
    assert frame.loc["Reef", "n"] == 40


def test_t_confidence_interval():
    """t interval matches the textbook formula."""
    values = np.array([4.1, 5.3, 6.0, 5.5, 4.8, 5.9])
    ci = t_confidence_interval(values, 0.95, group="g")

    n = len(values)
    margin = stats.t.ppf(0.975, n - 1) * values.std(ddof=1) / np.sqrt(n)
    assert ci.method == "t"
    assert ci.estimate == pytest.approx(values.mean())
    assert ci.lower == pytest.approx(values.mean() - margin)
    assert ci.upper == pytest.approx(values.mean() + margin)

    with pytest.raises(InvalidInput):
        t_confidence_interval(np.array([1.0]))


def test_welch_t_test(two_groups):
    """Welch test agrees with scipy and detects the habitat difference."""
    result = welch_t_test(two_groups, "length", "habitat")
    seagrass = two_groups.loc[two_groups["habitat"] == "Seagrass", "length"]
    reef = two_groups.loc[two_groups["habitat"] == "Reef", "length"]
    expected = stats.ttest_ind(seagrass, reef, equal_var=False)

    assert result.groups == ("Seagrass", "Reef")
    assert result.statistic == pytest.approx(expected.statistic)
    assert result.p_value == pytest.approx(expected.pvalue)
    assert result.mean_difference < 0
    assert result.ci_lower < result.mean_difference < result.ci_upper
    assert result.significant


def test_welch_t_test_rejects_three_groups(three_groups):
    """Only two groups can be compared."""
    with pytest.raises(InvalidInput):
        welch_t_test(three_groups, "value", "site")


def test_one_way_anova_matches_scipy(three_groups):
    """Sum-of-squares decomposition gives scipy's F and p."""
    result = one_way_anova(three_groups, "value", "site")
    groups = [g["value"].to_numpy() for _, g in three_groups.groupby("site")]
    expected = stats.f_oneway(*groups)

    assert result.df_between == 2
    assert result.df_within == 87
    assert result.group_sizes == [30, 30, 30]
    assert result.f_statistic == pytest.approx(expected.statistic)
    assert result.p_value == pytest.approx(expected.pvalue)

    total_ss = np.sum((three_groups["value"] - three_groups["value"].mean()) ** 2)
    assert result.ss_between + result.ss_within == pytest.approx(total_ss)
    assert len(result.residuals) == 90
    assert np.mean(result.residuals) == pytest.approx(0.0, abs=1e-9)
    assert "residuals" not in result.model_dump()


def test_one_way_anova_needs_two_groups():
    """Single-group data are rejected."""
    df = pd.DataFrame({"g": ["a"] * 5, "v": np.arange(5.0)})
    with pytest.raises(InvalidInput):
        one_way_anova(df, "v", "g")


def test_shapiro_test():
    """Shapiro-Wilk flags clearly non-normal data."""
    rng = np.random.default_rng(1)
    normal = shapiro_test(rng.normal(size=100), alpha=0.01)
    skewed = shapiro_test(rng.exponential(size=200) ** 3, alpha=0.01)

    assert normal.test == "shapiro_wilk"
    assert 0 < normal.statistic <= 1
    assert not skewed.passes

    with pytest.raises(InvalidInput):
        shapiro_test(np.array([1.0, 2.0]))


def test_levene_test(three_groups):
    """Median-centred Levene matches scipy."""
    result = levene_test(three_groups, "value", "site", alpha=0.01)
    groups = [g["value"].to_numpy() for _, g in three_groups.groupby("site", sort=False)]
    expected = stats.levene(*groups, center="median")

    assert result.variable == "value"
    assert result.statistic == pytest.approx(expected.statistic)
    assert result.p_value == pytest.approx(expected.pvalue)
    assert result.passes == (expected.pvalue >= 0.01)


def test_pearson_correlation():
    """Strong negative relationship is recovered."""
    rng = np.random.default_rng(2)
    temp = rng.normal(26, 2, 120)
    df = pd.DataFrame({"temp": temp, "do": 14 - 0.25 * temp + rng.normal(0, 0.1, 120)})

    result = pearson_correlation(df, "temp", "do")
    assert result.n == 120
    assert result.r < -0.9
    assert result.p_value < 0.001

    matrix = correlation_matrix(df, ["temp", "do"])
    assert matrix.loc["temp", "do"] == pytest.approx(result.r)
    assert matrix.loc["temp", "temp"] == pytest.approx(1.0)
