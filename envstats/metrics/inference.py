"""Confidence intervals and hypothesis tests"""

import numpy as np
import pandas as pd
from scipy import stats

from envstats.errors import InvalidInput
from envstats.schemas import (
    AnovaResult,
    AssumptionTest,
    ConfidenceInterval,
    CorrelationResult,
    TTestResult,
)
from envstats.utils.stats import sample_sd, t_interval


def _groups(df: pd.DataFrame, value_col: str, group_col: str) -> dict[str, np.ndarray]:
    """Split a value column by group, dropping missing values."""
    for col in (value_col, group_col):
        if col not in df.columns:
            raise KeyError(f"Missing column: {col}. Available: {list(df.columns)}")

    groups = {
        str(name): group_df[value_col].dropna().to_numpy(dtype=float)
        for name, group_df in df.groupby(group_col, observed=True, sort=False)
    }
    if len(groups) < 2:
        raise InvalidInput(f"need at least two groups in {group_col!r}, got {len(groups)}")
    small = [name for name, values in groups.items() if len(values) < 2]
    if small:
        raise InvalidInput(f"groups need at least two observations: {small}")
    return groups


def t_confidence_interval(
    values: np.ndarray,
    confidence_level: float = 0.95,
    group: str = "all",
) -> ConfidenceInterval:
    """Mean ± t(1-α/2, n-1) · sd / √n."""
    values = np.asarray(values, dtype=float)
    if len(values) < 2:
        raise InvalidInput("t interval needs at least two observations")
    if not 0.0 < confidence_level < 1.0:
        raise InvalidInput(f"confidence_level must be strictly between 0 and 1, got {confidence_level}")

    mean, lower, upper = t_interval(values, confidence_level)
    return ConfidenceInterval(
        group=group,
        method="t",
        estimate=mean,
        lower=lower,
        upper=upper,
        confidence_level=confidence_level,
        se=sample_sd(values) / np.sqrt(len(values)),
    )


def welch_t_test(
    df: pd.DataFrame,
    value_col: str,
    group_col: str,
    confidence_level: float = 0.95,
    alpha: float = 0.05,
) -> TTestResult:
    """Independent two-sample t-test without assuming equal variances."""
    groups = _groups(df, value_col, group_col)
    if len(groups) != 2:
        raise InvalidInput(f"t-test compares exactly two groups, got {list(groups)}")

    (name1, g1), (name2, g2) = groups.items()
    result = stats.ttest_ind(g1, g2, equal_var=False)
    ci = result.confidence_interval(confidence_level=confidence_level)

    return TTestResult(
        groups=(name1, name2),
        means=(float(np.mean(g1)), float(np.mean(g2))),
        mean_difference=float(np.mean(g1) - np.mean(g2)),
        statistic=float(result.statistic),
        df=float(result.df),
        p_value=float(result.pvalue),
        ci_lower=float(ci.low),
        ci_upper=float(ci.high),
        confidence_level=confidence_level,
        significant=bool(result.pvalue < alpha),
    )


def one_way_anova(
    df: pd.DataFrame,
    value_col: str,
    group_col: str,
    alpha: float = 0.05,
) -> AnovaResult:
    """One-way ANOVA by explicit sum-of-squares decomposition.

    Residuals are deviations from each group's mean; fitted values are the
    group means, aligned with the concatenated group order.
    """
    groups = _groups(df, value_col, group_col)
    values = np.concatenate(list(groups.values()))
    grand_mean = np.mean(values)

    fitted = np.concatenate([np.full(len(g), np.mean(g)) for g in groups.values()])
    residuals = values - fitted

    ss_between = float(sum(len(g) * (np.mean(g) - grand_mean) ** 2 for g in groups.values()))
    ss_within = float(np.sum(residuals ** 2))
    df_between = len(groups) - 1
    df_within = len(values) - len(groups)
    ms_between = ss_between / df_between
    ms_within = ss_within / df_within

    f_statistic = ms_between / ms_within if ms_within > 0 else float("inf")
    p_value = float(stats.f.sf(f_statistic, df_between, df_within))

    return AnovaResult(
        groups=list(groups.keys()),
        group_sizes=[len(g) for g in groups.values()],
        df_between=df_between,
        df_within=df_within,
        ss_between=ss_between,
        ss_within=ss_within,
        ms_between=ms_between,
        ms_within=ms_within,
        f_statistic=float(f_statistic),
        p_value=p_value,
        significant=bool(p_value < alpha),
        residuals=residuals.tolist(),
        fitted=fitted.tolist(),
    )


def shapiro_test(values: np.ndarray, alpha: float = 0.05, variable: str | None = None) -> AssumptionTest:
    """Shapiro-Wilk test of normality."""
    values = np.asarray(values, dtype=float)
    if len(values) < 3:
        raise InvalidInput("Shapiro-Wilk test needs at least three observations")

    result = stats.shapiro(values)
    return AssumptionTest(
        test="shapiro_wilk",
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        alpha=alpha,
        passes=bool(result.pvalue >= alpha),
        variable=variable,
    )


def levene_test(
    df: pd.DataFrame,
    value_col: str,
    group_col: str,
    alpha: float = 0.05,
) -> AssumptionTest:
    """Levene's test for equal variances, centred on group medians."""
    groups = _groups(df, value_col, group_col)
    result = stats.levene(*groups.values(), center="median")
    return AssumptionTest(
        test="levene",
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        alpha=alpha,
        passes=bool(result.pvalue >= alpha),
        variable=value_col,
    )


def pearson_correlation(df: pd.DataFrame, x: str, y: str) -> CorrelationResult:
    """Pearson correlation between two columns (complete cases only)."""
    pair = df[[x, y]].dropna()
    if len(pair) < 3:
        raise InvalidInput(f"correlation needs at least three complete pairs, got {len(pair)}")

    result = stats.pearsonr(pair[x], pair[y])
    return CorrelationResult(
        x=x,
        y=y,
        r=float(np.clip(result.statistic, -1.0, 1.0)),
        p_value=float(result.pvalue),
        n=len(pair),
    )


def correlation_matrix(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """Pearson correlation matrix of the given columns."""
    return df[columns].corr(method="pearson")
