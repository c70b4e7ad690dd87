"""Statistical utilities"""

import numpy as np
from scipy import stats


def percentile_interval(
    values: np.ndarray,
    confidence_level: float = 0.95,
) -> tuple[float, float]:
    """Percentile interval of an empirical distribution.

    Quantiles use linear interpolation between order statistics
    (numpy's default "linear" method, R's type 7).

    Returns:
        (lower, upper)
    """
    alpha = 1 - confidence_level
    lower, upper = np.quantile(values, [alpha / 2, 1 - alpha / 2], method="linear")
    return float(lower), float(upper)


def sample_sd(values: np.ndarray) -> float:
    """Sample standard deviation (ddof=1); NaN for fewer than two values."""
    values = np.asarray(values, dtype=float)
    if len(values) < 2:
        return float("nan")
    return float(np.std(values, ddof=1))


def t_interval(
    values: np.ndarray,
    confidence_level: float = 0.95,
) -> tuple[float, float, float]:
    """Parametric confidence interval for the mean using the t distribution.

    Returns:
        (mean, lower_ci, upper_ci)
    """
    values = np.asarray(values, dtype=float)
    n = len(values)
    mean = float(np.mean(values))
    t_crit = stats.t.ppf(1 - (1 - confidence_level) / 2, df=n - 1)
    margin = float(t_crit * sample_sd(values) / np.sqrt(n))
    return mean, mean - margin, mean + margin


def moment_skewness(values: np.ndarray) -> float:
    """Moment coefficient of skewness, m3 / m2**1.5 (no bias correction)."""
    return float(stats.skew(np.asarray(values, dtype=float), bias=True))
