"""Bootstrap resampling estimator with percentile confidence intervals"""

import logging
import math
from numbers import Integral, Real
from typing import Callable, Sequence

import numpy as np
from tqdm import tqdm

from envstats.errors import InvalidInput, StatisticError
from envstats.schemas import BootstrapResult
from envstats.utils.stats import percentile_interval, sample_sd

logger = logging.getLogger(__name__)

Statistic = Callable[[np.ndarray], float]  # resample -> value


def _validate(sample: Sequence[float], trials: int, confidence_level: float) -> np.ndarray:
    if isinstance(trials, bool) or not isinstance(trials, Integral):
        raise InvalidInput(f"trials must be an integer, got {trials!r}")
    if trials < 1:
        raise InvalidInput(f"trials must be >= 1, got {trials}")
    if not isinstance(confidence_level, Real) or not 0.0 < confidence_level < 1.0:
        raise InvalidInput(f"confidence_level must be strictly between 0 and 1, got {confidence_level!r}")

    try:
        data = np.array(sample, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"sample must be a sequence of reals: {e}") from e
    if data.ndim != 1:
        raise InvalidInput(f"sample must be one-dimensional, got shape {data.shape}")
    if len(data) == 0:
        raise InvalidInput("sample must not be empty")
    if not np.all(np.isfinite(data)):
        raise InvalidInput("sample contains NaN or infinite values")

    data.setflags(write=False)
    return data


def _apply(statistic: Statistic, resample: np.ndarray, trial: int | None) -> float:
    where = "the original sample" if trial is None else f"resample {trial}"
    try:
        value = statistic(resample)
    except Exception as e:
        raise StatisticError(f"statistic failed on {where}: {e}", trial=trial) from e

    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise StatisticError(
            f"statistic returned a non-scalar value on {where}: {value!r}", trial=trial
        ) from e
    if not math.isfinite(value):
        raise StatisticError(f"statistic returned {value} on {where}", trial=trial)
    return value


def estimate(
    sample: Sequence[float],
    statistic: Statistic,
    trials: int = 1000,
    confidence_level: float = 0.95,
    rng_seed: int | None = None,
    rng: np.random.Generator | None = None,
    progress: bool = False,
) -> BootstrapResult:
    """Estimate the sampling distribution of a statistic by bootstrap resampling.

    Each trial draws ``len(sample)`` indices uniformly with replacement,
    applies ``statistic`` to the resample and records the value. The
    percentile interval uses linear interpolation between order statistics.

    With ``trials=1`` the standard error is undefined and ``bootstrap_se`` is
    NaN. NaN never compares equal, so two such results are unequal under
    ``==`` even when drawn with the same seed; compare ``replicate_set``
    instead.

    Args:
        sample: Non-empty sequence of observations
        statistic: Function mapping a resample to a single real value
        trials: Number of resamples (R)
        confidence_level: Interval coverage, strictly between 0 and 1
        rng_seed: Seed for a fresh generator; same inputs and seed give identical results
        rng: Explicit generator to draw from instead of seeding a new one
        progress: Show a tqdm progress bar

    Returns:
        BootstrapResult with the replicate set and its summary

    Raises:
        InvalidInput: Empty sample, trials < 1 or confidence_level outside (0, 1)
        StatisticError: The statistic failed on some resample; the estimate is aborted
    """
    data = _validate(sample, trials, confidence_level)
    n = len(data)
    generator = rng if rng is not None else np.random.default_rng(rng_seed)

    observed = _apply(statistic, data, trial=None)

    replicates = np.empty(trials, dtype=float)
    for i in tqdm(range(trials), desc="Bootstrap", disable=not progress, leave=False):
        indices = generator.integers(0, n, size=n)
        replicates[i] = _apply(statistic, data[indices], trial=i)

    bootstrap_mean = float(np.mean(replicates))
    bootstrap_se = sample_sd(replicates)
    ci_lower, ci_upper = percentile_interval(replicates, confidence_level)

    logger.debug(
        "Bootstrap n=%d trials=%d mean=%.4f se=%.4f ci=[%.4f, %.4f]",
        n, trials, bootstrap_mean, bootstrap_se, ci_lower, ci_upper,
    )

    return BootstrapResult(
        replicate_set=tuple(replicates.tolist()),
        bootstrap_mean=bootstrap_mean,
        bootstrap_se=bootstrap_se,
        ci_lower=ci_lower,
        ci_upper=ci_upper,
        observed=observed,
        bias=bootstrap_mean - observed,
        trials=trials,
        confidence_level=confidence_level,
        n=n,
    )


def compute_bootstrap_ci(
    values: np.ndarray,
    statistic: Statistic,
    n_samples: int = 1000,
    confidence_level: float = 0.95,
    seed: int | None = None,
) -> tuple[float, float, float]:
    """Compute bootstrap confidence interval for a statistic.

    Returns:
        (observed_value, lower_ci, upper_ci)
    """
    result = estimate(values, statistic, n_samples, confidence_level, rng_seed=seed)
    return result.observed, result.ci_lower, result.ci_upper
