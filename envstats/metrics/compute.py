"""Metrics computation for the fish and estuary labs"""

import logging
from itertools import combinations
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from envstats.config import LabConfig
from envstats.dataset import estuary, fish
from envstats.dataset.load_base import load_dataset
from envstats.metrics.bootstrap import estimate
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
from envstats.registry import get_statistic
from envstats.schemas import BootstrapResult, ConfidenceInterval
from envstats.utils.io import read_json, write_json

logger = logging.getLogger(__name__)


def compute_fish_metrics(df: pd.DataFrame, config: LabConfig) -> dict[str, Any]:
    """Descriptive statistics, confidence intervals and tests for the fish lab.

    Returns:
        Dict with summaries, intervals, bootstrap results and inference results
    """
    value_col, group_col = fish.VALUE_COLUMN, fish.GROUP_COLUMN
    metrics = config.metrics

    summaries = summarize_by_group(df, value_col, group_col)

    intervals: list[ConfidenceInterval] = []
    bootstraps: dict[str, BootstrapResult] = {}
    mean_stat = get_statistic("mean")
    for offset, (habitat, group_df) in enumerate(df.groupby(group_col, observed=True, sort=False)):
        habitat = str(habitat)
        lengths = group_df[value_col].to_numpy(dtype=float)
        intervals.append(t_confidence_interval(lengths, metrics.confidence_level, group=habitat))

        logger.info("Bootstrapping mean length for %s (%d trials)", habitat, metrics.bootstrap_samples)
        boot = estimate(
            lengths,
            mean_stat,
            trials=metrics.bootstrap_samples,
            confidence_level=metrics.confidence_level,
            rng_seed=config.bootstrap_seed + offset,
        )
        bootstraps[habitat] = boot
        intervals.append(ConfidenceInterval(
            group=habitat,
            method="bootstrap",
            estimate=boot.bootstrap_mean,
            lower=boot.ci_lower,
            upper=boot.ci_upper,
            confidence_level=metrics.confidence_level,
            se=boot.bootstrap_se,
        ))

    t_test = welch_t_test(df, value_col, group_col, metrics.confidence_level, metrics.alpha)
    anova = one_way_anova(df, value_col, group_col, metrics.alpha)
    normality = shapiro_test(np.asarray(anova.residuals), metrics.alpha, variable="anova_residuals")
    equal_variance = levene_test(df, value_col, group_col, metrics.alpha)

    return {
        "summaries": summaries,
        "intervals": intervals,
        "bootstraps": bootstraps,
        "t_test": t_test,
        "anova": anova,
        "normality": normality,
        "equal_variance": equal_variance,
    }


def compute_estuary_metrics(df: pd.DataFrame, config: LabConfig) -> dict[str, Any]:
    """Location, spread, skewness, variance tests and correlations for the estuary lab."""
    group_col = estuary.GROUP_COLUMN
    variables = estuary.VARIABLES

    overall = {variable: summarize(df[variable]) for variable in variables}
    by_group = {variable: summarize_by_group(df, variable, group_col) for variable in variables}
    levene = [levene_test(df, variable, group_col, config.metrics.alpha) for variable in variables]
    correlations = [pearson_correlation(df, x, y) for x, y in combinations(variables, 2)]

    return {
        "overall": overall,
        "by_group": by_group,
        "levene": levene,
        "correlations": correlations,
        "correlation_matrix": correlation_matrix(df, variables),
    }


def _write_fish_metrics(results: dict[str, Any], metrics_dir: Path) -> None:
    summaries_to_frame(results["summaries"], index_name="habitat").to_csv(
        metrics_dir / "summary_by_habitat.csv"
    )
    pd.DataFrame([ci.model_dump() for ci in results["intervals"]]).to_csv(
        metrics_dir / "confidence_intervals.csv", index=False
    )

    replicates = pd.DataFrame({
        habitat: np.asarray(boot.replicate_set) for habitat, boot in results["bootstraps"].items()
    })
    replicates.index.name = "trial"
    replicates.to_csv(metrics_dir / "bootstrap_replicates.csv")

    write_json(metrics_dir / "inference.json", {
        "bootstrap": {habitat: boot.to_dict() for habitat, boot in results["bootstraps"].items()},
        "t_test": results["t_test"].model_dump(),
        "anova": results["anova"].model_dump(),
        "normality": results["normality"].model_dump(),
        "equal_variance": results["equal_variance"].model_dump(),
    })


def _write_estuary_metrics(results: dict[str, Any], metrics_dir: Path) -> None:
    summaries_to_frame(results["overall"], index_name="variable").to_csv(
        metrics_dir / "summary_overall.csv"
    )

    frames = []
    for variable, summaries in results["by_group"].items():
        frame = summaries_to_frame(summaries, index_name=estuary.GROUP_COLUMN).reset_index()
        frame.insert(0, "variable", variable)
        frames.append(frame)
    pd.concat(frames, ignore_index=True).to_csv(metrics_dir / "summary_by_estuary.csv", index=False)

    pd.DataFrame([t.model_dump() for t in results["levene"]]).to_csv(
        metrics_dir / "levene.csv", index=False
    )
    pd.DataFrame([c.model_dump() for c in results["correlations"]]).to_csv(
        metrics_dir / "correlations.csv", index=False
    )
    results["correlation_matrix"].to_csv(metrics_dir / "correlation_matrix.csv")


def compute_metrics_for_run(run_dir: Path) -> dict[str, Any]:
    """Compute and save metrics for a run."""
    run_dir = Path(run_dir)
    meta_file = run_dir / "meta.json"
    if not meta_file.exists():
        raise FileNotFoundError(f"Metadata file not found: {meta_file}")

    meta = read_json(meta_file)
    config = LabConfig(**meta["config"])
    df = load_dataset(run_dir / "data.csv", config.lab)

    metrics_dir = run_dir / "metrics"
    metrics_dir.mkdir(exist_ok=True)

    if config.lab == "fish":
        results = compute_fish_metrics(df, config)
        _write_fish_metrics(results, metrics_dir)
    else:
        results = compute_estuary_metrics(df, config)
        _write_estuary_metrics(results, metrics_dir)

    logger.info("Metrics written to %s", metrics_dir)
    return results
