"""Descriptive statistics (location, spread, shape)"""

import numpy as np
import pandas as pd

from envstats.errors import InvalidInput
from envstats.schemas import GroupSummary
from envstats.utils.stats import moment_skewness, sample_sd


def summarize(values: np.ndarray | pd.Series) -> GroupSummary:
    """Compute descriptive statistics for one sample."""
    values = np.asarray(values, dtype=float)
    values = values[~np.isnan(values)]
    if len(values) == 0:
        raise InvalidInput("cannot summarize an empty sample")

    sd = sample_sd(values)
    q25, q75 = np.quantile(values, [0.25, 0.75])
    return GroupSummary(
        n=len(values),
        mean=float(np.mean(values)),
        median=float(np.median(values)),
        sd=sd,
        var=sd ** 2,
        min=float(np.min(values)),
        max=float(np.max(values)),
        q25=float(q25),
        q75=float(q75),
        skewness=moment_skewness(values) if len(values) > 2 else float("nan"),
    )


def summarize_by_group(df: pd.DataFrame, value_col: str, group_col: str) -> dict[str, GroupSummary]:
    """Compute descriptive statistics per group, in group order."""
    for col in (value_col, group_col):
        if col not in df.columns:
            raise KeyError(f"Missing column: {col}. Available: {list(df.columns)}")

    return {
        str(group): summarize(group_df[value_col])
        for group, group_df in df.groupby(group_col, observed=True, sort=False)
    }


def summaries_to_frame(summaries: dict[str, GroupSummary], index_name: str = "group") -> pd.DataFrame:
    """Tabulate group summaries, one row per group."""
    frame = pd.DataFrame([s.model_dump() for s in summaries.values()], index=list(summaries.keys()))
    frame.index.name = index_name
    return frame
