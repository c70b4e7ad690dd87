"""Load and save lab datasets as CSV"""

from pathlib import Path

import pandas as pd

from envstats.dataset import estuary, fish


def save_dataset(df: pd.DataFrame, path: str | Path) -> None:
    """Write dataset to CSV without the index."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


def load_dataset(path: str | Path, lab: str | None = None) -> pd.DataFrame:
    """Load dataset from CSV file.

    Args:
        path: Path to CSV file
        lab: 'fish' or 'estuary' to restore the grouping column as categorical
            in order of first appearance
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    df = pd.read_csv(path)

    group_column = {"fish": fish.GROUP_COLUMN, "estuary": estuary.GROUP_COLUMN}.get(lab)
    if group_column is not None:
        if group_column not in df.columns:
            raise KeyError(f"Missing column: {group_column}. Available: {list(df.columns)}")
        order = list(pd.unique(df[group_column]))
        df[group_column] = pd.Categorical(df[group_column], categories=order)
    return df
