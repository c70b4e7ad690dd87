"""Deterministic hashing utilities for run provenance"""

import hashlib
import json
from typing import Any

import pandas as pd


def hash_dict(obj: dict[str, Any]) -> str:
    """Create deterministic SHA256 hash from dict."""
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(s.encode()).hexdigest()


def hash_frame(df: pd.DataFrame) -> str:
    """SHA256 of a table's contents, independent of dtype of the index."""
    row_hashes = pd.util.hash_pandas_object(df, index=False).to_numpy()
    return hashlib.sha256(row_hashes.tobytes()).hexdigest()
