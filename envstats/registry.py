"""Registry of named statistics for bootstrap estimation"""

import numpy as np

from envstats.metrics.bootstrap import Statistic


def _sd(x: np.ndarray) -> float:
    return float(np.std(x, ddof=1)) if len(x) > 1 else 0.0


def _var(x: np.ndarray) -> float:
    return float(np.var(x, ddof=1)) if len(x) > 1 else 0.0


_registry: dict[str, Statistic] = {
    "mean": lambda x: float(np.mean(x)),
    "median": lambda x: float(np.median(x)),
    "sd": _sd,
    "var": _var,
}


def get_statistic(name: str) -> Statistic:
    """Get statistic function by name.

    Args:
        name: One of 'mean', 'median', 'sd', 'var'

    Returns:
        Function mapping a sample to a single value
    """
    try:
        return _registry[name]
    except KeyError:
        raise ValueError(f"Unknown statistic: {name}. Available: {list_statistics()}") from None


def list_statistics() -> list[str]:
    """List all registered statistic names."""
    return list(_registry.keys())
