"""Error types raised by envstats"""


class EnvStatsError(Exception):
    """Base class for envstats errors."""


class InvalidInput(EnvStatsError, ValueError):
    """Malformed call arguments, detected before any work is done."""


class StatisticError(EnvStatsError):
    """A statistic function failed on a bootstrap resample."""

    def __init__(self, message: str, trial: int | None = None):
        super().__init__(message)
        self.trial = trial
