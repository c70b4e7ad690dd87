"""Logging utilities"""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Setup console logging configuration."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


def attach_run_log(log_file: Path) -> logging.Handler:
    """Mirror root log records into a run's log file.

    Returns:
        The attached handler; pass it to detach_run_log when the run ends
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def detach_run_log(handler: logging.Handler) -> None:
    """Remove and close a handler added by attach_run_log."""
    logging.getLogger().removeHandler(handler)
    handler.close()
