"""Tests for I/O, logging and plotting helpers"""

import logging

import pandas as pd

from envstats.utils.io import read_json, write_json
from envstats.utils.logging import LOG_FORMAT, attach_run_log, detach_run_log
from envstats.viz.plots import bootstrap_bounds


def test_write_json_maps_non_finite_to_null(tmp_path):
    """NaN and infinities are written as null so the file is strict JSON."""
    path = tmp_path / "out.json"
    write_json(path, {"se": float("nan"), "nested": {"values": [1.0, float("inf")]}, "ok": 2.5})

    text = path.read_text()
    assert "NaN" not in text and "Infinity" not in text

    data = read_json(path)
    assert data["se"] is None
    assert data["nested"]["values"] == [1.0, None]
    assert data["ok"] == 2.5


def test_run_log_handler(tmp_path):
    """Run log handler writes formatted records until detached."""
    log_file = tmp_path / "runs" / "run.log"
    handler = attach_run_log(log_file)
    log = logging.getLogger("envstats.test_run_log")
    try:
        log.warning("first record")
    finally:
        detach_run_log(handler)
    log.warning("after detach")

    assert handler not in logging.getLogger().handlers
    text = log_file.read_text()
    assert "envstats.test_run_log - WARNING - first record" in text
    assert "after detach" not in text
    assert "%(levelname)s" in LOG_FORMAT


def test_bootstrap_bounds_with_numeric_group_names(tmp_path):
    """Group names that read_csv parses as numbers still match their intervals."""
    path = tmp_path / "confidence_intervals.csv"
    pd.DataFrame({
        "group": [1, 1, 2],
        "method": ["t", "bootstrap", "bootstrap"],
        "lower": [0.5, 0.6, 1.6],
        "upper": [1.5, 1.4, 2.4],
    }).to_csv(path, index=False)
    intervals = pd.read_csv(path)

    assert bootstrap_bounds(intervals, "1") == (0.6, 1.4)
    assert bootstrap_bounds(intervals, "2") == (1.6, 2.4)
    assert bootstrap_bounds(intervals, "3") is None
