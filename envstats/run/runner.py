"""End-to-end lab runner"""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from envstats.config import LabConfig, load_config
from envstats.dataset.estuary import generate_estuary_data
from envstats.dataset.fish import generate_fish_data
from envstats.dataset.load_base import save_dataset
from envstats.utils.hashing import hash_dict, hash_frame
from envstats.utils.io import write_json
from envstats.utils.logging import attach_run_log, detach_run_log

logger = logging.getLogger(__name__)


def make_run_id(experiment_name: str) -> str:
    """Generate run ID from the current time and experiment name."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    return f"{timestamp}_{experiment_name}"


def generate_data(config: LabConfig) -> pd.DataFrame:
    """Generate the synthetic dataset for the configured lab."""
    if config.lab == "fish":
        return generate_fish_data(config.fish, config.seed)
    return generate_estuary_data(config.estuary, config.seed)


def prepare_run(config: LabConfig) -> Path:
    """Create a run directory holding the dataset and run metadata.

    Returns:
        Path to run directory
    """
    run_id = make_run_id(config.experiment_name)
    run_dir = Path(config.output.runs_dir) / run_id
    suffix = 1
    while run_dir.exists():
        run_dir = Path(config.output.runs_dir) / f"{run_id}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=True)

    df = generate_data(config)
    save_dataset(df, run_dir / "data.csv")
    logger.info("Generated %d %s observations (seed=%d)", len(df), config.lab, config.seed)

    config_dict = config.model_dump(mode="json")
    write_json(run_dir / "meta.json", {
        "run_id": run_dir.name,
        "lab": config.lab,
        "created_at": datetime.now().isoformat(timespec="seconds"),
        "config": config_dict,
        "config_hash": hash_dict(config_dict),
        "data_hash": hash_frame(df),
        "n_observations": len(df),
    })
    return run_dir


def run_experiment(config_path: str | Path) -> Path:
    """Run complete lab pipeline: data, metrics and (optionally) figures.

    Returns:
        Path to run directory
    """
    from envstats.metrics.compute import compute_metrics_for_run
    from envstats.viz.plots import generate_all_plots

    config = load_config(config_path)
    run_dir = prepare_run(config)

    run_log = attach_run_log(run_dir / "run.log")
    try:
        logger.info("Run directory: %s", run_dir)
        compute_metrics_for_run(run_dir)
        if config.output.save_figures:
            generate_all_plots(run_dir, config.output.figure_format)
    finally:
        detach_run_log(run_log)

    return run_dir
