"""Command-line interface"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from envstats.errors import EnvStatsError
from envstats.metrics.bootstrap import estimate
from envstats.metrics.compute import compute_metrics_for_run
from envstats.registry import get_statistic, list_statistics
from envstats.run.runner import run_experiment
from envstats.utils.logging import setup_logging
from envstats.viz.plots import generate_all_plots


def _bootstrap_command(args: argparse.Namespace) -> int:
    import pandas as pd

    data_path = Path(args.data)
    if not data_path.exists():
        print(f"Error: Data file not found: {data_path}")
        return 1

    df = pd.read_csv(data_path)
    if args.column not in df.columns:
        print(f"Error: Column {args.column!r} not in {list(df.columns)}")
        return 1
    if args.group_col:
        if args.group_col not in df.columns:
            print(f"Error: Column {args.group_col!r} not in {list(df.columns)}")
            return 1
        df = df[df[args.group_col].astype(str) == args.group]

    try:
        values = df[args.column].dropna().to_numpy(dtype=float)
    except (TypeError, ValueError):
        print(f"Error: column {args.column!r} is not numeric")
        return 1

    try:
        result = estimate(
            values,
            get_statistic(args.statistic),
            trials=args.trials,
            confidence_level=args.confidence,
            rng_seed=args.seed,
            progress=True,
        )
    except EnvStatsError as e:
        print(f"Error: {e}")
        return 1

    level = f"{args.confidence:.0%}"
    print(f"Bootstrap of {args.statistic}({args.column}), n={result.n}, trials={result.trials}")
    print(f"  Observed:       {result.observed:.4f}")
    print(f"  Bootstrap mean: {result.bootstrap_mean:.4f}")
    print(f"  Bootstrap SE:   {result.bootstrap_se:.4f}")
    print(f"  Bias:           {result.bias:.4f}")
    print(f"  {level} CI:        [{result.ci_lower:.4f}, {result.ci_upper:.4f}]")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Environmental statistics labs")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a lab")
    run_parser.add_argument("--config", type=str, required=True, help="Path to config YAML file")

    # Metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Compute metrics for a run")
    metrics_parser.add_argument("--run", type=str, required=True, help="Path to run directory")

    # Plots command
    plots_parser = subparsers.add_parser("plots", help="Generate plots for a run")
    plots_parser.add_argument("--run", type=str, required=True, help="Path to run directory")
    plots_parser.add_argument("--format", type=str, default=None, help="Figure format (defaults to the run's config)")

    # Bootstrap command
    boot_parser = subparsers.add_parser("bootstrap", help="Bootstrap a statistic of one CSV column")
    boot_parser.add_argument("--data", type=str, required=True, help="Path to CSV file")
    boot_parser.add_argument("--column", type=str, required=True, help="Numeric column to resample")
    boot_parser.add_argument("--group-col", type=str, default=None, help="Column used to select a group")
    boot_parser.add_argument("--group", type=str, default=None, help="Group value to keep")
    boot_parser.add_argument("--statistic", type=str, default="mean", choices=list_statistics())
    boot_parser.add_argument("--trials", type=int, default=5000, help="Number of resamples")
    boot_parser.add_argument("--confidence", type=float, default=0.95, help="Confidence level")
    boot_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "run":
        try:
            run_dir = run_experiment(args.config)
        except (EnvStatsError, FileNotFoundError, ValidationError) as e:
            print(f"Error: {e}")
            return 1
        print(f"Run completed. Results in: {run_dir}")

    elif args.command in ("metrics", "plots"):
        run_dir = Path(args.run)
        if not run_dir.exists():
            print(f"Error: Run directory not found: {run_dir}")
            return 1

        try:
            if args.command == "metrics":
                compute_metrics_for_run(run_dir)
                print(f"Metrics computed for: {run_dir}")
            else:
                format_str = args.format
                if format_str is None:
                    from envstats.utils.io import read_json
                    meta_file = run_dir / "meta.json"
                    meta = read_json(meta_file) if meta_file.exists() else {}
                    format_str = meta.get("config", {}).get("output", {}).get("figure_format", "png")
                generate_all_plots(run_dir, format_str)
                print(f"Plots generated for: {run_dir}")
        except (EnvStatsError, FileNotFoundError, ValidationError) as e:
            print(f"Error: {e}")
            return 1

    elif args.command == "bootstrap":
        if args.group_col and args.group is None:
            parser.error("--group is required with --group-col")
        return _bootstrap_command(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
