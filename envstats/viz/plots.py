"""Generate plots for lab results"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy import stats

from envstats.config import LabConfig
from envstats.dataset import estuary, fish
from envstats.dataset.load_base import load_dataset
from envstats.metrics.inference import one_way_anova
from envstats.utils.io import read_json

logger = logging.getLogger(__name__)

HABITAT_COLORS = ["forestgreen", "goldenrod"]


def _save(fig: plt.Figure, output_path: Path | None) -> None:
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


# Fish lab
def plot_confidence_intervals(intervals: pd.DataFrame, output_path: Path | None = None) -> None:
    """Plot group means with their t confidence intervals as error bars."""
    ci = intervals[intervals["method"] == "t"]
    if ci.empty:
        logger.warning("No t intervals to plot")
        return

    fig, ax = plt.subplots(figsize=(7, 6))
    x = np.arange(len(ci))
    ax.errorbar(
        x,
        ci["estimate"],
        yerr=[ci["estimate"] - ci["lower"], ci["upper"] - ci["estimate"]],
        fmt="o",
        color="blue",
        ecolor="red",
        elinewidth=2,
        capsize=10,
        markersize=8,
    )
    ax.set_xticks(x)
    ax.set_xticklabels(ci["group"])
    ax.set_xlim(-0.5, len(ci) - 0.5)
    ax.set_ylim(ci["lower"].min() - 10, ci["upper"].max() + 10)
    level = int(round(ci["confidence_level"].iloc[0] * 100))
    ax.set_title(f"Mean Fish Length by Habitat with {level}% CI")
    ax.set_xlabel("Habitat")
    ax.set_ylabel("Mean Length (mm)")
    ax.grid(axis="y", alpha=0.3)
    _save(fig, output_path)


def bootstrap_bounds(intervals: pd.DataFrame, group: str) -> tuple[float, float] | None:
    """Bootstrap interval bounds for one group from a confidence_intervals.csv table."""
    # Numeric-looking group names are parsed as numbers by read_csv
    row = intervals[(intervals["group"].astype(str) == str(group)) & (intervals["method"] == "bootstrap")]
    if row.empty:
        return None
    return float(row["lower"].iloc[0]), float(row["upper"].iloc[0])


def plot_bootstrap_distribution(
    replicates: np.ndarray,
    group: str,
    ci: tuple[float, float] | None = None,
    color: str = "lightblue",
    output_path: Path | None = None,
) -> None:
    """Histogram of bootstrap replicates of the mean."""
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.hist(replicates, bins=30, color=color, edgecolor="black")
    if ci is not None:
        for bound in ci:
            ax.axvline(bound, color="red", linestyle="--", linewidth=1)
    ax.set_title(f"Bootstrap Distribution of {group} Mean")
    ax.set_xlabel("Mean Length (mm)")
    ax.set_ylabel("Frequency")
    _save(fig, output_path)


def plot_group_boxplot(
    df: pd.DataFrame,
    value_col: str,
    group_col: str,
    title: str,
    ylabel: str,
    palette: list[str] | str | None = None,
    output_path: Path | None = None,
) -> None:
    """Boxplot of a value by group."""
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.boxplot(
        data=df, x=group_col, y=value_col, hue=group_col,
        palette=palette, width=0.6, legend=False, ax=ax,
    )
    ax.set_title(title)
    ax.set_xlabel(group_col.replace("_", " ").title())
    ax.set_ylabel(ylabel)
    _save(fig, output_path)


def plot_anova_diagnostics(df: pd.DataFrame, value_col: str, group_col: str, output_path: Path | None = None) -> None:
    """2x2 residual diagnostics for a one-way ANOVA model."""
    anova = one_way_anova(df, value_col, group_col)
    residuals = np.asarray(anova.residuals)
    fitted = np.asarray(anova.fitted)
    standardized = residuals / np.std(residuals, ddof=1)

    fig, axes = plt.subplots(2, 2, figsize=(11, 9))

    axes[0, 0].scatter(fitted, residuals, alpha=0.6)
    axes[0, 0].axhline(0, color="grey", linestyle="--")
    axes[0, 0].set_title("Residuals vs Fitted")
    axes[0, 0].set_xlabel("Fitted values")
    axes[0, 0].set_ylabel("Residuals")

    stats.probplot(standardized, dist="norm", plot=axes[0, 1])
    axes[0, 1].set_title("Normal Q-Q")

    axes[1, 0].scatter(fitted, np.sqrt(np.abs(standardized)), alpha=0.6)
    axes[1, 0].set_title("Scale-Location")
    axes[1, 0].set_xlabel("Fitted values")
    axes[1, 0].set_ylabel("√|Standardized residuals|")

    labels = np.repeat(anova.groups, anova.group_sizes)
    axes[1, 1].scatter(labels, standardized, alpha=0.6)
    axes[1, 1].axhline(0, color="grey", linestyle="--")
    axes[1, 1].set_title("Residuals vs Factor Levels")
    axes[1, 1].set_xlabel(group_col.replace("_", " ").title())
    axes[1, 1].set_ylabel("Standardized residuals")

    fig.tight_layout()
    _save(fig, output_path)


# Estuary lab
def plot_histogram(df: pd.DataFrame, column: str, bins: int = 20, output_path: Path | None = None) -> None:
    """Histogram of one variable."""
    label = estuary.VARIABLE_LABELS.get(column, column)
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.hist(df[column], bins=bins, color="skyblue", edgecolor="black")
    ax.set_title(f"Distribution of {label.split(' (')[0]}")
    ax.set_xlabel(label)
    ax.set_ylabel("Frequency")
    _save(fig, output_path)


def plot_density(df: pd.DataFrame, column: str, output_path: Path | None = None) -> None:
    """Kernel density estimate of one variable."""
    label = estuary.VARIABLE_LABELS.get(column, column)
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.kdeplot(data=df, x=column, fill=True, color="lightgreen", alpha=0.6, ax=ax)
    ax.set_title(f"Density Plot of {label.split(' (')[0]}")
    ax.set_xlabel(label)
    ax.set_ylabel("Density")
    _save(fig, output_path)


def plot_density_and_boxplot(df: pd.DataFrame, column: str, output_path: Path | None = None) -> None:
    """Density plot and boxplot of the same variable side by side."""
    label = estuary.VARIABLE_LABELS.get(column, column)
    name = label.split(" (")[0]
    fig, (ax_density, ax_box) = plt.subplots(1, 2, figsize=(13, 5))

    sns.kdeplot(data=df, x=column, fill=True, color="lightblue", alpha=0.6, ax=ax_density)
    ax_density.set_title(f"Density Plot of {name}")
    ax_density.set_xlabel(label)
    ax_density.set_ylabel("Density")

    sns.boxplot(data=df, y=column, color="tan", ax=ax_box)
    ax_box.set_title(f"Boxplot of {name}")
    ax_box.set_ylabel(label)

    fig.tight_layout()
    _save(fig, output_path)


def plot_scatter(df: pd.DataFrame, x: str, y: str, output_path: Path | None = None) -> None:
    """Scatterplot of two variables."""
    x_label = estuary.VARIABLE_LABELS.get(x, x)
    y_label = estuary.VARIABLE_LABELS.get(y, y)
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(df[x], df[y], alpha=0.7)
    ax.set_title(f"{x_label.split(' (')[0]} vs {y_label.split(' (')[0]}")
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    _save(fig, output_path)


def plot_qq(values: np.ndarray, title: str, output_path: Path | None = None) -> None:
    """Normal QQ plot with reference line."""
    fig, ax = plt.subplots(figsize=(7, 7))
    stats.probplot(np.asarray(values, dtype=float), dist="norm", plot=ax)
    ax.set_title(title)
    _save(fig, output_path)


def plot_faceted_histograms(
    df: pd.DataFrame,
    column: str,
    group_col: str,
    bins: int = 15,
    output_path: Path | None = None,
) -> None:
    """One histogram per group on shared axes."""
    label = estuary.VARIABLE_LABELS.get(column, column)
    grid = sns.displot(
        data=df, x=column, col=group_col, bins=bins,
        color="lightblue", edgecolor="black", height=4, facet_kws={"sharey": True},
    )
    grid.set_axis_labels(label, "Frequency")
    grid.set_titles("{col_name}")
    grid.figure.suptitle(f"{label.split(' (')[0]} Distributions by Estuary", y=1.03)
    _save(grid.figure, output_path)


def plot_pairs(df: pd.DataFrame, columns: list[str], output_path: Path | None = None) -> None:
    """Pairwise scatterplots of several variables."""
    grid = sns.pairplot(df[columns], diag_kind="hist", plot_kws={"alpha": 0.6})
    _save(grid.figure, output_path)


def generate_fish_plots(df: pd.DataFrame, metrics_dir: Path, figures_dir: Path, figure_format: str = "png") -> None:
    """All figures for the fish lab."""
    value_col, group_col = fish.VALUE_COLUMN, fish.GROUP_COLUMN

    intervals_file = metrics_dir / "confidence_intervals.csv"
    if intervals_file.exists():
        intervals = pd.read_csv(intervals_file)
        plot_confidence_intervals(intervals, figures_dir / f"mean_ci_by_habitat.{figure_format}")
    else:
        logger.warning("Confidence intervals not found: %s", intervals_file)
        intervals = None

    replicates_file = metrics_dir / "bootstrap_replicates.csv"
    if replicates_file.exists():
        replicates = pd.read_csv(replicates_file, index_col="trial")
        colors = ["lightblue", "lightgreen"]
        for i, habitat in enumerate(replicates.columns):
            ci = bootstrap_bounds(intervals, habitat) if intervals is not None else None
            plot_bootstrap_distribution(
                replicates[habitat].to_numpy(),
                habitat,
                ci=ci,
                color=colors[i % len(colors)],
                output_path=figures_dir / f"bootstrap_{habitat.lower().replace(' ', '_')}.{figure_format}",
            )
    else:
        logger.warning("Bootstrap replicates not found: %s", replicates_file)

    plot_group_boxplot(
        df, value_col, group_col,
        title="Fish Lengths by Habitat",
        ylabel="Length (mm)",
        palette=HABITAT_COLORS,
        output_path=figures_dir / f"length_boxplot.{figure_format}",
    )
    plot_anova_diagnostics(df, value_col, group_col, figures_dir / f"anova_diagnostics.{figure_format}")


def generate_estuary_plots(df: pd.DataFrame, figures_dir: Path, figure_format: str = "png") -> None:
    """All figures for the estuary lab."""
    group_col = estuary.GROUP_COLUMN
    temperature, oxygen, _ = estuary.VARIABLES

    plot_histogram(df, temperature, bins=20, output_path=figures_dir / f"temperature_histogram.{figure_format}")
    plot_density(df, temperature, figures_dir / f"temperature_density.{figure_format}")

    fig, ax = plt.subplots(figsize=(6, 6))
    sns.boxplot(data=df, y=temperature, color="tan", ax=ax)
    ax.set_title("Boxplot of Water Temperature")
    ax.set_ylabel(estuary.VARIABLE_LABELS[temperature])
    _save(fig, figures_dir / f"temperature_boxplot.{figure_format}")

    plot_group_boxplot(
        df, temperature, group_col,
        title="Water Temperature by Florida Estuary",
        ylabel=estuary.VARIABLE_LABELS[temperature],
        output_path=figures_dir / f"temperature_by_estuary.{figure_format}",
    )
    plot_density_and_boxplot(df, temperature, figures_dir / f"temperature_density_boxplot.{figure_format}")
    plot_scatter(df, temperature, oxygen, figures_dir / f"temperature_vs_oxygen.{figure_format}")
    plot_qq(df[temperature], "Normal Q-Q Plot of Water Temperature", figures_dir / f"temperature_qq.{figure_format}")
    plot_faceted_histograms(
        df, temperature, group_col, bins=15,
        output_path=figures_dir / f"temperature_by_estuary_facets.{figure_format}",
    )
    plot_group_boxplot(
        df, oxygen, group_col,
        title="Dissolved Oxygen by Estuary",
        ylabel=estuary.VARIABLE_LABELS[oxygen],
        output_path=figures_dir / f"oxygen_by_estuary.{figure_format}",
    )
    plot_pairs(df, estuary.VARIABLES, figures_dir / f"pairs.{figure_format}")


def generate_all_plots(run_dir: Path, figure_format: str = "png") -> None:
    """Generate all plots for a run."""
    run_dir = Path(run_dir)
    meta_file = run_dir / "meta.json"
    if not meta_file.exists():
        raise FileNotFoundError(f"Metadata file not found: {meta_file}")

    config = LabConfig(**read_json(meta_file)["config"])
    df = load_dataset(run_dir / "data.csv", config.lab)

    figures_dir = run_dir / "figures"
    figures_dir.mkdir(exist_ok=True)

    if config.lab == "fish":
        generate_fish_plots(df, run_dir / "metrics", figures_dir, figure_format)
    else:
        generate_estuary_plots(df, figures_dir, figure_format)
    logger.info("Figures written to %s", figures_dir)
