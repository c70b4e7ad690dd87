"""Tests for configuration and data generation"""

import numpy as np
import pytest
from pydantic import ValidationError

from envstats.config import FishConfig, LabConfig, load_config
from envstats.dataset.estuary import VARIABLES, generate_estuary_data
from envstats.dataset.fish import generate_fish_data
from envstats.dataset.load_base import load_dataset, save_dataset


def test_defaults_reproduce_lab_setup():
    """Default config matches the lab scenarios."""
    config = LabConfig(experiment_name="x", lab="fish")

    assert [h.name for h in config.fish.habitats] == ["Seagrass", "Reef"]
    assert [h.mean for h in config.fish.habitats] == [520, 700]
    assert len(config.estuary.sites) == 3
    assert config.metrics.bootstrap_samples == 5000
    assert config.metrics.confidence_level == 0.95
    assert config.bootstrap_seed == config.seed


def test_explicit_bootstrap_seed():
    """A configured bootstrap seed overrides the data seed."""
    config = LabConfig(experiment_name="x", lab="fish", seed=1, metrics={"bootstrap_seed": 77})
    assert config.bootstrap_seed == 77


def test_load_config(tmp_path):
    """YAML configs are validated."""
    path = tmp_path / "lab.yaml"
    path.write_text(
        "experiment_name: t\n"
        "lab: estuary\n"
        "seed: 230\n"
        "metrics:\n"
        "  alpha: 0.01\n"
    )
    config = load_config(path)
    assert config.lab == "estuary"
    assert config.metrics.alpha == 0.01

    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_shipped_configs_load():
    """Sample configs in configs/ are valid."""
    assert load_config("configs/fish_lab.yaml").lab == "fish"
    assert load_config("configs/estuary_lab.yaml").metrics.alpha == 0.01


@pytest.mark.parametrize(
    "overrides",
    [
        {"lab": "rivers"},
        {"metrics": {"confidence_level": 1.0}},
        {"metrics": {"bootstrap_samples": 0}},
        {"fish": {"habitats": [{"name": "A", "mean": 1, "sd": 1}]}},
        {"fish": {"habitats": [{"name": "A", "mean": 1, "sd": 1}, {"name": "A", "mean": 2, "sd": 1}]}},
        {"fish": {"habitats": [{"name": "A", "mean": 1, "sd": 0}, {"name": "B", "mean": 2, "sd": 1}]}},
    ],
)
def test_invalid_config(overrides):
    """Malformed configs raise ValidationError."""
    data = {"experiment_name": "x", "lab": "fish", **overrides}
    with pytest.raises(ValidationError):
        LabConfig(**data)


def test_generate_fish_data():
    """Fish data are reproducible and shaped by the config."""
    config = FishConfig()
    a = generate_fish_data(config, seed=123)
    b = generate_fish_data(config, seed=123)
    c = generate_fish_data(config, seed=124)

    assert a.equals(b)
    assert not a.equals(c)
    assert list(a.columns) == ["length", "habitat"]
    assert a["habitat"].value_counts()["Seagrass"] == 40
    assert list(a["habitat"].cat.categories) == ["Seagrass", "Reef"]

    means = a.groupby("habitat", observed=True)["length"].mean()
    assert 480 < means["Seagrass"] < 560
    assert 660 < means["Reef"] < 740


def test_generate_estuary_data():
    """Estuary data have one block of rows per site."""
    config = LabConfig(experiment_name="x", lab="estuary")
    df = generate_estuary_data(config.estuary, seed=230)

    assert len(df) == 180
    assert list(df.columns) == ["estuary", *VARIABLES]
    assert df["estuary"].iloc[0] == "Indian River Lagoon"
    assert df["estuary"].iloc[-1] == "Apalachicola Bay"
    assert not df[VARIABLES].isna().any().any()

    salinity = df.groupby("estuary", observed=True)["salinity_psu"].mean()
    assert salinity["Indian River Lagoon"] > salinity["Apalachicola Bay"]


def test_dataset_csv_round_trip(tmp_path):
    """Saved datasets load back with the grouping column restored."""
    df = generate_fish_data(FishConfig(), seed=1)
    path = tmp_path / "data.csv"
    save_dataset(df, path)

    loaded = load_dataset(path, "fish")
    assert list(loaded["habitat"].cat.categories) == ["Seagrass", "Reef"]
    assert np.allclose(loaded["length"], df["length"])

    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "nope.csv")
