"""Configuration system with YAML parsing and Pydantic validation"""

from pathlib import Path
from typing import Literal
import yaml
from pydantic import BaseModel, Field, model_validator


class Normal(BaseModel):
    """Parameters of a normal distribution."""
    mean: float
    sd: float = Field(..., gt=0.0)


class HabitatSpec(BaseModel):
    """One sampled fish habitat."""
    name: str
    n: int = Field(default=40, ge=2)
    mean: float
    sd: float = Field(..., gt=0.0)


class FishConfig(BaseModel):
    """Fish populations lab configuration."""
    habitats: list[HabitatSpec] = Field(default_factory=lambda: [
        HabitatSpec(name="Seagrass", n=40, mean=520, sd=40),
        HabitatSpec(name="Reef", n=40, mean=700, sd=45),
    ])

    @model_validator(mode="after")
    def _check_habitats(self) -> "FishConfig":
        if len(self.habitats) != 2:
            raise ValueError("fish lab compares exactly two habitats")
        if len({h.name for h in self.habitats}) != len(self.habitats):
            raise ValueError("habitat names must be unique")
        return self


class SiteSpec(BaseModel):
    """One monitored estuary."""
    name: str
    n: int = Field(default=60, ge=2)
    temperature_c: Normal
    dissolved_oxygen_mgl: Normal
    salinity_psu: Normal


def _default_sites() -> list[SiteSpec]:
    rows = [
        ("Indian River Lagoon", (27, 2), (6.5, 1.2), (32, 3)),
        ("Tampa Bay", (26, 2.5), (7.2, 1.0), (28, 4)),
        ("Apalachicola Bay", (25, 1.8), (7.8, 0.8), (20, 5)),
    ]
    return [
        SiteSpec(
            name=name,
            n=60,
            temperature_c=Normal(mean=t[0], sd=t[1]),
            dissolved_oxygen_mgl=Normal(mean=do[0], sd=do[1]),
            salinity_psu=Normal(mean=s[0], sd=s[1]),
        )
        for name, t, do, s in rows
    ]


class EstuaryConfig(BaseModel):
    """Estuary water-quality lab configuration."""
    sites: list[SiteSpec] = Field(default_factory=_default_sites)

    @model_validator(mode="after")
    def _check_sites(self) -> "EstuaryConfig":
        if len(self.sites) < 2:
            raise ValueError("estuary lab needs at least two sites")
        if len({s.name for s in self.sites}) != len(self.sites):
            raise ValueError("site names must be unique")
        return self


class MetricsConfig(BaseModel):
    """Metrics configuration."""
    bootstrap_samples: int = Field(default=5000, ge=1)
    confidence_level: float = Field(default=0.95, gt=0.0, lt=1.0)
    alpha: float = Field(default=0.05, gt=0.0, lt=1.0)
    bootstrap_seed: int | None = Field(default=None, description="Defaults to the data seed when unset")


class OutputConfig(BaseModel):
    """Output configuration."""
    runs_dir: str = "runs"
    save_figures: bool = True
    figure_format: str = "png"


class LabConfig(BaseModel):
    """Complete lab configuration."""
    experiment_name: str
    lab: Literal["fish", "estuary"]
    seed: int = 123
    fish: FishConfig = Field(default_factory=FishConfig)
    estuary: EstuaryConfig = Field(default_factory=EstuaryConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def bootstrap_seed(self) -> int:
        if self.metrics.bootstrap_seed is not None:
            return self.metrics.bootstrap_seed
        return self.seed


def load_config(config_path: str | Path) -> LabConfig:
    """Load and validate YAML config file."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return LabConfig(**data)
