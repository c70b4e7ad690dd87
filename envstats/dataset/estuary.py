"""Synthetic water-quality monitoring data for several estuaries"""

import numpy as np
import pandas as pd

from envstats.config import EstuaryConfig

GROUP_COLUMN = "estuary"
VARIABLES = ["temperature_c", "dissolved_oxygen_mgl", "salinity_psu"]

VARIABLE_LABELS = {
    "temperature_c": "Temperature (°C)",
    "dissolved_oxygen_mgl": "Dissolved Oxygen (mg/L)",
    "salinity_psu": "Salinity (psu)",
}


def generate_estuary_data(config: EstuaryConfig, seed: int) -> pd.DataFrame:
    """Draw temperature, dissolved oxygen and salinity for every site.

    Values are drawn variable by variable, and within a variable site by site,
    from a single generator seeded with ``seed``.
    """
    rng = np.random.default_rng(seed)

    data: dict[str, object] = {
        GROUP_COLUMN: pd.Categorical(
            [site.name for site in config.sites for _ in range(site.n)],
            categories=[site.name for site in config.sites],
        ),
    }
    for variable in VARIABLES:
        draws = []
        for site in config.sites:
            params = getattr(site, variable)
            draws.append(rng.normal(loc=params.mean, scale=params.sd, size=site.n))
        data[variable] = np.concatenate(draws)

    return pd.DataFrame(data)
