"""Emission module.

Turns lever fractions and active policies into direct PM emission and
precursor emission rates for one day.
"""

from airshed.core.config import ControlSettings, LEVER_NAMES
from airshed.core.state import PolicyFlags


# Multiplicative damping each policy applies to its lever
ODD_EVEN_TRAFFIC_FACTOR: float = 0.78
KILN_BAN_FACTOR: float = 0.35
BURNING_CRACKDOWN_FACTOR: float = 0.70

# Road sweeping works better on dry roads
ROAD_SWEEP_DRY_FACTOR: float = 0.70
ROAD_SWEEP_WET_FACTOR: float = 0.90

# Direct PM emitted per unit of effective lever
PRIMARY_PM_COEFFICIENTS: dict[str, float] = {
    "traffic": 22.0,
    "kilns": 28.0,
    "burning": 24.0,
    "dust": 16.0,
}

# Precursor emission per unit of effective lever
PRECURSOR_COEFFICIENTS: dict[str, dict[str, float]] = {
    "so2": {"kilns": 18.0, "burning": 2.0},
    "nox": {"traffic": 16.0, "kilns": 3.0},
    "voc": {"traffic": 10.0, "burning": 8.0},
    "nh3": {"burning": 2.0},
}

# Lever-independent sources (agriculture NH3)
PRECURSOR_BASELINES: dict[str, float] = {
    "so2": 0.0,
    "nox": 0.0,
    "voc": 0.0,
    "nh3": 6.0,
}


def effective_levels(
    controls: ControlSettings,
    flags: PolicyFlags,
    rain: bool,
) -> dict[str, float]:
    """Apply policy damping to the raw lever fractions."""
    traffic: float = controls.traffic
    kilns: float = controls.kilns
    burning: float = controls.burning
    dust: float = controls.dust

    if flags.odd_even:
        traffic *= ODD_EVEN_TRAFFIC_FACTOR
    if flags.kiln_ban:
        kilns *= KILN_BAN_FACTOR
    if flags.burning_crackdown:
        burning *= BURNING_CRACKDOWN_FACTOR
    if flags.road_sweep:
        dust *= ROAD_SWEEP_WET_FACTOR if rain else ROAD_SWEEP_DRY_FACTOR

    return {"traffic": traffic, "kilns": kilns, "burning": burning, "dust": dust}


def primary_emission(levels: dict[str, float]) -> float:
    """Direct PM emitted today. Not stored between days."""
    total: float = 0.0
    for lever in LEVER_NAMES:
        total += PRIMARY_PM_COEFFICIENTS[lever] * levels[lever]
    return total


def precursor_emissions(levels: dict[str, float]) -> dict[str, float]:
    """Emission into each precursor pool for today."""
    emissions: dict[str, float] = {}
    for species, coefficients in PRECURSOR_COEFFICIENTS.items():
        total: float = PRECURSOR_BASELINES[species]
        for lever, coefficient in coefficients.items():
            total += coefficient * levels[lever]
        emissions[species] = total
    return emissions
