"""Aerosol module.

Secondary PM formation out of the updated precursor pools, removal by dry
deposition/ventilation and rain washout, and the humidity haze multiplier
used for the reported total.
"""

from airshed.chemistry.meteorology import MeteorologyFactors
from airshed.core.config import EnvironmentState
from airshed.core.state import PMComposition, PollutantReservoirs


# Secondary formation coefficients
SULFATE_YIELD: float = 0.22
NITRATE_YIELD: float = 0.18
NITRATE_PAIRING_SCALE: float = 0.012  # NOx x NH3 product scale
SOA_YIELD: float = 0.16
SOA_OXIDATION_FRACTION: float = 0.9

# Removal
DRY_LOSS_BASE: float = 0.06
DRY_LOSS_PER_WIND: float = 0.03
RAIN_WASHOUT: float = 0.35

# Haze growth thresholds (relative humidity %, multiplier), highest first
HAZE_STEPS: tuple[tuple[float, float], ...] = (
    (78.0, 1.18),
    (65.0, 1.08),
)


def secondary_formation(
    reservoirs: PollutantReservoirs,
    met: MeteorologyFactors,
) -> dict[str, float]:
    """Mass formed today per secondary component, before inversion scaling."""
    return {
        "sulfate": SULFATE_YIELD * reservoirs.so2 * met.sun * met.humidity,
        "nitrate": (
            NITRATE_YIELD * reservoirs.nox * reservoirs.nh3
            * NITRATE_PAIRING_SCALE * met.cold * met.humidity
        ),
        "secondary_organic": SOA_YIELD * reservoirs.voc * met.sun * SOA_OXIDATION_FRACTION,
    }


def removal_fractions(env: EnvironmentState, met: MeteorologyFactors) -> tuple[float, float, float]:
    """Return (dry_loss, rain_loss, retained_fraction).

    The retained fraction is floored at zero so heavy rain plus strong wind
    can never flip the sign of a component.
    """
    dry_loss: float = DRY_LOSS_BASE + DRY_LOSS_PER_WIND * met.wind
    rain_loss: float = RAIN_WASHOUT if env.rain else 0.0
    retained: float = max(0.0, 1 - dry_loss - rain_loss)
    return dry_loss, rain_loss, retained


def update_composition(
    composition: PMComposition,
    primary_emission: float,
    formation: dict[str, float],
    inversion: float,
    retained: float,
) -> PMComposition:
    """Add today's mass (amplified by the inversion) then apply removal.

    The inversion factor scales only the added mass, not the existing stock.
    """
    added: dict[str, float] = {"primary": primary_emission, **formation}
    return PMComposition(**{
        name: max(0.0, (current + added[name] * inversion) * retained)
        for name, current in composition.values().items()
    })


def haze_multiplier(relative_humidity: float) -> float:
    """Display-only humidity scaling. Never applied to stored mass."""
    for threshold, multiplier in HAZE_STEPS:
        if relative_humidity >= threshold:
            return multiplier
    return 1.0
