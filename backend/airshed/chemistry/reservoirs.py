"""Precursor reservoir update.

Each pool gains today's emission and loses a first-order fraction driven
by sunlight (oxidation) and wind (ventilation). One explicit Euler step:
the loss uses the pool value from before the update.
"""

from airshed.chemistry.meteorology import MeteorologyFactors
from airshed.core.state import PollutantReservoirs


# species -> (sun coefficient, wind coefficient, loss scale)
RESERVOIR_LOSS_COEFFICIENTS: dict[str, tuple[float, float, float]] = {
    "so2": (0.12, 0.10, 0.15),
    "nox": (0.14, 0.08, 0.14),
    "voc": (0.10, 0.06, 0.12),
    "nh3": (0.0, 0.06, 0.08),  # no photochemical sink
}


def update_reservoirs(
    reservoirs: PollutantReservoirs,
    emissions: dict[str, float],
    met: MeteorologyFactors,
) -> PollutantReservoirs:
    """Return the pools after one day of emission and loss, floored at zero."""
    updated: dict[str, float] = {}
    for species, current in reservoirs.values().items():
        sun_coeff, wind_coeff, scale = RESERVOIR_LOSS_COEFFICIENTS[species]
        loss: float = (sun_coeff * met.sun + wind_coeff * met.wind) * current * scale
        updated[species] = max(0.0, current + emissions[species] - loss)
    return PollutantReservoirs(**updated)
