"""Meteorology scalars derived from the day's environment.

Each scalar is clamped to a fixed range so that extreme weather cannot
drive the box model into runaway feedback.
"""

from dataclasses import dataclass

from airshed.core.config import EnvironmentState


# Mixing height (m) at which the inversion factor is 1
INVERSION_REFERENCE_HEIGHT: float = 220.0
INVERSION_RANGE: tuple[float, float] = (0.6, 2.2)

# Relative humidity (%) at which the humidity factor is 1
HUMIDITY_REFERENCE: float = 80.0
HUMIDITY_RANGE: tuple[float, float] = (0.6, 1.35)

SUN_RANGE: tuple[float, float] = (0.2, 0.8)
WIND_RANGE: tuple[float, float] = (0.6, 3.0)

# Winter-stability proxy for nitrate formation
COLD_REFERENCE_HEIGHT: float = 260.0
COLD_SCALE_HEIGHT: float = 200.0
COLD_RANGE: tuple[float, float] = (0.2, 1.1)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class MeteorologyFactors:
    inversion: float
    humidity: float
    sun: float
    wind: float
    cold: float


def compute_meteorology(env: EnvironmentState) -> MeteorologyFactors:
    """Derive the clamped scalars used by the reservoir and aerosol updates."""
    return MeteorologyFactors(
        # lower mixing height traps more
        inversion=clamp(INVERSION_REFERENCE_HEIGHT / env.mixing_height, *INVERSION_RANGE),
        humidity=clamp(env.relative_humidity / HUMIDITY_REFERENCE, *HUMIDITY_RANGE),
        sun=clamp(env.sunlight_fraction, *SUN_RANGE),
        wind=clamp(env.wind_speed, *WIND_RANGE),
        cold=clamp(
            (COLD_REFERENCE_HEIGHT - env.mixing_height) / COLD_SCALE_HEIGHT,
            *COLD_RANGE,
        ),
    )
