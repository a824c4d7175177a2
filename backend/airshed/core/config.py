"""Simulation inputs, episode definitions and scenario configuration."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from airshed.policies.actions import POLICY_ACTIONS


# Seed values restored by SimulationEngine.reset()
SEED_RESERVOIRS = {
    "so2": 20.0,
    "nox": 18.0,
    "voc": 14.0,
    "nh3": 16.0,
}

SEED_COMPOSITION = {
    "primary": 35.0,
    "sulfate": 10.0,
    "nitrate": 8.0,
    "secondary_organic": 7.0,
}

# UI sliders hold whole percent points
SLIDER_MIN = 0.0
SLIDER_MAX = 100.0

# Starting slider positions of a fresh run
DEFAULT_SLIDERS = {
    "traffic": 60.0,
    "kilns": 70.0,
    "burning": 55.0,
    "dust": 50.0,
}

LEVER_NAMES = ("traffic", "kilns", "burning", "dust")


def _is_number(value) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, (bool, np.bool_))


def _check_range(
    errors: list[str],
    name: str,
    value,
    lower: float,
    upper: Optional[float],
    lower_inclusive: bool = True,
) -> None:
    """Append a message to *errors* if *value* is not a finite number in range."""
    try:
        finite = _is_number(value) and bool(np.isfinite(float(value)))
    except OverflowError:
        finite = False
    if not finite:
        errors.append(f"{name} must be a finite number, got {value!r}")
        return
    below = value < lower if lower_inclusive else value <= lower
    if below or (upper is not None and value > upper):
        if upper is None:
            bound = f">= {lower}" if lower_inclusive else f"> {lower}"
        else:
            bound = f"{lower}-{upper}"
        errors.append(f"{name} must be {bound}, got {value}")


@dataclass(frozen=True)
class EnvironmentState:
    """Meteorological drivers for one simulated day."""

    mixing_height: float  # m
    wind_speed: float  # m/s
    relative_humidity: float  # percent
    rain: bool = False
    sunlight_fraction: float = 0.5  # 0-1

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors: list[str] = []
        _check_range(errors, "mixing_height", self.mixing_height, 0.0, None, lower_inclusive=False)
        _check_range(errors, "wind_speed", self.wind_speed, 0.0, None)
        _check_range(errors, "relative_humidity", self.relative_humidity, 0.0, 100.0)
        _check_range(errors, "sunlight_fraction", self.sunlight_fraction, 0.0, 1.0)
        if not isinstance(self.rain, (bool, np.bool_)):
            errors.append(f"rain must be a boolean, got {self.rain!r}")
        return errors


@dataclass(frozen=True)
class ControlSettings:
    """Emission-intensity levers as fractions in [0, 1]."""

    traffic: float
    kilns: float
    burning: float
    dust: float

    @classmethod
    def from_percent(
        cls,
        traffic: float,
        kilns: float,
        burning: float,
        dust: float,
    ) -> "ControlSettings":
        """Normalize slider values (0-100) to lever fractions."""
        return cls(
            traffic=traffic / 100,
            kilns=kilns / 100,
            burning=burning / 100,
            dust=dust / 100,
        )

    def to_percent(self) -> dict[str, float]:
        return {name: getattr(self, name) * 100 for name in LEVER_NAMES}

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors: list[str] = []
        for name in LEVER_NAMES:
            _check_range(errors, name, getattr(self, name), 0.0, 1.0)
        return errors


@dataclass(frozen=True)
class LeverNudge:
    """One-time additive adjustment to slider positions, in percent points."""

    traffic: float = 0.0
    kilns: float = 0.0
    burning: float = 0.0
    dust: float = 0.0


@dataclass(frozen=True)
class SliderPositions:
    """Lever values as the UI holds them (0-100)."""

    traffic: float = DEFAULT_SLIDERS["traffic"]
    kilns: float = DEFAULT_SLIDERS["kilns"]
    burning: float = DEFAULT_SLIDERS["burning"]
    dust: float = DEFAULT_SLIDERS["dust"]

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors: list[str] = []
        for name in LEVER_NAMES:
            _check_range(errors, name, getattr(self, name), SLIDER_MIN, SLIDER_MAX)
        return errors

    def nudged(self, nudge: Optional[LeverNudge]) -> "SliderPositions":
        """Apply *nudge*, keeping every slider within its bounds."""
        if nudge is None:
            return self
        return SliderPositions(**{
            name: max(SLIDER_MIN, min(SLIDER_MAX, getattr(self, name) + getattr(nudge, name)))
            for name in LEVER_NAMES
        })

    def to_controls(self) -> ControlSettings:
        return ControlSettings.from_percent(self.traffic, self.kilns, self.burning, self.dust)


@dataclass(frozen=True)
class EpisodeDay:
    """One scripted day: its weather, story text and optional lever nudge."""

    title: str
    narrative: str
    environment: EnvironmentState
    nudge: Optional[LeverNudge] = None


@dataclass(frozen=True)
class Episode:
    """Ordered sequence of scripted days."""

    name: str
    days: tuple[EpisodeDay, ...]

    def __len__(self) -> int:
        return len(self.days)


@dataclass
class ScenarioConfig:
    """An episode plus starting sliders and a policy schedule.

    ``policy_schedule`` maps an episode-day index (0-based) to the policy
    names applied before that day is simulated.
    """

    episode: Episode
    initial_sliders: SliderPositions = field(default_factory=SliderPositions)
    policy_schedule: dict[int, list[str]] = field(default_factory=dict)

    # Metadata
    name: str = ""
    description: str = ""

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors = self.initial_sliders.validate()
        if len(self.episode) == 0:
            errors.append(f"episode '{self.episode.name}' has no days")
        for index in self.policy_schedule:
            if not 0 <= index < len(self.episode):
                errors.append(
                    f"policy_schedule day {index} outside episode of {len(self.episode)} days"
                )
        for index, flags in sorted(self.policy_schedule.items()):
            for flag in flags:
                if flag not in POLICY_ACTIONS:
                    errors.append(f"policy_schedule day {index}: unknown policy '{flag}'")
        for i, day in enumerate(self.episode.days):
            errors.extend(f"day {i}: {e}" for e in day.environment.validate())
        return errors
