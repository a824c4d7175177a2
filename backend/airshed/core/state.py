"""Simulation state data structures."""

from dataclasses import asdict, dataclass, fields, replace
from typing import Iterator, Optional

import pandas as pd

from airshed.core.config import SEED_COMPOSITION, SEED_RESERVOIRS


@dataclass(frozen=True)
class PollutantReservoirs:
    """Gaseous precursor pools."""

    so2: float = SEED_RESERVOIRS["so2"]
    nox: float = SEED_RESERVOIRS["nox"]
    voc: float = SEED_RESERVOIRS["voc"]
    nh3: float = SEED_RESERVOIRS["nh3"]

    def values(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class PMComposition:
    """Particulate mass by component (µg/m³-like units)."""

    primary: float = SEED_COMPOSITION["primary"]
    sulfate: float = SEED_COMPOSITION["sulfate"]
    nitrate: float = SEED_COMPOSITION["nitrate"]
    secondary_organic: float = SEED_COMPOSITION["secondary_organic"]

    def values(self) -> dict[str, float]:
        return asdict(self)

    def total(self) -> float:
        """Unweighted mass sum of all components."""
        return self.primary + self.sulfate + self.nitrate + self.secondary_organic


@dataclass
class PolicyFlags:
    """One-way policy switches. Once set, a flag stays set until reset."""

    kiln_ban: bool = False
    odd_even: bool = False
    burning_crackdown: bool = False
    road_sweep: bool = False
    public_alert: bool = False

    def active(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def copy(self) -> "PolicyFlags":
        return replace(self)


@dataclass
class TradeoffScores:
    """Accumulated costs of enacted policies. Only ever incremented."""

    econ: float = 0.0
    mobility: float = 0.0
    social: float = 0.0
    cost: float = 0.0

    def add(self, increments: dict[str, float]) -> None:
        for name, amount in increments.items():
            if amount < 0:
                raise ValueError(f"tradeoff increment for {name} must be >= 0, got {amount}")
            setattr(self, name, getattr(self, name) + amount)

    def copy(self) -> "TradeoffScores":
        return replace(self)


@dataclass(frozen=True)
class DayDiagnostics:
    """Intermediate quantities of one day update, kept for inspection."""

    # Policy-damped lever fractions
    effective_levels: dict[str, float]

    # Emissions
    primary_emission: float
    precursor_emissions: dict[str, float]

    # Meteorology scalars
    inversion_factor: float
    humidity_factor: float
    sun_factor: float
    wind_factor: float
    cold_factor: float

    # Secondary formation rates
    formation: dict[str, float]

    # Removal
    dry_loss: float
    rain_loss: float
    retained_fraction: float


@dataclass(frozen=True)
class DayResult:
    """Immutable record of one simulated day (or the day-0 seed)."""

    day: int
    total_reported: float
    haze_multiplier: float
    composition: PMComposition
    reservoirs: PollutantReservoirs
    tradeoff_scores: TradeoffScores
    flags: PolicyFlags
    diagnostics: Optional[DayDiagnostics] = None

    def to_dict(self) -> dict:
        """Flatten into a row for tables and JSON responses."""
        row = {
            "day": self.day,
            "total_reported": self.total_reported,
            "haze_multiplier": self.haze_multiplier,
            "total_mass": self.composition.total(),
        }
        row.update({f"pm_{k}": v for k, v in self.composition.values().items()})
        row.update(self.reservoirs.values())
        row.update({f"tradeoff_{k}": v for k, v in asdict(self.tradeoff_scores).items()})
        row["policies"] = ",".join(self.flags.active())
        return row


class HistoryLog:
    """Append-only sequence of DayResult records, indexed by day from 0."""

    def __init__(self):
        self._entries: list[DayResult] = []

    def append(self, result: DayResult) -> None:
        expected = len(self._entries)
        if result.day != expected:
            raise ValueError(f"history expects day {expected}, got day {result.day}")
        self._entries.append(result)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DayResult]:
        return iter(self._entries)

    def __getitem__(self, day: int) -> DayResult:
        return self._entries[day]

    def entries(self) -> tuple[DayResult, ...]:
        return tuple(self._entries)

    def copy(self) -> "HistoryLog":
        """Detached log holding the same immutable entries."""
        log = HistoryLog()
        log._entries = list(self._entries)
        return log

    def latest(self) -> DayResult:
        return self._entries[-1]

    def simulated(self) -> tuple[DayResult, ...]:
        """Entries produced by advance_day, i.e. without the day-0 seed."""
        return tuple(self._entries[1:])

    def days(self) -> list[int]:
        return [r.day for r in self._entries]

    def to_frame(self) -> pd.DataFrame:
        """One row per day, composition, reservoirs and tradeoffs flattened."""
        return pd.DataFrame([r.to_dict() for r in self._entries]).set_index("day")


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of engine state for rendering."""

    day: int
    reservoirs: PollutantReservoirs
    composition: PMComposition
    flags: PolicyFlags
    tradeoff_scores: TradeoffScores
    history: tuple[DayResult, ...]
