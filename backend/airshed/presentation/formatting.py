"""Display formatting over engine outputs.

Pure functions of DayResult / EngineSnapshot values. Nothing here holds or
writes engine state.
"""

import math
from dataclasses import asdict
from typing import Iterable

from airshed.core.config import EnvironmentState
from airshed.core.state import DayResult, PMComposition, PolicyFlags, TradeoffScores


COMPONENT_LABELS: dict[str, str] = {
    "primary": "Primary",
    "sulfate": "Sulfate",
    "nitrate": "Nitrate",
    "secondary_organic": "SOA",
}

# Insight thresholds
LOW_MIXING_HEIGHT_M: float = 150.0
HIGH_HUMIDITY_PCT: float = 78.0

# Trend plot y-axis never shrinks below this
TREND_MIN_Y_MAX: float = 80.0
TREND_HEADROOM: float = 1.1


def composition_shares(composition: PMComposition) -> dict[str, float]:
    """Percent share of each component by mass (haze excluded)."""
    values = composition.values()
    denominator: float = max(1e-6, sum(values.values()))
    return {name: 100 * value / denominator for name, value in values.items()}


def dominant_component(composition: PMComposition) -> str:
    """Label of the largest component; earlier components win ties."""
    values = composition.values()
    name = max(values, key=lambda k: values[k])
    return COMPONENT_LABELS[name]


def daily_insight(
    composition: PMComposition,
    environment: EnvironmentState,
    flags: PolicyFlags,
) -> str:
    parts: list[str] = [f"Dominant today: {dominant_component(composition)}."]
    if environment.mixing_height <= LOW_MIXING_HEIGHT_M:
        parts.append("Low mixing height is trapping pollution near the surface.")
    if environment.relative_humidity >= HIGH_HUMIDITY_PCT:
        parts.append("High humidity is boosting haze and making air look worse.")
    if environment.rain:
        parts.append("Rain is removing particles quickly.")
    if flags.public_alert:
        parts.append("Public alert reduces exposure behavior, but not emissions.")
    return " ".join(parts)


def tradeoff_line(scores: TradeoffScores) -> str:
    return (
        f"Tradeoffs so far — econ:{scores.econ:g}, mobility:{scores.mobility:g}, "
        f"social:{scores.social:g}, cost:{scores.cost:g}"
    )


def trend_series(history: Iterable[DayResult]) -> dict:
    """Points and y-axis bound for the trend plot."""
    entries = list(history)
    totals: list[float] = [r.total_reported for r in entries]
    y_max: float = max([TREND_MIN_Y_MAX, *totals]) * TREND_HEADROOM
    return {
        "days": [r.day for r in entries],
        "totals": totals,
        "y_max": y_max,
    }


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (round() would give 82 for 82.5)."""
    return int(math.floor(value + 0.5))


def format_day_report(result: DayResult) -> dict:
    """Rounded numbers for the headline and composition bars."""
    return {
        "day": result.day,
        "pm": round_half_up(result.total_reported),
        "haze_multiplier": result.haze_multiplier,
        "components": {name: round_half_up(v) for name, v in result.composition.values().items()},
        "shares": composition_shares(result.composition),
        "dominant": dominant_component(result.composition),
        "tradeoffs": asdict(result.tradeoff_scores),
    }
