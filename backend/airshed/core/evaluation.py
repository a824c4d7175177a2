"""End-of-run evaluation of a finished episode."""

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from airshed.core.errors import InvalidInputError
from airshed.core.state import DayResult


# (average above which the tier applies, tier id, message), worst first
OUTCOME_TIERS: tuple[tuple[float, str, str], ...] = (
    (
        180.0,
        "brutal",
        "Brutal week. Inversion + emissions dominated. Your best lever is "
        "cutting kilns/burning before the inversion days.",
    ),
    (
        120.0,
        "improved",
        "Bad but improved. You managed the worst days, but secondary "
        "formation still kept PM high.",
    ),
)

BEST_TIER: tuple[str, str] = (
    "strong",
    "Strong outcome. You reduced emissions early, so the inversion days "
    "didn't explode as much.",
)


@dataclass(frozen=True)
class RunEvaluation:
    average: float
    tier: str
    message: str
    days: int


def classify_average(average: float) -> tuple[str, str]:
    """Map an average reported PM value to (tier, message)."""
    for threshold, tier, message in OUTCOME_TIERS:
        if average > threshold:
            return tier, message
    return BEST_TIER


def evaluate_run(history: Iterable[DayResult]) -> RunEvaluation:
    """Average the reported totals of simulated days and grade the run.

    The day-0 seed entry is excluded. Reporting only; nothing is mutated.

    Raises
    ------
    InvalidInputError
        If no day has been simulated yet.
    """
    totals: list[float] = [r.total_reported for r in history if r.day > 0]
    if not totals:
        raise InvalidInputError(["cannot evaluate a run with no simulated days"])

    average: float = float(np.mean(totals))
    tier, message = classify_average(average)
    return RunEvaluation(average=average, tier=tier, message=message, days=len(totals))
