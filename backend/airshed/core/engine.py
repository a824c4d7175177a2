"""Main simulation engine.

Advances the single-box airshed model one day at a time:
    Phase A: Emissions (policy-damped levers -> primary PM and precursors)
    Phase B: Chemistry (meteorology scalars, reservoir update, secondary formation)
    Phase C: Aerosol (inversion-amplified addition, removal, haze multiplier)

Everything is computed from the current state and the two explicit inputs;
engine fields are only assigned once the whole day has been computed.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from airshed.chemistry.aerosol import (
    haze_multiplier,
    removal_fractions,
    secondary_formation,
    update_composition,
)
from airshed.chemistry.emissions import (
    effective_levels,
    precursor_emissions,
    primary_emission,
)
from airshed.chemistry.meteorology import compute_meteorology
from airshed.chemistry.reservoirs import update_reservoirs
from airshed.core.config import (
    ControlSettings,
    EnvironmentState,
    ScenarioConfig,
    SliderPositions,
)
from airshed.core.errors import InvalidInputError, StateInvariantViolation
from airshed.core.evaluation import RunEvaluation, evaluate_run
from airshed.core.state import (
    DayDiagnostics,
    DayResult,
    EngineSnapshot,
    HistoryLog,
    PMComposition,
    PolicyFlags,
    PollutantReservoirs,
    TradeoffScores,
)
from airshed.policies.actions import ALREADY_APPLIED_MESSAGE, POLICY_ACTIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicyOutcome:
    """Result of apply_policy. Re-applying a flag is reported, not raised."""

    flag: str
    applied: bool
    already_applied: bool
    message: str


def _check_invariants(
    reservoirs: PollutantReservoirs,
    composition: PMComposition,
) -> None:
    bad: list[str] = [
        f"{name}={value}"
        for name, value in {**reservoirs.values(), **composition.values()}.items()
        if not np.isfinite(value) or value < 0
    ]
    if bad:
        raise StateInvariantViolation(f"negative or non-finite state after update: {', '.join(bad)}")


class SimulationEngine:
    """Owns the precursor pools, PM composition, policy flags and tradeoffs."""

    def __init__(self):
        self.reset()

    @property
    def day(self) -> int:
        return self._day

    @property
    def flags(self) -> PolicyFlags:
        return self._flags.copy()

    @property
    def history(self) -> HistoryLog:
        """Detached copy; appending to it does not touch the engine."""
        return self._history.copy()

    def reset(self) -> None:
        """Restore seed pools and composition, clear flags, tradeoffs and history.

        History is re-seeded with a day-0 entry whose reported total is the
        unweighted sum of the seed PM components.
        """
        self._reservoirs: PollutantReservoirs = PollutantReservoirs()
        self._composition: PMComposition = PMComposition()
        self._flags: PolicyFlags = PolicyFlags()
        self._tradeoffs: TradeoffScores = TradeoffScores()
        self._day: int = 0
        self._history: HistoryLog = HistoryLog()
        self._history.append(DayResult(
            day=0,
            total_reported=self._composition.total(),
            haze_multiplier=1.0,
            composition=self._composition,
            reservoirs=self._reservoirs,
            tradeoff_scores=self._tradeoffs.copy(),
            flags=self._flags.copy(),
        ))

    def apply_policy(self, flag: str) -> PolicyOutcome:
        """Set a policy flag and charge its tradeoff, once.

        Raises
        ------
        InvalidInputError
            If *flag* is not a known policy.
        """
        if flag not in POLICY_ACTIONS:
            raise InvalidInputError([
                f"unknown policy '{flag}', expected one of {sorted(POLICY_ACTIONS)}"
            ])
        action = POLICY_ACTIONS[flag]

        if getattr(self._flags, action.flag):
            logger.debug("Policy %s already applied on day %d", flag, self._day)
            return PolicyOutcome(
                flag=flag, applied=False, already_applied=True, message=ALREADY_APPLIED_MESSAGE
            )

        setattr(self._flags, action.flag, True)
        self._tradeoffs.add(action.tradeoffs)
        logger.info("Applied policy %s after day %d (tradeoffs %s)", flag, self._day, action.tradeoffs)
        return PolicyOutcome(flag=flag, applied=True, already_applied=False, message=action.text)

    def advance_day(
        self,
        controls: ControlSettings,
        environment: EnvironmentState,
    ) -> DayResult:
        """Simulate one day and append the result to the history.

        Parameters
        ----------
        controls : ControlSettings
            Raw lever fractions, each in [0, 1].
        environment : EnvironmentState
            The day's meteorology.

        Returns
        -------
        DayResult
            Immutable record of the new day, also appended to the history.

        Raises
        ------
        InvalidInputError
            If either input is out of range. The engine is left untouched.
        """
        errors: list[str] = []
        if not isinstance(controls, ControlSettings):
            errors.append(f"controls must be ControlSettings, got {type(controls).__name__}")
        else:
            errors.extend(controls.validate())
        if not isinstance(environment, EnvironmentState):
            errors.append(f"environment must be EnvironmentState, got {type(environment).__name__}")
        else:
            errors.extend(environment.validate())
        if errors:
            raise InvalidInputError(errors)

        # ----- Phase A: Emissions -----
        levels: dict[str, float] = effective_levels(controls, self._flags, environment.rain)
        e_primary: float = primary_emission(levels)
        e_precursors: dict[str, float] = precursor_emissions(levels)

        # ----- Phase B: Chemistry -----
        met = compute_meteorology(environment)
        reservoirs: PollutantReservoirs = update_reservoirs(self._reservoirs, e_precursors, met)
        formation: dict[str, float] = secondary_formation(reservoirs, met)

        # ----- Phase C: Aerosol -----
        dry_loss, rain_loss, retained = removal_fractions(environment, met)
        composition: PMComposition = update_composition(
            self._composition, e_primary, formation, met.inversion, retained
        )
        haze: float = haze_multiplier(environment.relative_humidity)

        _check_invariants(reservoirs, composition)

        result = DayResult(
            day=self._day + 1,
            total_reported=composition.total() * haze,
            haze_multiplier=haze,
            composition=composition,
            reservoirs=reservoirs,
            tradeoff_scores=self._tradeoffs.copy(),
            flags=self._flags.copy(),
            diagnostics=DayDiagnostics(
                effective_levels=levels,
                primary_emission=e_primary,
                precursor_emissions=e_precursors,
                inversion_factor=met.inversion,
                humidity_factor=met.humidity,
                sun_factor=met.sun,
                wind_factor=met.wind,
                cold_factor=met.cold,
                formation=formation,
                dry_loss=dry_loss,
                rain_loss=rain_loss,
                retained_fraction=retained,
            ),
        )

        # Commit
        self._reservoirs = reservoirs
        self._composition = composition
        self._day = result.day
        self._history.append(result)

        logger.debug(
            "Day %d: reported PM %.1f (mass %.1f, haze x%.2f, inversion x%.2f)",
            result.day, result.total_reported, composition.total(), haze, met.inversion,
        )
        return result

    def snapshot(self) -> EngineSnapshot:
        """Read-only copy of the current state for rendering."""
        return EngineSnapshot(
            day=self._day,
            reservoirs=self._reservoirs,
            composition=self._composition,
            flags=self._flags.copy(),
            tradeoff_scores=self._tradeoffs.copy(),
            history=self._history.entries(),
        )


@dataclass
class EpisodeRun:
    """Everything produced by walking an engine through one episode."""

    results: list[DayResult]
    final_sliders: SliderPositions
    evaluation: RunEvaluation
    history: HistoryLog
    policy_outcomes: list[PolicyOutcome] = field(default_factory=list)


def run_episode(
    config: ScenarioConfig,
    engine: Optional[SimulationEngine] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> EpisodeRun:
    """Reset an engine and drive it through every day of an episode.

    Before each day the scheduled policies are applied and the day's lever
    nudge is added to the slider positions. Nudged sliders carry over to
    later days.

    Parameters
    ----------
    config : ScenarioConfig
        Episode, starting sliders and policy schedule.
    engine : SimulationEngine, optional
        Engine to drive. A new one is created if not provided.
    progress_callback : callable, optional
        Called with (current_day, total_days) after each day.

    Returns
    -------
    EpisodeRun
    """
    errors = config.validate()
    if errors:
        raise InvalidInputError(errors)

    if engine is None:
        engine = SimulationEngine()
    engine.reset()

    total_days: int = len(config.episode)
    sliders: SliderPositions = config.initial_sliders
    results: list[DayResult] = []
    outcomes: list[PolicyOutcome] = []

    logger.info("Running episode '%s' (%d days)", config.episode.name, total_days)

    for index, episode_day in enumerate(config.episode.days):
        for flag in config.policy_schedule.get(index, []):
            outcomes.append(engine.apply_policy(flag))

        sliders = sliders.nudged(episode_day.nudge)
        results.append(engine.advance_day(sliders.to_controls(), episode_day.environment))

        if progress_callback is not None:
            progress_callback(index + 1, total_days)

    evaluation = evaluate_run(engine.history)
    logger.info(
        "Episode '%s' finished: average PM %.1f (%s)",
        config.episode.name, evaluation.average, evaluation.tier,
    )
    return EpisodeRun(
        results=results,
        final_sliders=sliders,
        evaluation=evaluation,
        history=engine.history,
        policy_outcomes=outcomes,
    )
