"""Routes for interactive episode sessions.

A session pairs one SimulationEngine with an episode cursor and the current
slider positions. Each scripted day's policy schedule and lever nudge are
applied when that day becomes current, before the player advances it.
"""

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from typing import Iterator, Optional

from fastapi import APIRouter, HTTPException

from api.models import (
    DayReport,
    EnvironmentView,
    EpisodeDayView,
    PolicyResponse,
    RunEvaluationView,
    SessionCreateRequest,
    SessionView,
    SliderValues,
    TimeseriesResponse,
)
from airshed.core.config import EnvironmentState, ScenarioConfig, SliderPositions
from airshed.core.engine import SimulationEngine
from airshed.core.errors import InvalidInputError
from airshed.core.evaluation import evaluate_run
from airshed.presentation.formatting import (
    daily_insight,
    format_day_report,
    tradeoff_line,
    trend_series,
)
from airshed.scenarios.registry import get_scenario

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@dataclass
class Session:
    session_id: str
    scenario_id: str
    config: ScenarioConfig
    engine: SimulationEngine = field(default_factory=SimulationEngine)
    sliders: SliderPositions = field(default_factory=SliderPositions)
    cursor: int = 0  # index of the next episode day to simulate
    last_environment: Optional[EnvironmentState] = None
    started_at: float = field(default_factory=time.time)
    # Held while a mutating request runs; a second one gets 409
    lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def finished(self) -> bool:
        return self.cursor >= len(self.config.episode)


# In-memory store keyed by session_id
sessions: dict[str, Session] = {}


def _get_session(session_id: str) -> Session:
    if session_id not in sessions:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return sessions[session_id]


@contextmanager
def _exclusive(session: Session) -> Iterator[None]:
    """Reject overlapping mutations of the same session."""
    if not session.lock.acquire(blocking=False):
        raise HTTPException(
            status_code=409,
            detail=f"Session '{session.session_id}' is busy with another request",
        )
    try:
        yield
    finally:
        session.lock.release()


def _enter_day(session: Session) -> None:
    """Apply the current day's scheduled policies and lever nudge."""
    if session.finished:
        return
    for flag in session.config.policy_schedule.get(session.cursor, []):
        session.engine.apply_policy(flag)
    session.sliders = session.sliders.nudged(session.config.episode.days[session.cursor].nudge)


def _start(session: Session) -> None:
    session.engine.reset()
    session.cursor = 0
    session.sliders = session.config.initial_sliders
    session.last_environment = None
    _enter_day(session)


def _session_view(session: Session) -> SessionView:
    engine = session.engine
    snapshot = engine.snapshot()
    latest = engine.history.latest()

    current_day: Optional[EpisodeDayView] = None
    if not session.finished:
        episode_day = session.config.episode.days[session.cursor]
        current_day = EpisodeDayView(
            index=session.cursor,
            title=episode_day.title,
            narrative=episode_day.narrative,
            environment=EnvironmentView(**asdict(episode_day.environment)),
        )

    insight: Optional[str] = None
    if session.last_environment is not None:
        insight = daily_insight(latest.composition, session.last_environment, latest.flags)

    evaluation: Optional[RunEvaluationView] = None
    if session.finished:
        evaluation = RunEvaluationView(**asdict(evaluate_run(engine.history)))

    return SessionView(
        session_id=session.session_id,
        scenario_id=session.scenario_id,
        day=snapshot.day,
        finished=session.finished,
        current_day=current_day,
        sliders=SliderValues(**asdict(session.sliders)),
        flags=asdict(snapshot.flags),
        tradeoff_line=tradeoff_line(snapshot.tradeoff_scores),
        report=DayReport(**format_day_report(latest)),
        insight=insight,
        evaluation=evaluation,
    )


@router.post("", response_model=SessionView)
async def create_session(request: SessionCreateRequest) -> SessionView:
    """Start a new session on a predefined scenario."""
    try:
        config = get_scenario(request.scenario_id)
    except KeyError:
        raise HTTPException(
            status_code=404, detail=f"Scenario '{request.scenario_id}' not found"
        )
    errors = config.validate()
    if errors:
        raise HTTPException(status_code=422, detail="; ".join(errors))

    session = Session(
        session_id=str(uuid.uuid4()),
        scenario_id=request.scenario_id,
        config=config,
    )
    _start(session)
    sessions[session.session_id] = session
    logger.info("Created session %s on scenario %s", session.session_id, request.scenario_id)
    return _session_view(session)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session_id: str) -> SessionView:
    return _session_view(_get_session(session_id))


@router.put("/{session_id}/controls", response_model=SessionView)
async def set_controls(session_id: str, sliders: SliderValues) -> SessionView:
    """Move the lever sliders. Takes effect on the next advance."""
    session = _get_session(session_id)
    with _exclusive(session):
        session.sliders = SliderPositions(**sliders.model_dump())
    return _session_view(session)


@router.post("/{session_id}/policies/{flag}", response_model=PolicyResponse)
async def apply_policy(session_id: str, flag: str) -> PolicyResponse:
    """Enact a policy. Re-applying one is reported, not rejected."""
    session = _get_session(session_id)
    with _exclusive(session):
        try:
            outcome = session.engine.apply_policy(flag)
        except InvalidInputError as e:
            raise HTTPException(status_code=422, detail=str(e))
    return PolicyResponse(
        **asdict(outcome),
        tradeoff_line=tradeoff_line(session.engine.snapshot().tradeoff_scores),
    )


@router.post("/{session_id}/advance", response_model=SessionView)
async def advance_session(session_id: str) -> SessionView:
    """Simulate the current scripted day with the current sliders."""
    session = _get_session(session_id)
    with _exclusive(session):
        if session.finished:
            raise HTTPException(
                status_code=409, detail=f"Session '{session_id}' has finished its episode"
            )
        episode_day = session.config.episode.days[session.cursor]
        try:
            session.engine.advance_day(session.sliders.to_controls(), episode_day.environment)
        except InvalidInputError as e:
            raise HTTPException(status_code=422, detail=str(e))

        session.last_environment = episode_day.environment
        session.cursor += 1
        _enter_day(session)
    return _session_view(session)


@router.post("/{session_id}/reset", response_model=SessionView)
async def reset_session(session_id: str) -> SessionView:
    """Restart the episode from seed values."""
    session = _get_session(session_id)
    with _exclusive(session):
        _start(session)
    return _session_view(session)


@router.get("/{session_id}/timeseries", response_model=TimeseriesResponse)
async def get_timeseries(session_id: str) -> TimeseriesResponse:
    """Reported PM per day, seed included, for the trend plot."""
    session = _get_session(session_id)
    return TimeseriesResponse(**trend_series(session.engine.history))


@router.delete("/{session_id}")
async def delete_session(session_id: str) -> dict:
    _get_session(session_id)
    del sessions[session_id]
    return {"deleted": session_id}
