"""Pydantic models for API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class SessionCreateRequest(BaseModel):
    """Request to start an interactive episode."""

    scenario_id: str = Field(
        default="business_as_usual", description="Predefined scenario to load"
    )


class SliderValues(BaseModel):
    """Lever slider positions as shown in the UI (0-100)."""

    traffic: float = Field(..., ge=0.0, le=100.0)
    kilns: float = Field(..., ge=0.0, le=100.0)
    burning: float = Field(..., ge=0.0, le=100.0)
    dust: float = Field(..., ge=0.0, le=100.0)


class EnvironmentView(BaseModel):
    mixing_height: float = Field(..., description="Mixing height in meters")
    wind_speed: float = Field(..., description="Wind speed in m/s")
    relative_humidity: float = Field(..., description="Relative humidity in percent")
    rain: bool
    sunlight_fraction: float


class EpisodeDayView(BaseModel):
    """The scripted day that the next advance will simulate."""

    index: int = Field(..., description="0-based position in the episode")
    title: str
    narrative: str
    environment: EnvironmentView


class DayReport(BaseModel):
    """Rounded display values for one simulated day."""

    day: int
    pm: int = Field(..., description="Reported PM after haze multiplier, rounded")
    haze_multiplier: float
    components: dict[str, int]
    shares: dict[str, float] = Field(..., description="Percent share of each component by mass")
    dominant: str
    tradeoffs: dict[str, float]


class RunEvaluationView(BaseModel):
    average: float
    tier: str = Field(..., description="brutal, improved or strong")
    message: str
    days: int


class SessionView(BaseModel):
    """Full state of an interactive session for rendering."""

    session_id: str
    scenario_id: str
    day: int
    finished: bool
    current_day: Optional[EpisodeDayView] = Field(
        default=None, description="Next scripted day, absent once the episode is over"
    )
    sliders: SliderValues
    flags: dict[str, bool]
    tradeoff_line: str
    report: DayReport
    insight: Optional[str] = Field(
        default=None, description="Insight for the most recent simulated day"
    )
    evaluation: Optional[RunEvaluationView] = None


class PolicyResponse(BaseModel):
    flag: str
    applied: bool
    already_applied: bool
    message: str
    tradeoff_line: str


class TimeseriesResponse(BaseModel):
    days: list[int]
    totals: list[float]
    y_max: float


class PredefinedScenario(BaseModel):
    """A predefined scenario the front end can start a session from."""

    id: str = Field(..., description="Unique scenario identifier")
    name: str = Field(..., description="Short display name")
    description: str = Field(..., description="What the scenario does")
    days: int = Field(..., description="Number of scripted days")
    policy_schedule: dict[int, list[str]] = Field(
        default_factory=dict, description="Policies applied before each day index"
    )
