"""Predefined scenarios keyed by id."""

from typing import Callable

from airshed.core.config import ScenarioConfig
from airshed.scenarios.business_as_usual import build_business_as_usual_config
from airshed.scenarios.early_action import build_early_action_config
from airshed.scenarios.late_response import build_late_response_config


SCENARIOS: dict[str, Callable[[], ScenarioConfig]] = {
    "business_as_usual": build_business_as_usual_config,
    "early_action": build_early_action_config,
    "late_response": build_late_response_config,
}

DEFAULT_SCENARIO_ID = "business_as_usual"


def get_scenario(scenario_id: str) -> ScenarioConfig:
    """Build a fresh config for *scenario_id*, raising KeyError if unknown."""
    return SCENARIOS[scenario_id]()
