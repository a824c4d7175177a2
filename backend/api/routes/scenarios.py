"""Routes for predefined scenarios."""

from fastapi import APIRouter

from api.models import PredefinedScenario
from airshed.scenarios.registry import SCENARIOS

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


def _build_predefined_scenarios() -> list[PredefinedScenario]:
    """Build the list of predefined scenarios."""
    scenarios: list[PredefinedScenario] = []
    for scenario_id, build in SCENARIOS.items():
        config = build()
        scenarios.append(PredefinedScenario(
            id=scenario_id,
            name=config.name,
            description=config.description,
            days=len(config.episode),
            policy_schedule=config.policy_schedule,
        ))
    return scenarios


PREDEFINED_SCENARIOS = _build_predefined_scenarios()


@router.get("/predefined", response_model=list[PredefinedScenario])
async def get_predefined_scenarios() -> list[PredefinedScenario]:
    """Return the list of predefined scenarios.

    Each one is a starting point for an interactive session; the player can
    still enact any policy during play.
    """
    return PREDEFINED_SCENARIOS
