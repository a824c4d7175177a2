"""Scenario: ban kilns and stop open burning before the first day.

Tests whether cutting the SO₂ and burning sources ahead of the inversion
keeps sulfate and primary PM from piling up.
"""

from airshed.core.config import ScenarioConfig, SliderPositions
from airshed.scenarios.winter_week import build_winter_week


def build_early_action_config() -> ScenarioConfig:
    """Build a ScenarioConfig with kiln ban and burning crackdown on day 1.

    Returns
    -------
    ScenarioConfig
        Default sliders, both policies scheduled before the first day.
    """
    return ScenarioConfig(
        episode=build_winter_week(),
        initial_sliders=SliderPositions(),
        policy_schedule={0: ["kiln_ban", "burning_crackdown"]},
        name="Early action (kilns + burning)",
        description=(
            "Shut down brick kilns and crack down on open burning before the "
            "inversion sets in. Costs economic and social tradeoff points."
        ),
    )

# Alias for script compatibility
get_config = build_early_action_config
