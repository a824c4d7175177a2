"""Scenario: react only once the haze day arrives.

Odd-even traffic, road sweeping and a public alert are enacted before the
humid day, after the inversion has already built up a PM stock.
"""

from airshed.core.config import ScenarioConfig, SliderPositions
from airshed.scenarios.winter_week import HAZE_DAY_INDEX, build_winter_week


def build_late_response_config() -> ScenarioConfig:
    """Build a ScenarioConfig with traffic/dust measures from the haze day on."""
    return ScenarioConfig(
        episode=build_winter_week(),
        initial_sliders=SliderPositions(),
        policy_schedule={HAZE_DAY_INDEX: ["odd_even", "road_sweep", "public_alert"]},
        name="Late response (traffic + dust)",
        description=(
            "Wait until humidity turns the valley hazy, then impose odd-even "
            "traffic, road sweeping and a public health alert."
        ),
    )

# Alias for script compatibility
get_config = build_late_response_config
