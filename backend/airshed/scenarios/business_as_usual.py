"""Scenario: the winter week with no policy response.

Baseline against which the control scenarios are compared.
"""

from airshed.core.config import ScenarioConfig, SliderPositions
from airshed.scenarios.winter_week import build_winter_week


def build_business_as_usual_config() -> ScenarioConfig:
    """Build a ScenarioConfig for the no-action winter week.

    Returns
    -------
    ScenarioConfig
        Default sliders, empty policy schedule.
    """
    return ScenarioConfig(
        episode=build_winter_week(),
        initial_sliders=SliderPositions(),
        name="Business as usual",
        description=(
            "Run the full winter week at default activity levels without enacting "
            "any policy. Kiln and festival nudges still apply."
        ),
    )

# Alias for script compatibility
get_config = build_business_as_usual_config
