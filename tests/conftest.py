import pytest

from airshed.core.config import ControlSettings, EnvironmentState
from airshed.core.engine import SimulationEngine


@pytest.fixture
def engine():
    return SimulationEngine()


@pytest.fixture
def default_controls():
    return ControlSettings(traffic=0.60, kilns=0.70, burning=0.55, dust=0.50)


@pytest.fixture
def first_day_env():
    return EnvironmentState(
        mixing_height=180.0,
        wind_speed=1.2,
        relative_humidity=55.0,
        rain=False,
        sunlight_fraction=0.55,
    )
