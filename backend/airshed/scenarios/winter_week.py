"""The Kathmandu winter week: seven scripted days of valley meteorology.

Day environments, story text and one-time lever nudges. Pure data; the
engine never reads this module.
"""

from airshed.core.config import Episode, EpisodeDay, EnvironmentState, LeverNudge


WINTER_WEEK_DAYS: tuple[EpisodeDay, ...] = (
    EpisodeDay(
        title="Day 1 — Winter starts",
        narrative=(
            "Cold morning. The valley traps air near the ground. Traffic + kilns "
            "are running. PM builds fast under low mixing height."
        ),
        environment=EnvironmentState(
            mixing_height=180.0, wind_speed=1.2, relative_humidity=55.0,
            rain=False, sunlight_fraction=0.55,
        ),
    ),
    EpisodeDay(
        title="Day 2 — Inversion deepens",
        narrative=(
            "Inversion strengthens overnight. Even if emissions stay the same, "
            "concentrations jump because dilution collapses."
        ),
        environment=EnvironmentState(
            mixing_height=120.0, wind_speed=0.8, relative_humidity=60.0,
            rain=False, sunlight_fraction=0.50,
        ),
    ),
    EpisodeDay(
        title="Day 3 — Brick kiln push",
        narrative=(
            "Demand surges. Kilns run harder. Expect more primary PM and SO₂, "
            "which later converts to sulfate."
        ),
        environment=EnvironmentState(
            mixing_height=140.0, wind_speed=0.9, relative_humidity=62.0,
            rain=False, sunlight_fraction=0.52,
        ),
        nudge=LeverNudge(kilns=10.0),
    ),
    EpisodeDay(
        title="Day 4 — Haze day (high humidity)",
        narrative=(
            "Humidity rises. Particles absorb water and look worse. Secondary "
            "formation also gets a boost under moist conditions."
        ),
        environment=EnvironmentState(
            mixing_height=150.0, wind_speed=0.9, relative_humidity=82.0,
            rain=False, sunlight_fraction=0.45,
        ),
    ),
    EpisodeDay(
        title="Day 5 — Festival + cooking + traffic",
        narrative=(
            "More movement, more cooking fires, more congestion. You'll feel it "
            "quickly because primary emissions act instantly."
        ),
        environment=EnvironmentState(
            mixing_height=160.0, wind_speed=1.0, relative_humidity=70.0,
            rain=False, sunlight_fraction=0.50,
        ),
        nudge=LeverNudge(traffic=12.0, burning=10.0),
    ),
    EpisodeDay(
        title="Day 6 — Wind picks up",
        narrative=(
            "A breeze arrives. Not a full cleanout, but dilution improves. This "
            "is where you see if controls were worth it."
        ),
        environment=EnvironmentState(
            mixing_height=260.0, wind_speed=2.1, relative_humidity=58.0,
            rain=False, sunlight_fraction=0.55,
        ),
    ),
    EpisodeDay(
        title="Day 7 — Light rain",
        narrative=(
            "Rain finally. Wet deposition removes particles fast. If PM stays "
            "high even after rain, you're dealing with ongoing emissions + "
            "quick formation."
        ),
        environment=EnvironmentState(
            mixing_height=320.0, wind_speed=2.4, relative_humidity=75.0,
            rain=True, sunlight_fraction=0.30,
        ),
    ),
)

# Index of the humid day, used by scenarios that react to it
HAZE_DAY_INDEX: int = 3


def build_winter_week() -> Episode:
    return Episode(name="kathmandu_winter_week", days=WINTER_WEEK_DAYS)
