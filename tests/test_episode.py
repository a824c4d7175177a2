"""Tests for episode data, scenario configs and the episode runner."""

import pytest

from airshed.core.config import (
    EnvironmentState,
    Episode,
    EpisodeDay,
    LeverNudge,
    ScenarioConfig,
    SliderPositions,
)
from airshed.core.engine import SimulationEngine, run_episode
from airshed.core.errors import InvalidInputError
from airshed.scenarios.registry import SCENARIOS, get_scenario
from airshed.scenarios.winter_week import HAZE_DAY_INDEX, build_winter_week


def test_winter_week_shape():
    episode = build_winter_week()
    assert len(episode) == 7
    assert episode.days[0].environment == EnvironmentState(
        mixing_height=180.0, wind_speed=1.2, relative_humidity=55.0,
        rain=False, sunlight_fraction=0.55,
    )
    assert episode.days[HAZE_DAY_INDEX].environment.relative_humidity == 82.0
    assert episode.days[-1].environment.rain is True
    assert [i for i, d in enumerate(episode.days) if d.nudge] == [2, 4]


def test_slider_nudge_clamps_to_bounds():
    sliders = SliderPositions(traffic=95.0, kilns=3.0, burning=50.0, dust=50.0)
    nudged = sliders.nudged(LeverNudge(traffic=12.0, kilns=-10.0))
    assert nudged == SliderPositions(traffic=100.0, kilns=0.0, burning=50.0, dust=50.0)
    assert sliders.nudged(None) is sliders


def test_sliders_normalize_to_fractions():
    controls = SliderPositions().to_controls()
    assert (controls.traffic, controls.kilns, controls.burning, controls.dust) == (
        0.60, 0.70, 0.55, 0.50
    )


@pytest.mark.parametrize("scenario_id", sorted(SCENARIOS))
def test_predefined_scenarios_validate(scenario_id):
    config = get_scenario(scenario_id)
    assert config.validate() == []
    assert config.name


def test_business_as_usual_run():
    progress = []
    run = run_episode(
        get_scenario("business_as_usual"),
        progress_callback=lambda day, total: progress.append((day, total)),
    )

    assert [r.day for r in run.results] == [1, 2, 3, 4, 5, 6, 7]
    assert len(run.history) == 8
    assert progress[-1] == (7, 7)
    assert run.final_sliders == SliderPositions(traffic=72.0, kilns=80.0, burning=65.0, dust=50.0)
    assert run.policy_outcomes == []
    assert run.evaluation.days == 7
    assert run.results[HAZE_DAY_INDEX].haze_multiplier == 1.18
    assert run.results[-1].diagnostics.rain_loss == 0.35


def test_kiln_nudge_applies_on_day_three():
    run = run_episode(get_scenario("business_as_usual"))
    levels = [r.diagnostics.effective_levels["kilns"] for r in run.results]
    assert levels[:2] == [0.70, 0.70]
    assert levels[2:] == [0.80] * 5


def test_early_action_beats_business_as_usual():
    baseline = run_episode(get_scenario("business_as_usual"))
    early = run_episode(get_scenario("early_action"))

    assert early.results[0].flags.kiln_ban is True
    assert early.results[0].tradeoff_scores.econ == 8
    assert early.results[0].tradeoff_scores.social == 5
    assert all(
        e.total_reported < b.total_reported
        for e, b in zip(early.results, baseline.results)
    )
    assert early.evaluation.average < baseline.evaluation.average


def test_late_response_policies_start_on_haze_day():
    run = run_episode(get_scenario("late_response"))

    assert run.results[HAZE_DAY_INDEX - 1].flags.odd_even is False
    assert run.results[HAZE_DAY_INDEX].flags.odd_even is True
    assert run.results[HAZE_DAY_INDEX].flags.public_alert is True
    assert [o.flag for o in run.policy_outcomes] == ["odd_even", "road_sweep", "public_alert"]


def test_run_episode_resets_given_engine(default_controls, first_day_env):
    engine = SimulationEngine()
    engine.apply_policy("kiln_ban")
    engine.advance_day(default_controls, first_day_env)

    run = run_episode(get_scenario("business_as_usual"), engine=engine)

    assert list(run.history) == list(engine.history)
    assert engine.day == 7
    assert engine.flags.kiln_ban is False


def test_runs_are_repeatable():
    first = run_episode(get_scenario("late_response"))
    second = run_episode(get_scenario("late_response"))
    assert first.results == second.results
    assert first.evaluation == second.evaluation


def test_schedule_outside_episode_rejected():
    config = get_scenario("business_as_usual")
    config.policy_schedule = {9: ["kiln_ban"]}
    with pytest.raises(InvalidInputError, match="policy_schedule day 9"):
        run_episode(config)


def test_invalid_episode_environment_rejected():
    bad_day = EpisodeDay(
        title="Broken", narrative="", environment=EnvironmentState(-1.0, 1.0, 50.0)
    )
    config = ScenarioConfig(episode=Episode(name="broken", days=(bad_day,)))
    with pytest.raises(InvalidInputError, match="day 0: mixing_height"):
        run_episode(config)


def test_history_frame():
    run = run_episode(get_scenario("early_action"))
    frame = run.history.to_frame()

    assert list(frame.index) == list(range(8))
    assert frame.loc[0, "total_reported"] == 60.0
    assert frame.loc[1, "policies"] == "kiln_ban,burning_crackdown"
    assert {"pm_primary", "pm_sulfate", "so2", "tradeoff_econ", "total_mass"} <= set(frame.columns)


def test_unknown_scheduled_policy_rejected_before_running():
    config = get_scenario("business_as_usual")
    config.policy_schedule = {3: ["congestion_charge"]}
    assert config.validate() == ["policy_schedule day 3: unknown policy 'congestion_charge'"]

    engine = SimulationEngine()
    engine.advance_day(config.initial_sliders.to_controls(), config.episode.days[0].environment)
    with pytest.raises(InvalidInputError, match="congestion_charge"):
        run_episode(config, engine=engine)

    # Rejected before reset, so the engine keeps its previous day
    assert engine.day == 1
