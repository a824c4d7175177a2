#!/usr/bin/env python3
"""Run a predefined scenario and output results."""

import sys
import os
import json
import logging
import time
from dataclasses import asdict

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "backend", ".env"))

logging.basicConfig(
    level=os.environ.get("AIRSHED_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("scenario")


def main():
    from airshed.core.engine import run_episode
    from airshed.presentation.formatting import daily_insight, tradeoff_line
    from airshed.scenarios.registry import SCENARIOS, get_scenario

    if len(sys.argv) < 2 or sys.argv[1] not in SCENARIOS:
        print("Usage: python run_scenario.py <scenario_name>")
        print(f"Available scenarios: {', '.join(SCENARIOS.keys())}")
        sys.exit(1)

    scenario_name = sys.argv[1]
    logger.info(f"Running scenario: {scenario_name}")
    config = get_scenario(scenario_name)

    start = time.time()
    run = run_episode(
        config,
        progress_callback=lambda day, total: logger.debug(f"Day {day}/{total}"),
    )
    elapsed = time.time() - start
    logger.info(f"Episode completed in {elapsed:.3f}s ({len(run.results)} days)")

    for outcome in run.policy_outcomes:
        logger.info(f"  policy {outcome.flag}: {outcome.message}")

    for episode_day, result in zip(config.episode.days, run.results):
        insight = daily_insight(result.composition, episode_day.environment, result.flags)
        logger.info(f"  {episode_day.title}: PM {result.total_reported:.0f} | {insight}")

    # Save results
    default_dir = os.path.join(os.path.dirname(__file__), "..", "backend", "data", "results")
    results_dir = os.path.join(os.environ.get("AIRSHED_RESULTS_DIR", default_dir), scenario_name)
    os.makedirs(results_dir, exist_ok=True)

    history_df = run.history.to_frame()
    history_df.to_parquet(os.path.join(results_dir, "history.parquet"))

    with open(os.path.join(results_dir, "summary.json"), "w") as f:
        json.dump({
            "scenario": scenario_name,
            "name": config.name,
            "policy_schedule": config.policy_schedule,
            "final_sliders": asdict(run.final_sliders),
            "evaluation": asdict(run.evaluation),
        }, f, indent=2)

    logger.info(f"Results saved to {results_dir}/")

    # Print summary
    final = run.results[-1]
    logger.info("=== Summary ===")
    logger.info(f"  average reported PM: {run.evaluation.average:.1f} ({run.evaluation.tier})")
    logger.info(f"  {run.evaluation.message}")
    logger.info(f"  {tradeoff_line(final.tradeoff_scores)}")


if __name__ == "__main__":
    main()
