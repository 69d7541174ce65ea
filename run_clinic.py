#!/usr/bin/env python3
"""
Walk-in Clinic Triage Simulator
Runs the interactive console or non-interactive batch simulations.

Usage: python3 run_clinic.py [--options]
"""

import argparse
import json
import logging
import math
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from eval.metrics import confidence_interval_95, episode_metrics
from eval.plots import plot_queue_lengths
from eval.run_episodes import load_config, run_episodes
from sim.console import ClinicConsole
from sim.processes import generate_patients, set_seed
from sim.runner import run_simulation
from sim.scheduler import Scheduler

logger = logging.getLogger("clinic")


def setup_logging(verbose: bool) -> None:
    """Console logging on stderr so it never mixes with the report on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run_interactive(params: dict, seed: int) -> None:
    """Admit the generated cohort at minute 0, then read commands from stdin."""
    set_seed(seed)
    scheduler = Scheduler(stale_policy=params["stale_policy"])
    for p in generate_patients(params["initial_patients"], 0, params["urgent_share"]):
        scheduler.add_patient(p)
    console = ClinicConsole(
        scheduler,
        capacity_range=(params["capacity_min"], params["capacity_max"]),
    )
    console.run(sys.stdin, interactive=True)


def run_batch(params: dict, seed: int, episodes: int, plot: str | None) -> None:
    if episodes > 1:
        mean_m, std_m, all_m = run_episodes(params, episodes, seed)
        print(f"Aggregate over {episodes} runs (seeds {seed}..{seed + episodes - 1}):")
        for key in mean_m:
            print(f"  {key:<18} {mean_m[key]:10.2f} ± {std_m[key]:.2f}")
        waits = [m["mean_wait"] for m in all_m if not math.isnan(m["mean_wait"])]
        lo, hi = confidence_interval_95(waits)
        print(f"  mean_wait 95% CI   [{lo:.2f}, {hi:.2f}]")
        return

    scheduler, history = run_simulation(params, seed)
    scheduler.display_queues()
    scheduler.display_statistics()
    print(json.dumps(episode_metrics(scheduler, history), indent=2))
    if plot:
        out = plot_queue_lengths(history, plot)
        print(f"Saved queue plot to {out}")


def main():
    parser = argparse.ArgumentParser(
        description="Walk-in clinic triage simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_clinic.py                      # interactive console
  python run_clinic.py --batch --seed 42 --plot results/queues.png
  python run_clinic.py --batch --episodes 20 --stale-policy abandon
        """,
    )
    parser.add_argument("--config", type=str, default=None, help="YAML config (default: config/default.yaml)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: from config)")
    parser.add_argument("--batch", action="store_true", help="Run without console input")
    parser.add_argument("--episodes", type=int, default=1, help="Seeded runs to aggregate in batch mode")
    parser.add_argument("--plot", type=str, default=None, help="Save a queue-length plot (batch, single run)")
    parser.add_argument(
        "--stale-policy",
        choices=["drop", "abandon"],
        default=None,
        help="What happens to patients past the wait cutoff",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    try:
        params = load_config(args.config)
        if args.stale_policy:
            params["stale_policy"] = args.stale_policy
        seed = params["seed"] if args.seed is None else args.seed

        if args.batch:
            run_batch(params, seed, args.episodes, args.plot)
        else:
            run_interactive(params, seed)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)
    except (OSError, ValueError) as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
