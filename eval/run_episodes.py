"""Run K seeded simulations and aggregate metrics."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from env_config import config_path_overridden, get_config_path
from eval.metrics import aggregate_metrics, episode_metrics
from sim.entities import StalePolicy
from sim.runner import run_simulation

logger = logging.getLogger(__name__)


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load config YAML and flatten it into params for run_simulation."""
    explicit = config_path is not None or config_path_overridden()
    path = Path(config_path) if config_path is not None else get_config_path()
    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        logger.debug("No config at %s, using defaults", path)
        return _default_params()
    with open(path) as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {path} is not valid YAML: {e}") from e
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(cfg).__name__}")
    return _config_to_params(cfg)


def _default_params() -> dict[str, Any]:
    return {
        "initial_patients": 100,
        "urgent_share": 0.5,
        "arrivals_per_tick": 0,
        "max_ticks": 1000,
        "capacity_min": 5,
        "capacity_max": 10,
        "stale_policy": StalePolicy.DROP.value,
        "seed": 0,
    }


def _section(cfg: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section; an empty section (`sim:`) counts as no overrides."""
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section {name!r} must be a mapping")
    return section


def _config_to_params(cfg: dict[str, Any]) -> dict[str, Any]:
    """Flatten config sections into a params dict."""
    defaults = _default_params()
    sim = _section(cfg, "sim")
    service = _section(cfg, "service")
    policy = _section(cfg, "policy")
    try:
        params: dict[str, Any] = {
            "initial_patients": int(sim.get("initial_patients", defaults["initial_patients"])),
            "urgent_share": float(sim.get("urgent_share", defaults["urgent_share"])),
            "arrivals_per_tick": int(sim.get("arrivals_per_tick", defaults["arrivals_per_tick"])),
            "max_ticks": int(sim.get("max_ticks", defaults["max_ticks"])),
            "capacity_min": int(service.get("capacity_min", defaults["capacity_min"])),
            "capacity_max": int(service.get("capacity_max", defaults["capacity_max"])),
            "stale_policy": StalePolicy(policy.get("stale", defaults["stale_policy"])).value,
            "seed": int(cfg.get("seed", defaults["seed"])),
        }
    except TypeError as e:
        raise ValueError(f"config value has the wrong type: {e}") from e
    if params["capacity_min"] < 0 or params["capacity_max"] < params["capacity_min"]:
        raise ValueError(
            f"invalid capacity range [{params['capacity_min']}, {params['capacity_max']}]"
        )
    if not 0.0 <= params["urgent_share"] <= 1.0:
        raise ValueError("urgent_share must be in [0, 1]")
    return params


def run_episodes(
    params: dict[str, Any],
    K: int,
    base_seed: int = 0,
) -> tuple[dict[str, float], dict[str, float], list[dict[str, Any]]]:
    """
    Run K simulations with seeds base_seed .. base_seed+K-1.
    Returns (mean_metrics, std_metrics, all_metrics_list).
    """
    metrics_list: list[dict[str, Any]] = []
    for i in range(K):
        scheduler, history = run_simulation(params, base_seed + i)
        metrics_list.append(episode_metrics(scheduler, history))

    mean_metrics, std_metrics = aggregate_metrics(metrics_list)
    return mean_metrics, std_metrics, metrics_list


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Run K seeded clinic simulations")
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--n_episodes", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out", type=str, default=None, help="Write summary JSON here")
    args = parser.parse_args()

    params = load_config(args.config)
    base_seed = params["seed"] if args.seed is None else args.seed
    mean_m, std_m, _ = run_episodes(params, args.n_episodes, base_seed)
    summary = {"params": params, "episodes": args.n_episodes, "mean": mean_m, "std": std_m}
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w") as f:
            json.dump(summary, f, indent=2)
        print(f"Saved {out}")
    else:
        print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
