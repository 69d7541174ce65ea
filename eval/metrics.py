"""Per-run metrics and aggregation across seeded runs."""

from __future__ import annotations

from typing import Any

import numpy as np

from sim.scheduler import Scheduler


def _mean(values: list[int]) -> float:
    """Mean wait, or NaN when no patient was served (average unavailable)."""
    return float(np.mean(values)) if values else float("nan")


def episode_metrics(scheduler: Scheduler, history: list[dict[str, int]]) -> dict[str, Any]:
    """
    Flatten one run into numeric metrics. Wait metrics are NaN when nobody in
    that group was served, so aggregation can skip them.
    """
    s = scheduler.stats
    waits = [r.wait for r in scheduler.served]
    urgent_waits = [r.wait for r in scheduler.served if r.patient.is_urgent]
    normal_waits = [r.wait for r in scheduler.served if not r.patient.is_urgent]
    return {
        "total_admitted": s.total_admitted,
        "total_urgent": s.total_urgent,
        "total_normal": s.total_normal,
        "total_served": s.total_served,
        "total_stale": s.total_stale,
        "mean_wait": _mean(waits),
        "p95_wait": float(np.percentile(waits, 95)) if waits else float("nan"),
        "urgent_mean_wait": _mean(urgent_waits),
        "normal_mean_wait": _mean(normal_waits),
        "service_rate": s.total_served / s.total_admitted if s.total_admitted else 0.0,
        "ticks": len(history),
    }


def aggregate_metrics(metrics_list: list[dict[str, Any]]) -> tuple[dict[str, float], dict[str, float]]:
    """Mean and std of every numeric metric over K runs, ignoring NaN entries."""
    if not metrics_list:
        return {}, {}

    means: dict[str, float] = {}
    stds: dict[str, float] = {}
    for k in metrics_list[0].keys():
        vals = np.array([m.get(k, np.nan) for m in metrics_list], dtype=float)
        present = vals[~np.isnan(vals)]
        if present.size == 0:
            means[k] = float("nan")
            stds[k] = float("nan")
            continue
        means[k] = float(np.mean(present))
        stds[k] = float(np.std(present)) if present.size > 1 else 0.0
    return means, stds


def confidence_interval_95(values: list[float]) -> tuple[float, float]:
    """Return (lower, upper) 95% CI for mean."""
    if len(values) < 2:
        return (float(values[0]), float(values[0])) if values else (float("nan"), float("nan"))
    n = len(values)
    mean = np.mean(values)
    se = np.std(values, ddof=1) / (n ** 0.5)
    margin = 1.96 * se
    return (float(mean - margin), float(mean + margin))
