"""Batch runner: drive the scheduler tick by tick without console input."""

from __future__ import annotations

import logging
from typing import Any

from sim.processes import generate_patients, sample_capacity, set_seed
from sim.scheduler import Scheduler

logger = logging.getLogger(__name__)


def run_simulation(
    params: dict[str, Any],
    seed: int,
) -> tuple[Scheduler, list[dict[str, int]]]:
    """
    Run one simulation: admit the initial cohort at tick 0, then serve and
    advance until both queues are empty (or max_ticks is reached).
    Returns (scheduler, history) with one history row per tick.
    """
    set_seed(seed)
    initial = params.get("initial_patients", 100)
    cap_min = params.get("capacity_min", 5)
    cap_max = params.get("capacity_max", 10)
    urgent_share = params.get("urgent_share", 0.5)
    arrivals_per_tick = params.get("arrivals_per_tick", 0)
    max_ticks = params.get("max_ticks", 1000)

    scheduler = Scheduler(stale_policy=params.get("stale_policy", "drop"))
    for p in generate_patients(initial, 0, urgent_share):
        scheduler.add_patient(p)

    history: list[dict[str, int]] = []
    tick = 0
    while not scheduler.is_idle() and tick < max_ticks:
        if tick > 0 and arrivals_per_tick:
            for p in generate_patients(arrivals_per_tick, tick, urgent_share):
                scheduler.add_patient(p)
        stale_before = scheduler.stats.total_stale
        capacity = sample_capacity(cap_min, cap_max)
        served = scheduler.serve_patients(capacity, tick)
        history.append(
            {
                "tick": tick,
                "capacity": capacity,
                "served": len(served),
                "stale": scheduler.stats.total_stale - stale_before,
                "urgent_waiting": len(scheduler.urgent_queue),
                "normal_waiting": len(scheduler.normal_queue),
            }
        )
        tick += 1

    if not scheduler.is_idle():
        logger.warning("Stopped at max_ticks=%d with patients still queued", max_ticks)
    logger.info(
        "seed=%d ticks=%d admitted=%d served=%d stale=%d",
        seed,
        tick,
        scheduler.stats.total_admitted,
        scheduler.stats.total_served,
        scheduler.stats.total_stale,
    )
    return scheduler, history
