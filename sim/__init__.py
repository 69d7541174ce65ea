"""Tick-based simulator for a two-class walk-in clinic queue."""

from sim.entities import Category, Gender, Patient, SchedulerStats, StalePolicy
from sim.scheduler import Scheduler
from sim.runner import run_simulation

__all__ = [
    "Category",
    "Gender",
    "Patient",
    "SchedulerStats",
    "StalePolicy",
    "Scheduler",
    "run_simulation",
]
