"""Processes: seeding, random patient generation, service capacity sampling."""

from __future__ import annotations

import numpy as np

from sim.entities import Category, Gender, Patient

ID_LENGTH = 14


def set_seed(seed: int) -> None:
    np.random.seed(seed)


def sample_patient_id() -> str:
    """14-digit id whose first digit is 2 or 3."""
    first = int(np.random.randint(2, 4))
    rest = np.random.randint(0, 10, size=ID_LENGTH - 1)
    return str(first) + "".join(str(int(d)) for d in rest)


def sample_gender() -> Gender:
    return Gender.MALE if np.random.rand() < 0.5 else Gender.FEMALE


def sample_time_label() -> str:
    hour = int(np.random.randint(0, 24))
    minute = int(np.random.randint(0, 60))
    return f"{hour:02d}:{minute:02d}"


def sample_category(urgent_share: float = 0.5) -> Category:
    return Category.URGENT if np.random.rand() < urgent_share else Category.NORMAL


def sample_capacity(low: int = 5, high: int = 10) -> int:
    """Uniform integer number of service slots in [low, high]."""
    if high < low:
        raise ValueError(f"capacity range is empty: [{low}, {high}]")
    return int(np.random.randint(low, high + 1))


def generate_patient(tick: int, urgent_share: float = 0.5) -> Patient:
    """Create one patient arriving at `tick` with sampled attributes."""
    return Patient(
        id=sample_patient_id(),
        gender=sample_gender(),
        arrival_time_label=sample_time_label(),
        category=sample_category(urgent_share),
        arrival_tick=tick,
    )


def generate_patients(count: int, tick: int, urgent_share: float = 0.5) -> list[Patient]:
    return [generate_patient(tick, urgent_share) for _ in range(count)]
