"""Simulator entities: Patient, Category, ServedRecord, SchedulerStats."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

# Patient categories
CATEGORY_URGENT = "Urgent"
CATEGORY_NORMAL = "Normal"
CATEGORIES = (CATEGORY_URGENT, CATEGORY_NORMAL)

# Stale handling
STALE_DROP = "drop"
STALE_ABANDON = "abandon"

# Patients waiting longer than this many ticks are no longer served.
MAX_WAIT_TICKS = 10


class Category(str, Enum):
    URGENT = CATEGORY_URGENT
    NORMAL = CATEGORY_NORMAL

    @classmethod
    def parse(cls, value: str) -> Category:
        """Case-insensitive lookup: 'urgent', 'URGENT' and 'Urgent' all map to URGENT."""
        normalized = value.strip().capitalize()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Invalid patient type {value!r}. Must be 'Urgent' or 'Normal'.")


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class StalePolicy(str, Enum):
    DROP = STALE_DROP
    ABANDON = STALE_ABANDON


@dataclass(frozen=True)
class Patient:
    """A walk-in patient. Immutable once admitted."""

    id: str
    gender: Gender
    arrival_time_label: str  # HH:MM, display only
    category: Category
    arrival_tick: int

    @property
    def is_urgent(self) -> bool:
        return self.category == Category.URGENT

    def wait_at(self, tick: int) -> int:
        return tick - self.arrival_tick


@dataclass(frozen=True)
class ServedRecord:
    """One entry of the served log."""

    patient: Patient
    served_tick: int
    wait: int


@dataclass
class SchedulerStats:
    """Running counters; every field only ever grows."""

    total_admitted: int = 0
    total_urgent: int = 0
    total_normal: int = 0
    total_served: int = 0
    cumulative_wait_ticks: int = 0
    total_stale: int = 0

    def record_admission(self, patient: Patient) -> None:
        if patient.is_urgent:
            self.total_urgent += 1
        else:
            self.total_normal += 1
        self.total_admitted += 1

    def record_service(self, wait: int) -> None:
        self.total_served += 1
        self.cumulative_wait_ticks += wait

    def record_stale(self) -> None:
        self.total_stale += 1

    @property
    def average_wait(self) -> float | None:
        if self.total_served == 0:
            return None
        return self.cumulative_wait_ticks / self.total_served

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["average_wait"] = self.average_wait
        return d
