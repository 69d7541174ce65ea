"""Two-class triage scheduler: urgent-first serving with a fixed wait cutoff."""

from __future__ import annotations

import logging
import sys
from collections import deque
from typing import Any, TextIO

from sim.entities import (
    MAX_WAIT_TICKS,
    Patient,
    SchedulerStats,
    ServedRecord,
    StalePolicy,
)

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Holds the urgent and normal FIFO queues, the served log and the counters.

    Urgent patients are always considered before normal ones within a single
    serving pass. Patients whose wait exceeds MAX_WAIT_TICKS are removed
    without service; what happens to them is decided by the stale policy.
    """

    def __init__(self, stale_policy: StalePolicy | str = StalePolicy.DROP) -> None:
        self.stale_policy = StalePolicy(stale_policy)
        self.urgent_queue: deque[Patient] = deque()
        self.normal_queue: deque[Patient] = deque()
        self.served: list[ServedRecord] = []
        self.abandoned: list[ServedRecord] = []
        self.stats = SchedulerStats()

    def add_patient(self, patient: Patient) -> None:
        if patient.is_urgent:
            self.urgent_queue.append(patient)
        else:
            self.normal_queue.append(patient)
        self.stats.record_admission(patient)

    def serve_patients(self, capacity: int, current_tick: int) -> list[Patient]:
        """Serve up to `capacity` patients at `current_tick`; returns those served."""
        served_now: list[Patient] = []
        for queue in (self.urgent_queue, self.normal_queue):
            while len(served_now) < capacity and queue:
                patient = queue.popleft()
                wait = patient.wait_at(current_tick)
                if wait > MAX_WAIT_TICKS:
                    self._on_stale(patient, current_tick, wait)
                    continue
                self.served.append(ServedRecord(patient, current_tick, wait))
                self.stats.record_service(wait)
                served_now.append(patient)
        return served_now

    def _on_stale(self, patient: Patient, current_tick: int, wait: int) -> None:
        self.stats.record_stale()
        logger.debug(
            "Patient %s (%s) waited %d ticks at tick %d; removed (%s)",
            patient.id,
            patient.category.value,
            wait,
            current_tick,
            self.stale_policy.value,
        )
        if self.stale_policy == StalePolicy.ABANDON:
            self.abandoned.append(ServedRecord(patient, current_tick, wait))

    def is_urgent_queue_empty(self) -> bool:
        return not self.urgent_queue

    def is_normal_queue_empty(self) -> bool:
        return not self.normal_queue

    def is_idle(self) -> bool:
        return self.is_urgent_queue_empty() and self.is_normal_queue_empty()

    @property
    def served_patients(self) -> list[Patient]:
        return [r.patient for r in self.served]

    def average_wait(self) -> float | None:
        return self.stats.average_wait

    def summary(self) -> dict[str, Any]:
        d = self.stats.to_dict()
        d["urgent_waiting"] = len(self.urgent_queue)
        d["normal_waiting"] = len(self.normal_queue)
        d["abandoned"] = len(self.abandoned)
        return d

    def display_queues(self, stream: TextIO | None = None) -> None:
        out = stream or sys.stdout
        print("\nCurrent State of Queues:", file=out)
        print("Urgent Queue: " + " ".join(p.id for p in self.urgent_queue), file=out)
        print("Normal Queue: " + " ".join(p.id for p in self.normal_queue), file=out)
        print(
            "Currently Served Patients: " + " ".join(r.patient.id for r in self.served),
            file=out,
        )

    def display_statistics(self, stream: TextIO | None = None) -> None:
        out = stream or sys.stdout
        s = self.stats
        print("\nSimulation Summary:", file=out)
        print(f"Total Patients: {s.total_admitted}", file=out)
        print(f"Urgent Patients: {s.total_urgent}", file=out)
        print(f"Normal Patients: {s.total_normal}", file=out)
        print(f"Total Served Patients: {s.total_served}", file=out)
        avg = s.average_wait
        if avg is None:
            print("Average Waiting Time: N/A (no patients served)", file=out)
        else:
            print(f"Average Waiting Time: {avg:.2f} minutes", file=out)
        if self.stale_policy == StalePolicy.ABANDON:
            print(f"Abandoned Patients: {len(self.abandoned)}", file=out)
