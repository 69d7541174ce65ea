"""Interactive console driver: manual entries and the `next` command."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from intake.parser import ENTRY_FORMAT, EntryError, parse_entry
from sim.processes import sample_capacity
from sim.scheduler import Scheduler

NEXT_COMMAND = "next"


class ClinicConsole:
    """Feeds command lines into a Scheduler and tracks the simulated minute."""

    def __init__(
        self,
        scheduler: Scheduler,
        capacity_range: tuple[int, int] = (5, 10),
        stream: TextIO | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.capacity_range = capacity_range
        self.out = stream or sys.stdout
        self.tick = 0
        self.finished = False

    def say(self, message: str) -> None:
        print(message, file=self.out)

    def greet(self) -> None:
        self.say("Welcome to the Patient Scheduling System!")
        self.say("You can input patient details manually or type 'next' to advance time.")
        self.say(f"Format: {ENTRY_FORMAT}")

    def prompt(self) -> None:
        self.say(f"\n--- Minute {self.tick} ---")
        self.say("Enter patient details or type 'next' to advance time:")

    def handle_line(self, line: str) -> bool:
        """Process one line. Returns False once the simulation has ended."""
        text = line.strip()
        if not text:
            self.say("No input provided. Please try again.")
            return True

        if text == NEXT_COMMAND:
            return self.advance()

        try:
            patient = parse_entry(text, self.tick)
        except EntryError as e:
            self.say(f"Invalid input: {e}\nPlease try again.")
            return True
        self.scheduler.add_patient(patient)
        return True

    def advance(self) -> bool:
        """Serve one tick's worth of patients, then move the clock forward."""
        capacity = sample_capacity(*self.capacity_range)
        self.scheduler.serve_patients(capacity, self.tick)
        self.scheduler.display_queues(self.out)
        self.tick += 1
        if self.scheduler.is_idle():
            self.say("All patients have been served. Ending simulation.")
            self.finished = True
            return False
        return True

    def run(self, lines: Iterable[str], interactive: bool = False) -> None:
        """Consume lines until the queues drain or input runs out; print the report."""
        if interactive:
            self.greet()
        for line in self._lines(lines, interactive):
            if not self.handle_line(line):
                break
        self.scheduler.display_statistics(self.out)

    def _lines(self, lines: Iterable[str], interactive: bool) -> Iterable[str]:
        """
        Yield input lines, prompting once per line in interactive mode. A
        terminal is prompted before each read; any other source is read first
        so no prompt is printed after the input ends.
        """
        it = iter(lines)
        if interactive and getattr(lines, "isatty", lambda: False)():
            while True:
                self.prompt()
                try:
                    yield next(it)
                except StopIteration:
                    return
        for line in it:
            if interactive:
                self.prompt()
            yield line
