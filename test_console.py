#!/usr/bin/env python3
"""
Test the interactive console driver
Feeds scripted lines through ClinicConsole and checks queue state and output.
"""

import io
import sys
import unittest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from sim.console import ClinicConsole
from sim.entities import Category
from sim.processes import set_seed
from sim.scheduler import Scheduler


class TestClinicConsole(unittest.TestCase):

    def setUp(self):
        set_seed(0)
        self.out = io.StringIO()
        self.scheduler = Scheduler()
        self.console = ClinicConsole(self.scheduler, capacity_range=(5, 5), stream=self.out)

    def test_manual_entry_admitted_at_current_minute(self):
        self.assertTrue(self.console.handle_line("P1 M 08:15 urgent"))
        self.assertEqual(len(self.scheduler.urgent_queue), 1)
        patient = self.scheduler.urgent_queue[0]
        self.assertEqual(patient.category, Category.URGENT)
        self.assertEqual(patient.arrival_tick, 0)
        self.assertEqual(self.scheduler.stats.total_urgent, 1)

    def test_invalid_entry_reported_and_ignored(self):
        self.assertTrue(self.console.handle_line("P1 M 08:15 critical"))
        self.assertIn("Invalid input:", self.out.getvalue())
        self.assertEqual(self.scheduler.stats.total_admitted, 0)

    def test_empty_line(self):
        self.assertTrue(self.console.handle_line("   \n"))
        self.assertIn("No input provided", self.out.getvalue())

    def test_next_advances_and_ends_when_drained(self):
        self.console.handle_line("P1 F 08:30 Urgent")
        self.console.handle_line("P2 M 08:31 Normal")
        keep_going = self.console.handle_line("next\n")

        self.assertFalse(keep_going)
        self.assertTrue(self.console.finished)
        self.assertEqual(self.console.tick, 1)
        self.assertEqual([p.id for p in self.scheduler.served_patients], ["P1", "P2"])
        text = self.out.getvalue()
        self.assertIn("Current State of Queues:", text)
        self.assertIn("All patients have been served. Ending simulation.", text)

    def test_later_entry_waits_from_its_own_minute(self):
        console = ClinicConsole(self.scheduler, capacity_range=(1, 1), stream=self.out)
        console.handle_line("A1 M 08:00 Urgent")
        console.handle_line("A2 M 08:00 Urgent")
        self.assertTrue(console.handle_line("next"))  # serves A1 at minute 0
        console.handle_line("A3 F 08:01 Urgent")  # arrives at minute 1
        self.assertTrue(console.handle_line("next"))  # serves A2, wait 1
        self.assertFalse(console.handle_line("next"))  # serves A3, wait 1

        self.assertEqual([r.wait for r in self.scheduler.served], [0, 1, 1])
        self.assertEqual(self.scheduler.served[2].patient.arrival_tick, 1)

    def test_run_prints_final_statistics(self):
        self.console.run(["P1 F 08:30 urgent", "bad line", "next", "P9 M 09:00 Normal"])

        text = self.out.getvalue()
        self.assertIn("Simulation Summary:", text)
        self.assertIn("Total Patients: 1", text)
        self.assertIn("Total Served Patients: 1", text)
        self.assertIn("Average Waiting Time: 0.00 minutes", text)
        # Lines after termination are not processed
        self.assertEqual(self.scheduler.stats.total_admitted, 1)

    def test_run_stops_at_end_of_input(self):
        self.console.run(["P1 F 08:30 Normal"])
        self.assertFalse(self.console.finished)
        self.assertIn("Average Waiting Time: N/A (no patients served)", self.out.getvalue())

    def test_interactive_prompts(self):
        self.console.run(["next"], interactive=True)
        text = self.out.getvalue()
        self.assertIn("Welcome to the Patient Scheduling System!", text)
        self.assertIn("--- Minute 0 ---", text)

    def test_one_prompt_per_line_when_input_ends(self):
        """Scripted input gets exactly one prompt per line, none after the last."""
        self.console.run(["P1 F 08:30 Normal"], interactive=True)
        self.assertEqual(self.out.getvalue().count("--- Minute"), 1)

        out = io.StringIO()
        console = ClinicConsole(Scheduler(), capacity_range=(1, 1), stream=out)
        console.run(["A1 M 08:00 Urgent", "A2 M 08:00 Urgent", "next"], interactive=True)
        self.assertEqual(out.getvalue().count("--- Minute"), 3)
        self.assertIn("--- Minute 0 ---", out.getvalue())
        self.assertNotIn("--- Minute 1 ---", out.getvalue())

    def test_terminal_prompted_before_each_read(self):
        class FakeTerminal:
            def __init__(self, lines):
                self._lines = iter(lines)

            def isatty(self):
                return True

            def __iter__(self):
                return self._lines

        self.console.run(FakeTerminal(["P1 F 08:30 Normal"]), interactive=True)
        # The second prompt is what a live user sees before ending input
        self.assertEqual(self.out.getvalue().count("--- Minute"), 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
