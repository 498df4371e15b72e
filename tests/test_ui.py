"""Tests for row rendering and the Textual app, including renaming through its Input."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from tickletimer.core.modes import AddEdit, DumpConfirm, Normal, RemoveReset, Rename
from tickletimer.ui.widgets import EMPTY_MESSAGE, build_footer, build_timer_row, build_timer_rows

from helpers import FakeClock, make_controller, press


class TestWidgets(unittest.TestCase):

    def test_row_text(self):
        c = make_controller("Calls", clock=FakeClock(0.0))
        c.store.adjust_elapsed(0, 125.0)
        row = c.rows()[0]
        text = build_timer_row(row, c.mode, c.spinner_frame, c.tick_count, True)
        self.assertEqual(text.plain, "  02:05 Calls")

    def test_running_row_has_spinner(self):
        clock = FakeClock(0.0)
        c = make_controller("Calls", clock=clock)
        press(c, "s")
        clock.advance(61)
        c.tick()
        text = build_timer_row(c.rows()[0], c.mode, c.spinner_frame, c.tick_count, True)
        self.assertEqual(text.plain, "/ 01:01 Calls")
        quiet = build_timer_row(c.rows()[0], c.mode, c.spinner_frame, c.tick_count, False)
        self.assertEqual(quiet.plain, "  01:01 Calls")

    def test_rows_joined(self):
        c = make_controller()
        self.assertEqual(build_timer_rows(c).plain.count("\n"), 2)

    def test_empty_list_message(self):
        c = make_controller()
        press(c, "r", "d", "y", "r", "d", "y", "r", "d", "y")
        self.assertEqual(build_timer_rows(c).plain, EMPTY_MESSAGE)

    def test_footer_per_mode(self):
        c = make_controller()
        self.assertIn("s: start/stop", build_footer(c).plain)
        press(c, "r")
        self.assertIn("[Remove/Reset Mode]", build_footer(c).plain)
        press(c, "d")
        self.assertEqual(build_footer(c).plain, "Delete this timer? (y/n)")
        press(c, "n", "r", "t")
        self.assertEqual(build_footer(c).plain, "Reset this timer? (y/n)")
        press(c, "n", "a")
        self.assertIn("[Add/Edit Mode]", build_footer(c).plain)
        press(c, "r")
        self.assertTrue(build_footer(c).plain.startswith("Renaming:"))
        press(c, "escape", "b", "u", "u")
        self.assertEqual(build_footer(c).plain, "Timers dumped. Reset all timers? (y/n)")


class TestApp(unittest.IsolatedAsyncioTestCase):
    """Drives the real Textual app headless."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)
        from tickletimer.core import config, dump
        self._orig = (config.TIMERS_PATH, config.SETTINGS_PATH, dump.DUMP_DIR)
        config.TIMERS_PATH = self._tmppath / "timers.json"
        config.SETTINGS_PATH = self._tmppath / "config.json"
        dump.DUMP_DIR = self._tmppath / "dumps"

    def tearDown(self):
        from tickletimer.core import config, dump
        config.TIMERS_PATH, config.SETTINGS_PATH, dump.DUMP_DIR = self._orig
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    async def test_modes_and_quit_saves(self):
        from tickletimer.core import config
        from tickletimer.ui.app import TickleTimerApp

        clock = FakeClock()
        app = TickleTimerApp(clock=clock)
        async with app.run_test() as pilot:
            c = app.controller
            self.assertEqual([t.label for t in c.store], ["Timer A", "Timer B", "Timer C"])
            await pilot.press("r", "d", "n")
            self.assertEqual(c.mode, Normal())
            self.assertEqual(len(c.store), 3)
            await pilot.press("down", "s")
            clock.advance(42)
            await pilot.press("a")
            self.assertIsInstance(c.mode, AddEdit)
            await pilot.press("b", "q")

        self.assertEqual(app.return_code, 0)
        with open(config.TIMERS_PATH, encoding="utf-8") as f:
            saved = json.load(f)
        self.assertEqual(saved[1], {"label": "Timer B", "elapsed": 42.0, "running": False})

    async def test_double_tap_dump(self):
        from tickletimer.core import dump
        from tickletimer.ui.app import TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("u", "u")
            self.assertIsInstance(app.controller.mode, DumpConfirm)
            await pilot.press("y")
            self.assertEqual(app.controller.mode, Normal())
        self.assertEqual(len(list(dump.DUMP_DIR.glob("dump_*.csv"))), 1)

    async def test_remove_reset_mode_via_keys(self):
        from tickletimer.ui.app import TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("r")
            self.assertIsInstance(app.controller.mode, RemoveReset)
            await pilot.press("d", "y")
            self.assertEqual([t.label for t in app.controller.store], ["Timer B", "Timer C"])

    async def test_rename_through_input(self):
        from tickletimer.ui.app import TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("a", "r")
            self.assertIsInstance(app.controller.mode, Rename)
            self.assertTrue(app.rename_input.display)
            self.assertIs(app.focused, app.rename_input)
            self.assertEqual(app.rename_input.value, "Timer A")
            await pilot.press("backspace", "Z", "enter")
            self.assertEqual(app.controller.store.get(0).label, "Timer Z")
            self.assertIsInstance(app.controller.mode, AddEdit)
            self.assertFalse(app.rename_input.display)
            # Back in AddEdit, keys drive the controller again
            await pilot.press("a")
            self.assertEqual(len(app.controller.store), 4)

    async def test_rename_keys_stay_in_input(self):
        from tickletimer.ui.app import TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("a", "r", "a", "q", "d")
            self.assertIsInstance(app.controller.mode, Rename)
            self.assertEqual(app.rename_input.value, "Timer Aaqd")
            self.assertEqual(len(app.controller.store), 3)
            self.assertFalse(app.controller.quit_requested)

    async def test_rename_escape_cancels(self):
        from tickletimer.ui.app import TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("a", "r", "backspace", "backspace", "escape")
            self.assertIsInstance(app.controller.mode, AddEdit)
            self.assertEqual(app.controller.store.get(0).label, "Timer A")
            self.assertIsNone(app.focused)

    async def test_blank_rename_through_input_keeps_label(self):
        from tickletimer.ui.app import TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("a", "r", *["backspace"] * 10)
            self.assertEqual(app.rename_input.value, "")
            await pilot.press("enter")
            self.assertEqual(app.controller.store.get(0).label, "Timer A")
            self.assertIsInstance(app.controller.mode, AddEdit)

    async def test_rename_input_respects_char_limit(self):
        from tickletimer.ui.app import RENAME_CHAR_LIMIT, TickleTimerApp

        app = TickleTimerApp(clock=FakeClock())
        async with app.run_test() as pilot:
            await pilot.press("a", "r", *["x"] * (RENAME_CHAR_LIMIT + 5), "enter")
            self.assertEqual(len(app.controller.store.get(0).label), RENAME_CHAR_LIMIT)


if __name__ == "__main__":
    unittest.main()
