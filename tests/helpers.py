"""Shared test helpers for tickletimer."""

from tickletimer.core.controller import InteractionController
from tickletimer.core.modes import KeyEvent
from tickletimer.core.timer_state import TimerStore


class FakeClock:
    """Monotonic-style clock that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class BufferEditor:
    """Holds rename text the way the Input widget does, without a running app."""

    def __init__(self):
        self.value = ""

    def set_value(self, value):
        self.value = value


class Recorder:
    """Stands in for save/dump callables, keeping every call's records."""

    def __init__(self, result="dump.csv", error=None):
        self.calls = []
        self.result = result
        self.error = error

    def __call__(self, records):
        self.calls.append(records)
        if self.error is not None:
            raise self.error
        return self.result


def seeded_store(*labels):
    labels = labels or ("Timer A", "Timer B", "Timer C")
    return TimerStore.from_records([{"label": l, "elapsed": 0.0, "running": False} for l in labels], 0.0)


def make_controller(*labels, animations=True, clock=None, save=None, dump=None):
    clock = clock or FakeClock()
    return InteractionController(
        seeded_store(*labels),
        BufferEditor(),
        animations=animations,
        clock=clock,
        save=save,
        dump=dump,
    )


def press(controller, *keys):
    for key in keys:
        controller.handle(KeyEvent(key))
