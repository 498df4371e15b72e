"""Timer list and elapsed-time accounting — pure logic, no UI.

A running timer never accumulates time on its own. Its effective elapsed
value is computed on demand as ``elapsed + (now - start_time)``, and the
live segment is only folded into ``elapsed`` when the timer is stopped or
when the list is persisted on shutdown.

Every index-taking method treats an out-of-range index as a no-op, so a
stale cursor or an empty list can never corrupt the store.
"""

import itertools
from dataclasses import dataclass, field
from tickletimer.common.logger import log

_handles = itertools.count(1)


@dataclass
class Timer:
    label: str
    elapsed: float = 0.0
    running: bool = False
    start_time: float | None = None
    last_reset_time: float | None = None
    # Opaque identity that survives insertions and deletions around this timer.
    handle: int = field(default_factory=lambda: next(_handles))

    def effective_elapsed(self, now):
        if self.running and self.start_time is not None:
            return self.elapsed + max(0.0, now - self.start_time)
        return self.elapsed


class TimerStore:

    def __init__(self, timers=None):
        self._timers: list[Timer] = list(timers or [])

    # Builds a store from persisted records. A record still marked running is restarted at `now`, so time that
    # passed while the program was closed is never counted.
    @classmethod
    def from_records(cls, records, now):
        timers = []
        for rec in records:
            running = bool(rec.get("running", False))
            timers.append(Timer(
                label=rec["label"],
                elapsed=max(0.0, float(rec.get("elapsed", 0.0))),
                running=running,
                start_time=now if running else None,
            ))
        log.debug(f"Built timer store with {len(timers)} timers")
        return cls(timers)

    def __len__(self):
        return len(self._timers)

    def __iter__(self):
        return iter(self._timers)

    def _get(self, index):
        if 0 <= index < len(self._timers):
            return self._timers[index]
        return None

    def get(self, index):
        return self._get(index)

    def handle_at(self, index):
        timer = self._get(index)
        return timer.handle if timer is not None else None

    def index_of(self, handle):
        for i, timer in enumerate(self._timers):
            if timer.handle == handle:
                return i
        return None

    #region === Mutations ===

    # Appends a new stopped timer. With no label, one is generated from its position ("Timer 4").
    def add(self, label=None):
        if not label:
            label = f"Timer {len(self._timers) + 1}"
        timer = Timer(label=label)
        self._timers.append(timer)
        log.debug(f"Added timer '{label}' at index {len(self._timers) - 1}")
        return timer.handle

    def rename(self, index, new_label):
        timer = self._get(index)
        if timer is None:
            return
        log.debug(f"Renamed timer '{timer.label}' to '{new_label}'")
        timer.label = new_label

    # Stops a running timer, committing its live segment, or starts a stopped one at `now`.
    def toggle_running(self, index, now):
        timer = self._get(index)
        if timer is None:
            return
        if timer.running:
            timer.elapsed = timer.effective_elapsed(now)
            timer.running = False
            timer.start_time = None
            log.debug(f"Stopped timer '{timer.label}' at {timer.elapsed:.1f}s")
        else:
            timer.start_time = now
            timer.running = True
            log.debug(f"Started timer '{timer.label}' from {timer.elapsed:.1f}s")

    # Shifts only the stored baseline, floored at zero. A running timer keeps its segment untouched, so the
    # displayed value moves by `delta` straight away.
    def adjust_elapsed(self, index, delta):
        timer = self._get(index)
        if timer is None:
            return
        timer.elapsed = max(0.0, timer.elapsed + delta)
        log.debug(f"Adjusted timer '{timer.label}' by {delta:+.0f}s to {timer.elapsed:.1f}s")

    def reset(self, index, now):
        timer = self._get(index)
        if timer is None:
            return
        timer.elapsed = 0.0
        timer.running = False
        timer.start_time = None
        timer.last_reset_time = now
        log.debug(f"Reset timer '{timer.label}' to 0.0")

    def reset_all(self, now):
        for i in range(len(self._timers)):
            self.reset(i, now)

    def delete(self, index):
        timer = self._get(index)
        if timer is None:
            return
        del self._timers[index]
        log.debug(f"Deleted timer '{timer.label}' from index {index}")

    #endregion === Mutations ===

    def effective_elapsed(self, index, now):
        timer = self._get(index)
        if timer is None:
            return 0.0
        return timer.effective_elapsed(now)

    # Returns plain records for saving or dumping, with every live segment folded into "elapsed". Normally this
    # is only a view and the timers keep running. On shutdown the fold is committed and every timer is stopped.
    def snapshot_for_persistence(self, now, shutdown=False):
        records = []
        for timer in self._timers:
            elapsed = timer.effective_elapsed(now)
            if shutdown and timer.running:
                timer.elapsed = elapsed
                timer.running = False
                timer.start_time = None
            records.append({
                "label": timer.label,
                "elapsed": elapsed,
                "running": timer.running,
            })
        return records
