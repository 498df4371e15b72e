"""Mode-driven input handling on top of a TimerStore.

The controller receives one event at a time (a key press or a 10 Hz tick),
updates its own mode and cursor, and calls into the store. Ticks only move
the animation counters; elapsed time is never accounted for on a tick.
"""

import time
from dataclasses import dataclass
from typing import Callable, Protocol

from tickletimer.common.logger import log
from tickletimer.core.keys import DoubleTapDetector
from tickletimer.core.modes import (
    AddEdit,
    ConfirmAction,
    DumpConfirm,
    Event,
    KeyEvent,
    Mode,
    Normal,
    RemoveReset,
    Rename,
    TickEvent,
)
from tickletimer.core.timer_state import TimerStore

ADJUST_STEP = 30.0
SPINNER_FRAMES = ("|", "/", "-", "\\")
QUIT_KEYS = ("q", "ctrl+c")


class TextEditor(Protocol):
    """Line-editing capability used while renaming.

    The UI delivers raw keystrokes to the editor itself while in Rename mode;
    the controller only seeds its value and reads it back on commit.
    """

    value: str

    def set_value(self, value: str) -> None: ...


@dataclass(frozen=True)
class RowView:
    label: str
    elapsed: float
    running: bool
    is_cursor: bool


class InteractionController:

    def __init__(
            self,
            store: TimerStore,
            editor: TextEditor,
            *,
            animations: bool = True,
            clock: Callable[[], float] = time.monotonic,
            save: Callable[[list], object] | None = None,
            dump: Callable[[list], object] | None = None,
    ) -> None:
        self.store = store
        self.editor = editor
        self.animations = animations
        self.clock = clock
        self._save = save
        self._dump = dump

        self.mode: Mode = Normal()
        self.cursor = 0
        self.tick_count = 0
        self.spinner_index = 0
        self.status = ""
        self.quit_requested = False
        self._save_failed = False
        self._dump_keys = DoubleTapDetector("u")

    # ------------------------------------------------------------------ #
    #  Read side                                                           #
    # ------------------------------------------------------------------ #

    @property
    def confirming(self):
        return getattr(self.mode, "confirming", False)

    @property
    def confirm_action(self):
        return getattr(self.mode, "pending", ConfirmAction.NONE)

    @property
    def spinner_frame(self):
        return SPINNER_FRAMES[self.spinner_index]

    @property
    def has_cursor(self):
        """False while the timer list is empty; cursor-driven keys do nothing then."""
        return 0 <= self.cursor < len(self.store)

    def rows(self, now=None):
        now = self.clock() if now is None else now
        return [
            RowView(t.label, t.effective_elapsed(now), t.running, i == self.cursor)
            for i, t in enumerate(self.store)
        ]

    # ------------------------------------------------------------------ #
    #  Dispatch                                                            #
    # ------------------------------------------------------------------ #

    def handle(self, event: Event):
        if isinstance(event, TickEvent):
            self.tick()
        elif isinstance(event, KeyEvent):
            self.handle_key(event.key)
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def tick(self):
        if not self.animations:
            return
        self.tick_count += 1
        self.spinner_index = (self.spinner_index + 1) % len(SPINNER_FRAMES)

    def handle_key(self, key):
        mode = self.mode
        if isinstance(mode, Normal):
            self._on_normal(key)
        elif isinstance(mode, RemoveReset):
            self._on_remove_reset(mode, key)
        elif isinstance(mode, AddEdit):
            self._on_add_edit(key)
        elif isinstance(mode, Rename):
            self._on_rename(mode, key)
        elif isinstance(mode, DumpConfirm):
            self._on_dump_confirm(key)

    def _enter(self, mode):
        if mode != self.mode:
            log.debug(f"Mode {self.mode.name} -> {mode.name}")
        self.mode = mode

    def _clamp_cursor(self):
        self.cursor = max(0, min(self.cursor, len(self.store) - 1))

    # ------------------------------------------------------------------ #
    #  Per-mode handlers                                                   #
    # ------------------------------------------------------------------ #

    def _on_normal(self, key):
        if key == "up":
            if self.cursor > 0:
                self.cursor -= 1
        elif key == "down":
            if self.cursor < len(self.store) - 1:
                self.cursor += 1
        elif key == "s":
            self.store.toggle_running(self.cursor, self.clock())
        elif key == "r":
            self._enter(RemoveReset())
        elif key == "a":
            self._enter(AddEdit())
        elif key == "u":
            if self._dump_keys.press(key, self.clock()):
                self._dump_all()
                self._enter(DumpConfirm())
        elif key in QUIT_KEYS:
            self._quit()

    def _on_remove_reset(self, mode: RemoveReset, key):
        if mode.confirming:
            if key == "y":
                if mode.pending is ConfirmAction.DELETE:
                    self.store.delete(self.cursor)
                    self._clamp_cursor()
                elif mode.pending is ConfirmAction.RESET:
                    self.store.reset(self.cursor, self.clock())
                self._enter(Normal())
            elif key == "n":
                self._enter(Normal())
            return

        if key == "d":
            self._enter(RemoveReset(ConfirmAction.DELETE))
        elif key == "t":
            self._enter(RemoveReset(ConfirmAction.RESET))
        elif key == "[":
            self.store.adjust_elapsed(self.cursor, -ADJUST_STEP)
        elif key == "]":
            self.store.adjust_elapsed(self.cursor, ADJUST_STEP)
        elif key == "r":
            self._enter(Normal())

    def _on_add_edit(self, key):
        if key == "a":
            self.store.add()
            self._clamp_cursor()
        elif key == "r":
            handle = self.store.handle_at(self.cursor)
            if handle is None:
                return
            self.editor.set_value(self.store.get(self.cursor).label)
            self._enter(Rename(handle))
        elif key == "[":
            self.store.adjust_elapsed(self.cursor, -ADJUST_STEP)
        elif key == "]":
            self.store.adjust_elapsed(self.cursor, ADJUST_STEP)
        elif key == "b":
            self._enter(Normal())

    def _on_rename(self, mode: Rename, key):
        if key == "enter":
            label = self.editor.value.strip()
            index = self.store.index_of(mode.target)
            # Labels are never blank; an empty buffer commits like a cancel
            if not label:
                log.debug("Ignoring blank rename")
            elif index is not None:
                self.store.rename(index, label)
            self._enter(AddEdit())
        elif key == "escape":
            self._enter(AddEdit())

    def _on_dump_confirm(self, key):
        if key == "y":
            self.store.reset_all(self.clock())
            self._enter(Normal())
        elif key == "n":
            self._enter(Normal())

    # ------------------------------------------------------------------ #
    #  Persistence                                                         #
    # ------------------------------------------------------------------ #

    def _dump_all(self):
        if self._dump is None:
            return
        records = self.store.snapshot_for_persistence(self.clock())
        try:
            path = self._dump(records)
        except OSError as e:
            log.warning(f"Failed to dump timers: {e}")
            self.status = f"Dump failed: {e}"
            return
        self.status = f"Dumped to {path}"

    # Commits every running segment, stops all timers and saves. A failed save keeps the session open so the
    # message can be read; asking to quit again after that exits without saving.
    def _quit(self):
        if self._save_failed:
            log.warning("Quitting without saving after an earlier failed save")
            self.quit_requested = True
            return
        records = self.store.snapshot_for_persistence(self.clock(), shutdown=True)
        if self._save is not None:
            try:
                self._save(records)
            except OSError as e:
                log.warning(f"Failed to save timers on quit: {e}")
                self.status = f"Save failed: {e}. Press q again to quit without saving."
                self._save_failed = True
                return
        self.quit_requested = True
