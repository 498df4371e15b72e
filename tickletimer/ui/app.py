import time
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, Static

from tickletimer.common.logger import log
from tickletimer.core import config
from tickletimer.core.controller import InteractionController
from tickletimer.core.dump import dump_timers
from tickletimer.core.modes import KeyEvent, Rename, TickEvent
from tickletimer.core.timer_state import TimerStore
from tickletimer.ui.widgets import build_footer, build_timer_rows

TICK_SECONDS = 0.1
RENAME_CHAR_LIMIT = 64


# Turns a Textual key event into the names the controller understands: the printed character for printable
# keys ("s", "[", " "), Textual's key name for everything else ("up", "enter", "escape").
def normalize_key(event):
    if event.is_printable and event.character:
        return event.character
    return event.key


# Lets the controller seed and read the rename Input without knowing about Textual.
class InputEditor:

    def __init__(self, widget: Input):
        self.widget = widget

    @property
    def value(self):
        return self.widget.value

    def set_value(self, value):
        self.widget.value = value[:RENAME_CHAR_LIMIT]
        self.widget.cursor_position = len(self.widget.value)


# ---------------------------------------------------------------------------
# Main app
# ---------------------------------------------------------------------------

class TickleTimerApp(App):

    CSS = """
    #timers {
        height: auto;
    }
    #footer {
        margin-top: 1;
    }
    #rename {
        display: none;
    }
    #status {
        text-style: italic;
    }
    """

    ENABLE_COMMAND_PALETTE = False
    AUTO_FOCUS = None
    # Quit keys go through the controller so timers are always committed and saved first. Escape is bound here
    # so it still reaches the controller while the rename Input has focus.
    BINDINGS = [
        Binding("ctrl+c", "interrupt", show=False, priority=True),
        Binding("ctrl+q", "interrupt", show=False, priority=True),
        Binding("escape", "escape", show=False, priority=True),
    ]

    def __init__(self, clock=time.monotonic):
        super().__init__()
        self.rename_input = Input(
            id="rename",
            max_length=RENAME_CHAR_LIMIT,
            placeholder="New timer name...",
            select_on_focus=False,
        )
        self.controller = build_controller(InputEditor(self.rename_input), clock=clock)

    def compose(self) -> ComposeResult:
        yield Static(id="timers")
        yield Static(id="footer")
        yield self.rename_input
        yield Static(id="status")

    def on_mount(self) -> None:
        self._refresh_view()
        self.set_interval(TICK_SECONDS, self._on_tick)

    # ------------------------------------------------------------------ #
    #  Events                                                              #
    # ------------------------------------------------------------------ #

    def _on_tick(self) -> None:
        self.controller.handle(TickEvent())
        self._refresh_view()

    def on_key(self, event) -> None:
        # While renaming, keystrokes belong to the Input
        if isinstance(self.controller.mode, Rename):
            return
        event.stop()
        event.prevent_default()
        self._dispatch(KeyEvent(normalize_key(event)))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if isinstance(self.controller.mode, Rename):
            self._dispatch(KeyEvent("enter"))

    def action_interrupt(self) -> None:
        self._dispatch(KeyEvent("ctrl+c"))

    def action_escape(self) -> None:
        self._dispatch(KeyEvent("escape"))

    def _dispatch(self, event: KeyEvent) -> None:
        self.controller.handle(event)
        if self.controller.quit_requested:
            self.exit()
            return
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.query_one("#timers", Static).update(build_timer_rows(self.controller))
        self.query_one("#footer", Static).update(build_footer(self.controller))
        self.query_one("#status", Static).update(self.controller.status)

        renaming = isinstance(self.controller.mode, Rename)
        self.rename_input.display = renaming
        focused = self.focused is self.rename_input
        if renaming and not focused:
            self.set_focus(self.rename_input)
        elif not renaming and focused:
            self.set_focus(None)


# Loads everything from disk and wires up the controller the app runs on.
def build_controller(editor, clock=time.monotonic):
    settings = config.load_settings()
    store = TimerStore.from_records(config.load_timers(), clock())
    return InteractionController(
        store,
        editor,
        animations=settings["enable_animations"],
        clock=clock,
        save=config.save_timers,
        dump=dump_timers,
    )


def main():
    log.info("=== INITIALIZED NEW SESSION ===")
    app = TickleTimerApp()
    app.run()
    log.info("Session ended")
    return app.return_code or 0
