from rich.style import Style
from rich.text import Text

from tickletimer.core.modes import AddEdit, ConfirmAction, DumpConfirm, Normal, RemoveReset, Rename
from tickletimer.util import format_clock

# Row background per mode. Normal rows keep the terminal's own background.
MODE_BACKGROUNDS = {
    RemoveReset: "red",
    AddEdit: "green",
    DumpConfirm: "yellow",
}

EMPTY_MESSAGE = "No timers. Press a, then a to add one."


def build_timer_row(row, mode, spinner_frame, tick_count, animations):
    """Render one timer as ``<spinner> MM:SS label``."""
    prefix = "  "
    if row.running and animations:
        prefix = f"{spinner_frame} "

    style = Style()
    bg = MODE_BACKGROUNDS.get(type(mode))
    if bg:
        style += Style(bgcolor=bg)
    if row.is_cursor:
        style += Style(reverse=True)
        if not isinstance(mode, Normal):
            style += Style(bold=True)
    # Running timers blink bold with the tick
    if row.running and animations and tick_count % 2 == 0:
        style += Style(bold=True)

    return Text(f"{prefix}{format_clock(row.elapsed)} {row.label}", style=style)


def build_timer_rows(controller, now=None):
    rows = controller.rows(now)
    if not rows:
        return Text(EMPTY_MESSAGE, style="dim")
    return Text("\n").join(
        build_timer_row(r, controller.mode, controller.spinner_frame, controller.tick_count, controller.animations)
        for r in rows
    )


def build_footer(controller):
    """Hint line or prompt for the current mode."""
    mode = controller.mode
    if isinstance(mode, RemoveReset):
        if mode.pending is ConfirmAction.DELETE:
            return Text("Delete this timer? (y/n)")
        if mode.pending is ConfirmAction.RESET:
            return Text("Reset this timer? (y/n)")
        return Text("[Remove/Reset Mode]   d: delete  t: reset  [: -30s  ]: +30s  r: back")
    if isinstance(mode, AddEdit):
        return Text("[Add/Edit Mode] a: add  r: rename  [: -30s  ]: +30s  b: back")
    if isinstance(mode, Rename):
        return Text("Renaming: enter to save, esc to cancel")
    if isinstance(mode, DumpConfirm):
        return Text("Timers dumped. Reset all timers? (y/n)")
    return Text("↑/↓: navigate  s: start/stop  a: add/edit  r: remove/reset  u u: dump/reset  q: quit")
