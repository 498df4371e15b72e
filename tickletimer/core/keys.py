"""Double-keystroke detection for the dump shortcut."""

DOUBLE_TAP_WINDOW = 1.0


def is_double_tap(prev_key, prev_time, cur_key, cur_time, window=DOUBLE_TAP_WINDOW):
    """True when ``cur_key`` repeats ``prev_key`` strictly inside ``window`` seconds."""
    if prev_key is None or prev_time is None:
        return False
    if prev_key != cur_key:
        return False
    return 0 <= cur_time - prev_time < window


class DoubleTapDetector:
    """Remembers the last watched key press and reports when it is repeated in time.

    A press that completes a double tap clears the memory, so three quick presses
    trigger once and leave the third press as the start of a new pair.
    """

    def __init__(self, key, window=DOUBLE_TAP_WINDOW):
        self.key = key
        self.window = window
        self.last_key = None
        self.last_time = None

    def press(self, key, now):
        if key != self.key:
            return False
        if is_double_tap(self.last_key, self.last_time, key, now, self.window):
            self.clear()
            return True
        self.last_key = key
        self.last_time = now
        return False

    def clear(self):
        self.last_key = None
        self.last_time = None
