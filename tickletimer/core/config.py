import json
from tickletimer.common.logger import log
from tickletimer.common.setup import PATHS

#region === Helpers and Paths ===

TIMERS_PATH = PATHS.data / "timers.json"
SETTINGS_PATH = PATHS.data / "config.json"

# Default values for config.json.
_SETTINGS_DEFAULTS = {
    "enable_animations": True,
}

# Helper to return a fresh seed list for first runs, or when timers.json can't be used.
def build_default_timers():
    return [
        {"label": "Timer A", "elapsed": 0.0, "running": False},
        {"label": "Timer B", "elapsed": 0.0, "running": False},
        {"label": "Timer C", "elapsed": 0.0, "running": False},
    ]

#endregion === Helpers and Paths ===

#region === Saving and Loading Timers ===

# Loads the timer records from timers.json, validating each entry. Bad entries are dropped, bad fields are
# defaulted, and anything that can't be read at all falls back to the seed timers.
def load_timers():
    try:
        if not TIMERS_PATH.exists():
            log.info(f"No existing timers file at '{TIMERS_PATH}', loading seed timers.")
            return build_default_timers()
        with open(TIMERS_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise TypeError(f"Expected a list of timers, got {type(raw).__name__}")

        timers = []
        skipped = 0
        defaulted_values = set()
        for i, entry in enumerate(raw):
            if not isinstance(entry, dict) or not isinstance(entry.get("label"), str):
                skipped += 1
                continue
            elapsed = entry.get("elapsed", 0.0)
            if isinstance(elapsed, bool) or not isinstance(elapsed, (int, float)) or elapsed < 0:
                defaulted_values.add(f"[{i}].elapsed")
                elapsed = 0.0
            running = entry.get("running", False)
            if not isinstance(running, bool):
                defaulted_values.add(f"[{i}].running")
                running = False
            timers.append({"label": entry["label"], "elapsed": float(elapsed), "running": running})

        # Log results
        if skipped or defaulted_values:
            log.warning(f"Loaded {len(timers)} timers from '{TIMERS_PATH}', skipping {skipped} invalid entries and defaulting: {', '.join(sorted(defaulted_values)) or 'nothing'}")
        else:
            log.info(f"Successfully loaded {len(timers)} timers from '{TIMERS_PATH}'.")
        return timers
    # Fall back to the seed timers in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError, ValueError):
        log.warning("Ran into an error while trying to load timers.json, falling back to seed timers.",exc_info=True)
        return build_default_timers()

# Write the given timer records to disk. Errors are left to the caller, which decides how to report them.
def save_timers(records):
    TIMERS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(TIMERS_PATH, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)
    log.info(f"Successfully saved {len(records)} timers to '{TIMERS_PATH}'")

#endregion === Saving and Loading Timers ===

#region === Settings ===

# Loads config.json, filling in defaults for anything missing or of the wrong type.
def load_settings():
    settings = dict(_SETTINGS_DEFAULTS)
    try:
        if not SETTINGS_PATH.exists():
            return settings
        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise TypeError(f"Expected a settings object, got {type(raw).__name__}")
        for key, default in _SETTINGS_DEFAULTS.items():
            if isinstance(raw.get(key), type(default)):
                settings[key] = raw[key]
            elif key in raw:
                log.warning(f"Ignoring invalid value for setting '{key}': {raw[key]!r}")
        return settings
    except (json.JSONDecodeError, OSError, TypeError, ValueError):
        log.warning("Ran into an error while trying to load config.json, using default settings.",exc_info=True)
        return dict(_SETTINGS_DEFAULTS)

#endregion === Settings ===
