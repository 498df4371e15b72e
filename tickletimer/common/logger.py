import logging
from logging.handlers import RotatingFileHandler
from tickletimer.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3

# Builds the app logger. Everything goes to files under PATHS.logs since the terminal belongs to the UI:
#   tickletimer.log   INFO and up, rotated, kept across runs
#   latest.log        everything from this run only
#   debug/*.log       one DEBUG file per run, the newest `debug_runs` kept
def get_logger(name="tickletimer", level=logging.DEBUG, debug_runs: int = 10) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)
    # Already configured in this process
    if logger.handlers:
        return logger

    log_dir = PATHS.logs
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    rotating = RotatingFileHandler(log_dir / f"{name}.log", maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS,
                                   encoding="utf-8", delay=True)
    rotating.setLevel(logging.INFO)

    latest = logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8", delay=True)
    latest.setLevel(level)

    handlers = [rotating, latest]

    if debug_runs > 0:
        debug_dir = log_dir / "debug"
        debug_dir.mkdir(parents=True, exist_ok=True)
        this_run = logging.FileHandler(debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log",
                                       encoding="utf-8", delay=True)
        this_run.setLevel(logging.DEBUG)
        handlers.append(this_run)

        # Prune oldest runs; the current run's file isn't created until its first record
        runs = sorted(debug_dir.glob(f"{name}_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
        for run in runs[debug_runs - 1:]:
            try: run.unlink()
            except OSError: pass

    for handler in handlers:
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    return logger

log = get_logger()
