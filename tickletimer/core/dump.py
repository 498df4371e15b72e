import csv
from datetime import datetime
from tickletimer.common.logger import log
from tickletimer.common.setup import PATHS
from tickletimer.util import format_duration

DUMP_DIR = PATHS.dumps

# Picks a fresh dump filename for this moment, such as dump_2026-02-12_14-03-11.csv. If a dump already exists
# under that name (two dumps in the same second), a counter is appended instead of overwriting it.
def next_dump_path(dump_dir=None, now=None):
    dump_dir = dump_dir or DUMP_DIR
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    path = dump_dir / f"dump_{stamp}.csv"
    n = 1
    while path.exists():
        path = dump_dir / f"dump_{stamp}_{n}.csv"
        n += 1
    return path

# Writes a two column Label/Elapsed table for the given timer records and returns where it went.
def dump_timers(records, dump_dir=None):
    dump_dir = dump_dir or DUMP_DIR
    dump_dir.mkdir(parents=True, exist_ok=True)
    path = next_dump_path(dump_dir)
    # "x" mode fails rather than truncating an existing file
    with open(path, "x", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Label", "Elapsed"])
        for rec in records:
            writer.writerow([rec["label"], format_duration(rec["elapsed"])])
    log.info(f"Dumped {len(records)} timers to '{path}'")
    return path
