import sys
from tickletimer.common.logger import log
from tickletimer.ui.app import main

# Entry point for `python -m tickletimer` and the `tickletimer` script
def run() -> None:
    try:
        code = main()
    except SystemExit:
        raise
    except Exception as e:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        print(f"tickletimer: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)

if __name__ == "__main__":
    run()
