"""Logging configuration for todo-app."""

import logging
import sys


class _RequestNoiseFilter(logging.Filter):
    """Keep werkzeug's per-request lines out of the console unless WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("werkzeug"):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stderr handler.

    Call once at startup, before the first log line. At DEBUG level the
    werkzeug request log is shown as well.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    if root.level > logging.DEBUG:
        handler.addFilter(_RequestNoiseFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
