# src/taskboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "taskboard.log"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

# Request lines from httpx are INFO; they would drown the task log.
PINNED_LEVELS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


class _TerminalFilter(logging.Filter):
    """Only our own records reach stderr; everyone else needs ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskboard" or record.name.startswith("taskboard."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskboard",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure the root logger once, before the app starts.

    The file handler keeps everything (rotated by size); the stderr handler
    stays at WARNING unless asked for more, since the TUI draws over the terminal.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    terminal = logging.StreamHandler(sys.stderr)
    terminal.setLevel(console_level)
    terminal.setFormatter(fmt)
    terminal.addFilter(_TerminalFilter())
    root.addHandler(terminal)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # warnings.warn(...) shows up as 'py.warnings'.
    logging.captureWarnings(True)

    for name, level in PINNED_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    return log_file
