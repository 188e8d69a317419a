# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the app through the composition root, then runs the TUI
in the main thread until the user quits.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_app
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # The TUI owns the terminal: stderr gets WARNING+ at most.
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    configured_level = getattr(logging, level_name, logging.INFO)
    console_level = max(configured_level, logging.WARNING)

    log_file = setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
    )

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    app = create_app(settings=settings)
    try:
        app.run()
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
