"""
Log sinks for the moodmorph CLI.

Library modules log through ``from loguru import logger`` and never add sinks
themselves. The CLI calls ``setup_logging`` once per invocation: a terse
console sink at the chosen level, plus an optional rotating file that keeps
everything from DEBUG up.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <7}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{function}:{line} | {message}"
LOG_FILE_NAME = "moodmorph.log"


def log_file_in(log_dir: str | Path) -> Path:
    return Path(log_dir).expanduser() / LOG_FILE_NAME


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
    *,
    rotation: str = "5 MB",
    retention: str = "14 days",
) -> None:
    """
    Replace loguru's default sink with the console and file sinks.

    Args:
        level: Console threshold (DEBUG, INFO, WARNING, ERROR); case-insensitive.
        log_file: Where to keep the DEBUG-level log. None logs to stderr only.
        rotation: Size at which the log file is rotated.
        retention: How long rotated files are kept.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
    if log_file is not None:
        logger.add(
            str(log_file),
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )
