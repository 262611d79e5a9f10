"""
Logging Configuration
Sets up the package logger and resolves the level requested at start-up.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach handlers to the 'earthcurve' logger.

    Output always goes to stdout; with ``log_file`` it is mirrored into that
    file (overwritten on each start).

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("earthcurve")
    logger.setLevel(level)

    # Restarting the app inside one interpreter must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized ({logging.getLevelName(level)}).")


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as 'debug' into a logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default
