"""Logging setup.

The TUI owns the terminal, so records go to a file instead of stderr.
"""

import logging
from pathlib import Path

LOGGER_NAME = "repo_lens"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_file: Path = Path("repo-lens.log")) -> logging.Logger:
    """Attach a file handler to the package logger (once)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    target = str(Path(log_file).resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return logger

    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
