"""Logging setup; the TUI owns stdout so records go to a file."""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"


def configure_logging(log_path: Path | None = None, level: str = "INFO") -> Path:
    """Attach a file handler to the package logger and return its path."""
    path = DEFAULT_LOG_PATH if log_path is None else log_path
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("hotmanim")
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    return path
