"""
Logging Levels:
    DEBUG: Individual marks and measures
    INFO: Request lifecycle
    WARNING: Lookups of unknown marks
    ERROR: Failed Requests
    CRITICAL: Abort Immediately

Log Structure:
    timestamp
    level
    message
    optional metadata(dict)
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from typing_extensions import Any


def _add_file_handler(logger: logging.Logger, name: str, log_dir: str, formatter: logging.Formatter) -> None:
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_file = (Path(log_dir) / f"{name}.log").resolve()
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename).resolve() == log_file:
            return
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def setup_logger(name: str, log_dir: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Define the logging function and return the logger.

    A logger configured by an earlier call keeps its handlers and level, but
    still gains a file handler for a log_dir it was not writing to yet.

    Args:
        name (str): The name of the logger.
        log_dir (Optional[str]): Directory for a `<name>.log` file. Console only when None.
        level (int): Logging Severity Level

    Returns:
        Logging.Logger: Returns a defined logger."""

    logger = logging.getLogger(name)
    formatter = logging.Formatter(fmt="%(message)s")

    if not logger.handlers:
        logger.setLevel(level)
        logger.propagate = False

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_dir is not None:
        _add_file_handler(logger, name, log_dir, formatter)

    return logger


def log_event(logger: logging.Logger, level: int, message: str, **metadata: Any):
    """
    Logs events as a single JSON line

    Args:
        logger (logging.Logger): Logging Function,
        level (int): Severity Level,
        message (str): Message to Log,
        **metadata (Any): keyword argument representing all metadata

    Returns:
        None
    """
    if not logger.isEnabledFor(level):
        return

    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "message": message,
        "metadata": metadata,
    }

    # default=str keeps non-JSON values (paths, enums) loggable
    logger.log(level, json.dumps(payload, default=str))
