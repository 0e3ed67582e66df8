# src/sra2otu/utils/logger.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "sra2otu"
_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if name:
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def setup_logger(verbose: bool = False) -> logging.Logger:
    """
    Configure the package 'sra2otu' logger:
      - INFO to console (DEBUG with verbose=True)
      - DEBUG to file, once the working directory is known (see add_file_handler)
    Idempotent: safe to call multiple times.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if getattr(setup_logger, "_configured", False):
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(ch)

    setup_logger._configured = True  # type: ignore[attr-defined]
    return logger


def add_file_handler(log_file: Path) -> None:
    """Attach a DEBUG file handler; a second call for the same file is a no-op."""
    logger = logging.getLogger(_LOGGER_NAME)
    target = str(log_file.resolve())
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(fh)
