"""Logging setup for the pageflow logger hierarchy."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stream handler to the ``pageflow`` logger (once)."""
    logger = logging.getLogger("pageflow")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    if not any(getattr(h, "_pageflow", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        handler._pageflow = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
