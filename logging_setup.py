#!/usr/bin/env python3
"""
logging_setup.py
================
Logging for the SmartFlow service.

* Root logger: console plus ``smartflow.log`` (rotating, 1 MB, 2 backups).
  Classifier and activity-log records land here.
* ``controller`` logger: additionally writes DEBUG records to
  ``controller_debug.log`` (5 MB, 2 backups).  Arbitration decisions,
  ignored overrides, ticker start/stop and tick errors go there, so a
  signal timeline can be replayed without raising the console level.

:func:`setup_logging` is called once by :func:`main.main` before the
controller and the ASGI app are built.
"""

import logging
from logging.handlers import RotatingFileHandler

from config import CONTROLLER_DEBUG_LOG_FILE, LOG_FILE


def setup_logging(level: int = logging.INFO) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)

    fh = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=2)
    fh.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)
    root.addHandler(fh)

    # ── Dedicated debug file for per-tick controller traces ───────────
    controller_logger = logging.getLogger("controller")
    controller_logger.setLevel(logging.DEBUG)
    dfh = RotatingFileHandler(
        CONTROLLER_DEBUG_LOG_FILE, maxBytes=5_000_000, backupCount=2
    )
    dfh.setLevel(logging.DEBUG)
    dfh.setFormatter(fmt)
    controller_logger.addHandler(dfh)
