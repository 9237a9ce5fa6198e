#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf - it never imports from
other project packages.
"""

from typing import Tuple

# ── Controller defaults ──────────────────────────────────────────────────────
DEFAULT_TICK_SECONDS: float = 1.0

# (road id, display name) in tie-break order
DEFAULT_ROADS: Tuple[Tuple[str, str], ...] = (
    ("A", "North Boulevard"),
    ("B", "East Avenue"),
    ("C", "South Drive"),
    ("D", "West Way"),
)

# ── Analytics ────────────────────────────────────────────────────────────────
ANALYTICS_WINDOW: int = 20

# ── Classification collaborator ──────────────────────────────────────────────
DEFAULT_CLASSIFIER_URL: str = "http://localhost:8500/classify"
DEFAULT_CLASSIFIER_TIMEOUT_S: float = 15.0

# ── HTTP API ─────────────────────────────────────────────────────────────────
DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000

# ── Log files (relative to the working directory) ────────────────────────────
LOG_FILE: str = "smartflow.log"
CONTROLLER_DEBUG_LOG_FILE: str = "controller_debug.log"
