#!/usr/bin/env python3
"""
control/policy.py
=================
Tunable arbitration and timing parameters for the signal controller.
Every constant lives in the frozen :class:`SignalPolicy` dataclass so that
experiments can swap policies without touching code.

The vehicle weights and traffic-level thresholds are shared with the
external classifier and must stay bit-for-bit identical to its contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


def _default_green_ticks() -> Dict[str, int]:
    return {"Low": 15, "Medium": 30, "High": 45}


@dataclass(frozen=True)
class SignalPolicy:
    """Immutable bag of every tunable controller parameter.

    Groups: scoring bonuses, congestion tiers, starvation, phase timing,
    vehicle weights, activity log.
    """

    # ── Scoring bonuses ───────────────────────────────────────────────────
    emergency_bonus: int = 10000
    """Added when the road's snapshot reports an ambulance."""

    starvation_bonus: int = 5000
    """Added once a road has waited longer than ``starvation_ms``."""

    active_sentinel_score: int = -1
    """Score pinned on the currently active road so it never wins a contest."""

    # ── Congestion tiers (on total vehicle count) ─────────────────────────
    high_tier_count: int = 30
    """Counts strictly above this earn ``high_tier_bonus``."""

    medium_tier_count: int = 20
    """Counts strictly above this (and not high) earn ``medium_tier_bonus``."""

    high_tier_bonus: int = 3000
    medium_tier_bonus: int = 2000
    low_tier_bonus: int = 1000
    """Baseline every candidate receives, even with zero vehicles."""

    # ── Starvation ────────────────────────────────────────────────────────
    starvation_ms: int = 180_000
    """Wait (since last GREEN) after which the starvation bonus applies."""

    # ── Phase timing (ticks) ──────────────────────────────────────────────
    green_ticks: Dict[str, int] = field(default_factory=_default_green_ticks)
    """GREEN duration keyed by traffic level name."""

    yellow_ticks: int = 3
    """Fixed YELLOW duration."""

    # ── Vehicle weights ───────────────────────────────────────────────────
    bike_weight: int = 1
    car_weight: int = 2
    auto_weight: int = 2
    bus_weight: int = 3
    truck_weight: int = 3

    # ── Activity log ──────────────────────────────────────────────────────
    log_capacity: int = 30
    """Entries retained by the activity log."""

    def green_ticks_for(self, level: str) -> int:
        """GREEN duration for *level*; unknown levels fall back to Low."""
        return self.green_ticks.get(str(level), self.green_ticks["Low"])


DEFAULT_POLICY = SignalPolicy()
