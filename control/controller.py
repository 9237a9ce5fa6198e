#!/usr/bin/env python3
"""
control/controller.py
=====================
Thread-safe owner of the controller state.

:class:`SignalController` serialises ticks, operator commands and
classification results behind one lock, feeds each through
:func:`control.engine.step`, and records the resulting notices in the
:class:`~activity.log.ActivityLog`.  The UI and HTTP layer read cached
copies without touching the transition logic.

Public API consumed by :mod:`web.api`
-------------------------------------
* ``start()`` / ``stop()``              → ``None``
* ``set_mode(mode)``                    → ``None``
* ``manual_override(road_id)``          → ``None``
* ``apply_reading(road_id, snapshot)``  → ``bool``
* ``state``                             → ``ControllerState``
* ``snapshot()``                        → ``dict``
* ``get_logs()``                        → ``List[LogEntry]``
* ``get_analytics()``                   → ``dict``
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable, List, Optional, Tuple, Union

from activity.entry import LogEntry
from activity.log import ActivityLog
from activity.utils import utc_now
from config import ANALYTICS_WINDOW, DEFAULT_ROADS
from control.analytics import DensityHistory, DensitySample
from control.density import DensitySnapshot
from control.engine import (
    ApplyReading,
    Event,
    ManualOverride,
    SetMode,
    Start,
    Stop,
    Tick,
    next_goal,
    step,
)
from control.policy import SignalPolicy
from control.scorer import rank_candidates
from control.state import AuthorityMode, ControllerState, initial_state
from control.ticker import ThreadTicker, Ticker

log = logging.getLogger("controller")


def _wall_clock_ms() -> float:
    return time.time() * 1000.0


class SignalController:
    """Signal arbitration and timing engine for one intersection.

    Parameters
    ----------
    roads : iterable of (id, name)
        Fixed road set in tie-break order.
    policy : SignalPolicy or None
        Tunable constants; defaults when *None*.
    ticker : Ticker or None
        Periodic scheduler; a one-second :class:`ThreadTicker` when *None*.
    clock : callable or None
        Returns the current time in milliseconds (starvation scoring).
    activity : ActivityLog or None
        Audit trail; a new one sized by ``policy.log_capacity`` when *None*.
    history_window : int
        Density samples kept for analytics.
    """

    def __init__(
        self,
        roads: Iterable[Tuple[str, str]] = DEFAULT_ROADS,
        policy: Optional[SignalPolicy] = None,
        ticker: Optional[Ticker] = None,
        clock: Optional[Callable[[], float]] = None,
        activity: Optional[ActivityLog] = None,
        history_window: int = ANALYTICS_WINDOW,
    ) -> None:
        self.policy = policy or SignalPolicy()
        self._clock = clock or _wall_clock_ms
        self._ticker = ticker or ThreadTicker()
        self.activity = activity or ActivityLog(capacity=self.policy.log_capacity)
        self.history = DensityHistory(window=history_window)

        self._lock = threading.Lock()
        # Held across the state flip and the ticker call so start and stop
        # cannot interleave.
        self._lifecycle_lock = threading.Lock()
        self._state: ControllerState = initial_state(roads, self._clock())

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin autonomous ticking; the first tick picks a fresh road."""
        with self._lifecycle_lock:
            self._dispatch(Start())
            self._ticker.start(self.tick)

    def stop(self) -> None:
        """Halt ticking; road states stay as they are."""
        with self._lifecycle_lock:
            self._dispatch(Stop())
            self._ticker.stop()

    # ── Operator commands ─────────────────────────────────────────────────────

    def set_mode(self, mode: Union[AuthorityMode, str]) -> None:
        self._dispatch(SetMode(AuthorityMode(mode)))

    def manual_override(self, road_id: str) -> None:
        """Open *road_id* directly.  Ignored unless in MANUAL mode."""
        self._dispatch(ManualOverride(road_id, self._clock()))

    # ── Collaborator input ────────────────────────────────────────────────────

    def apply_reading(self, road_id: str, snapshot: DensitySnapshot) -> bool:
        """Replace a road's density snapshot.

        Returns False when *road_id* is not one of this controller's roads.
        """
        if not self.has_road(road_id):
            log.warning("reading for unknown road %r ignored", road_id)
            return False
        self._dispatch(ApplyReading(road_id, snapshot))
        self.history.add(DensitySample(utc_now(), road_id, snapshot.total_weight))
        return True

    # ── Timer ─────────────────────────────────────────────────────────────────

    def tick(self) -> None:
        """One timer step; called by the ticker."""
        self._dispatch(Tick(self._clock()))

    # ── Read API ──────────────────────────────────────────────────────────────

    @property
    def state(self) -> ControllerState:
        with self._lock:
            return self._state

    def has_road(self, road_id: str) -> bool:
        return self.state.index_of(road_id) is not None

    def get_logs(self) -> List[LogEntry]:
        return self.activity.entries()

    def get_analytics(self) -> dict:
        return {
            "samples": [s.as_dict() for s in self.history.samples()],
            "summary": self.history.summary(),
        }

    def snapshot(self) -> dict:
        """Dashboard view of the current state."""
        with self._lock:
            state = self._state
        now_ms = self._clock()
        goal = next_goal(state, now_ms, self.policy)
        active = state.active_road
        densities = [road.density for road in state.roads]
        return {
            "running": state.running,
            "mode": state.mode.value,
            "active_road": active.id if active else None,
            "next_goal": state.roads[goal].id if goal is not None else None,
            "emergency_status": (
                "DETECTED" if any(d.ambulance_detected for d in densities) else "CLEAR"
            ),
            "safety_integrity": (
                "ALERT" if any(d.accident_detected for d in densities) else "NOMINAL"
            ),
            "ticker_active": self._ticker.active,
            "roads": [road.as_dict() for road in state.roads],
            "candidates": self._candidates(state, now_ms),
            "activity_metrics": self.activity.metrics.report(),
        }

    # ── internals ─────────────────────────────────────────────────────────────

    def _candidates(self, state: ControllerState, now_ms: float) -> List[dict]:
        # The scorer only runs while the controller drives the signals itself.
        if not state.running or state.mode != AuthorityMode.AUTONOMOUS:
            return []
        return [
            c.as_dict()
            for c in rank_candidates(state.roads, state.active_index, now_ms, self.policy)
        ]

    def _dispatch(self, event: Event) -> ControllerState:
        with self._lock:
            transition = step(self._state, event, self.policy)
            self._state = transition.state
            # Recorded under the lock so log order matches transition order.
            for notice in transition.notices:
                self.activity.record(notice.message, notice.severity)
            return transition.state
