#!/usr/bin/env python3
"""
control/engine.py
=================
Pure state-transition function for the signal controller.

:func:`step` takes a :class:`~control.state.ControllerState` and one
event and returns a :class:`Transition`: the new state plus the activity
notices the step produced.  No clocks, locks or threads live here; the
caller supplies timestamps on the events and serialises calls.

Events
------
Tick
    One fixed time unit of the autonomous timer.
Start / Stop
    Toggle ``running``.
SetMode
    Switch the control authority (AUTONOMOUS or MANUAL).
ManualOverride
    Operator opens one road directly (MANUAL only).
ApplyReading
    Replace one road's density snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from activity.entry import Severity
from control.density import DensitySnapshot
from control.policy import DEFAULT_POLICY, SignalPolicy
from control.scorer import select_next
from control.state import AuthorityMode, ControllerState, SignalStatus

log = logging.getLogger("controller")


# ── Events ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Tick:
    now_ms: float


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class SetMode:
    mode: AuthorityMode


@dataclass(frozen=True)
class ManualOverride:
    road_id: str
    now_ms: float


@dataclass(frozen=True)
class ApplyReading:
    road_id: str
    snapshot: DensitySnapshot


Event = Union[Tick, Start, Stop, SetMode, ManualOverride, ApplyReading]


# ── Results ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Notice:
    """An activity entry a step wants recorded."""

    message: str
    severity: Severity = Severity.INFO


@dataclass(frozen=True)
class Transition:
    state: ControllerState
    notices: Tuple[Notice, ...] = ()


# ── Helpers ───────────────────────────────────────────────────────────────────

def _open_road(
    state: ControllerState,
    winner: int,
    countdown: int,
    now_ms: float,
) -> ControllerState:
    """Open *winner* and force every other road RED."""
    roads = tuple(
        replace(
            road,
            status=SignalStatus.GREEN,
            countdown=countdown,
            last_green_at_ms=now_ms,
        )
        if idx == winner
        else replace(road, status=SignalStatus.RED, countdown=0)
        for idx, road in enumerate(state.roads)
    )
    return replace(state, roads=roads, active_index=winner)


def _open_next(state: ControllerState, now_ms: float, policy: SignalPolicy) -> Transition:
    winner = select_next(state.roads, state.active_index, now_ms, policy)
    road = state.roads[winner]
    duration = policy.green_ticks_for(road.density.traffic_level.value)
    log.debug(
        "arbitration winner=%s level=%s green_ticks=%d",
        road.id, road.density.traffic_level.value, duration,
    )
    return Transition(
        _open_road(state, winner, duration, now_ms),
        (Notice(f"AI Mode: Route {road.id} Open"),),
    )


# ── Handlers ──────────────────────────────────────────────────────────────────

def _on_tick(state: ControllerState, event: Tick, policy: SignalPolicy) -> Transition:
    # Authority gate comes before any mutation.
    if not state.running or state.mode != AuthorityMode.AUTONOMOUS:
        return Transition(state)

    active = state.active_road
    if active is None:
        return _open_next(state, event.now_ms, policy)

    idx = state.active_index
    if active.countdown <= 1:
        if active.status == SignalStatus.GREEN:
            return Transition(state.with_road(
                idx,
                replace(active, status=SignalStatus.YELLOW, countdown=policy.yellow_ticks),
            ))
        if active.status == SignalStatus.YELLOW:
            return _open_next(state, event.now_ms, policy)

    return Transition(state.with_road(
        idx, replace(active, countdown=max(0, active.countdown - 1)),
    ))


def _on_start(state: ControllerState) -> Transition:
    if state.running:
        return Transition(state)
    return Transition(
        replace(state, running=True, active_index=None),
        (Notice("System Engaged: Signal Controller Running"),),
    )


def _on_stop(state: ControllerState) -> Transition:
    if not state.running:
        return Transition(state)
    return Transition(
        replace(state, running=False),
        (Notice("System Standby: Signal Controller Halted"),),
    )


def _on_set_mode(state: ControllerState, event: SetMode) -> Transition:
    mode = AuthorityMode(event.mode)
    if mode == AuthorityMode.MANUAL:
        notice = Notice("Operator Authority: Manual Override Enabled", Severity.ALERT)
    else:
        notice = Notice("System Authority: AI Control Resumed", Severity.INFO)
    return Transition(replace(state, mode=mode), (notice,))


def _on_manual_override(state: ControllerState, event: ManualOverride) -> Transition:
    if state.mode != AuthorityMode.MANUAL:
        log.debug("manual override of %s ignored: not in manual mode", event.road_id)
        return Transition(state)
    idx = state.index_of(event.road_id)
    if idx is None:
        log.debug("manual override ignored: unknown road %r", event.road_id)
        return Transition(state)
    # Manual mode has no timed countdown.
    return Transition(
        _open_road(state, idx, 0, event.now_ms),
        (Notice(f"Manual Command: Open Route {event.road_id}"),),
    )


def _on_apply_reading(state: ControllerState, event: ApplyReading) -> Transition:
    idx = state.index_of(event.road_id)
    if idx is None:
        log.debug("reading for unknown road %r dropped", event.road_id)
        return Transition(state)
    snapshot = event.snapshot
    notices = []
    if snapshot.ambulance_detected:
        notices.append(Notice(f"Emergency: Ambulance Road {event.road_id}", Severity.EMERGENCY))
    if snapshot.accident_detected:
        notices.append(Notice(f"Alert: Accident Road {event.road_id}", Severity.ALERT))
    road = replace(state.roads[idx], density=snapshot)
    return Transition(state.with_road(idx, road), tuple(notices))


# ── Entry point ───────────────────────────────────────────────────────────────

def step(
    state: ControllerState,
    event: Event,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> Transition:
    """Apply *event* to *state* and return the resulting transition."""
    if isinstance(event, Tick):
        return _on_tick(state, event, policy)
    if isinstance(event, Start):
        return _on_start(state)
    if isinstance(event, Stop):
        return _on_stop(state)
    if isinstance(event, SetMode):
        return _on_set_mode(state, event)
    if isinstance(event, ManualOverride):
        return _on_manual_override(state, event)
    if isinstance(event, ApplyReading):
        return _on_apply_reading(state, event)
    raise TypeError(f"unsupported event: {event!r}")


def next_goal(
    state: ControllerState,
    now_ms: float,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> Optional[int]:
    """Road the scorer would open next, or None outside autonomous running."""
    if not state.running or state.mode != AuthorityMode.AUTONOMOUS:
        return None
    return select_next(state.roads, state.active_index, now_ms, policy)
