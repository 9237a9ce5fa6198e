#!/usr/bin/env python3
"""
control/state.py
================
Immutable controller state.

:class:`ControllerState` is the single context object every transition
reads and replaces; nothing here is module-global.  Roads are stored as a
tuple whose order is the tie-break precedence used by the scorer.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from control.density import NO_READING, DensityReading


class SignalStatus(str, Enum):
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"


class AuthorityMode(str, Enum):
    AUTONOMOUS = "AUTONOMOUS"
    MANUAL = "MANUAL"


@dataclass(frozen=True)
class Road:
    """One intersection approach under signal control."""

    id: str
    name: str = ""
    status: SignalStatus = SignalStatus.RED
    countdown: int = 0
    last_green_at_ms: float = 0.0
    density: DensityReading = NO_READING

    @property
    def is_open(self) -> bool:
        return self.status != SignalStatus.RED

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "countdown": self.countdown,
            "last_green_at_ms": self.last_green_at_ms,
            "density": self.density.as_dict(),
        }


@dataclass(frozen=True)
class ControllerState:
    """Everything the timer and the operator commands act on.

    Invariant: at most one road is GREEN or YELLOW.
    """

    roads: Tuple[Road, ...]
    active_index: Optional[int] = None
    running: bool = False
    mode: AuthorityMode = AuthorityMode.AUTONOMOUS

    @property
    def active_road(self) -> Optional[Road]:
        if self.active_index is None:
            return None
        return self.roads[self.active_index]

    def index_of(self, road_id: str) -> Optional[int]:
        for idx, road in enumerate(self.roads):
            if road.id == road_id:
                return idx
        return None

    def open_roads(self) -> Tuple[Road, ...]:
        return tuple(road for road in self.roads if road.is_open)

    def with_road(self, index: int, road: Road) -> "ControllerState":
        roads = list(self.roads)
        roads[index] = road
        return replace(self, roads=tuple(roads))


def initial_state(
    roads: Iterable[Tuple[str, str]],
    now_ms: float,
) -> ControllerState:
    """Build an idle controller state.

    Parameters
    ----------
    roads : iterable of (id, name)
        Road identities in tie-break order.  Must be non-empty with
        unique ids.
    now_ms : float
        Start time; every road's ``last_green_at_ms`` starts here.
    """
    built: Sequence[Road] = tuple(
        Road(id=str(road_id), name=str(name), last_green_at_ms=now_ms)
        for road_id, name in roads
    )
    if not built:
        raise ValueError("a controller needs at least one road")
    ids = [road.id for road in built]
    if len(set(ids)) != len(ids):
        raise ValueError(f"road ids must be unique: {ids}")
    return ControllerState(roads=tuple(built))
