#!/usr/bin/env python3
"""
control/density.py
==================
Per-road density readings produced by the classification collaborator.

A road's reading is *tagged*: either :class:`NoReading` (nothing has been
classified yet) or a :class:`DensitySnapshot`.  Both expose the same
read-only surface, and :class:`NoReading` spells out the Low-traffic
fallback the scorer and the timer rely on.

Derivation helpers
------------------
* :func:`total_weight` - weighted vehicle sum.
* :func:`total_count` - plain vehicle sum.
* :func:`traffic_level_for` - Low / Medium / High from the count.
* :func:`make_snapshot` - builds a snapshot with derived fields recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from control.policy import DEFAULT_POLICY, SignalPolicy


class TrafficLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class VehicleBreakdown:
    """Vehicle counts by class; every count is a non-negative int."""

    bikes: int = 0
    cars: int = 0
    autos: int = 0
    buses: int = 0
    trucks: int = 0

    def __post_init__(self) -> None:
        for name in ("bikes", "cars", "autos", "buses", "trucks"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative int, got {value!r}")

    def as_dict(self) -> dict:
        return {
            "bikes": self.bikes,
            "cars": self.cars,
            "autos": self.autos,
            "buses": self.buses,
            "trucks": self.trucks,
        }


def total_count(breakdown: VehicleBreakdown) -> int:
    return (
        breakdown.bikes
        + breakdown.cars
        + breakdown.autos
        + breakdown.buses
        + breakdown.trucks
    )


def total_weight(breakdown: VehicleBreakdown, policy: SignalPolicy = DEFAULT_POLICY) -> int:
    """Weighted sum: bike 1, car/auto 2, bus/truck 3 under the default policy."""
    return (
        breakdown.bikes * policy.bike_weight
        + breakdown.cars * policy.car_weight
        + breakdown.autos * policy.auto_weight
        + breakdown.buses * policy.bus_weight
        + breakdown.trucks * policy.truck_weight
    )


def traffic_level_for(count: int, policy: SignalPolicy = DEFAULT_POLICY) -> TrafficLevel:
    """Low up to 20 vehicles, Medium for 21..30, High above 30."""
    if count > policy.high_tier_count:
        return TrafficLevel.HIGH
    if count > policy.medium_tier_count:
        return TrafficLevel.MEDIUM
    return TrafficLevel.LOW


@dataclass(frozen=True)
class DensitySnapshot:
    """One classification result for one road.

    Build instances with :func:`make_snapshot` so the derived fields
    always agree with the breakdown.
    """

    breakdown: VehicleBreakdown
    total_weight: int
    traffic_level: TrafficLevel
    ambulance_detected: bool = False
    accident_detected: bool = False

    present = True

    @property
    def total_count(self) -> int:
        return total_count(self.breakdown)

    def as_dict(self) -> dict:
        return {
            "breakdown": self.breakdown.as_dict(),
            "totalWeight": self.total_weight,
            "trafficLevel": self.traffic_level.value,
            "ambulanceDetected": self.ambulance_detected,
            "accidentDetected": self.accident_detected,
        }


@dataclass(frozen=True)
class NoReading:
    """Placeholder until a road's first classification arrives.

    Behaves exactly like an empty Low-traffic road.
    """

    present = False

    @property
    def total_count(self) -> int:
        return 0

    @property
    def total_weight(self) -> int:
        return 0

    @property
    def traffic_level(self) -> TrafficLevel:
        return TrafficLevel.LOW

    @property
    def ambulance_detected(self) -> bool:
        return False

    @property
    def accident_detected(self) -> bool:
        return False

    def as_dict(self) -> Optional[dict]:
        return None


DensityReading = Union[NoReading, DensitySnapshot]

NO_READING = NoReading()


def make_snapshot(
    breakdown: VehicleBreakdown,
    ambulance_detected: bool = False,
    accident_detected: bool = False,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> DensitySnapshot:
    """Build a snapshot, deriving weight and level from *breakdown*."""
    return DensitySnapshot(
        breakdown=breakdown,
        total_weight=total_weight(breakdown, policy),
        traffic_level=traffic_level_for(total_count(breakdown), policy),
        ambulance_detected=bool(ambulance_detected),
        accident_detected=bool(accident_detected),
    )


# Returned by the classification boundary whenever the service is unavailable.
FALLBACK_SNAPSHOT = make_snapshot(VehicleBreakdown())
