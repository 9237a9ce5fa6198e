#!/usr/bin/env python3
"""
control/scorer.py
=================
Right-of-way arbitration.

Stateless helpers, safe to call from inside a tick or an operator command:

* :func:`road_score` - priority score for one candidate road.
* :func:`rank_candidates` - every road with its score, best first.
* :func:`select_next` - index of the winning road.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from control.policy import DEFAULT_POLICY, SignalPolicy
from control.state import Road


@dataclass(frozen=True)
class Candidate:
    index: int
    road_id: str
    score: int

    def as_dict(self) -> dict:
        return {"index": self.index, "road_id": self.road_id, "score": self.score}


def road_score(road: Road, now_ms: float, policy: SignalPolicy = DEFAULT_POLICY) -> int:
    """Scheduling-priority score for *road*.

    Higher score ⇒ should get right of way next.
    Factors: ambulance bonus, congestion tier, raw weight, starvation.
    """
    density = road.density
    score = 0
    if density.ambulance_detected:
        score += policy.emergency_bonus

    count = density.total_count
    if count > policy.high_tier_count:
        score += policy.high_tier_bonus
    elif count > policy.medium_tier_count:
        score += policy.medium_tier_bonus
    else:
        score += policy.low_tier_bonus

    score += density.total_weight

    if now_ms - road.last_green_at_ms > policy.starvation_ms:
        score += policy.starvation_bonus
    return score


def rank_candidates(
    roads: Sequence[Road],
    active_index: Optional[int],
    now_ms: float,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> List[Candidate]:
    """Score every road and order them best first.

    The active road is pinned at the sentinel score so it only wins when
    it is the sole road.  Equal scores keep declaration order.
    """
    if not roads:
        raise ValueError("cannot arbitrate an empty road set")
    candidates = [
        Candidate(
            index=idx,
            road_id=road.id,
            score=(
                policy.active_sentinel_score
                if idx == active_index
                else road_score(road, now_ms, policy)
            ),
        )
        for idx, road in enumerate(roads)
    ]
    # sorted() is stable, reverse=True included
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def select_next(
    roads: Sequence[Road],
    active_index: Optional[int],
    now_ms: float,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> int:
    """Index of the road that should open next."""
    return rank_candidates(roads, active_index, now_ms, policy)[0].index
