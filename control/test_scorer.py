#!/usr/bin/env python3
"""
Arbitration tests: scoring terms, winner selection and tie-breaks.
"""

from __future__ import annotations

import unittest

from control.density import VehicleBreakdown, make_snapshot
from control.policy import SignalPolicy
from control.scorer import rank_candidates, road_score, select_next
from control.state import Road

NOW_MS = 1_000_000.0


def _road(road_id: str, cars: int = 0, ambulance: bool = False,
          last_green_at_ms: float = NOW_MS, **counts: int) -> Road:
    breakdown = VehicleBreakdown(cars=cars, **counts)
    return Road(
        id=road_id,
        last_green_at_ms=last_green_at_ms,
        density=make_snapshot(breakdown, ambulance_detected=ambulance),
    )


class RoadScoreTests(unittest.TestCase):
    def test_empty_road_gets_low_tier_baseline(self) -> None:
        self.assertEqual(road_score(Road(id="A", last_green_at_ms=NOW_MS), NOW_MS), 1000)

    def test_tier_boundaries(self) -> None:
        self.assertEqual(road_score(_road("A", cars=20), NOW_MS), 1000 + 40)
        self.assertEqual(road_score(_road("A", cars=21), NOW_MS), 2000 + 42)
        self.assertEqual(road_score(_road("A", cars=30), NOW_MS), 2000 + 60)
        self.assertEqual(road_score(_road("A", cars=31), NOW_MS), 3000 + 62)

    def test_ambulance_bonus(self) -> None:
        self.assertEqual(road_score(_road("A", bikes=5, ambulance=True), NOW_MS), 10000 + 1000 + 5)

    def test_starvation_threshold_is_strict(self) -> None:
        at_limit = Road(id="A", last_green_at_ms=NOW_MS - 180_000)
        past_limit = Road(id="A", last_green_at_ms=NOW_MS - 180_001)
        self.assertEqual(road_score(at_limit, NOW_MS), 1000)
        self.assertEqual(road_score(past_limit, NOW_MS), 6000)

    def test_policy_overrides_bonuses(self) -> None:
        policy = SignalPolicy(emergency_bonus=1, low_tier_bonus=0)
        road = _road("A", ambulance=True)
        self.assertEqual(road_score(road, NOW_MS, policy), 1)


class SelectNextTests(unittest.TestCase):
    def test_scenario_ambulance_road_wins(self) -> None:
        roads = [
            _road("A", cars=25),
            _road("B", bikes=5, ambulance=True),
            _road("C", cars=25),
            _road("D", cars=25),
        ]
        self.assertEqual(select_next(roads, None, NOW_MS), 1)

    def test_scenario_starvation_beats_weight(self) -> None:
        roads = [
            Road(id="A", last_green_at_ms=NOW_MS),
            Road(id="B", last_green_at_ms=NOW_MS),
            _road("C", cars=5, last_green_at_ms=NOW_MS - 200_000),
            _road("D", cars=25, last_green_at_ms=NOW_MS),
        ]
        self.assertEqual(road_score(roads[2], NOW_MS), 6010)
        self.assertEqual(road_score(roads[3], NOW_MS), 2050)
        self.assertEqual(select_next(roads, None, NOW_MS), 2)

        # Without the starvation bonus D would have won on weight.
        fresh_c = _road("C", cars=5, last_green_at_ms=NOW_MS)
        self.assertEqual(select_next([roads[0], roads[1], fresh_c, roads[3]], None, NOW_MS), 3)

    def test_emergency_dominates_heaviest_congestion(self) -> None:
        roads = [
            _road("A", trucks=60),
            _road("B", ambulance=True),
        ]
        self.assertEqual(select_next(roads, None, NOW_MS), 1)

    def test_active_road_is_excluded(self) -> None:
        roads = [_road("A", cars=40), _road("B"), _road("C")]
        self.assertEqual(select_next(roads, 0, NOW_MS), 1)
        ranking = rank_candidates(roads, 0, NOW_MS)
        self.assertEqual(ranking[-1].index, 0)
        self.assertEqual(ranking[-1].score, -1)

    def test_single_active_road_is_reselected(self) -> None:
        self.assertEqual(select_next([_road("A")], 0, NOW_MS), 0)

    def test_ties_go_to_first_declared_road(self) -> None:
        roads = [_road("A", cars=3), _road("B", cars=10), _road("C", cars=10), _road("D", cars=10)]
        self.assertEqual(select_next(roads, None, NOW_MS), 1)
        self.assertEqual(select_next(roads, 1, NOW_MS), 2)
        self.assertEqual([c.road_id for c in rank_candidates(roads, None, NOW_MS)],
                         ["B", "C", "D", "A"])

    def test_deterministic_and_side_effect_free(self) -> None:
        roads = (_road("A", cars=12), _road("B", buses=4), _road("C", bikes=9))
        first = select_next(roads, 2, NOW_MS)
        for _ in range(10):
            self.assertEqual(select_next(roads, 2, NOW_MS), first)
        self.assertEqual(roads[2].density.total_weight, 9)

    def test_empty_road_set_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            select_next([], None, NOW_MS)


if __name__ == "__main__":
    unittest.main()
