#!/usr/bin/env python3
"""
control/analytics.py
====================
Bounded window of recent density samples for the dashboard's load chart.

Only the newest ``window`` samples are kept; nothing is persisted.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Deque, Dict, List

import numpy as np


@dataclass(frozen=True)
class DensitySample:
    timestamp: datetime
    road_id: str
    total_weight: int

    def as_dict(self) -> dict:
        return {
            "time": self.timestamp.strftime("%H:%M:%S"),
            "road_id": self.road_id,
            "weight": self.total_weight,
        }


class DensityHistory:
    """Newest-last window of classification weights."""

    def __init__(self, window: int = 20) -> None:
        if window < 1:
            raise ValueError("window must be at least 1")
        self._samples: Deque[DensitySample] = deque(maxlen=window)
        self._lock = threading.Lock()

    def add(self, sample: DensitySample) -> None:
        with self._lock:
            self._samples.append(sample)

    def samples(self) -> List[DensitySample]:
        with self._lock:
            return list(self._samples)

    def summary(self) -> Dict[str, float]:
        """Mean and peak weight over the window (zeros when empty)."""
        weights = np.array([s.total_weight for s in self.samples()], dtype=float)
        if weights.size == 0:
            return {"count": 0, "mean_weight": 0.0, "peak_weight": 0.0}
        return {
            "count": int(weights.size),
            "mean_weight": float(np.mean(weights)),
            "peak_weight": float(np.max(weights)),
        }
