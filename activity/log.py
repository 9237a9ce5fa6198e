"""
ActivityLog: Bounded, newest-first audit trail for the signal controller.

Supports:
    - Prepend-only recording (entries are never mutated)
    - Fixed capacity with oldest-first eviction
    - Per-severity counters
    - Mirroring of every entry to the diagnostic logger

Intended usage:
    - The controller records arbitration and authority events
    - Dashboards and the HTTP API read :meth:`ActivityLog.entries`
"""

import logging
import threading
from collections import deque
from typing import Callable, Deque, List, Optional

from .entry import LogEntry, Severity
from .metrics import LogMetrics
from .utils import new_entry_id, utc_now

log = logging.getLogger(__name__)

_LEVEL_FOR_SEVERITY = {
    Severity.INFO: logging.INFO,
    Severity.ALERT: logging.WARNING,
    Severity.EMERGENCY: logging.WARNING,
}


class ActivityLog:
    """
    Ring buffer of :class:`LogEntry` records, newest first.

    Attributes:
        capacity (int): Maximum number of entries retained.
        metrics (LogMetrics): Running counters.
    """

    def __init__(self, capacity: int = 30, clock: Optional[Callable] = None):
        """
        Initialize an ActivityLog instance.

        Args:
            capacity (int): Number of entries kept; older ones are evicted.
            clock (callable): Returns the timestamp for new entries. Defaults to :func:`utc_now`.
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.metrics = LogMetrics()
        self._clock = clock or utc_now
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def record(self, message: str, severity: Severity = Severity.INFO) -> LogEntry:
        """
        Prepend a new entry.

        Args:
            message (str): Human-readable event description.
            severity (Severity): Entry severity.

        Returns:
            LogEntry: The stored entry.
        """
        entry = LogEntry(
            id=new_entry_id(),
            timestamp=self._clock(),
            message=message,
            severity=Severity(severity),
        )
        with self._lock:
            if len(self._entries) == self.capacity:
                self.metrics.evicted += 1
            self._entries.appendleft(entry)
            self.metrics.recorded += 1
            if entry.severity == Severity.ALERT:
                self.metrics.alerts += 1
            elif entry.severity == Severity.EMERGENCY:
                self.metrics.emergencies += 1

        log.log(
            _LEVEL_FOR_SEVERITY[entry.severity],
            "activity severity=%s message=%s", entry.severity.value, message,
        )
        return entry

    def entries(self) -> List[LogEntry]:
        """
        Return the retained entries, newest first.

        Returns:
            List[LogEntry]: A copy; callers cannot alter the log through it.
        """
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
