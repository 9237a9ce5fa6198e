"""
LogMetrics: Tracks simple statistics for Activity Log traffic.
"""


class LogMetrics:
    """
    Tracks how many entries were recorded per severity and how many fell
    off the end of the ring buffer.

    Attributes:
        recorded (int): Total number of entries ever recorded.
        evicted (int): Number of entries dropped to honour the capacity.
        alerts (int): Number of ALERT entries recorded.
        emergencies (int): Number of EMERGENCY entries recorded.
    """

    def __init__(self):
        """Initialize all counters to zero."""
        self.recorded = 0
        self.evicted = 0
        self.alerts = 0
        self.emergencies = 0

    def report(self) -> dict:
        """
        Return a snapshot of current metrics.

        Returns:
            dict: Dictionary containing 'recorded', 'evicted', 'alerts' and 'emergencies' counters.
        """
        return {
            "recorded": self.recorded,
            "evicted": self.evicted,
            "alerts": self.alerts,
            "emergencies": self.emergencies,
        }
