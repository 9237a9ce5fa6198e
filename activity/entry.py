"""
LogEntry: Data structure representing one Activity Log record.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Severity(str, Enum):
    """How loudly an entry should be surfaced to the operator."""

    INFO = "INFO"
    ALERT = "ALERT"
    EMERGENCY = "EMERGENCY"


@dataclass(frozen=True)
class LogEntry:
    """
    Represents a single Activity Log record.

    Attributes:
        id (str): Unique identifier for the entry.
        timestamp (datetime): UTC time at which the entry was recorded.
        message (str): Human-readable description (e.g. 'AI Mode: Route B Open').
        severity (Severity): INFO, ALERT or EMERGENCY.
    """
    id: str
    timestamp: datetime
    message: str
    severity: Severity = Severity.INFO

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
            "severity": self.severity.value,
        }
