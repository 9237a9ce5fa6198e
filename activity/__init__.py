"""
activity - Bounded in-memory audit trail
=========================================

Records arbitration decisions and authority changes made by the signal
controller.  The log is append-only for the controller and read-only for
every other consumer.

Modules
-------
entry
    :class:`LogEntry` dataclass and :class:`Severity` enum.
log
    :class:`ActivityLog` prepend-only ring buffer.
metrics
    :class:`LogMetrics` counter snapshot.
utils
    ID generation and timestamp helpers.
"""

from .entry   import LogEntry, Severity
from .log     import ActivityLog
from .metrics import LogMetrics
from .utils   import new_entry_id, utc_now

__all__ = [
    "LogEntry",
    "Severity",
    "ActivityLog",
    "LogMetrics",
    "new_entry_id",
    "utc_now",
]
