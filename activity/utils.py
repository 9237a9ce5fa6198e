"""
Utility functions for the Activity Log:
    - ID generation
    - timestamps
"""

import uuid
from datetime import datetime, timezone


# ---------- ID Helpers ----------
def new_entry_id() -> str:
    """
    Generate a globally unique entry ID.

    Returns:
        str: UUID string for a new entry.
    """
    return str(uuid.uuid4())


# ---------- Timing ----------
def utc_now() -> datetime:
    """Current wall-clock time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
