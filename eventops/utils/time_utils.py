# eventops/utils/time_utils.py
"""
Time helpers shared by models, CRUD and background jobs.

Datetimes are stored timezone-aware (UTC). Some database backends (SQLite)
hand them back naive, so anything that compares datetimes normalizes with
`as_utc` first.
"""

import time
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
