"""
Utility helpers
"""

from typing import Optional
from datetime import datetime, timezone


def to_utc_naive(timestamp: datetime) -> datetime:
    """Normalize a timestamp to naive UTC (aware values are converted first)"""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    return timestamp


def utc_now() -> datetime:
    """Current time as naive UTC, matching what SQLite hands back"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_timestamp_with_timezone(timestamp: Optional[datetime]) -> Optional[str]:
    """Format a timestamp as ISO-8601 with a trailing 'Z' (UTC)"""
    if not timestamp:
        return None
    # Stored values are UTC; make that explicit for the frontend
    return to_utc_naive(timestamp).isoformat() + 'Z'
