"""
Timestamp and duration formatting for timeline labels.
"""

from datetime import datetime, timedelta, timezone

from regatta_replay.core.constants import (
    MILLISECONDS_PER_SECOND, SECONDS_PER_MINUTE, MINUTES_PER_HOUR
)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_datetime(t: float) -> datetime:
    return _EPOCH + timedelta(milliseconds=t)


def format_timestamp_utc(t: float) -> str:
    """Format epoch milliseconds as ISO 8601 UTC, e.g. 2024-01-15T10:00:00.000Z."""
    return _to_datetime(t).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def format_time(t: float) -> str:
    """Format epoch milliseconds as HH:MM:SS (UTC)."""
    return _to_datetime(t).strftime('%H:%M:%S')


def format_duration(ms: float) -> str:
    """
    Format a duration in milliseconds as a short human-readable string.

    Examples: '1h 2m 3s', '2m 3s', '3s'
    """
    seconds = int(ms // MILLISECONDS_PER_SECOND)
    minutes = seconds // SECONDS_PER_MINUTE
    hours = minutes // MINUTES_PER_HOUR

    if hours > 0:
        return f"{hours}h {minutes % MINUTES_PER_HOUR}m {seconds % SECONDS_PER_MINUTE}s"
    if minutes > 0:
        return f"{minutes}m {seconds % SECONDS_PER_MINUTE}s"
    return f"{seconds}s"
