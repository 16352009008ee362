"""UTC timestamp helpers shared by the job store schema."""

from datetime import datetime, timezone
from typing import Optional

# Storage format: ISO 8601, microseconds, explicit 'Z'
STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """Render a datetime in the storage format.

    Example:
        >>> format_timestamp(datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc))
        '2025-11-04T12:00:00.000000Z'
    """
    dt = ensure_utc(dt)
    return dt.strftime(STORAGE_FORMAT) if dt else None
