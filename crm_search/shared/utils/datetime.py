"""UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def start_of_utc_day(now: datetime | None = None) -> datetime:
    """Return midnight UTC of the given (or current) day.

    Used for "today" counters on the realtime dashboard tier.
    """
    current = now or utc_now()
    return current.astimezone(UTC).replace(hour=0, minute=0, second=0, microsecond=0)
