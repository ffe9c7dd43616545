"""UTC datetime helpers.

Every timestamp taskdesk stores or returns is timezone-aware UTC: task
lifecycle stamps come from utc_now(), and values read back from the store pass
through ensure_utc() at the repository boundary.
"""

from datetime import UTC, datetime

_SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as aware UTC; naive values are taken to already be UTC.

    Args:
        dt: Datetime read from the store (drivers may return naive values), or None.

    Returns:
        UTC-aware datetime, or None when dt is None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def days_between(start: datetime, end: datetime) -> float:
    """Return the elapsed time from start to end in fractional days."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / _SECONDS_PER_DAY
