"""UTC helpers. Timestamps and due dates are compared as timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime to aware UTC; naive values are taken as UTC.

    Due dates arrive naive from some clients and drivers, so every due-date
    comparison goes through here.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
