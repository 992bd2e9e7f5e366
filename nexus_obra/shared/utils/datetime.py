"""UTC datetime helpers. All timestamps in the system are timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def to_unix_seconds(dt: datetime) -> int:
    """Return whole seconds since the epoch for dt (naive values are treated as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
