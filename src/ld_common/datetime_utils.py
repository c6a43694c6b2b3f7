"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """ISO-8601 timestamp with millisecond precision, as stored in `createdAt`."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
