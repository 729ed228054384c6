from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc_iso(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as ISO 8601 in UTC.

    Naive datetimes are assumed to already be UTC. Returns None for None.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
