from __future__ import annotations

from datetime import datetime, timezone


def ensure_utc(value: datetime) -> datetime:
    """Attaches UTC to naive datetimes read back from drivers without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def elapsed_ms(*, start: datetime, end: datetime) -> int:
    delta = ensure_utc(end) - ensure_utc(start)
    return max(0, int(delta.total_seconds() * 1000))
