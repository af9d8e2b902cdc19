from __future__ import annotations
from datetime import datetime, UTC

def now() -> datetime:
    return datetime.now(UTC)

def parse_timestamp(value) -> datetime | None:
    """
    ISO 8601 string, datetime, or epoch milliseconds -> aware UTC datetime.
    Returns None when the value cannot be read as a timestamp.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    # Sans offset = UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)

def to_iso(dt: datetime) -> str:
    """`2026-01-01T10:00:00.000Z`"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
