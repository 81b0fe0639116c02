"""Fragment timestamps: ISO-8601 strings in UTC with millisecond precision.

Timestamps are stored and compared as strings (e.g. 2025-01-01T12:00:00.000Z).
The fixed width and Z suffix make lexical order equal chronological order.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def to_iso_utc(dt: datetime) -> str:
    """Format dt as a fragment timestamp. Naive values are taken to be UTC."""
    dt = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso_utc(utc_now())
