"""Utilities for datetime handling."""

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """Convert datetime to ISO format string."""
    return dt.isoformat()


def from_iso(value: str | datetime | None) -> datetime | None:
    """Parse a stored timestamp.

    Accepts ISO strings (with 'Z' or explicit offset) and SQLite's
    CURRENT_TIMESTAMP format ("2024-01-02 03:04:05"), which is UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
