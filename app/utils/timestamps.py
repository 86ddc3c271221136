"""Timestamp formatting shared by records and responses."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso_z(moment: datetime) -> str:
    """Format as UTC ISO-8601 with milliseconds and a ``Z`` suffix.

    Naive datetimes are taken to be local time.

    Example:
        >>> to_iso_z(datetime(2025, 3, 1, 10, 15, 30, 123456, tzinfo=timezone.utc))
        '2025-03-01T10:15:30.123Z'
    """
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
