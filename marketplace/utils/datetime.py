"""Helpers for working with UTC timestamps.

Domain entities carry timezone-aware UTC datetimes. The database columns are
plain ``DateTime`` columns, so values are stored as naive UTC and re-attached
to UTC when they are read back.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` expressed in UTC, treating naive values as UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` as a naive UTC datetime suitable for the database."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def minutes_between(start: datetime, end: datetime) -> float:
    """Return the number of minutes elapsed from ``start`` to ``end``."""

    delta: timedelta = ensure_utc(end) - ensure_utc(start)
    return delta.total_seconds() / 60.0


__all__ = ["ensure_utc", "minutes_between", "to_storage_datetime", "utc_now"]
