"""Utility helpers for reusable functionality."""

from .datetime import ensure_utc, minutes_between, to_storage_datetime, utc_now

__all__ = ["ensure_utc", "minutes_between", "to_storage_datetime", "utc_now"]
