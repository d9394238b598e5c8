"""Schemas shared by several endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LocationPayload(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str | None = Field(default=None, max_length=255)


class LocationRead(BaseModel):
    lat: float
    lng: float
    address: str | None = None

    model_config = ConfigDict(from_attributes=True)


class DispatchFailureRead(BaseModel):
    reason: str
    recipient_id: int | None = None
    details: Any = None

    model_config = ConfigDict(from_attributes=True)


class DispatchResultRead(BaseModel):
    """Partial-failure report of a notification fan-out."""

    dispatched: int
    recorded: int
    skipped: int
    failures: list[DispatchFailureRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


__all__ = ["DispatchFailureRead", "DispatchResultRead", "LocationPayload", "LocationRead"]
