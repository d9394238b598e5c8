"""Schemas for shop endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import LocationRead


class ShopCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    category: str = Field(..., min_length=1, max_length=60)
    lat: float
    lng: float
    address: str | None = Field(default=None, max_length=255)
    mobile_number: str | None = Field(default=None, max_length=40)
    is_open: bool = False
    delivery_enabled: bool = False
    delivery_range_km: float | None = None


class ShopUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    category: str | None = Field(default=None, max_length=60)
    lat: float | None = None
    lng: float | None = None
    address: str | None = Field(default=None, max_length=255)
    mobile_number: str | None = Field(default=None, max_length=40)
    delivery_enabled: bool | None = None
    delivery_range_km: float | None = None

    model_config = ConfigDict(extra="forbid")


class ShopStatusUpdate(BaseModel):
    is_open: bool
    estimate_minutes: int | None = None
    estimate_action: str | None = None


class StatusEstimateRead(BaseModel):
    minutes: int
    action: str

    model_config = ConfigDict(from_attributes=True)


class ShopRead(BaseModel):
    id: int
    owner_id: int
    name: str
    category: str
    location: LocationRead | None = None
    is_open: bool
    estimate: StatusEstimateRead | None = None
    delivery_enabled: bool
    delivery_range_km: float | None = None
    mobile_number: str | None = None
    last_updated: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DeliveryEligibilityRead(BaseModel):
    """Eligibility answer; ``distance_km`` is rounded to two decimals."""

    delivery_available: bool
    in_range: bool
    distance_km: float | None = None


class BroadcastRequest(BaseModel):
    radius_km: float = Field(..., ge=0)
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1)
    data: dict = Field(default_factory=dict)


class PendingCountRead(BaseModel):
    shop_id: int
    pending: int


__all__ = [
    "BroadcastRequest",
    "DeliveryEligibilityRead",
    "PendingCountRead",
    "ShopCreate",
    "ShopRead",
    "ShopStatusUpdate",
    "ShopUpdate",
    "StatusEstimateRead",
]
