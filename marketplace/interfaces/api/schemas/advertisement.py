"""Schemas for advertisement endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AdvertisementCreate(BaseModel):
    message: str = Field(..., min_length=1)
    has_discount: bool = False
    discount_percentage: float | None = Field(default=None, ge=0, le=100)
    discount_text: str | None = Field(default=None, max_length=120)


class AdvertisementUpdate(BaseModel):
    message: str | None = None
    is_active: bool | None = None
    has_discount: bool | None = None
    discount_percentage: float | None = Field(default=None, ge=0, le=100)
    discount_text: str | None = Field(default=None, max_length=120)

    model_config = ConfigDict(extra="forbid")


class AdvertisementSendRequest(BaseModel):
    radius_km: float = Field(..., ge=0)


class AdvertisementRead(BaseModel):
    id: int
    shop_id: int
    owner_id: int
    message: str
    is_active: bool
    notifications_sent: int
    has_discount: bool
    discount_percentage: float | None = None
    discount_text: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AdvertisementDeleteResult(BaseModel):
    deleted_notifications: int


__all__ = [
    "AdvertisementCreate",
    "AdvertisementDeleteResult",
    "AdvertisementRead",
    "AdvertisementSendRequest",
    "AdvertisementUpdate",
]
