"""Schemas for user endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from marketplace.domain.entities import ROLE_CUSTOMER


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=255)
    phone: str | None = Field(default=None, max_length=40)
    roles: list[str] = Field(default_factory=lambda: [ROLE_CUSTOMER], min_length=1)
    active_role: str | None = None


class UserLocationUpdate(BaseModel):
    lat: float
    lng: float
    address: str | None = Field(default=None, max_length=255)
    last_updated: datetime | None = None


class PushSubscriptionUpdate(BaseModel):
    subscriber_id: str | None = Field(default=None, max_length=255)
    push_enabled: bool


class RoleRequest(BaseModel):
    role: str


class UserLocationRead(BaseModel):
    lat: float
    lng: float
    address: str | None = None
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    roles: list[str]
    active_role: str
    location: UserLocationRead | None = None
    subscriber_id: str | None = None
    push_enabled: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "PushSubscriptionUpdate",
    "RoleRequest",
    "UserCreate",
    "UserLocationRead",
    "UserLocationUpdate",
    "UserRead",
]
