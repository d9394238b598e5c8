"""Schemas for inventory endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    price: float | None = Field(default=None, ge=0)
    price_description: str | None = Field(default=None, max_length=120)
    description: str | None = None
    category: str | None = Field(default=None, max_length=60)
    in_stock: bool = True


class ItemUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    price: float | None = Field(default=None, ge=0)
    price_description: str | None = Field(default=None, max_length=120)
    description: str | None = None
    category: str | None = Field(default=None, max_length=60)
    in_stock: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ItemRead(BaseModel):
    id: int
    shop_id: int
    name: str
    price: float | None = None
    price_description: str | None = None
    description: str | None = None
    category: str | None = None
    in_stock: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ItemCreate", "ItemRead", "ItemUpdate"]
