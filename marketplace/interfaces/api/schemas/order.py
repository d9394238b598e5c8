"""Schemas for order endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from marketplace.domain.entities import ORDER_TYPE_DELIVERY

from .common import DispatchResultRead, LocationPayload, LocationRead


class OrderLinePayload(BaseModel):
    item_id: int
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    shop_id: int
    items: list[OrderLinePayload] = Field(..., min_length=1)
    order_type: str = ORDER_TYPE_DELIVERY
    delivery_location: LocationPayload | None = None
    customer_notes: str | None = Field(default=None, max_length=1000)


class OrderStatusUpdate(BaseModel):
    status: str
    estimate_minutes: int | None = None
    rejection_reason: str | None = Field(default=None, max_length=500)


class OrderItemRead(BaseModel):
    item_id: int
    name: str
    quantity: int
    unit_price: float
    price_description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    id: int
    shop_id: int
    customer_id: int
    customer_name: str
    customer_contact: str | None = None
    status: str
    total_amount: float
    items: list[OrderItemRead]
    order_type: str
    delivery_location: LocationRead | None = None
    estimate_minutes: int | None = None
    rejection_reason: str | None = None
    customer_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderTransitionRead(BaseModel):
    order: OrderRead
    notification: DispatchResultRead | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "OrderCreate",
    "OrderItemRead",
    "OrderLinePayload",
    "OrderRead",
    "OrderStatusUpdate",
    "OrderTransitionRead",
]
