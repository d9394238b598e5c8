"""Domain entity representing a customer order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from marketplace.domain.geo import GeoPoint

ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_CONFIRMED = "confirmed"
ORDER_STATUS_COMPLETED = "completed"
ORDER_STATUS_REJECTED = "rejected"
ORDER_STATUS_CANCELLED = "cancelled"

ORDER_TYPE_DELIVERY = "delivery"
ORDER_TYPE_PICKUP = "pickup"
ORDER_TYPES = (ORDER_TYPE_DELIVERY, ORDER_TYPE_PICKUP)


@dataclass
class OrderItem:
    """Line item with the name and unit price captured when the order was placed."""

    item_id: int
    name: str
    quantity: int
    unit_price: float
    price_description: str | None = None

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass
class Order:
    """Ledger entry linking one customer with one shop."""

    id: int | None
    shop_id: int
    customer_id: int
    customer_name: str
    status: str
    total_amount: float
    items: list[OrderItem] = field(default_factory=list)
    order_type: str = ORDER_TYPE_DELIVERY
    customer_contact: str | None = None
    delivery_location: GeoPoint | None = None
    estimate_minutes: int | None = None
    rejection_reason: str | None = None
    customer_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "ORDER_STATUS_CANCELLED",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_CONFIRMED",
    "ORDER_STATUS_PENDING",
    "ORDER_STATUS_REJECTED",
    "ORDER_TYPES",
    "ORDER_TYPE_DELIVERY",
    "ORDER_TYPE_PICKUP",
    "Order",
    "OrderItem",
]
