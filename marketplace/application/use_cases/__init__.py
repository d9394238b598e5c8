"""Aggregate application use cases."""

from .notifications import broadcast_nearby
from .orders import (
    cancel_order,
    create_order,
    get_customer_orders,
    get_pending_orders_count,
    get_shop_orders,
    update_order_status,
)

__all__ = [
    "broadcast_nearby",
    "cancel_order",
    "create_order",
    "get_customer_orders",
    "get_pending_orders_count",
    "get_shop_orders",
    "update_order_status",
]
