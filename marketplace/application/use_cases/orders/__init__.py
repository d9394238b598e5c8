"""Use cases for placing and progressing orders."""

from .create_order import OrderLine, create_order
from .queries import (
    get_customer_orders,
    get_order,
    get_owner_order_history,
    get_pending_orders_count,
    get_shop_order_history,
    get_shop_orders,
)
from .update_status import OrderTransitionResult, cancel_order, update_order_status

__all__ = [
    "OrderLine",
    "OrderTransitionResult",
    "cancel_order",
    "create_order",
    "get_customer_orders",
    "get_order",
    "get_owner_order_history",
    "get_pending_orders_count",
    "get_shop_order_history",
    "get_shop_orders",
    "update_order_status",
]
