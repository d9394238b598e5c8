"""Domain entities exposed by the application."""

from .advertisement import Advertisement
from .item import Item
from .notification import DispatchFailure, DispatchResult, Notification
from .order import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_PENDING,
    ORDER_STATUS_REJECTED,
    ORDER_TYPE_DELIVERY,
    ORDER_TYPE_PICKUP,
    ORDER_TYPES,
    Order,
    OrderItem,
)
from .shop import ESTIMATE_ACTIONS, ESTIMATE_CLOSING, ESTIMATE_OPENING, Shop, StatusEstimate
from .user import ROLE_CUSTOMER, ROLE_SHOPKEEPER, USER_ROLES, User, UserLocation

__all__ = [
    "Advertisement",
    "DispatchFailure",
    "DispatchResult",
    "ESTIMATE_ACTIONS",
    "ESTIMATE_CLOSING",
    "ESTIMATE_OPENING",
    "Item",
    "Notification",
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
    "ROLE_CUSTOMER",
    "ROLE_SHOPKEEPER",
    "Shop",
    "StatusEstimate",
    "USER_ROLES",
    "User",
    "UserLocation",
]
