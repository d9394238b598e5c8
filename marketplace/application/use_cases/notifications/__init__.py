"""Targeting, fan-out and inbox helpers for notifications."""

from .broadcast import EVENT_BROADCAST, broadcast_nearby
from .dispatcher import NotificationDispatcher
from .events import (
    EVENT_ORDER_STATUS,
    EVENT_ORDER_UPDATED,
    notify_order_status_changed,
    publish_order_event,
)
from .inbox import list_notifications, mark_notifications_read
from .targeting import NearbyUser, find_nearby_users, find_push_recipients

__all__ = [
    "EVENT_BROADCAST",
    "EVENT_ORDER_STATUS",
    "EVENT_ORDER_UPDATED",
    "NearbyUser",
    "NotificationDispatcher",
    "broadcast_nearby",
    "find_nearby_users",
    "find_push_recipients",
    "list_notifications",
    "mark_notifications_read",
    "notify_order_status_changed",
    "publish_order_event",
]
