"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

from typing import Any

from marketplace.domain.entities import Notification

from ._scheduling import schedule_send
from .manager import NotificationConnectionManager, notification_manager


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its recipient."""

        message = {"type": "notification", "data": serialize_notification(notification)}
        schedule_send(self._manager, notification.recipient_id, message)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "event_type": notification.event_type,
        "title": notification.title,
        "body": notification.body,
        "data": notification.data or {},
        "shop_id": notification.shop_id,
        "advertisement_id": notification.advertisement_id,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "read_at": notification.read_at.isoformat() if notification.read_at else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "dispatch_notification",
    "notification_publisher",
    "serialize_notification",
]
