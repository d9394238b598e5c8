"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NotificationPublisher,
    dispatch_notification,
    notification_publisher,
    serialize_notification,
)
from .realtime import (
    RealtimeEventPublisher,
    build_event,
    dispatch_realtime_event,
    realtime_event_publisher,
)

__all__ = [
    "NotificationConnectionManager",
    "NotificationPublisher",
    "RealtimeEventPublisher",
    "build_event",
    "dispatch_notification",
    "dispatch_realtime_event",
    "notification_manager",
    "notification_publisher",
    "realtime_event_publisher",
    "serialize_notification",
]
