"""Fan structured events such as ``order.updated`` out to websocket subscribers."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from marketplace.utils import utc_now

from ._scheduling import schedule_send
from .manager import NotificationConnectionManager, notification_manager


def build_event(event_type: str, payload: Any) -> dict[str, Any]:
    """Return the websocket envelope for ``event_type``.

    The payload is copied so later mutation by the caller cannot leak into
    messages that are still queued.
    """

    return {
        "type": event_type,
        "data": copy.deepcopy(payload),
        "sent_at": utc_now().isoformat(),
    }


class RealtimeEventPublisher:
    """Send one event to each distinct user of a recipient list."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def publish(self, user_ids: Iterable[int | None], *, event_type: str, payload: Any) -> int:
        """Schedule the event for every connected recipient and return how many."""

        recipients = [user_id for user_id in dict.fromkeys(user_ids) if user_id]
        if not recipients:
            return 0
        message = build_event(event_type, payload)
        scheduled = 0
        for user_id in recipients:
            if self._manager.is_connected(user_id):
                schedule_send(self._manager, user_id, message)
                scheduled += 1
        return scheduled


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


def dispatch_realtime_event(
    user_ids: Iterable[int | None], *, event_type: str, payload: Any
) -> int:
    return realtime_event_publisher.publish(user_ids, event_type=event_type, payload=payload)


__all__ = [
    "RealtimeEventPublisher",
    "build_event",
    "dispatch_realtime_event",
    "realtime_event_publisher",
]
