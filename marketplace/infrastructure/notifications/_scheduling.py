"""Schedule websocket sends from both async and worker-thread callers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)

# Strong references to pending sends; the loop only keeps weak ones.
_pending_sends: set[asyncio.Task[None]] = set()


def schedule_send(
    manager: NotificationConnectionManager, user_id: int, message: dict[str, Any]
) -> None:
    """Hand ``message`` to the event loop serving ``user_id``'s websockets.

    Users without an open connection are skipped. Outside of an event loop or
    an AnyIO worker thread there is nobody to deliver to, so the message is
    dropped.
    """

    if not manager.is_connected(user_id):
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        try:
            from_thread.run(manager.send_to_user, user_id, message)
        except RuntimeError:
            logger.debug("No event loop available; realtime message for %s dropped", user_id)
    else:
        task = loop.create_task(manager.send_to_user(user_id, message))
        _pending_sends.add(task)
        task.add_done_callback(_pending_sends.discard)


__all__ = ["schedule_send"]
