"""Registry of open websocket connections keyed by marketplace user."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Keep every open socket of a user so each device receives the same events.

    A user may be connected from several devices at once (a shopkeeper's
    phone and tablet, for instance).
    """

    def __init__(self) -> None:
        self._sockets: dict[int, list[WebSocket]] = {}

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets.setdefault(user_id, []).append(websocket)
        logger.debug(
            "User %s connected (%s open sockets)", user_id, self.connection_count(user_id)
        )

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id)
        if not sockets:
            return
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            del self._sockets[user_id]
        logger.debug(
            "User %s disconnected (%s open sockets)", user_id, self.connection_count(user_id)
        )

    def is_connected(self, user_id: int) -> bool:
        return bool(self._sockets.get(user_id))

    def connection_count(self, user_id: int) -> int:
        return len(self._sockets.get(user_id, ()))

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        """Deliver ``message`` to each socket of ``user_id``, dropping dead ones."""

        for websocket in list(self._sockets.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception:  # pragma: no cover - closed sockets are dropped
                logger.debug("Dropping closed websocket of user %s", user_id)
                self.disconnect(user_id, websocket)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
