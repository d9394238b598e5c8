"""Endpoints and websocket handler for in-app notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from marketplace.application.use_cases.notifications import (
    list_notifications as list_notifications_uc,
    mark_notifications_read,
)
from marketplace.domain.entities import User
from marketplace.domain.errors import MarketplaceError
from marketplace.infrastructure.database import SessionLocal, get_db
from marketplace.infrastructure.notifications import notification_manager, serialize_notification
from marketplace.infrastructure.repositories import NotificationRepository
from marketplace.interfaces.api.dependencies import get_current_user, resolve_current_user
from marketplace.interfaces.api.routes_helpers import to_http_exception
from marketplace.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationMarkReadResult,
    NotificationRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the current user."""

    try:
        notifications = list_notifications_uc(
            db, recipient_id=current_user.id, unread_only=unread_only, limit=limit
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.post("/read", response_model=NotificationMarkReadResult)
def mark_as_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationMarkReadResult:
    updated = mark_notifications_read(
        db, recipient_id=current_user.id, notification_ids=payload.unique_ids()
    )
    return NotificationMarkReadResult(updated=updated)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream notifications and order updates to the connected user.

    Unread notifications are sent first as an ``init`` message. Clients may
    send ``{"type": "ping"}`` and ``{"type": "ack", "ids": [...]}``.
    """

    session = SessionLocal()
    try:
        user = resolve_current_user(websocket.query_params.get("user_id"), session)
        pending = NotificationRepository(session).list_for_recipient(user.id, unread_only=True)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        if pending:
            await websocket.send_json(
                {"type": "init", "data": [serialize_notification(item) for item in pending]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue
            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        NotificationRepository(ack_session).mark_as_read(
                            [int(value) for value in ids if isinstance(value, int)],
                            recipient_id=user.id,
                        )
                    finally:
                        ack_session.close()
    except WebSocketDisconnect:
        logger.debug("Realtime subscriber %s disconnected", user.id)
    finally:
        notification_manager.disconnect(user.id, websocket)


__all__ = ["router"]
