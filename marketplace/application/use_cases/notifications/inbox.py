"""Read access to a user's in-app notifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from marketplace.domain.entities import Notification
from marketplace.domain.errors import ValidationError
from marketplace.infrastructure.repositories import NotificationRepository

MAX_LIMIT = 200


def list_notifications(
    session: Session,
    *,
    recipient_id: int,
    unread_only: bool = False,
    limit: int = 50,
) -> Sequence[Notification]:
    """Return the newest notifications for ``recipient_id``."""

    if limit < 1 or limit > MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")
    repository = NotificationRepository(session)
    return repository.list_for_recipient(recipient_id, unread_only=unread_only, limit=limit)


def mark_notifications_read(
    session: Session, *, recipient_id: int, notification_ids: Iterable[int]
) -> int:
    """Mark the given notifications as read; ids owned by others are ignored."""

    repository = NotificationRepository(session)
    return repository.mark_as_read(notification_ids, recipient_id=recipient_id)


__all__ = ["MAX_LIMIT", "list_notifications", "mark_notifications_read"]
