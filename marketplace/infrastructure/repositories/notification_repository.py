"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from marketplace.domain.entities import Notification
from marketplace.infrastructure.models import NotificationModel
from marketplace.utils import ensure_utc, to_storage_datetime, utc_now


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id
        )
        if unread_only:
            query = query.filter(NotificationModel.read_at.is_(None))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create_many(self, notifications: Iterable[Notification]) -> list[Notification]:
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            self.session.add(model)
            models.append(model)
        if not models:
            return []
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def mark_as_read(self, notification_ids: Iterable[int], *, recipient_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.read_at.is_(None),
            )
            .update(
                {NotificationModel.read_at: to_storage_datetime(utc_now())},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def recipients_for_advertisement(self, advertisement_id: int) -> set[int]:
        rows = (
            self.session.query(NotificationModel.recipient_id)
            .filter(NotificationModel.advertisement_id == advertisement_id)
            .all()
        )
        return {row[0] for row in rows}

    def delete_by_advertisement(self, advertisement_id: int, *, commit: bool = True) -> int:
        return self._delete(NotificationModel.advertisement_id == advertisement_id, commit)

    def delete_by_shop(self, shop_id: int, *, commit: bool = True) -> int:
        return self._delete(NotificationModel.shop_id == shop_id, commit)

    def delete_by_recipient(self, recipient_id: int, *, commit: bool = True) -> int:
        return self._delete(NotificationModel.recipient_id == recipient_id, commit)

    def _delete(self, criterion, commit: bool) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(criterion)
            .delete(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return deleted

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = to_storage_datetime(notification.created_at or utc_now())
        model.recipient_id = notification.recipient_id
        model.shop_id = notification.shop_id
        model.advertisement_id = notification.advertisement_id
        model.event_type = notification.event_type
        model.title = notification.title
        model.body = notification.body
        model.data = notification.data or {}
        model.read_at = to_storage_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            shop_id=model.shop_id,
            advertisement_id=model.advertisement_id,
            event_type=model.event_type,
            title=model.title,
            body=model.body,
            data=model.data or {},
            created_at=ensure_utc(model.created_at),
            read_at=ensure_utc(model.read_at),
        )


__all__ = ["NotificationRepository"]
