"""Persistence helpers for advertisements."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from marketplace.domain.entities import Advertisement
from marketplace.infrastructure.models import AdvertisementModel
from marketplace.utils import ensure_utc, to_storage_datetime


class AdvertisementRepository:
    """Provide CRUD operations for :class:`Advertisement` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, advertisement_id: int) -> Advertisement | None:
        model = self.session.get(AdvertisementModel, advertisement_id)
        if model is None:
            return None
        self.session.refresh(model)
        return self._to_entity(model)

    def list_by_shop(self, shop_id: int, *, active_only: bool = False) -> Sequence[Advertisement]:
        query = self.session.query(AdvertisementModel).filter(
            AdvertisementModel.shop_id == shop_id
        )
        if active_only:
            query = query.filter(AdvertisementModel.is_active.is_(True))
        query = query.order_by(
            AdvertisementModel.created_at.desc(), AdvertisementModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, advertisement: Advertisement) -> Advertisement:
        model = AdvertisementModel()
        self._apply_entity_to_model(model, advertisement, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, advertisement: Advertisement) -> Advertisement:
        model = self.session.get(AdvertisementModel, advertisement.id)
        if model is None:
            msg = f"Advertisement with id {advertisement.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, advertisement, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def increment_notifications_sent(self, advertisement_id: int, amount: int) -> None:
        if amount <= 0:
            return
        self.session.query(AdvertisementModel).filter(
            AdvertisementModel.id == advertisement_id
        ).update(
            {
                AdvertisementModel.notifications_sent: AdvertisementModel.notifications_sent
                + amount
            },
            synchronize_session=False,
        )
        self.session.commit()

    def delete(self, advertisement_id: int, *, commit: bool = True) -> None:
        self.session.query(AdvertisementModel).filter(
            AdvertisementModel.id == advertisement_id
        ).delete(synchronize_session=False)
        if commit:
            self.session.commit()

    def delete_by_shop(self, shop_id: int, *, commit: bool = True) -> int:
        deleted = (
            self.session.query(AdvertisementModel)
            .filter(AdvertisementModel.shop_id == shop_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return deleted

    def list_ids_by_shop(self, shop_id: int) -> list[int]:
        rows = (
            self.session.query(AdvertisementModel.id)
            .filter(AdvertisementModel.shop_id == shop_id)
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def _to_entity(model: AdvertisementModel) -> Advertisement:
        return Advertisement(
            id=model.id,
            shop_id=model.shop_id,
            owner_id=model.owner_id,
            message=model.message,
            is_active=bool(model.is_active),
            notifications_sent=model.notifications_sent or 0,
            has_discount=bool(model.has_discount),
            discount_percentage=model.discount_percentage,
            discount_text=model.discount_text,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: AdvertisementModel,
        advertisement: Advertisement,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.shop_id = advertisement.shop_id
            model.owner_id = advertisement.owner_id
            model.created_at = to_storage_datetime(advertisement.created_at)
            model.notifications_sent = advertisement.notifications_sent
        model.message = advertisement.message
        model.is_active = advertisement.is_active
        model.has_discount = advertisement.has_discount
        model.discount_percentage = advertisement.discount_percentage
        model.discount_text = advertisement.discount_text
        model.updated_at = to_storage_datetime(advertisement.updated_at)


__all__ = ["AdvertisementRepository"]
