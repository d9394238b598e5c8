"""Persistence layer for shops."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from marketplace.domain.entities import Shop, StatusEstimate
from marketplace.domain.geo import GeoPoint
from marketplace.infrastructure.models import ShopModel
from marketplace.utils import ensure_utc, to_storage_datetime


class ShopRepository:
    """Provide CRUD operations for :class:`Shop` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, shop_id: int) -> Shop | None:
        model = self.session.get(ShopModel, shop_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, shop_ids: Sequence[int]) -> dict[int, Shop]:
        if not shop_ids:
            return {}
        query = self.session.query(ShopModel).filter(ShopModel.id.in_(set(shop_ids)))
        return {model.id: self._to_entity(model) for model in query.all()}

    def list_by_owner(self, owner_id: int) -> Sequence[Shop]:
        query = (
            self.session.query(ShopModel)
            .filter(ShopModel.owner_id == owner_id)
            .order_by(ShopModel.created_at.asc(), ShopModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def search(
        self,
        *,
        category: str | None = None,
        is_open: bool | None = None,
        term: str | None = None,
    ) -> Sequence[Shop]:
        query = self.session.query(ShopModel)
        if category:
            query = query.filter(ShopModel.category == category)
        if is_open is not None:
            query = query.filter(ShopModel.is_open.is_(is_open))
        if term and term.strip():
            pattern = f"%{term.strip()}%"
            query = query.filter(
                or_(
                    ShopModel.name.ilike(pattern),
                    ShopModel.category.ilike(pattern),
                    ShopModel.location_address.ilike(pattern),
                )
            )
        return [self._to_entity(model) for model in query.order_by(ShopModel.id).all()]

    def list_with_estimate(self) -> Sequence[Shop]:
        query = self.session.query(ShopModel).filter(ShopModel.estimate_minutes.is_not(None))
        return [self._to_entity(model) for model in query.all()]

    def create(self, shop: Shop) -> Shop:
        model = ShopModel()
        self._apply_entity_to_model(model, shop, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, shop: Shop, *, commit: bool = True) -> Shop:
        model = self.session.get(ShopModel, shop.id)
        if model is None:
            msg = f"Shop with id {shop.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, shop, include_creation_fields=False)
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, shop_id: int, *, commit: bool = True) -> None:
        self.session.query(ShopModel).filter(ShopModel.id == shop_id).delete(
            synchronize_session=False
        )
        if commit:
            self.session.commit()

    @staticmethod
    def _to_entity(model: ShopModel) -> Shop:
        location = None
        if model.location_lat is not None and model.location_lng is not None:
            location = GeoPoint(
                lat=model.location_lat,
                lng=model.location_lng,
                address=model.location_address,
            )
        estimate = None
        if model.estimate_minutes is not None and model.estimate_action:
            estimate = StatusEstimate(
                minutes=model.estimate_minutes, action=model.estimate_action
            )
        return Shop(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            category=model.category,
            location=location,
            is_open=bool(model.is_open),
            estimate=estimate,
            delivery_enabled=bool(model.delivery_enabled),
            delivery_range_km=model.delivery_range_km,
            mobile_number=model.mobile_number,
            last_updated=ensure_utc(model.last_updated),
            created_at=ensure_utc(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: ShopModel, shop: Shop, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.created_at = to_storage_datetime(shop.created_at)
            model.owner_id = shop.owner_id
        model.name = shop.name
        model.category = shop.category
        if shop.location is None:
            model.location_lat = None
            model.location_lng = None
            model.location_address = None
        else:
            model.location_lat = shop.location.lat
            model.location_lng = shop.location.lng
            model.location_address = shop.location.address
        model.mobile_number = shop.mobile_number
        model.is_open = shop.is_open
        model.estimate_minutes = shop.estimate.minutes if shop.estimate else None
        model.estimate_action = shop.estimate.action if shop.estimate else None
        model.delivery_enabled = shop.delivery_enabled
        model.delivery_range_km = shop.delivery_range_km
        model.last_updated = to_storage_datetime(shop.last_updated)


__all__ = ["ShopRepository"]
