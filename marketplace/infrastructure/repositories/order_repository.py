"""Persistence helpers for orders."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from marketplace.domain.entities import Order, OrderItem
from marketplace.domain.geo import GeoPoint
from marketplace.infrastructure.models import OrderModel
from marketplace.utils import ensure_utc, to_storage_datetime


class OrderRepository:
    """Provide CRUD operations for :class:`Order` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, order_id: int) -> Order | None:
        model = self.session.get(OrderModel, order_id)
        if model is None:
            return None
        # Conditional updates bypass the identity map.
        self.session.refresh(model)
        return self._to_entity(model)

    def create(self, order: Order) -> Order:
        model = OrderModel()
        self._apply_entity_to_model(model, order)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_by_shop(
        self,
        shop_id: int,
        *,
        statuses: Iterable[str] | None = None,
        exclude_statuses: Iterable[str] | None = None,
    ) -> Sequence[Order]:
        return self.list_by_shops(
            [shop_id], statuses=statuses, exclude_statuses=exclude_statuses
        )

    def list_by_shops(
        self,
        shop_ids: Sequence[int],
        *,
        statuses: Iterable[str] | None = None,
        exclude_statuses: Iterable[str] | None = None,
    ) -> Sequence[Order]:
        if not shop_ids:
            return []
        query = self.session.query(OrderModel).filter(
            OrderModel.shop_id.in_(set(shop_ids))
        )
        query = self._filter_statuses(query, statuses, exclude_statuses)
        query = query.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def list_by_customer(
        self,
        customer_id: int,
        *,
        statuses: Iterable[str] | None = None,
        exclude_statuses: Iterable[str] | None = None,
    ) -> Sequence[Order]:
        query = self.session.query(OrderModel).filter(
            OrderModel.customer_id == customer_id
        )
        query = self._filter_statuses(query, statuses, exclude_statuses)
        query = query.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def count_by_shop_status(self, shop_id: int, status: str) -> int:
        return (
            self.session.query(func.count(OrderModel.id))
            .filter(OrderModel.shop_id == shop_id)
            .filter(OrderModel.status == status)
            .scalar()
            or 0
        )

    def exists_for_shop(self, shop_id: int) -> bool:
        return (
            self.session.query(OrderModel.id)
            .filter(OrderModel.shop_id == shop_id)
            .first()
            is not None
        )

    def apply_transition(
        self,
        order_id: int,
        *,
        expected_status: str,
        new_status: str,
        updated_at: datetime,
        estimate_minutes: int | None = None,
        rejection_reason: str | None = None,
    ) -> bool:
        """Move ``order_id`` to ``new_status`` only if it still has ``expected_status``.

        Returns ``False`` when another writer changed the status first, in
        which case nothing is written.
        """

        values = {
            OrderModel.status: new_status,
            OrderModel.updated_at: to_storage_datetime(updated_at),
        }
        if estimate_minutes is not None:
            values[OrderModel.estimate_minutes] = estimate_minutes
        if rejection_reason is not None:
            values[OrderModel.rejection_reason] = rejection_reason

        updated = (
            self.session.query(OrderModel)
            .filter(OrderModel.id == order_id)
            .filter(OrderModel.status == expected_status)
            .update(values, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1

    def delete_by_shop(self, shop_id: int, *, commit: bool = True) -> int:
        deleted = (
            self.session.query(OrderModel)
            .filter(OrderModel.shop_id == shop_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return deleted

    def delete_by_customer(self, customer_id: int, *, commit: bool = True) -> int:
        deleted = (
            self.session.query(OrderModel)
            .filter(OrderModel.customer_id == customer_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return deleted

    @staticmethod
    def _filter_statuses(query, statuses, exclude_statuses):
        if statuses is not None:
            query = query.filter(OrderModel.status.in_(list(statuses)))
        if exclude_statuses:
            query = query.filter(OrderModel.status.not_in(list(exclude_statuses)))
        return query

    @staticmethod
    def _to_entity(model: OrderModel) -> Order:
        delivery_location = None
        if model.delivery_lat is not None and model.delivery_lng is not None:
            delivery_location = GeoPoint(
                lat=model.delivery_lat,
                lng=model.delivery_lng,
                address=model.delivery_address,
            )
        items = [
            OrderItem(
                item_id=int(raw["item_id"]),
                name=raw.get("name") or "",
                quantity=int(raw.get("quantity") or 0),
                unit_price=float(raw.get("unit_price") or 0.0),
                price_description=raw.get("price_description"),
            )
            for raw in (model.items or [])
        ]
        return Order(
            id=model.id,
            shop_id=model.shop_id,
            customer_id=model.customer_id,
            customer_name=model.customer_name,
            customer_contact=model.customer_contact,
            status=model.status,
            total_amount=model.total_amount,
            items=items,
            order_type=model.order_type,
            delivery_location=delivery_location,
            estimate_minutes=model.estimate_minutes,
            rejection_reason=model.rejection_reason,
            customer_notes=model.customer_notes,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: OrderModel, order: Order) -> None:
        model.shop_id = order.shop_id
        model.customer_id = order.customer_id
        model.customer_name = order.customer_name
        model.customer_contact = order.customer_contact
        model.order_type = order.order_type
        if order.delivery_location is not None:
            model.delivery_lat = order.delivery_location.lat
            model.delivery_lng = order.delivery_location.lng
            model.delivery_address = order.delivery_location.address
        model.items = [
            {
                "item_id": item.item_id,
                "name": item.name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "price_description": item.price_description,
            }
            for item in order.items
        ]
        model.total_amount = order.total_amount
        model.status = order.status
        model.estimate_minutes = order.estimate_minutes
        model.rejection_reason = order.rejection_reason
        model.customer_notes = order.customer_notes
        model.created_at = to_storage_datetime(order.created_at)
        model.updated_at = to_storage_datetime(order.updated_at)


__all__ = ["OrderRepository"]
