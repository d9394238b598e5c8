"""Persistence helpers for inventory items."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from marketplace.domain.entities import Item
from marketplace.infrastructure.models import ItemModel
from marketplace.utils import ensure_utc, to_storage_datetime


class ItemRepository:
    """Provide CRUD operations for :class:`Item` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, item_id: int) -> Item | None:
        model = self.session.get(ItemModel, item_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, item_ids: Sequence[int]) -> dict[int, Item]:
        if not item_ids:
            return {}
        query = self.session.query(ItemModel).filter(ItemModel.id.in_(set(item_ids)))
        return {model.id: self._to_entity(model) for model in query.all()}

    def list_by_shop(self, shop_id: int, *, in_stock_only: bool = False) -> Sequence[Item]:
        query = self.session.query(ItemModel).filter(ItemModel.shop_id == shop_id)
        if in_stock_only:
            query = query.filter(ItemModel.in_stock.is_(True))
        query = query.order_by(ItemModel.name.asc(), ItemModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def search(
        self,
        *,
        category: str | None = None,
        in_stock: bool | None = None,
        term: str | None = None,
    ) -> Sequence[Item]:
        query = self.session.query(ItemModel)
        if category:
            query = query.filter(ItemModel.category == category)
        if in_stock is not None:
            query = query.filter(ItemModel.in_stock.is_(in_stock))
        if term and term.strip():
            pattern = f"%{term.strip()}%"
            query = query.filter(
                or_(
                    ItemModel.name.ilike(pattern),
                    ItemModel.description.ilike(pattern),
                    ItemModel.category.ilike(pattern),
                )
            )
        query = query.order_by(ItemModel.name.asc(), ItemModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, item: Item) -> Item:
        model = ItemModel()
        self._apply_entity_to_model(model, item, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, item: Item) -> Item:
        model = self.session.get(ItemModel, item.id)
        if model is None:
            msg = f"Item with id {item.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, item, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, item_id: int, *, commit: bool = True) -> None:
        self.session.query(ItemModel).filter(ItemModel.id == item_id).delete(
            synchronize_session=False
        )
        if commit:
            self.session.commit()

    def delete_by_shop(self, shop_id: int, *, commit: bool = True) -> int:
        deleted = (
            self.session.query(ItemModel)
            .filter(ItemModel.shop_id == shop_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return deleted

    @staticmethod
    def _to_entity(model: ItemModel) -> Item:
        return Item(
            id=model.id,
            shop_id=model.shop_id,
            name=model.name,
            price=model.price,
            in_stock=bool(model.in_stock),
            price_description=model.price_description,
            description=model.description,
            category=model.category,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: ItemModel, item: Item, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.shop_id = item.shop_id
            model.created_at = to_storage_datetime(item.created_at)
        model.name = item.name
        model.description = item.description
        model.price = item.price
        model.price_description = item.price_description
        model.category = item.category
        model.in_stock = item.in_stock
        model.updated_at = to_storage_datetime(item.updated_at)


__all__ = ["ItemRepository"]
