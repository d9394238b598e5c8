"""Manage and search inventory items."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from marketplace.domain.entities import Item
from marketplace.domain.errors import NotFound, ValidationError
from marketplace.infrastructure.repositories import ItemRepository, ShopRepository
from marketplace.utils import utc_now

logger = logging.getLogger(__name__)


def _validate_price(price: float | None) -> float | None:
    if price is None:
        return None
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValidationError("Price must be a number")
    if not math.isfinite(price) or price < 0:
        raise ValidationError("Price must be a non-negative number")
    return float(price)


def _require_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Item name is required")
    return name.strip()


def create_item(
    session: Session,
    *,
    shop_id: int,
    name: str,
    price: float | None = None,
    price_description: str | None = None,
    description: str | None = None,
    category: str | None = None,
    in_stock: bool = True,
) -> Item:
    if ShopRepository(session).get(shop_id) is None:
        raise NotFound("Shop", shop_id)

    now = utc_now()
    item = Item(
        id=None,
        shop_id=shop_id,
        name=_require_name(name),
        price=_validate_price(price),
        price_description=price_description,
        description=description,
        category=category,
        in_stock=in_stock,
        created_at=now,
        updated_at=now,
    )
    return ItemRepository(session).create(item)


def get_item(session: Session, item_id: int) -> Item:
    item = ItemRepository(session).get(item_id)
    if item is None:
        raise NotFound("Item", item_id)
    return item


def list_items(session: Session, *, shop_id: int, in_stock_only: bool = False) -> Sequence[Item]:
    if ShopRepository(session).get(shop_id) is None:
        raise NotFound("Shop", shop_id)
    return ItemRepository(session).list_by_shop(shop_id, in_stock_only=in_stock_only)


def update_item(
    session: Session,
    *,
    item_id: int,
    name: str | None = None,
    price: float | None = None,
    price_description: str | None = None,
    description: str | None = None,
    category: str | None = None,
    in_stock: bool | None = None,
) -> Item:
    """Apply the provided changes; ``None`` leaves a field untouched."""

    item = get_item(session, item_id)
    changes: dict[str, object] = {"updated_at": utc_now()}
    if name is not None:
        changes["name"] = _require_name(name)
    if price is not None:
        changes["price"] = _validate_price(price)
    if price_description is not None:
        changes["price_description"] = price_description or None
    if description is not None:
        changes["description"] = description or None
    if category is not None:
        changes["category"] = category or None
    if in_stock is not None:
        changes["in_stock"] = in_stock
    return ItemRepository(session).update(replace(item, **changes))


def delete_item(session: Session, item_id: int) -> None:
    """Remove an item; orders keep their own snapshot of it."""

    get_item(session, item_id)
    ItemRepository(session).delete(item_id)
    logger.info("Deleted item %s", item_id)


def search_items(
    session: Session,
    *,
    term: str | None = None,
    category: str | None = None,
    in_stock: bool | None = None,
) -> Sequence[Item]:
    """Search items across all shops.

    The term matches the item name, description or category, case-insensitively.
    """

    return ItemRepository(session).search(category=category, in_stock=in_stock, term=term)


__all__ = [
    "create_item",
    "delete_item",
    "get_item",
    "list_items",
    "search_items",
    "update_item",
]
