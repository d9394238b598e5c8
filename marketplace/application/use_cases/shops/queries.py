"""Read-only shop lookups."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from marketplace.domain.entities import Shop
from marketplace.domain.errors import NotFound
from marketplace.infrastructure.repositories import ShopRepository


def get_shop(session: Session, shop_id: int) -> Shop:
    shop = ShopRepository(session).get(shop_id)
    if shop is None:
        raise NotFound("Shop", shop_id)
    return shop


def list_shops_by_owner(session: Session, owner_id: int) -> Sequence[Shop]:
    return ShopRepository(session).list_by_owner(owner_id)


def search_shops(
    session: Session,
    *,
    category: str | None = None,
    is_open: bool | None = None,
    term: str | None = None,
) -> Sequence[Shop]:
    """Filter shops by category, open flag and a free-text term.

    The term matches the shop name, category or address, case-insensitively.
    """

    return ShopRepository(session).search(category=category, is_open=is_open, term=term)


__all__ = ["get_shop", "list_shops_by_owner", "search_shops"]
