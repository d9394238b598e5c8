"""Order lists and counters."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from marketplace.domain.entities import ORDER_STATUS_PENDING, Order
from marketplace.domain.errors import NotFound
from marketplace.domain.order_status import (
    OWNER_HISTORY_STATUSES,
    SHOP_HISTORY_STATUSES,
    active_for_customer,
    active_for_shop,
)
from marketplace.infrastructure.repositories import (
    OrderRepository,
    ShopRepository,
    UserRepository,
)


def _ensure_shop(session: Session, shop_id: int) -> None:
    if ShopRepository(session).get(shop_id) is None:
        raise NotFound("Shop", shop_id)


def get_order(session: Session, order_id: int) -> Order:
    order = OrderRepository(session).get(order_id)
    if order is None:
        raise NotFound("Order", order_id)
    return order


def get_shop_orders(
    session: Session, *, shop_id: int, active_only: bool = True
) -> Sequence[Order]:
    """Orders of a shop, newest first; terminal ones are hidden unless ``active_only`` is off."""

    _ensure_shop(session, shop_id)
    orders = OrderRepository(session).list_by_shop(shop_id)
    return active_for_shop(orders) if active_only else list(orders)


def get_customer_orders(
    session: Session, *, customer_id: int, active_only: bool = True
) -> Sequence[Order]:
    """Orders placed by a customer, newest first; cancelled ones are hidden by default."""

    if UserRepository(session).get(customer_id) is None:
        raise NotFound("User", customer_id)
    orders = OrderRepository(session).list_by_customer(customer_id)
    return active_for_customer(orders) if active_only else list(orders)


def get_shop_order_history(session: Session, *, shop_id: int) -> Sequence[Order]:
    _ensure_shop(session, shop_id)
    return OrderRepository(session).list_by_shop(shop_id, statuses=SHOP_HISTORY_STATUSES)


def get_owner_order_history(session: Session, *, owner_id: int) -> Sequence[Order]:
    """Finished orders across every shop owned by ``owner_id``, newest first."""

    shops = ShopRepository(session).list_by_owner(owner_id)
    return OrderRepository(session).list_by_shops(
        [shop.id for shop in shops], statuses=OWNER_HISTORY_STATUSES
    )


def get_pending_orders_count(session: Session, *, shop_id: int) -> int:
    _ensure_shop(session, shop_id)
    return OrderRepository(session).count_by_shop_status(shop_id, ORDER_STATUS_PENDING)


__all__ = [
    "get_customer_orders",
    "get_order",
    "get_owner_order_history",
    "get_pending_orders_count",
    "get_shop_order_history",
    "get_shop_orders",
]
