"""Use case for placing an order."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from marketplace.domain.delivery import evaluate
from marketplace.domain.entities import (
    ORDER_STATUS_PENDING,
    ORDER_TYPE_DELIVERY,
    ORDER_TYPES,
    Order,
    OrderItem,
)
from marketplace.domain.errors import DeliveryIneligible, NotFound, ValidationError
from marketplace.domain.geo import GeoPoint, validate_coordinates
from marketplace.infrastructure.repositories import (
    ItemRepository,
    OrderRepository,
    ShopRepository,
    UserRepository,
)
from marketplace.utils import utc_now

from ..notifications.events import publish_order_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderLine:
    """Requested quantity of one inventory item."""

    item_id: int
    quantity: int


def _resolve_items(session: Session, shop_id: int, lines: Sequence[OrderLine]) -> list[OrderItem]:
    if not lines:
        raise ValidationError("An order needs at least one item")
    for line in lines:
        if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity < 1:
            raise ValidationError("Item quantities must be whole numbers of at least 1")

    inventory = ItemRepository(session).get_map_by_ids([line.item_id for line in lines])
    resolved: list[OrderItem] = []
    for line in lines:
        item = inventory.get(line.item_id)
        if item is None or item.shop_id != shop_id:
            raise NotFound("Item", line.item_id)
        if not item.in_stock:
            raise ValidationError(f"'{item.name}' is out of stock")
        resolved.append(
            OrderItem(
                item_id=item.id,
                name=item.name,
                quantity=line.quantity,
                unit_price=item.price or 0.0,
                price_description=item.price_description,
            )
        )
    return resolved


def create_order(
    session: Session,
    *,
    shop_id: int,
    customer_id: int,
    items: Sequence[OrderLine],
    delivery_location: GeoPoint | None = None,
    order_type: str = ORDER_TYPE_DELIVERY,
    customer_notes: str | None = None,
) -> Order:
    """Create a ``pending`` order after checking inventory and delivery eligibility.

    Delivery orders fall back to the customer's stored location when none is
    given, and are refused with :class:`DeliveryIneligible` unless the shop
    delivers to that point.
    """

    if order_type not in ORDER_TYPES:
        raise ValidationError(f"Order type must be one of: {', '.join(ORDER_TYPES)}")

    shop = ShopRepository(session).get(shop_id)
    if shop is None:
        raise NotFound("Shop", shop_id)
    customer = UserRepository(session).get(customer_id)
    if customer is None:
        raise NotFound("User", customer_id)

    order_items = _resolve_items(session, shop_id, items)

    location = None
    if order_type == ORDER_TYPE_DELIVERY:
        location = delivery_location
        if location is None and customer.location is not None:
            location = customer.location.as_point()
        if location is not None:
            validate_coordinates(location.lat, location.lng)
        evaluation = evaluate(shop, location)
        if not evaluation.eligible:
            message = (
                "This shop does not offer delivery"
                if not evaluation.delivery_available
                else "The delivery location is outside the shop's delivery range"
            )
            raise DeliveryIneligible(evaluation, message)

    now = utc_now()
    order = Order(
        id=None,
        shop_id=shop_id,
        customer_id=customer_id,
        customer_name=customer.name,
        customer_contact=customer.phone,
        status=ORDER_STATUS_PENDING,
        total_amount=round(sum(item.line_total for item in order_items), 2),
        items=order_items,
        order_type=order_type,
        delivery_location=location,
        customer_notes=customer_notes.strip() if customer_notes and customer_notes.strip() else None,
        created_at=now,
        updated_at=now,
    )
    created = OrderRepository(session).create(order)
    logger.info("Order %s placed at shop %s by user %s", created.id, shop_id, customer_id)
    publish_order_event(created, shop)
    return created


__all__ = ["OrderLine", "create_order"]
