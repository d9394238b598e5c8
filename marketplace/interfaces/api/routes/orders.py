"""Routes for placing orders and moving them through their lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marketplace.application.use_cases.orders import (
    OrderLine,
    cancel_order as cancel_order_uc,
    create_order as create_order_uc,
    get_customer_orders as get_customer_orders_uc,
    get_order as get_order_uc,
    get_owner_order_history as get_owner_order_history_uc,
    update_order_status as update_order_status_uc,
)
from marketplace.application.use_cases.shops import get_shop
from marketplace.domain.entities import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    Order,
    User,
)
from marketplace.domain.errors import MarketplaceError
from marketplace.domain.geo import GeoPoint
from marketplace.infrastructure.database import get_db
from marketplace.infrastructure.push import PushClient
from marketplace.interfaces.api.dependencies import (
    get_current_user,
    get_push_client_dependency,
)
from marketplace.interfaces.api.routes_helpers import forbidden, to_http_exception
from marketplace.interfaces.api.schemas import (
    OrderCreate,
    OrderRead,
    OrderStatusUpdate,
    OrderTransitionRead,
)

router = APIRouter(prefix="/orders", tags=["orders"])


def _load_order(db: Session, order_id: int) -> tuple[Order, int]:
    """Return the order and the id of the owner of its shop."""

    try:
        order = get_order_uc(db, order_id)
        shop = get_shop(db, order.shop_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return order, shop.owner_id


@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OrderRead:
    location = None
    if payload.delivery_location is not None:
        location = GeoPoint(
            lat=payload.delivery_location.lat,
            lng=payload.delivery_location.lng,
            address=payload.delivery_location.address,
        )
    try:
        order = create_order_uc(
            db,
            shop_id=payload.shop_id,
            customer_id=current_user.id,
            items=[OrderLine(item_id=line.item_id, quantity=line.quantity) for line in payload.items],
            delivery_location=location,
            order_type=payload.order_type,
            customer_notes=payload.customer_notes,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return OrderRead.model_validate(order)


@router.get("/mine", response_model=list[OrderRead])
def list_my_orders(
    active_only: bool = Query(default=True),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OrderRead]:
    orders = get_customer_orders_uc(db, customer_id=current_user.id, active_only=active_only)
    return [OrderRead.model_validate(order) for order in orders]


@router.get("/history", response_model=list[OrderRead])
def list_owner_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OrderRead]:
    """Finished orders across every shop owned by the caller."""

    orders = get_owner_order_history_uc(db, owner_id=current_user.id)
    return [OrderRead.model_validate(order) for order in orders]


@router.get("/{order_id}", response_model=OrderRead)
def read_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OrderRead:
    order, owner_id = _load_order(db, order_id)
    if current_user.id not in (order.customer_id, owner_id):
        raise forbidden("Only the customer or the shop owner can view this order")
    return OrderRead.model_validate(order)


@router.put("/{order_id}/status", response_model=OrderTransitionRead)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    push_client: PushClient | None = Depends(get_push_client_dependency),
) -> OrderTransitionRead:
    """Either party may complete an order; other changes depend on the caller's role."""

    order, owner_id = _load_order(db, order_id)
    if payload.status == ORDER_STATUS_CANCELLED:
        if current_user.id != order.customer_id:
            raise forbidden("Only the customer can cancel an order")
    elif payload.status == ORDER_STATUS_COMPLETED:
        if current_user.id not in (order.customer_id, owner_id):
            raise forbidden("Only the customer or the shop owner can complete this order")
    elif current_user.id != owner_id:
        raise forbidden("Only the shop owner can change this order")

    try:
        result = update_order_status_uc(
            db,
            order_id=order_id,
            status=payload.status,
            estimate_minutes=payload.estimate_minutes,
            rejection_reason=payload.rejection_reason,
            actor_id=current_user.id,
            push_client=push_client,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return OrderTransitionRead.model_validate(result)


@router.post("/{order_id}/cancel", response_model=OrderTransitionRead)
def cancel_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    push_client: PushClient | None = Depends(get_push_client_dependency),
) -> OrderTransitionRead:
    order, _ = _load_order(db, order_id)
    if current_user.id != order.customer_id:
        raise forbidden("Only the customer can cancel an order")
    try:
        result = cancel_order_uc(
            db, order_id=order_id, actor_id=current_user.id, push_client=push_client
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return OrderTransitionRead.model_validate(result)


__all__ = ["router"]
