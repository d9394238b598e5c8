"""Routes for shops, their order dashboards and nearby broadcasts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from marketplace.application.use_cases.notifications import broadcast_nearby
from marketplace.application.use_cases.orders import (
    get_pending_orders_count as get_pending_orders_count_uc,
    get_shop_order_history as get_shop_order_history_uc,
    get_shop_orders as get_shop_orders_uc,
)
from marketplace.application.use_cases.shops import (
    create_shop as create_shop_uc,
    delete_shop as delete_shop_uc,
    evaluate_shop_delivery,
    get_shop as get_shop_uc,
    list_shops_by_owner,
    search_shops as search_shops_uc,
    update_shop as update_shop_uc,
    update_shop_status as update_shop_status_uc,
)
from marketplace.domain.entities import Shop, User
from marketplace.domain.errors import MarketplaceError
from marketplace.domain.geo import GeoPoint, round_distance
from marketplace.infrastructure.database import get_db
from marketplace.infrastructure.push import PushClient
from marketplace.interfaces.api.dependencies import (
    get_current_user,
    get_push_client_dependency,
)
from marketplace.interfaces.api.routes_helpers import ensure_shop_owner, to_http_exception
from marketplace.interfaces.api.schemas import (
    BroadcastRequest,
    DeliveryEligibilityRead,
    DispatchResultRead,
    OrderRead,
    PendingCountRead,
    ShopCreate,
    ShopRead,
    ShopStatusUpdate,
    ShopUpdate,
)

router = APIRouter(prefix="/shops", tags=["shops"])


def _owned_shop(db: Session, shop_id: int, user: User) -> Shop:
    try:
        shop = get_shop_uc(db, shop_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    ensure_shop_owner(shop, user)
    return shop


@router.post("/", response_model=ShopRead, status_code=status.HTTP_201_CREATED)
def create_shop(
    payload: ShopCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShopRead:
    try:
        shop = create_shop_uc(db, owner_id=current_user.id, **payload.model_dump())
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return ShopRead.model_validate(shop)


@router.get("/", response_model=list[ShopRead])
def search_shops(
    category: str | None = Query(default=None),
    is_open: bool | None = Query(default=None),
    q: str | None = Query(default=None, max_length=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ShopRead]:
    shops = search_shops_uc(db, category=category, is_open=is_open, term=q)
    return [ShopRead.model_validate(shop) for shop in shops]


@router.get("/mine", response_model=list[ShopRead])
def list_my_shops(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ShopRead]:
    return [ShopRead.model_validate(shop) for shop in list_shops_by_owner(db, current_user.id)]


@router.get("/{shop_id}", response_model=ShopRead)
def read_shop(
    shop_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShopRead:
    try:
        shop = get_shop_uc(db, shop_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return ShopRead.model_validate(shop)


@router.put("/{shop_id}", response_model=ShopRead)
def update_shop(
    shop_id: int,
    payload: ShopUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShopRead:
    _owned_shop(db, shop_id, current_user)
    try:
        shop = update_shop_uc(db, shop_id=shop_id, **payload.model_dump(exclude_unset=True))
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return ShopRead.model_validate(shop)


@router.put("/{shop_id}/status", response_model=ShopRead)
def update_shop_status(
    shop_id: int,
    payload: ShopStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShopRead:
    _owned_shop(db, shop_id, current_user)
    try:
        shop = update_shop_status_uc(
            db,
            shop_id=shop_id,
            is_open=payload.is_open,
            estimate_minutes=payload.estimate_minutes,
            estimate_action=payload.estimate_action,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return ShopRead.model_validate(shop)


@router.delete("/{shop_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shop(
    shop_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    _owned_shop(db, shop_id, current_user)
    try:
        delete_shop_uc(db, shop_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{shop_id}/delivery-eligibility", response_model=DeliveryEligibilityRead)
def read_delivery_eligibility(
    shop_id: int,
    lat: float | None = Query(default=None),
    lng: float | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DeliveryEligibilityRead:
    """Check delivery to ``lat``/``lng`` or, when omitted, to the caller's last location."""

    location = None
    if lat is not None and lng is not None:
        location = GeoPoint(lat=lat, lng=lng)
    elif current_user.location is not None:
        location = current_user.location.as_point()
    try:
        evaluation = evaluate_shop_delivery(db, shop_id=shop_id, location=location)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return DeliveryEligibilityRead(
        delivery_available=evaluation.delivery_available,
        in_range=evaluation.in_range,
        distance_km=round_distance(evaluation.distance_km),
    )


@router.get("/{shop_id}/orders", response_model=list[OrderRead])
def list_shop_orders(
    shop_id: int,
    active_only: bool = Query(default=True),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OrderRead]:
    _owned_shop(db, shop_id, current_user)
    orders = get_shop_orders_uc(db, shop_id=shop_id, active_only=active_only)
    return [OrderRead.model_validate(order) for order in orders]


@router.get("/{shop_id}/orders/pending-count", response_model=PendingCountRead)
def read_pending_orders_count(
    shop_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PendingCountRead:
    _owned_shop(db, shop_id, current_user)
    pending = get_pending_orders_count_uc(db, shop_id=shop_id)
    return PendingCountRead(shop_id=shop_id, pending=pending)


@router.get("/{shop_id}/orders/history", response_model=list[OrderRead])
def list_shop_order_history(
    shop_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OrderRead]:
    _owned_shop(db, shop_id, current_user)
    orders = get_shop_order_history_uc(db, shop_id=shop_id)
    return [OrderRead.model_validate(order) for order in orders]


@router.post("/{shop_id}/broadcast", response_model=DispatchResultRead)
def broadcast_to_nearby_users(
    shop_id: int,
    payload: BroadcastRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    push_client: PushClient | None = Depends(get_push_client_dependency),
) -> DispatchResultRead:
    _owned_shop(db, shop_id, current_user)
    try:
        result = broadcast_nearby(
            db,
            shop_id=shop_id,
            radius_km=payload.radius_km,
            title=payload.title,
            body=payload.body,
            data=payload.data,
            push_client=push_client,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return DispatchResultRead.model_validate(result)


__all__ = ["router"]
