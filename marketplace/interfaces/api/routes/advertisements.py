"""Routes for shop advertisements."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marketplace.application.use_cases.advertisements import (
    create_advertisement as create_advertisement_uc,
    delete_advertisement as delete_advertisement_uc,
    get_advertisement,
    list_advertisements as list_advertisements_uc,
    send_advertisement as send_advertisement_uc,
    update_advertisement as update_advertisement_uc,
)
from marketplace.application.use_cases.shops import get_shop
from marketplace.domain.entities import User
from marketplace.domain.errors import MarketplaceError
from marketplace.infrastructure.database import get_db
from marketplace.infrastructure.push import PushClient
from marketplace.interfaces.api.dependencies import (
    get_current_user,
    get_push_client_dependency,
)
from marketplace.interfaces.api.routes_helpers import ensure_shop_owner, to_http_exception
from marketplace.interfaces.api.schemas import (
    AdvertisementCreate,
    AdvertisementDeleteResult,
    AdvertisementRead,
    AdvertisementSendRequest,
    AdvertisementUpdate,
    DispatchResultRead,
)

router = APIRouter(tags=["advertisements"])


def _ensure_advertisement_owner(db: Session, advertisement_id: int, user: User) -> None:
    try:
        advertisement = get_advertisement(db, advertisement_id)
        shop = get_shop(db, advertisement.shop_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    ensure_shop_owner(shop, user)


@router.post(
    "/shops/{shop_id}/advertisements",
    response_model=AdvertisementRead,
    status_code=status.HTTP_201_CREATED,
)
def create_advertisement(
    shop_id: int,
    payload: AdvertisementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdvertisementRead:
    try:
        ensure_shop_owner(get_shop(db, shop_id), current_user)
        advertisement = create_advertisement_uc(db, shop_id=shop_id, **payload.model_dump())
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return AdvertisementRead.model_validate(advertisement)


@router.get("/shops/{shop_id}/advertisements", response_model=list[AdvertisementRead])
def list_advertisements(
    shop_id: int,
    active_only: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[AdvertisementRead]:
    try:
        advertisements = list_advertisements_uc(db, shop_id=shop_id, active_only=active_only)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return [AdvertisementRead.model_validate(item) for item in advertisements]


@router.put("/advertisements/{advertisement_id}", response_model=AdvertisementRead)
def update_advertisement(
    advertisement_id: int,
    payload: AdvertisementUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdvertisementRead:
    _ensure_advertisement_owner(db, advertisement_id, current_user)
    try:
        advertisement = update_advertisement_uc(
            db, advertisement_id=advertisement_id, **payload.model_dump(exclude_unset=True)
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return AdvertisementRead.model_validate(advertisement)


@router.delete(
    "/advertisements/{advertisement_id}", response_model=AdvertisementDeleteResult
)
def delete_advertisement(
    advertisement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdvertisementDeleteResult:
    _ensure_advertisement_owner(db, advertisement_id, current_user)
    try:
        deleted = delete_advertisement_uc(db, advertisement_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return AdvertisementDeleteResult(deleted_notifications=deleted)


@router.post(
    "/advertisements/{advertisement_id}/send", response_model=DispatchResultRead
)
def send_advertisement(
    advertisement_id: int,
    payload: AdvertisementSendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    push_client: PushClient | None = Depends(get_push_client_dependency),
) -> DispatchResultRead:
    _ensure_advertisement_owner(db, advertisement_id, current_user)
    try:
        result = send_advertisement_uc(
            db,
            advertisement_id=advertisement_id,
            radius_km=payload.radius_km,
            push_client=push_client,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return DispatchResultRead.model_validate(result)


__all__ = ["router"]
