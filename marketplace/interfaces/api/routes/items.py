"""Routes for shop inventory."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marketplace.application.use_cases.items import (
    create_item as create_item_uc,
    delete_item as delete_item_uc,
    get_item as get_item_uc,
    list_items as list_items_uc,
    search_items as search_items_uc,
    update_item as update_item_uc,
)
from marketplace.application.use_cases.shops import get_shop
from marketplace.domain.entities import User
from marketplace.domain.errors import MarketplaceError
from marketplace.infrastructure.database import get_db
from marketplace.interfaces.api.dependencies import get_current_user
from marketplace.interfaces.api.routes_helpers import ensure_shop_owner, to_http_exception
from marketplace.interfaces.api.schemas import ItemCreate, ItemRead, ItemUpdate

router = APIRouter(tags=["items"])


@router.get("/items", response_model=list[ItemRead])
def search_items(
    q: str | None = Query(default=None, max_length=100),
    category: str | None = Query(default=None),
    in_stock: bool | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ItemRead]:
    """Search items across every shop."""

    items = search_items_uc(db, term=q, category=category, in_stock=in_stock)
    return [ItemRead.model_validate(item) for item in items]


@router.get("/shops/{shop_id}/items", response_model=list[ItemRead])
def list_items(
    shop_id: int,
    in_stock_only: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ItemRead]:
    try:
        items = list_items_uc(db, shop_id=shop_id, in_stock_only=in_stock_only)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return [ItemRead.model_validate(item) for item in items]


@router.post(
    "/shops/{shop_id}/items",
    response_model=ItemRead,
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    shop_id: int,
    payload: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ItemRead:
    try:
        ensure_shop_owner(get_shop(db, shop_id), current_user)
        item = create_item_uc(db, shop_id=shop_id, **payload.model_dump())
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return ItemRead.model_validate(item)


@router.put("/items/{item_id}", response_model=ItemRead)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ItemRead:
    try:
        item = get_item_uc(db, item_id)
        ensure_shop_owner(get_shop(db, item.shop_id), current_user)
        updated = update_item_uc(db, item_id=item_id, **payload.model_dump(exclude_unset=True))
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return ItemRead.model_validate(updated)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    try:
        item = get_item_uc(db, item_id)
        ensure_shop_owner(get_shop(db, item.shop_id), current_user)
        delete_item_uc(db, item_id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc


__all__ = ["router"]
