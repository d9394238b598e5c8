"""Routes for accounts, device location and push subscriptions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from marketplace.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    enable_role as enable_role_uc,
    switch_active_role as switch_active_role_uc,
    update_push_subscription as update_push_subscription_uc,
    update_user_location as update_user_location_uc,
)
from marketplace.domain.entities import User
from marketplace.domain.errors import MarketplaceError
from marketplace.infrastructure.database import get_db
from marketplace.interfaces.api.dependencies import get_current_user
from marketplace.interfaces.api.routes_helpers import to_http_exception
from marketplace.interfaces.api.schemas import (
    PushSubscriptionUpdate,
    RoleRequest,
    UserCreate,
    UserLocationUpdate,
    UserRead,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    """Create the marketplace profile for an account of the identity provider."""

    try:
        user = create_user_uc(
            db,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            roles=payload.roles,
            active_role=payload.active_role,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.put("/me/location", response_model=UserRead)
def update_location(
    payload: UserLocationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    try:
        user = update_user_location_uc(
            db,
            user_id=current_user.id,
            lat=payload.lat,
            lng=payload.lng,
            address=payload.address,
            last_updated=payload.last_updated,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)


@router.put("/me/push-subscription", response_model=UserRead)
def update_push_subscription(
    payload: PushSubscriptionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    try:
        user = update_push_subscription_uc(
            db,
            user_id=current_user.id,
            subscriber_id=payload.subscriber_id,
            push_enabled=payload.push_enabled,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)


@router.put("/me/active-role", response_model=UserRead)
def switch_active_role(
    payload: RoleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    try:
        user = switch_active_role_uc(db, user_id=current_user.id, role=payload.role)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)


@router.post("/me/roles", response_model=UserRead)
def enable_role(
    payload: RoleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    try:
        user = enable_role_uc(db, user_id=current_user.id, role=payload.role)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        delete_user_uc(db, current_user.id)
    except MarketplaceError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
