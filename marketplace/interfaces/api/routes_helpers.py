"""Helper utilities shared across API route handlers."""

from __future__ import annotations

from fastapi import HTTPException, status

from marketplace.domain.entities import Shop, User
from marketplace.domain.errors import (
    DeliveryIneligible,
    InvalidTransition,
    MarketplaceError,
    NotFound,
    ValidationError,
)
from marketplace.domain.geo import round_distance

_STATUS_BY_ERROR: tuple[tuple[type[MarketplaceError], int], ...] = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (InvalidTransition, status.HTTP_409_CONFLICT),
    (DeliveryIneligible, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: MarketplaceError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, DeliveryIneligible):
        evaluation = exc.evaluation
        detail = {
            "message": str(exc),
            "delivery_available": getattr(evaluation, "delivery_available", False),
            "in_range": getattr(evaluation, "in_range", False),
            "distance_km": round_distance(getattr(evaluation, "distance_km", None)),
        }
        return HTTPException(status_code=status_code, detail=detail)
    if isinstance(exc, InvalidTransition):
        detail = {
            "message": str(exc),
            "current": exc.current,
            "requested": exc.requested,
        }
        return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=status_code, detail=str(exc))


def forbidden(message: str = "Not allowed") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)


def ensure_shop_owner(shop: Shop, user: User) -> None:
    if shop.owner_id != user.id:
        raise forbidden("Only the shop owner can do this")


__all__ = ["ensure_shop_owner", "forbidden", "to_http_exception"]
