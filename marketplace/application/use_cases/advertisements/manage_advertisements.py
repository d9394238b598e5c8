"""Create, edit, list and delete shop advertisements."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.domain.entities import Advertisement
from marketplace.domain.errors import NotFound, ValidationError
from marketplace.infrastructure.repositories import (
    AdvertisementRepository,
    NotificationRepository,
    ShopRepository,
)
from marketplace.utils import utc_now

logger = logging.getLogger(__name__)


def _validate_message(message: str | None) -> str:
    if message is None or not message.strip():
        raise ValidationError("Advertisement message is required")
    return message.strip()


def _validate_discount(
    has_discount: bool, percentage: float | None, text: str | None
) -> tuple[float | None, str | None]:
    if not has_discount:
        return None, None
    if percentage is not None:
        if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
            raise ValidationError("Discount percentage must be a number")
        if not math.isfinite(percentage) or not 0 <= percentage <= 100:
            raise ValidationError("Discount percentage must be between 0 and 100")
        percentage = float(percentage)
    return percentage, text.strip() if text and text.strip() else None


def get_advertisement(session: Session, advertisement_id: int) -> Advertisement:
    advertisement = AdvertisementRepository(session).get(advertisement_id)
    if advertisement is None:
        raise NotFound("Advertisement", advertisement_id)
    return advertisement


def create_advertisement(
    session: Session,
    *,
    shop_id: int,
    message: str,
    has_discount: bool = False,
    discount_percentage: float | None = None,
    discount_text: str | None = None,
) -> Advertisement:
    shop = ShopRepository(session).get(shop_id)
    if shop is None:
        raise NotFound("Shop", shop_id)

    percentage, text = _validate_discount(has_discount, discount_percentage, discount_text)
    now = utc_now()
    advertisement = Advertisement(
        id=None,
        shop_id=shop_id,
        owner_id=shop.owner_id,
        message=_validate_message(message),
        has_discount=has_discount,
        discount_percentage=percentage,
        discount_text=text,
        created_at=now,
        updated_at=now,
    )
    return AdvertisementRepository(session).create(advertisement)


def update_advertisement(
    session: Session,
    *,
    advertisement_id: int,
    message: str | None = None,
    is_active: bool | None = None,
    has_discount: bool | None = None,
    discount_percentage: float | None = None,
    discount_text: str | None = None,
) -> Advertisement:
    advertisement = get_advertisement(session, advertisement_id)
    changes: dict[str, object] = {"updated_at": utc_now()}
    if message is not None:
        changes["message"] = _validate_message(message)
    if is_active is not None:
        changes["is_active"] = is_active

    discount_flag = advertisement.has_discount if has_discount is None else has_discount
    percentage, text = _validate_discount(
        discount_flag,
        discount_percentage if discount_percentage is not None else advertisement.discount_percentage,
        discount_text if discount_text is not None else advertisement.discount_text,
    )
    changes.update(has_discount=discount_flag, discount_percentage=percentage, discount_text=text)

    return AdvertisementRepository(session).update(replace(advertisement, **changes))


def list_advertisements(
    session: Session, *, shop_id: int, active_only: bool = False
) -> Sequence[Advertisement]:
    if ShopRepository(session).get(shop_id) is None:
        raise NotFound("Shop", shop_id)
    return AdvertisementRepository(session).list_by_shop(shop_id, active_only=active_only)


def delete_advertisement(session: Session, advertisement_id: int) -> int:
    """Delete the advertisement and its notifications; return how many notifications went."""

    get_advertisement(session, advertisement_id)
    try:
        deleted = NotificationRepository(session).delete_by_advertisement(
            advertisement_id, commit=False
        )
        AdvertisementRepository(session).delete(advertisement_id, commit=False)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to delete advertisement %s", advertisement_id)
        raise
    logger.info(
        "Deleted advertisement %s with %s notifications", advertisement_id, deleted
    )
    return deleted


__all__ = [
    "create_advertisement",
    "delete_advertisement",
    "get_advertisement",
    "list_advertisements",
    "update_advertisement",
]
