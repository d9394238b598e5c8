"""Use case for publishing a new shop."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from marketplace.domain.entities import ROLE_SHOPKEEPER, Shop
from marketplace.domain.errors import NotFound, ValidationError
from marketplace.infrastructure.repositories import ShopRepository, UserRepository
from marketplace.utils import utc_now

from .validators import build_location, require_text, validate_delivery

logger = logging.getLogger(__name__)


def create_shop(
    session: Session,
    *,
    owner_id: int,
    name: str,
    category: str,
    lat: float,
    lng: float,
    address: str | None = None,
    mobile_number: str | None = None,
    is_open: bool = False,
    delivery_enabled: bool = False,
    delivery_range_km: float | None = None,
) -> Shop:
    owner = UserRepository(session).get(owner_id)
    if owner is None:
        raise NotFound("User", owner_id)
    if not owner.can_act_as(ROLE_SHOPKEEPER):
        raise ValidationError("Only shopkeepers can create shops")

    now = utc_now()
    shop = Shop(
        id=None,
        owner_id=owner_id,
        name=require_text(name, "Shop name"),
        category=require_text(category, "Category"),
        location=build_location(lat, lng, address),
        is_open=is_open,
        delivery_enabled=delivery_enabled,
        delivery_range_km=validate_delivery(delivery_enabled, delivery_range_km),
        mobile_number=mobile_number.strip() if mobile_number else None,
        last_updated=now,
        created_at=now,
    )
    created = ShopRepository(session).create(shop)
    logger.info("Shop %s created by user %s", created.id, owner_id)
    return created


__all__ = ["create_shop"]
