"""Use cases for editing a shop profile and its open status."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from marketplace.domain.entities import Shop
from marketplace.infrastructure.repositories import ShopRepository
from marketplace.utils import utc_now

from .queries import get_shop
from .validators import build_estimate, build_location, require_text, validate_delivery

logger = logging.getLogger(__name__)

_UNCHANGED = object()


def update_shop(
    session: Session,
    *,
    shop_id: int,
    name: str | None = None,
    category: str | None = None,
    lat: float | None = None,
    lng: float | None = None,
    address: str | None = None,
    mobile_number: str | None = None,
    delivery_enabled: bool | None = None,
    delivery_range_km: float | None = _UNCHANGED,
) -> Shop:
    """Apply the provided profile changes; ``None`` leaves a field untouched.

    ``delivery_range_km`` may be passed as ``None`` explicitly to clear it.
    """

    shop = get_shop(session, shop_id)
    changes: dict[str, object] = {}

    if name is not None:
        changes["name"] = require_text(name, "Shop name")
    if category is not None:
        changes["category"] = require_text(category, "Category")
    if lat is not None or lng is not None:
        current = shop.location
        new_lat = lat if lat is not None else (current.lat if current else None)
        new_lng = lng if lng is not None else (current.lng if current else None)
        new_address = address if address is not None else (current.address if current else None)
        changes["location"] = build_location(new_lat, new_lng, new_address)
    elif address is not None and shop.location is not None:
        changes["location"] = replace(shop.location, address=address.strip() or None)
    if mobile_number is not None:
        changes["mobile_number"] = mobile_number.strip() or None

    enabled = shop.delivery_enabled if delivery_enabled is None else delivery_enabled
    range_km = shop.delivery_range_km if delivery_range_km is _UNCHANGED else delivery_range_km
    changes["delivery_enabled"] = enabled
    changes["delivery_range_km"] = validate_delivery(enabled, range_km)

    return ShopRepository(session).update(replace(shop, **changes))


def update_shop_status(
    session: Session,
    *,
    shop_id: int,
    is_open: bool,
    estimate_minutes: int | None = None,
    estimate_action: str | None = None,
) -> Shop:
    """Set the open flag and the optional opening/closing estimate."""

    shop = get_shop(session, shop_id)
    estimate = build_estimate(estimate_minutes, estimate_action)
    updated = ShopRepository(session).update(
        replace(shop, is_open=is_open, estimate=estimate, last_updated=utc_now())
    )
    logger.info("Shop %s is now %s", shop_id, "open" if is_open else "closed")
    return updated


__all__ = ["update_shop", "update_shop_status"]
