"""Broadcast a message from a shop to the users around it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from marketplace.domain.entities import DispatchResult
from marketplace.domain.errors import NotFound, ValidationError
from marketplace.infrastructure.push import PushClient
from marketplace.infrastructure.repositories import ShopRepository

from .dispatcher import NotificationDispatcher
from .targeting import find_nearby_users

logger = logging.getLogger(__name__)

EVENT_BROADCAST = "shop.broadcast"


def broadcast_nearby(
    session: Session,
    *,
    shop_id: int,
    radius_km: float,
    title: str,
    body: str,
    data: Mapping[str, Any] | None = None,
    advertisement_id: int | None = None,
    event_type: str = EVENT_BROADCAST,
    push_client: PushClient | None = None,
) -> DispatchResult:
    """Notify every user within ``radius_km`` of the shop.

    All users with a location in range get an in-app record; the dispatcher
    pushes to the ones with an active subscription.
    """

    shop = ShopRepository(session).get(shop_id)
    if shop is None:
        raise NotFound("Shop", shop_id)
    if shop.location is None:
        raise ValidationError("The shop has no location to broadcast from")

    nearby = find_nearby_users(
        session, lat=shop.location.lat, lng=shop.location.lng, radius_km=radius_km
    )
    logger.info(
        "Broadcasting from shop %s to %s users within %s km",
        shop_id,
        len(nearby),
        radius_km,
    )

    payload = {"shop_id": shop_id, "shop_name": shop.name}
    payload.update(data or {})
    dispatcher = NotificationDispatcher(session, push_client)
    return dispatcher.dispatch(
        [match.user_id for match in nearby],
        title,
        body,
        payload,
        event_type=event_type,
        shop_id=shop_id,
        advertisement_id=advertisement_id,
    )


__all__ = ["EVENT_BROADCAST", "broadcast_nearby"]
