"""Broadcast an advertisement to users near its shop."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from marketplace.domain.entities import DispatchResult
from marketplace.domain.errors import NotFound, ValidationError
from marketplace.infrastructure.push import PushClient
from marketplace.infrastructure.repositories import AdvertisementRepository, ShopRepository

from ..notifications.broadcast import broadcast_nearby
from .manage_advertisements import get_advertisement

logger = logging.getLogger(__name__)

EVENT_ADVERTISEMENT = "advertisement"
MAX_PREVIEW_LENGTH = 100


def preview_message(message: str) -> str:
    if len(message) > MAX_PREVIEW_LENGTH:
        return message[:MAX_PREVIEW_LENGTH] + "..."
    return message


def send_advertisement(
    session: Session,
    *,
    advertisement_id: int,
    radius_km: float,
    push_client: PushClient | None = None,
) -> DispatchResult:
    """Notify nearby users once per advertisement and count the new records."""

    advertisement = get_advertisement(session, advertisement_id)
    if not advertisement.is_active:
        raise ValidationError("Inactive advertisements cannot be sent")
    shop = ShopRepository(session).get(advertisement.shop_id)
    if shop is None:
        raise NotFound("Shop", advertisement.shop_id)

    result = broadcast_nearby(
        session,
        shop_id=shop.id,
        radius_km=radius_km,
        title=f"Special Offer at {shop.name}!",
        body=preview_message(advertisement.message),
        data={
            "type": EVENT_ADVERTISEMENT,
            "advertisement_id": advertisement.id,
            "has_discount": advertisement.has_discount,
            "discount_percentage": advertisement.discount_percentage,
            "discount_text": advertisement.discount_text,
        },
        advertisement_id=advertisement.id,
        event_type=EVENT_ADVERTISEMENT,
        push_client=push_client,
    )
    AdvertisementRepository(session).increment_notifications_sent(
        advertisement.id, result.recorded
    )
    logger.info(
        "Advertisement %s sent: %s new recipients, %s already notified",
        advertisement.id,
        result.recorded,
        result.skipped,
    )
    return result


__all__ = ["EVENT_ADVERTISEMENT", "preview_message", "send_advertisement"]
