"""Delivery eligibility for a shop and a location supplied by the caller."""

from __future__ import annotations

from sqlalchemy.orm import Session

from marketplace.domain.delivery import DeliveryEvaluation, evaluate
from marketplace.domain.geo import GeoPoint

from .queries import get_shop


def evaluate_shop_delivery(
    session: Session, *, shop_id: int, location: GeoPoint | None
) -> DeliveryEvaluation:
    return evaluate(get_shop(session, shop_id), location)


__all__ = ["evaluate_shop_delivery"]
