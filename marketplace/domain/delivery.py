"""Delivery eligibility rules for a shop and a customer location."""

from __future__ import annotations

from dataclasses import dataclass

from .entities import Shop
from .geo import GeoPoint, distance_between


@dataclass(frozen=True)
class DeliveryEvaluation:
    """Whether a shop delivers at all and whether it reaches the customer."""

    delivery_available: bool
    in_range: bool
    distance_km: float | None

    @property
    def eligible(self) -> bool:
        return self.delivery_available and self.in_range


def evaluate(shop: Shop, customer_location: GeoPoint | None) -> DeliveryEvaluation:
    """Evaluate whether ``shop`` can deliver to ``customer_location``.

    Missing location data on either side yields ``in_range=False``: range
    cannot be proven, so the order is not allowed to proceed.
    """

    if not shop.delivery_enabled:
        return DeliveryEvaluation(delivery_available=False, in_range=False, distance_km=None)

    if customer_location is None or shop.location is None:
        return DeliveryEvaluation(delivery_available=True, in_range=False, distance_km=None)

    distance = distance_between(shop.location, customer_location)
    delivery_range = shop.delivery_range_km or 0.0
    return DeliveryEvaluation(
        delivery_available=True,
        in_range=distance <= delivery_range,
        distance_km=distance,
    )


__all__ = ["DeliveryEvaluation", "evaluate"]
