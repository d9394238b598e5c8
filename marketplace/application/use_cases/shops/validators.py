"""Input checks shared by the shop use cases."""

from __future__ import annotations

import math

from marketplace.domain.entities import ESTIMATE_ACTIONS, StatusEstimate
from marketplace.domain.errors import ValidationError
from marketplace.domain.geo import GeoPoint, validate_coordinates


def require_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def build_location(lat: float, lng: float, address: str | None = None) -> GeoPoint:
    validate_coordinates(lat, lng)
    return GeoPoint(lat=float(lat), lng=float(lng), address=address.strip() if address else None)


def validate_delivery(delivery_enabled: bool, delivery_range_km: float | None) -> float | None:
    """Return the range to store; enabling delivery requires a usable range."""

    if delivery_range_km is not None:
        if isinstance(delivery_range_km, bool) or not isinstance(delivery_range_km, (int, float)):
            raise ValidationError("Delivery range must be a number")
        if not math.isfinite(delivery_range_km) or delivery_range_km < 0:
            raise ValidationError("Delivery range must be a non-negative number of kilometres")
        delivery_range_km = float(delivery_range_km)
    if delivery_enabled and delivery_range_km is None:
        raise ValidationError("A delivery range is required when delivery is enabled")
    return delivery_range_km


def build_estimate(minutes: int | None, action: str | None) -> StatusEstimate | None:
    if minutes is None and action is None:
        return None
    if minutes is None or action is None:
        raise ValidationError("An estimate needs both minutes and an action")
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
        raise ValidationError("Estimate minutes must be a non-negative whole number")
    if action not in ESTIMATE_ACTIONS:
        raise ValidationError(f"Estimate action must be one of: {', '.join(ESTIMATE_ACTIONS)}")
    return StatusEstimate(minutes=minutes, action=action)


__all__ = ["build_estimate", "build_location", "require_text", "validate_delivery"]
