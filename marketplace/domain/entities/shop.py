"""Domain entity representing a shop published by a shopkeeper."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from marketplace.domain.geo import GeoPoint

ESTIMATE_OPENING = "opening"
ESTIMATE_CLOSING = "closing"
ESTIMATE_ACTIONS = (ESTIMATE_OPENING, ESTIMATE_CLOSING)


@dataclass
class StatusEstimate:
    """Expected time until the shop opens or closes."""

    minutes: int
    action: str


@dataclass
class Shop:
    """Shop profile, open status and delivery configuration."""

    id: int | None
    owner_id: int
    name: str
    category: str
    location: GeoPoint | None
    is_open: bool
    estimate: StatusEstimate | None = None
    delivery_enabled: bool = False
    delivery_range_km: float | None = None
    mobile_number: str | None = None
    last_updated: datetime | None = None
    created_at: datetime | None = None


__all__ = [
    "ESTIMATE_ACTIONS",
    "ESTIMATE_CLOSING",
    "ESTIMATE_OPENING",
    "Shop",
    "StatusEstimate",
]
