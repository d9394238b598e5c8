"""Domain entity representing a marketplace account."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from marketplace.domain.geo import GeoPoint

ROLE_CUSTOMER = "customer"
ROLE_SHOPKEEPER = "shopkeeper"
USER_ROLES = (ROLE_CUSTOMER, ROLE_SHOPKEEPER)


@dataclass
class UserLocation:
    """Last known position reported by the user's device."""

    lat: float
    lng: float
    last_updated: datetime
    address: str | None = None

    def as_point(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng, address=self.address)


@dataclass
class User:
    """Core attributes describing an account.

    ``roles`` is what the account is authorized to do; ``active_role`` is the
    view the client is currently showing and must be one of ``roles``.
    """

    id: int | None
    name: str
    email: str
    active_role: str
    roles: list[str] = field(default_factory=list)
    phone: str | None = None
    location: UserLocation | None = None
    subscriber_id: str | None = None
    push_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def can_act_as(self, role: str) -> bool:
        """Return ``True`` when the account is authorized for ``role``."""

        return role in self.roles

    def is_push_capable(self) -> bool:
        return bool(self.push_enabled and self.subscriber_id)


__all__ = [
    "ROLE_CUSTOMER",
    "ROLE_SHOPKEEPER",
    "USER_ROLES",
    "User",
    "UserLocation",
]
