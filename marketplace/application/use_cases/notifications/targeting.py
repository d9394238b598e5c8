"""Select users within a radius of a point."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from marketplace.config import get_settings
from marketplace.domain.entities import UserLocation
from marketplace.domain.geo import bounding_box, distance_km, validate_coordinates
from marketplace.infrastructure.repositories import UserRepository
from marketplace.utils import utc_now


@dataclass(frozen=True)
class NearbyUser:
    """A user whose last known location lies within the requested radius."""

    user_id: int
    subscriber_id: str | None
    location: UserLocation
    distance_km: float


def find_nearby_users(
    session: Session,
    *,
    lat: float,
    lng: float,
    radius_km: float,
    now: datetime | None = None,
) -> list[NearbyUser]:
    """Return every user with a location within ``radius_km`` (inclusive)."""

    return _find(session, lat=lat, lng=lng, radius_km=radius_km, require_push=False, now=now)


def find_push_recipients(
    session: Session,
    *,
    lat: float,
    lng: float,
    radius_km: float,
    now: datetime | None = None,
) -> list[NearbyUser]:
    """Like :func:`find_nearby_users`, restricted to users that accept push."""

    return _find(session, lat=lat, lng=lng, radius_km=radius_km, require_push=True, now=now)


def _find(
    session: Session,
    *,
    lat: float,
    lng: float,
    radius_km: float,
    require_push: bool,
    now: datetime | None,
) -> list[NearbyUser]:
    validate_coordinates(lat, lng)
    box = bounding_box(lat, lng, radius_km)

    updated_after = None
    max_age = get_settings().location_max_age_hours
    if max_age is not None:
        updated_after = (now or utc_now()) - timedelta(hours=max_age)

    candidates = UserRepository(session).list_with_location(
        box, require_push=require_push, updated_after=updated_after
    )

    matches: list[NearbyUser] = []
    for user in candidates:
        location = user.location
        distance = distance_km(lat, lng, location.lat, location.lng)
        if distance <= radius_km:
            matches.append(
                NearbyUser(
                    user_id=user.id,
                    subscriber_id=user.subscriber_id,
                    location=location,
                    distance_km=distance,
                )
            )
    matches.sort(key=lambda match: (match.distance_km, match.user_id))
    return matches


__all__ = ["NearbyUser", "find_nearby_users", "find_push_recipients"]
