"""Use case for recording the device location of a user."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from marketplace.domain.entities import User, UserLocation
from marketplace.domain.errors import ValidationError
from marketplace.domain.geo import validate_coordinates
from marketplace.infrastructure.repositories import UserRepository
from marketplace.utils import ensure_utc, utc_now

from .get_user import get_user

# Device clocks drift; anything further ahead is rejected.
CLOCK_SKEW_TOLERANCE = timedelta(minutes=1)


def update_user_location(
    session: Session,
    *,
    user_id: int,
    lat: float,
    lng: float,
    address: str | None = None,
    last_updated: datetime | None = None,
) -> User:
    validate_coordinates(lat, lng)
    now = utc_now()
    timestamp = ensure_utc(last_updated) if last_updated is not None else now
    if timestamp > now + CLOCK_SKEW_TOLERANCE:
        raise ValidationError("The location timestamp cannot be in the future")

    user = get_user(session, user_id)
    updated = replace(
        user,
        location=UserLocation(
            lat=float(lat),
            lng=float(lng),
            address=address.strip() if address else None,
            last_updated=timestamp,
        ),
        updated_at=now,
    )
    return UserRepository(session).update(updated)


__all__ = ["update_user_location"]
