"""Great-circle distance helpers shared by delivery checks and targeting."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import ValidationError

EARTH_RADIUS_KM = 6371.0
# Padding added to bounding boxes so points exactly on the radius survive
# floating point error in the pre-filter.
_BOX_PADDING_DEGREES = 1e-9


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair with an optional human readable address."""

    lat: float
    lng: float
    address: str | None = None


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle in degrees containing every point within a radius.

    ``min_lng``/``max_lng`` are ``None`` when the circle wraps the antimeridian
    or reaches a pole, in which case only the latitude band applies.
    """

    min_lat: float
    max_lat: float
    min_lng: float | None
    max_lng: float | None

    @property
    def bounds_longitude(self) -> bool:
        return self.min_lng is not None and self.max_lng is not None


def validate_coordinates(lat: float, lng: float) -> None:
    """Raise :class:`ValidationError` unless ``lat``/``lng`` are usable coordinates."""

    for name, value in (("latitude", lat), ("longitude", lng)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{name} must be a number")
        if not math.isfinite(value):
            raise ValidationError(f"{name} must be finite")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("latitude must be between -90 and 90")
    if not -180.0 <= lng <= 180.0:
        raise ValidationError("longitude must be between -180 and 180")


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the Haversine distance in kilometres between two points.

    The value is not rounded; callers compare against it directly and only
    round with :func:`round_distance` when presenting it.
    """

    validate_coordinates(lat1, lng1)
    validate_coordinates(lat2, lng2)

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(origin: GeoPoint, destination: GeoPoint) -> float:
    """Return :func:`distance_km` for two :class:`GeoPoint` values."""

    return distance_km(origin.lat, origin.lng, destination.lat, destination.lng)


def round_distance(value: float | None) -> float | None:
    """Round ``value`` to two decimals for display."""

    if value is None:
        return None
    return round(value, 2)


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox:
    """Return a box that contains every point within ``radius_km`` of ``lat``/``lng``."""

    validate_coordinates(lat, lng)
    if not math.isfinite(radius_km) or radius_km < 0:
        raise ValidationError("radius must be a non-negative number")

    angular = radius_km / EARTH_RADIUS_KM
    d_lat = math.degrees(angular) + _BOX_PADDING_DEGREES
    min_lat = lat - d_lat
    max_lat = lat + d_lat

    if min_lat <= -90.0 or max_lat >= 90.0 or angular >= math.pi / 2:
        return BoundingBox(
            min_lat=max(min_lat, -90.0),
            max_lat=min(max_lat, 90.0),
            min_lng=None,
            max_lng=None,
        )

    ratio = math.sin(angular) / math.cos(math.radians(lat))
    if ratio >= 1.0:
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=None, max_lng=None)

    d_lng = math.degrees(math.asin(ratio)) + _BOX_PADDING_DEGREES
    min_lng = lng - d_lng
    max_lng = lng + d_lng
    if min_lng < -180.0 or max_lng > 180.0:
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=None, max_lng=None)

    return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)


__all__ = [
    "EARTH_RADIUS_KM",
    "BoundingBox",
    "GeoPoint",
    "bounding_box",
    "distance_between",
    "distance_km",
    "round_distance",
    "validate_coordinates",
]
