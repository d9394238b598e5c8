import math

import pytest

from marketplace.domain.errors import ValidationError
from marketplace.domain.geo import (
    GeoPoint,
    bounding_box,
    distance_between,
    distance_km,
    round_distance,
)


def test_distance_to_same_point_is_zero():
    assert distance_km(12.9716, 77.5946, 12.9716, 77.5946) == 0.0


def test_distance_is_symmetric():
    forward = distance_km(12.9716, 77.5946, 13.05, 77.6)
    backward = distance_km(13.05, 77.6, 12.9716, 77.5946)

    assert forward == pytest.approx(backward)


def test_one_degree_of_latitude_is_about_111_km():
    assert distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.19, abs=0.01)


def test_distance_between_points_matches_raw_coordinates():
    origin = GeoPoint(lat=40.7128, lng=-74.006)
    destination = GeoPoint(lat=34.0522, lng=-118.2437)

    assert distance_between(origin, destination) == distance_km(
        40.7128, -74.006, 34.0522, -118.2437
    )
    assert distance_between(origin, destination) == pytest.approx(3936, abs=5)


@pytest.mark.parametrize(
    "lat, lng",
    [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_invalid_coordinates_are_rejected(lat, lng):
    with pytest.raises(ValidationError):
        distance_km(lat, lng, 0.0, 0.0)


def test_round_distance_only_affects_presentation():
    assert round_distance(1.08357) == 1.08
    assert round_distance(None) is None


def test_bounding_box_contains_points_on_the_radius():
    lat, lng, radius = 12.9716, 77.5946, 5.0
    box = bounding_box(lat, lng, radius)

    assert box.bounds_longitude
    for bearing in range(0, 360, 15):
        angular = radius / 6371.0
        theta = math.radians(bearing)
        phi1 = math.radians(lat)
        phi2 = math.asin(
            math.sin(phi1) * math.cos(angular)
            + math.cos(phi1) * math.sin(angular) * math.cos(theta)
        )
        lambda2 = math.radians(lng) + math.atan2(
            math.sin(theta) * math.sin(angular) * math.cos(phi1),
            math.cos(angular) - math.sin(phi1) * math.sin(phi2),
        )
        point_lat, point_lng = math.degrees(phi2), math.degrees(lambda2)

        assert box.min_lat <= point_lat <= box.max_lat
        assert box.min_lng <= point_lng <= box.max_lng


def test_bounding_box_drops_longitude_near_the_antimeridian():
    box = bounding_box(0.0, 179.99, 10.0)

    assert not box.bounds_longitude


def test_bounding_box_rejects_negative_radius():
    with pytest.raises(ValidationError):
        bounding_box(0.0, 0.0, -1.0)
