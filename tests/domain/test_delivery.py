import pytest

from marketplace.domain.delivery import evaluate
from marketplace.domain.entities import Shop
from marketplace.domain.geo import GeoPoint


def build_shop(**overrides) -> Shop:
    values = {
        "id": 1,
        "owner_id": 1,
        "name": "Corner Store",
        "category": "grocery",
        "location": GeoPoint(lat=12.9716, lng=77.5946),
        "is_open": True,
        "delivery_enabled": True,
        "delivery_range_km": 5.0,
    }
    values.update(overrides)
    return Shop(**values)


def test_customer_inside_the_range_is_eligible():
    evaluation = evaluate(build_shop(), GeoPoint(lat=12.9716, lng=77.6046))

    assert evaluation.delivery_available is True
    assert evaluation.in_range is True
    assert evaluation.eligible is True
    assert evaluation.distance_km == pytest.approx(1.08, abs=0.01)


def test_customer_outside_the_range_is_not_eligible():
    evaluation = evaluate(build_shop(), GeoPoint(lat=13.05, lng=77.6))

    assert evaluation.delivery_available is True
    assert evaluation.in_range is False
    assert evaluation.eligible is False
    assert 8.5 < evaluation.distance_km < 9.5


def test_shop_without_delivery_is_never_available():
    evaluation = evaluate(
        build_shop(delivery_enabled=False), GeoPoint(lat=12.9716, lng=77.5946)
    )

    assert evaluation.delivery_available is False
    assert evaluation.in_range is False
    assert evaluation.distance_km is None


def test_missing_customer_location_fails_closed():
    evaluation = evaluate(build_shop(), None)

    assert evaluation.delivery_available is True
    assert evaluation.in_range is False
    assert evaluation.distance_km is None


def test_missing_shop_location_fails_closed():
    evaluation = evaluate(build_shop(location=None), GeoPoint(lat=12.9716, lng=77.5946))

    assert evaluation.in_range is False
    assert evaluation.eligible is False


def test_range_boundary_is_inclusive():
    customer = GeoPoint(lat=12.9716, lng=77.6046)
    shop = build_shop()
    exact = evaluate(shop, customer).distance_km

    assert evaluate(build_shop(delivery_range_km=exact), customer).in_range is True
    assert evaluate(build_shop(delivery_range_km=exact - 0.01), customer).in_range is False


def test_zero_range_only_reaches_the_shop_itself():
    shop = build_shop(delivery_range_km=0.0)

    assert evaluate(shop, GeoPoint(lat=12.9716, lng=77.5946)).in_range is True
    assert evaluate(shop, GeoPoint(lat=12.9717, lng=77.5946)).in_range is False
