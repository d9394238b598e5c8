"""Shared fixtures: a throwaway SQLite database and small record factories."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

import pytest

# Ensure the project root (which contains the ``marketplace`` package) is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
for _name in ("ONESIGNAL_APP_ID", "ONESIGNAL_REST_API_KEY", "LOCATION_MAX_AGE_HOURS"):
    os.environ.pop(_name, None)

from marketplace.config import reset_settings_cache  # noqa: E402
from marketplace.domain.entities import ROLE_CUSTOMER, ROLE_SHOPKEEPER  # noqa: E402
from marketplace.domain.errors import DispatchFailed  # noqa: E402
from marketplace.infrastructure.push import PushResponse  # noqa: E402

SHOP_LAT = 12.9716
SHOP_LNG = 77.5946


class FakePushClient:
    """Records every push request instead of calling the provider."""

    def __init__(
        self,
        *,
        response: PushResponse | None = None,
        error: DispatchFailed | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def send(
        self,
        player_ids: Sequence[str],
        *,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> PushResponse:
        self.calls.append(
            {"player_ids": list(player_ids), "title": title, "body": body, "data": dict(data or {})}
        )
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return PushResponse(id="fake-notification", recipients=len(player_ids))


@pytest.fixture(autouse=True)
def database():
    """Recreate every table before each test."""

    from marketplace.infrastructure import database as db_module
    from marketplace.infrastructure import models  # noqa: F401  # register every table

    reset_settings_cache()
    db_module.Base.metadata.drop_all(bind=db_module.engine, checkfirst=True)
    db_module.initialize_database()
    yield db_module
    reset_settings_cache()


@pytest.fixture()
def session(database):
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def fake_push_client():
    """Return the recording client class so tests can configure failures."""

    return FakePushClient


@pytest.fixture()
def push_client() -> FakePushClient:
    return FakePushClient()


@pytest.fixture()
def make_user(session):
    from marketplace.application.use_cases.users import (
        create_user,
        update_push_subscription,
        update_user_location,
    )

    counter = {"value": 0}

    def _make_user(
        *,
        name: str | None = None,
        roles: Sequence[str] = (ROLE_CUSTOMER,),
        lat: float | None = None,
        lng: float | None = None,
        subscriber_id: str | None = None,
        phone: str | None = None,
    ):
        counter["value"] += 1
        number = counter["value"]
        user = create_user(
            session,
            name=name or f"User {number}",
            email=f"user{number}@example.com",
            roles=list(roles),
            phone=phone,
        )
        if lat is not None and lng is not None:
            user = update_user_location(session, user_id=user.id, lat=lat, lng=lng)
        if subscriber_id is not None:
            user = update_push_subscription(
                session, user_id=user.id, subscriber_id=subscriber_id, push_enabled=True
            )
        return user

    return _make_user


@pytest.fixture()
def make_shop(session, make_user):
    from marketplace.application.use_cases.shops import create_shop

    def _make_shop(
        *,
        owner=None,
        lat: float = SHOP_LAT,
        lng: float = SHOP_LNG,
        delivery_enabled: bool = True,
        delivery_range_km: float | None = 5.0,
        name: str = "Corner Store",
    ):
        owner = owner or make_user(name="Owner", roles=[ROLE_SHOPKEEPER])
        return create_shop(
            session,
            owner_id=owner.id,
            name=name,
            category="grocery",
            lat=lat,
            lng=lng,
            is_open=True,
            delivery_enabled=delivery_enabled,
            delivery_range_km=delivery_range_km,
        )

    return _make_shop


@pytest.fixture()
def make_item(session):
    from marketplace.application.use_cases.items import create_item

    def _make_item(shop, *, name: str = "Milk", price: float | None = 2.5, in_stock: bool = True):
        return create_item(session, shop_id=shop.id, name=name, price=price, in_stock=in_stock)

    return _make_item


@pytest.fixture()
def make_order(session, make_user, make_shop, make_item):
    """Place a pickup order, returning ``(order, shop, customer)``."""

    from marketplace.application.use_cases.orders import OrderLine, create_order

    def _make_order(*, shop=None, customer=None, quantity: int = 2):
        shop = shop or make_shop()
        customer = customer or make_user(name="Customer", lat=SHOP_LAT, lng=SHOP_LNG + 0.01)
        item = make_item(shop)
        order = create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=item.id, quantity=quantity)],
            order_type="pickup",
        )
        return order, shop, customer

    return _make_order


@pytest.fixture(scope="session", autouse=True)
def remove_test_database():
    yield
    from marketplace.infrastructure import database as db_module

    db_module.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def client(push_client):
    """Return a test client whose push provider is the recording fake."""

    from fastapi.testclient import TestClient

    from main import create_app
    from marketplace.interfaces.api.dependencies import get_push_client_dependency

    app = create_app()
    app.dependency_overrides[get_push_client_dependency] = lambda: push_client
    with TestClient(app) as test_client:
        yield test_client
