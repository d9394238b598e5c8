from datetime import timedelta

import pytest

from marketplace.application.use_cases.advertisements import (
    create_advertisement,
    send_advertisement,
)
from marketplace.application.use_cases.orders import update_order_status
from marketplace.application.use_cases.users import (
    create_user,
    delete_user,
    enable_role,
    get_user,
    switch_active_role,
    update_push_subscription,
    update_user_location,
)
from marketplace.domain.entities import ROLE_CUSTOMER, ROLE_SHOPKEEPER
from marketplace.domain.errors import NotFound, ValidationError
from marketplace.infrastructure.repositories import (
    AdvertisementRepository,
    ItemRepository,
    NotificationRepository,
    OrderRepository,
    ShopRepository,
)
from marketplace.utils import utc_now


def test_create_user_normalizes_email_and_defaults_role(session):
    user = create_user(session, name="  Asha ", email=" Asha@Example.COM ")

    assert user.id is not None
    assert user.name == "Asha"
    assert user.email == "asha@example.com"
    assert user.roles == [ROLE_CUSTOMER]
    assert user.active_role == ROLE_CUSTOMER
    assert user.location is None
    assert user.push_enabled is False


def test_duplicate_email_is_rejected(session):
    create_user(session, name="First", email="same@example.com")

    with pytest.raises(ValidationError):
        create_user(session, name="Second", email="SAME@example.com")


@pytest.mark.parametrize(
    "roles, active_role",
    [([], None), (["admin"], None), ([ROLE_CUSTOMER], ROLE_SHOPKEEPER)],
)
def test_invalid_roles_are_rejected(session, roles, active_role):
    with pytest.raises(ValidationError):
        create_user(
            session,
            name="Someone",
            email="someone@example.com",
            roles=roles,
            active_role=active_role,
        )


def test_active_role_must_be_held(session, make_user):
    user = make_user()

    with pytest.raises(ValidationError):
        switch_active_role(session, user_id=user.id, role=ROLE_SHOPKEEPER)

    enable_role(session, user_id=user.id, role=ROLE_SHOPKEEPER)
    switched = switch_active_role(session, user_id=user.id, role=ROLE_SHOPKEEPER)

    assert switched.active_role == ROLE_SHOPKEEPER
    assert switched.roles == [ROLE_CUSTOMER, ROLE_SHOPKEEPER]


def test_enable_unknown_role_is_rejected(session, make_user):
    user = make_user()

    with pytest.raises(ValidationError):
        enable_role(session, user_id=user.id, role="admin")


def test_location_update_is_stored_with_timestamp(session, make_user):
    user = make_user()

    updated = update_user_location(
        session, user_id=user.id, lat=12.97, lng=77.59, address=" MG Road "
    )

    assert updated.location.lat == 12.97
    assert updated.location.address == "MG Road"
    assert updated.location.last_updated is not None
    assert get_user(session, user.id).location.lng == 77.59


def test_location_timestamp_in_the_future_is_rejected(session, make_user):
    user = make_user()

    with pytest.raises(ValidationError):
        update_user_location(
            session,
            user_id=user.id,
            lat=12.97,
            lng=77.59,
            last_updated=utc_now() + timedelta(hours=1),
        )


def test_location_with_invalid_coordinates_is_rejected(session, make_user):
    user = make_user()

    with pytest.raises(ValidationError):
        update_user_location(session, user_id=user.id, lat=95.0, lng=0.0)


def test_enabling_push_requires_a_subscriber_id(session, make_user):
    user = make_user()

    with pytest.raises(ValidationError):
        update_push_subscription(session, user_id=user.id, subscriber_id="  ", push_enabled=True)

    enabled = update_push_subscription(
        session, user_id=user.id, subscriber_id="player-1", push_enabled=True
    )
    assert enabled.is_push_capable()

    disabled = update_push_subscription(
        session, user_id=user.id, subscriber_id=None, push_enabled=False
    )
    assert disabled.subscriber_id is None
    assert not disabled.is_push_capable()


def test_unknown_user_raises_not_found(session):
    with pytest.raises(NotFound):
        get_user(session, 12345)


def test_delete_user_removes_owned_shops_and_dependents(
    session, make_user, make_shop, make_order, push_client
):
    owner = make_user(name="Owner to delete", roles=[ROLE_SHOPKEEPER])
    shop = make_shop(owner=owner)
    make_user(lat=12.9716, lng=77.5946)
    order, _, customer = make_order(shop=shop)
    advertisement = create_advertisement(session, shop_id=shop.id, message="Half price")
    send_advertisement(
        session, advertisement_id=advertisement.id, radius_km=5, push_client=push_client
    )

    delete_user(session, owner.id)

    with pytest.raises(NotFound):
        get_user(session, owner.id)
    assert ShopRepository(session).get(shop.id) is None
    assert ItemRepository(session).list_by_shop(shop.id) == []
    assert AdvertisementRepository(session).get(advertisement.id) is None
    assert OrderRepository(session).get(order.id) is None
    assert NotificationRepository(session).recipients_for_advertisement(advertisement.id) == set()
    assert get_user(session, customer.id).id == customer.id


def test_delete_customer_removes_their_orders_and_inbox(session, make_order, push_client):
    order, shop, customer = make_order()

    update_order_status(
        session, order_id=order.id, status="rejected", push_client=push_client
    )

    delete_user(session, customer.id)

    assert OrderRepository(session).get(order.id) is None
    assert NotificationRepository(session).list_for_recipient(customer.id) == []
    assert ShopRepository(session).get(shop.id) is not None
