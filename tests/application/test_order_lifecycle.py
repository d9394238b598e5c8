import pytest

from marketplace.application.use_cases.orders import (
    OrderLine,
    cancel_order,
    create_order,
    get_customer_orders,
    get_order,
    get_owner_order_history,
    get_pending_orders_count,
    get_shop_order_history,
    get_shop_orders,
    update_order_status,
)
from marketplace.domain.entities import ROLE_SHOPKEEPER
from marketplace.domain.errors import (
    DeliveryIneligible,
    DispatchFailed,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from marketplace.domain.geo import GeoPoint
from marketplace.domain.order_status import ORDER_STATUSES
from marketplace.infrastructure.repositories import NotificationRepository, OrderRepository
from marketplace.utils import utc_now

SHOP_LAT = 12.9716
SHOP_LNG = 77.5946

LEGAL = {
    ("pending", "confirmed"),
    ("pending", "rejected"),
    ("pending", "cancelled"),
    ("confirmed", "confirmed"),
    ("confirmed", "completed"),
    ("confirmed", "rejected"),
    ("confirmed", "cancelled"),
}


def _force_status(session, order_id: int, status: str) -> None:
    if status == "pending":
        return
    repository = OrderRepository(session)
    if status == "completed":
        assert repository.apply_transition(
            order_id, expected_status="pending", new_status="confirmed", updated_at=utc_now()
        )
        assert repository.apply_transition(
            order_id, expected_status="confirmed", new_status="completed", updated_at=utc_now()
        )
        return
    assert repository.apply_transition(
        order_id, expected_status="pending", new_status=status, updated_at=utc_now()
    )


def test_create_order_snapshots_items_and_totals(session, make_shop, make_item, make_user):
    shop = make_shop()
    customer = make_user(name="Asha", phone="555-0100")
    milk = make_item(shop, name="Milk", price=2.5)
    bread = make_item(shop, name="Bread", price=1.25)

    order = create_order(
        session,
        shop_id=shop.id,
        customer_id=customer.id,
        items=[OrderLine(item_id=milk.id, quantity=2), OrderLine(item_id=bread.id, quantity=3)],
        order_type="pickup",
        customer_notes="  ring the bell  ",
    )

    assert order.status == "pending"
    assert order.total_amount == 8.75
    assert [(line.name, line.quantity, line.unit_price) for line in order.items] == [
        ("Milk", 2, 2.5),
        ("Bread", 3, 1.25),
    ]
    assert order.customer_name == "Asha"
    assert order.customer_contact == "555-0100"
    assert order.customer_notes == "ring the bell"
    assert get_order(session, order.id).items[1].name == "Bread"


def test_create_order_validates_inventory(session, make_shop, make_item, make_user):
    shop = make_shop()
    other_shop = make_shop(name="Elsewhere")
    customer = make_user()
    foreign = make_item(other_shop)
    sold_out = make_item(shop, name="Eggs", in_stock=False)
    item = make_item(shop)

    with pytest.raises(ValidationError):
        create_order(session, shop_id=shop.id, customer_id=customer.id, items=[], order_type="pickup")
    with pytest.raises(ValidationError):
        create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=item.id, quantity=0)],
            order_type="pickup",
        )
    with pytest.raises(NotFound):
        create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=foreign.id, quantity=1)],
            order_type="pickup",
        )
    with pytest.raises(ValidationError):
        create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=sold_out.id, quantity=1)],
            order_type="pickup",
        )


def test_delivery_order_outside_range_is_refused(session, make_shop, make_item, make_user):
    shop = make_shop()
    item = make_item(shop)
    customer = make_user(lat=13.05, lng=77.6)

    with pytest.raises(DeliveryIneligible) as excinfo:
        create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=item.id, quantity=1)],
        )

    assert excinfo.value.evaluation.in_range is False
    assert OrderRepository(session).exists_for_shop(shop.id) is False


def test_delivery_order_uses_stored_customer_location(session, make_shop, make_item, make_user):
    shop = make_shop()
    item = make_item(shop)
    customer = make_user(lat=SHOP_LAT, lng=SHOP_LNG + 0.01)

    order = create_order(
        session,
        shop_id=shop.id,
        customer_id=customer.id,
        items=[OrderLine(item_id=item.id, quantity=1)],
    )

    assert order.order_type == "delivery"
    assert order.delivery_location.lat == pytest.approx(SHOP_LAT)


def test_delivery_order_without_any_location_is_refused(session, make_shop, make_item, make_user):
    shop = make_shop()
    item = make_item(shop)
    customer = make_user()

    with pytest.raises(DeliveryIneligible):
        create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=item.id, quantity=1)],
        )


def test_delivery_to_shop_without_delivery_is_refused(session, make_shop, make_item, make_user):
    shop = make_shop(delivery_enabled=False, delivery_range_km=None)
    item = make_item(shop)
    customer = make_user()

    with pytest.raises(DeliveryIneligible) as excinfo:
        create_order(
            session,
            shop_id=shop.id,
            customer_id=customer.id,
            items=[OrderLine(item_id=item.id, quantity=1)],
            delivery_location=GeoPoint(lat=SHOP_LAT, lng=SHOP_LNG),
        )

    assert excinfo.value.evaluation.delivery_available is False


def test_confirm_complete_then_reject_is_refused(session, make_order, push_client):
    order, _, _ = make_order()

    confirmed = update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=15, push_client=push_client
    )
    assert confirmed.order.status == "confirmed"
    assert confirmed.order.estimate_minutes == 15

    completed = update_order_status(
        session, order_id=order.id, status="completed", push_client=push_client
    )
    assert completed.order.status == "completed"

    with pytest.raises(InvalidTransition):
        update_order_status(
            session, order_id=order.id, status="rejected", push_client=push_client
        )
    assert get_order(session, order.id).status == "completed"


def test_reconfirming_is_idempotent_and_updates_the_estimate(session, make_order, push_client):
    order, _, customer = make_order()

    update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=20, push_client=push_client
    )
    again = update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=20, push_client=push_client
    )
    changed = update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=30, push_client=push_client
    )

    assert again.order.status == "confirmed"
    assert again.order.estimate_minutes == 20
    assert changed.order.estimate_minutes == 30
    titles = [n.title for n in NotificationRepository(session).list_for_recipient(customer.id)]
    assert titles.count("Order confirmed") == 1
    assert titles.count("Delivery time updated") == 2


@pytest.mark.parametrize("current", ORDER_STATUSES)
@pytest.mark.parametrize("requested", ORDER_STATUSES)
def test_every_transition_is_applied_or_refused_without_change(
    session, make_order, push_client, current, requested
):
    order, _, _ = make_order()
    _force_status(session, order.id, current)

    if (current, requested) in LEGAL:
        result = update_order_status(
            session,
            order_id=order.id,
            status=requested,
            estimate_minutes=10,
            push_client=push_client,
        )
        assert result.order.status == requested
    else:
        with pytest.raises(InvalidTransition):
            update_order_status(
                session,
                order_id=order.id,
                status=requested,
                estimate_minutes=10,
                push_client=push_client,
            )
        assert get_order(session, order.id).status == current


def test_rejection_reason_is_stored_and_sent(session, make_order, push_client):
    order, _, customer = make_order()

    result = update_order_status(
        session,
        order_id=order.id,
        status="rejected",
        rejection_reason="Out of delivery staff",
        push_client=push_client,
    )

    assert result.order.rejection_reason == "Out of delivery staff"
    inbox = NotificationRepository(session).list_for_recipient(customer.id)
    assert inbox[0].title == "Order rejected"
    assert "Out of delivery staff" in inbox[0].body
    assert inbox[0].data["status"] == "rejected"


def test_cancel_notifies_the_shop_owner(session, make_order, push_client):
    order, shop, customer = make_order()

    result = cancel_order(session, order_id=order.id, push_client=push_client)

    assert result.order.status == "cancelled"
    owner_inbox = NotificationRepository(session).list_for_recipient(shop.owner_id)
    assert [n.title for n in owner_inbox] == ["Order cancelled"]
    assert NotificationRepository(session).list_for_recipient(customer.id) == []


def test_customer_confirming_receipt_notifies_the_shop_owner(session, make_order, push_client):
    order, shop, customer = make_order()
    update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=10, push_client=push_client
    )

    result = update_order_status(
        session,
        order_id=order.id,
        status="completed",
        actor_id=customer.id,
        push_client=push_client,
    )

    assert result.order.status == "completed"
    assert result.notification.recorded == 1
    owner_inbox = NotificationRepository(session).list_for_recipient(shop.owner_id)
    assert [n.title for n in owner_inbox] == ["Order received"]
    customer_titles = [
        n.title for n in NotificationRepository(session).list_for_recipient(customer.id)
    ]
    assert customer_titles == ["Order confirmed"]


def test_owner_completing_notifies_the_customer(session, make_order, push_client):
    order, shop, customer = make_order()
    update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=10, push_client=push_client
    )

    update_order_status(
        session,
        order_id=order.id,
        status="completed",
        actor_id=shop.owner_id,
        push_client=push_client,
    )

    customer_inbox = NotificationRepository(session).list_for_recipient(customer.id)
    assert "Order completed" in [n.title for n in customer_inbox]
    assert NotificationRepository(session).list_for_recipient(shop.owner_id) == []


def test_stale_conditional_update_writes_nothing(session, make_order):
    order, _, _ = make_order()
    repository = OrderRepository(session)

    assert repository.apply_transition(
        order.id,
        expected_status="pending",
        new_status="confirmed",
        updated_at=utc_now(),
        estimate_minutes=5,
    )
    assert not repository.apply_transition(
        order.id, expected_status="pending", new_status="rejected", updated_at=utc_now()
    )
    assert repository.get(order.id).status == "confirmed"


def test_transition_rechecks_after_a_concurrent_change(session, make_order, monkeypatch):
    order, _, _ = make_order()
    original = OrderRepository.apply_transition
    raced = {"done": False}

    def racing(self, order_id, **kwargs):
        if not raced["done"]:
            raced["done"] = True
            original(
                self,
                order_id,
                expected_status="pending",
                new_status="cancelled",
                updated_at=utc_now(),
            )
        return original(self, order_id, **kwargs)

    monkeypatch.setattr(OrderRepository, "apply_transition", racing)

    with pytest.raises(InvalidTransition) as excinfo:
        update_order_status(session, order_id=order.id, status="confirmed", estimate_minutes=10)

    assert excinfo.value.current == "cancelled"
    assert get_order(session, order.id).status == "cancelled"


def test_missing_order_raises_not_found(session):
    with pytest.raises(NotFound):
        update_order_status(session, order_id=999, status="cancelled")


def test_push_failure_does_not_undo_the_transition(
    session, make_order, make_user, fake_push_client
):
    order, shop, customer = make_order(
        customer=make_user(name="Push user", subscriber_id="player-1")
    )
    failing = fake_push_client(error=DispatchFailed("boom", status_code=500))

    result = update_order_status(
        session, order_id=order.id, status="confirmed", estimate_minutes=5, push_client=failing
    )

    assert result.order.status == "confirmed"
    assert result.notification.recorded == 1
    assert result.notification.failures[0].reason == "push-failed"
    assert failing.calls[0]["player_ids"] == ["player-1"]


def test_views_and_pending_count(session, make_order, make_shop, make_user, push_client):
    shop = make_shop()
    customer = make_user(name="Regular")
    pending, _, _ = make_order(shop=shop, customer=customer)
    confirmed, _, _ = make_order(shop=shop, customer=customer)
    completed, _, _ = make_order(shop=shop, customer=customer)
    cancelled, _, _ = make_order(shop=shop, customer=customer)
    rejected, _, _ = make_order(shop=shop, customer=customer)

    update_order_status(
        session, order_id=confirmed.id, status="confirmed", estimate_minutes=5, push_client=push_client
    )
    update_order_status(
        session, order_id=completed.id, status="confirmed", estimate_minutes=5, push_client=push_client
    )
    update_order_status(
        session, order_id=completed.id, status="completed", push_client=push_client
    )
    cancel_order(session, order_id=cancelled.id, push_client=push_client)
    update_order_status(
        session, order_id=rejected.id, status="rejected", push_client=push_client
    )

    assert {o.id for o in get_shop_orders(session, shop_id=shop.id)} == {pending.id, confirmed.id}
    assert {o.id for o in get_customer_orders(session, customer_id=customer.id)} == {
        pending.id,
        confirmed.id,
        completed.id,
        rejected.id,
    }
    assert {o.id for o in get_shop_order_history(session, shop_id=shop.id)} == {
        completed.id,
        rejected.id,
    }
    assert {o.id for o in get_owner_order_history(session, owner_id=shop.owner_id)} == {
        completed.id,
        rejected.id,
        cancelled.id,
    }
    assert get_pending_orders_count(session, shop_id=shop.id) == 1
    assert len(get_shop_orders(session, shop_id=shop.id, active_only=False)) == 5


def test_owner_history_spans_every_shop(session, make_order, make_shop, make_user, push_client):
    owner = make_user(name="Chain owner", roles=[ROLE_SHOPKEEPER])
    first = make_shop(owner=owner, name="First")
    second = make_shop(owner=owner, name="Second")
    order_a, _, _ = make_order(shop=first)
    order_b, _, _ = make_order(shop=second)
    cancel_order(session, order_id=order_a.id, push_client=push_client)
    cancel_order(session, order_id=order_b.id, push_client=push_client)

    history = get_owner_order_history(session, owner_id=owner.id)

    assert {order.id for order in history} == {order_a.id, order_b.id}
