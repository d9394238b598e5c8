from datetime import timedelta

import pytest

from marketplace.application.use_cases.notifications import (
    NotificationDispatcher,
    broadcast_nearby,
    find_nearby_users,
    find_push_recipients,
    list_notifications,
    mark_notifications_read,
)
from marketplace.application.use_cases.users import update_user_location
from marketplace.domain.errors import DispatchFailed, NotFound, ValidationError
from marketplace.domain.geo import distance_km
from marketplace.infrastructure.push import PushResponse
from marketplace.infrastructure.repositories import NotificationRepository
from marketplace.utils import utc_now

SHOP_LAT = 12.9716
SHOP_LNG = 77.5946


def test_radius_boundary_is_inclusive(session, make_user):
    user = make_user(lat=SHOP_LAT + 0.03, lng=SHOP_LNG)
    exact = distance_km(SHOP_LAT, SHOP_LNG, SHOP_LAT + 0.03, SHOP_LNG)

    included = find_nearby_users(session, lat=SHOP_LAT, lng=SHOP_LNG, radius_km=exact)
    excluded = find_nearby_users(session, lat=SHOP_LAT, lng=SHOP_LNG, radius_km=exact - 0.01)

    assert [match.user_id for match in included] == [user.id]
    assert excluded == []


def test_nearby_users_are_sorted_by_distance(session, make_user):
    far = make_user(lat=SHOP_LAT + 0.02, lng=SHOP_LNG)
    near = make_user(lat=SHOP_LAT + 0.01, lng=SHOP_LNG)
    make_user(lat=SHOP_LAT + 1.0, lng=SHOP_LNG)
    make_user()

    matches = find_nearby_users(session, lat=SHOP_LAT, lng=SHOP_LNG, radius_km=5)

    assert [match.user_id for match in matches] == [near.id, far.id]
    assert matches[0].distance_km < matches[1].distance_km


def test_push_recipients_require_an_enabled_subscription(session, make_user):
    subscribed = make_user(lat=SHOP_LAT, lng=SHOP_LNG, subscriber_id="player-1")
    make_user(lat=SHOP_LAT, lng=SHOP_LNG)

    matches = find_push_recipients(session, lat=SHOP_LAT, lng=SHOP_LNG, radius_km=1)

    assert [(match.user_id, match.subscriber_id) for match in matches] == [
        (subscribed.id, "player-1")
    ]


def test_stale_locations_are_ignored_when_configured(session, make_user, monkeypatch):
    from marketplace.config import reset_settings_cache

    fresh = make_user(lat=SHOP_LAT, lng=SHOP_LNG)
    stale = make_user()
    update_user_location(
        session,
        user_id=stale.id,
        lat=SHOP_LAT,
        lng=SHOP_LNG,
        last_updated=utc_now() - timedelta(hours=48),
    )

    everyone = find_nearby_users(session, lat=SHOP_LAT, lng=SHOP_LNG, radius_km=1)
    assert {match.user_id for match in everyone} == {fresh.id, stale.id}

    monkeypatch.setenv("LOCATION_MAX_AGE_HOURS", "24")
    reset_settings_cache()
    recent = find_nearby_users(session, lat=SHOP_LAT, lng=SHOP_LNG, radius_km=1)
    assert [match.user_id for match in recent] == [fresh.id]


def test_targeting_rejects_invalid_coordinates(session):
    with pytest.raises(ValidationError):
        find_nearby_users(session, lat=120.0, lng=0.0, radius_km=1)


def test_dispatch_records_and_pushes(session, make_user, push_client):
    pushable = make_user(subscriber_id="player-1")
    inbox_only = make_user()

    result = NotificationDispatcher(session, push_client).dispatch(
        [pushable.id, inbox_only.id, pushable.id],
        "Hello",
        "Fresh bread",
        {"kind": "test"},
        event_type="test.event",
    )

    assert result.recorded == 2
    assert result.dispatched == 1
    assert result.failures == []
    assert result.succeeded
    assert push_client.calls == [
        {"player_ids": ["player-1"], "title": "Hello", "body": "Fresh bread", "data": {"kind": "test"}}
    ]
    stored = NotificationRepository(session).list_for_recipient(inbox_only.id)
    assert stored[0].data == {"kind": "test"}
    assert stored[0].event_type == "test.event"


def test_dispatch_reports_unknown_recipients(session, make_user, push_client):
    user = make_user()

    result = NotificationDispatcher(session, push_client).dispatch(
        [user.id, 4242], "Hello", "Body", event_type="test.event"
    )

    assert result.recorded == 1
    assert [(failure.reason, failure.recipient_id) for failure in result.failures] == [
        ("recipient-not-found", 4242)
    ]


def test_push_failure_keeps_inbox_records(session, make_user, fake_push_client):
    users = [make_user(subscriber_id=f"player-{index}") for index in range(3)]
    failing = fake_push_client(
        error=DispatchFailed("rejected", status_code=400, payload={"errors": ["bad"]})
    )

    result = NotificationDispatcher(session, failing).dispatch(
        [user.id for user in users], "Hello", "Body", event_type="test.event"
    )

    assert result.recorded == 3
    assert result.dispatched == 0
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.reason == "push-failed"
    assert failure.details["status_code"] == 400
    assert failure.details["payload"] == {"errors": ["bad"]}
    for user in users:
        assert len(NotificationRepository(session).list_for_recipient(user.id)) == 1


def test_invalid_subscribers_are_reported_per_recipient(session, make_user, fake_push_client):
    good = make_user(subscriber_id="player-good")
    bad = make_user(subscriber_id="player-bad")
    client = fake_push_client(
        response=PushResponse(
            id="n-1",
            recipients=1,
            errors={"invalid_player_ids": ["player-bad"]},
            invalid_player_ids=["player-bad"],
        )
    )

    result = NotificationDispatcher(session, client).dispatch(
        [good.id, bad.id], "Hello", "Body", event_type="test.event"
    )

    assert result.dispatched == 1
    assert [(f.reason, f.recipient_id) for f in result.failures] == [
        ("invalid-subscriber", bad.id)
    ]


def test_dispatch_without_push_provider_only_records(session, make_user):
    user = make_user(subscriber_id="player-1")

    dispatcher = NotificationDispatcher(session)
    result = dispatcher.dispatch([user.id], "Hello", "Body", event_type="test.event")

    assert dispatcher.push_client is None
    assert result.recorded == 1
    assert result.dispatched == 0
    assert result.failures == []


@pytest.mark.parametrize("title, body", [("", "Body"), ("Title", "   ")])
def test_dispatch_requires_title_and_body(session, make_user, push_client, title, body):
    user = make_user()

    with pytest.raises(ValidationError):
        NotificationDispatcher(session, push_client).dispatch(
            [user.id], title, body, event_type="test.event"
        )


def test_broadcast_reaches_only_users_in_range(session, make_shop, make_user, push_client):
    shop = make_shop()
    first = make_user(lat=SHOP_LAT + 0.01, lng=SHOP_LNG, subscriber_id="player-1")
    second = make_user(lat=SHOP_LAT, lng=SHOP_LNG + 0.02, subscriber_id="player-2")
    outside = make_user(lat=SHOP_LAT + 0.5, lng=SHOP_LNG, subscriber_id="player-3")

    result = broadcast_nearby(
        session,
        shop_id=shop.id,
        radius_km=5,
        title="Flash sale",
        body="Everything 10% off",
        push_client=push_client,
    )

    assert len(push_client.calls) == 1
    assert sorted(push_client.calls[0]["player_ids"]) == ["player-1", "player-2"]
    assert push_client.calls[0]["data"] == {"shop_id": shop.id, "shop_name": shop.name}
    assert result.dispatched == 2
    assert result.recorded == 2
    repository = NotificationRepository(session)
    assert len(repository.list_for_recipient(first.id)) == 1
    assert len(repository.list_for_recipient(second.id)) == 1
    assert repository.list_for_recipient(outside.id) == []


def test_broadcast_from_unknown_shop(session, push_client):
    with pytest.raises(NotFound):
        broadcast_nearby(
            session, shop_id=77, radius_km=5, title="Hi", body="There", push_client=push_client
        )


def test_inbox_listing_and_marking_read(session, make_user, push_client):
    user = make_user()
    other = make_user()
    dispatcher = NotificationDispatcher(session, push_client)
    dispatcher.dispatch([user.id], "First", "One", event_type="test.event")
    dispatcher.dispatch([user.id], "Second", "Two", event_type="test.event")

    notifications = list_notifications(session, recipient_id=user.id)
    assert [n.title for n in notifications] == ["Second", "First"]

    assert mark_notifications_read(
        session, recipient_id=other.id, notification_ids=[notifications[0].id]
    ) == 0
    assert mark_notifications_read(
        session, recipient_id=user.id, notification_ids=[notifications[0].id]
    ) == 1

    unread = list_notifications(session, recipient_id=user.id, unread_only=True)
    assert [n.title for n in unread] == ["First"]


@pytest.mark.parametrize("limit", [0, 201])
def test_inbox_limit_is_bounded(session, make_user, limit):
    user = make_user()

    with pytest.raises(ValidationError):
        list_notifications(session, recipient_id=user.id, limit=limit)
