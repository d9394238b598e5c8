"""Fan a notification out to the push provider and the in-app inbox."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from marketplace.domain.entities import DispatchFailure, DispatchResult, Notification, User
from marketplace.domain.errors import DispatchFailed, ValidationError
from marketplace.infrastructure.notifications import dispatch_notification
from marketplace.infrastructure.push import PushClient, get_push_client
from marketplace.infrastructure.repositories import NotificationRepository, UserRepository
from marketplace.utils import utc_now

logger = logging.getLogger(__name__)

FAILURE_RECIPIENT_NOT_FOUND = "recipient-not-found"
FAILURE_PUSH_FAILED = "push-failed"
FAILURE_INVALID_SUBSCRIBER = "invalid-subscriber"
FAILURE_PROVIDER_ERROR = "provider-error"


class NotificationDispatcher:
    """Persist one notification per recipient and push to the capable subset.

    Persistence and push are independent: a push failure is reported in the
    returned :class:`DispatchResult` and never prevents the in-app records
    from being stored. Persistence errors propagate.
    """

    def __init__(self, session: Session, push_client: PushClient | None = None) -> None:
        self.session = session
        self.push_client = push_client if push_client is not None else get_push_client()
        self._users = UserRepository(session)
        self._notifications = NotificationRepository(session)

    def dispatch(
        self,
        recipient_ids: Iterable[int],
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
        *,
        event_type: str,
        shop_id: int | None = None,
        advertisement_id: int | None = None,
    ) -> DispatchResult:
        if not title or not title.strip():
            raise ValidationError("Notification title is required")
        if not body or not body.strip():
            raise ValidationError("Notification body is required")

        result = DispatchResult()
        unique_ids = list(dict.fromkeys(int(recipient_id) for recipient_id in recipient_ids))
        users = self._users.get_map_by_ids(unique_ids)

        targets: list[User] = []
        already_notified = (
            self._notifications.recipients_for_advertisement(advertisement_id)
            if advertisement_id is not None
            else set()
        )
        for recipient_id in unique_ids:
            user = users.get(recipient_id)
            if user is None:
                result.failures.append(
                    DispatchFailure(reason=FAILURE_RECIPIENT_NOT_FOUND, recipient_id=recipient_id)
                )
                continue
            if recipient_id in already_notified:
                result.skipped += 1
                continue
            targets.append(user)

        if not targets:
            return result

        payload = dict(data or {})
        created_at = utc_now()
        saved = self._notifications.create_many(
            Notification(
                id=None,
                recipient_id=user.id,
                event_type=event_type,
                title=title,
                body=body,
                data=payload,
                shop_id=shop_id,
                advertisement_id=advertisement_id,
                created_at=created_at,
            )
            for user in targets
        )
        result.recorded = len(saved)
        for notification in saved:
            dispatch_notification(notification)

        self._push([user for user in targets if user.is_push_capable()], title, body, payload, result)
        logger.info(
            "Dispatched '%s' to %s recipients (recorded=%s, pushed=%s, failures=%s)",
            event_type,
            len(targets),
            result.recorded,
            result.dispatched,
            len(result.failures),
        )
        return result

    def _push(
        self,
        users: list[User],
        title: str,
        body: str,
        data: dict[str, Any],
        result: DispatchResult,
    ) -> None:
        if not users:
            return
        if self.push_client is None:
            logger.info("Push provider not configured; skipping push for %s users", len(users))
            return

        by_subscriber = {user.subscriber_id: user.id for user in users}
        player_ids = list(by_subscriber)
        try:
            response = self.push_client.send(player_ids, title=title, body=body, data=data)
        except DispatchFailed as exc:
            result.failures.append(
                DispatchFailure(
                    reason=FAILURE_PUSH_FAILED,
                    details={
                        "message": str(exc),
                        "status_code": exc.status_code,
                        "payload": exc.payload,
                    },
                )
            )
            return

        invalid = set(response.invalid_player_ids)
        for player_id in invalid:
            result.failures.append(
                DispatchFailure(
                    reason=FAILURE_INVALID_SUBSCRIBER,
                    recipient_id=by_subscriber.get(player_id),
                    details={"subscriber_id": player_id},
                )
            )
        if response.errors and not invalid:
            result.failures.append(
                DispatchFailure(reason=FAILURE_PROVIDER_ERROR, details=response.errors)
            )

        if response.recipients is not None:
            result.dispatched = response.recipients
        else:
            result.dispatched = len([pid for pid in player_ids if pid not in invalid])


__all__ = [
    "FAILURE_INVALID_SUBSCRIBER",
    "FAILURE_PROVIDER_ERROR",
    "FAILURE_PUSH_FAILED",
    "FAILURE_RECIPIENT_NOT_FOUND",
    "NotificationDispatcher",
]
