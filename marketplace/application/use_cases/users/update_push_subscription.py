"""Use case for storing a user's push notification subscription."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from marketplace.domain.entities import User
from marketplace.domain.errors import ValidationError
from marketplace.infrastructure.repositories import UserRepository
from marketplace.utils import utc_now

from .get_user import get_user


def update_push_subscription(
    session: Session,
    *,
    user_id: int,
    subscriber_id: str | None,
    push_enabled: bool,
) -> User:
    """Store the provider subscriber id; enabling push requires one."""

    cleaned = subscriber_id.strip() if subscriber_id else None
    if push_enabled and not cleaned:
        raise ValidationError("A subscriber id is required to enable push notifications")

    user = get_user(session, user_id)
    updated = replace(
        user,
        subscriber_id=cleaned or None,
        push_enabled=bool(push_enabled),
        updated_at=utc_now(),
    )
    return UserRepository(session).update(updated)


__all__ = ["update_push_subscription"]
