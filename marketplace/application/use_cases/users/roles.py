"""Use cases for the roles a user may act as."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from marketplace.domain.entities import USER_ROLES, User
from marketplace.domain.errors import ValidationError
from marketplace.infrastructure.repositories import UserRepository
from marketplace.utils import utc_now

from .get_user import get_user


def switch_active_role(session: Session, *, user_id: int, role: str) -> User:
    """Persist ``role`` as the view the user is working in.

    Only roles the account already holds may be activated.
    """

    user = get_user(session, user_id)
    if not user.can_act_as(role):
        raise ValidationError(f"The user is not authorized to act as '{role}'")
    if user.active_role == role:
        return user
    return UserRepository(session).update(replace(user, active_role=role, updated_at=utc_now()))


def enable_role(session: Session, *, user_id: int, role: str) -> User:
    """Add ``role`` to the roles the user holds, without activating it."""

    if role not in USER_ROLES:
        raise ValidationError(f"Unknown role '{role}'")
    user = get_user(session, user_id)
    if user.can_act_as(role):
        return user
    return UserRepository(session).update(
        replace(user, roles=[*user.roles, role], updated_at=utc_now())
    )


__all__ = ["enable_role", "switch_active_role"]
