"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from marketplace.domain.entities import User
from marketplace.domain.errors import NotFound
from marketplace.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the user identified by ``user_id`` or raise :class:`NotFound`."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFound("User", user_id)
    return user


__all__ = ["get_user"]
