"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from marketplace.domain.entities import User
from marketplace.infrastructure.database import get_db
from marketplace.infrastructure.push import PushClient, get_push_client
from marketplace.infrastructure.repositories import UserRepository

USER_ID_HEADER = "X-User-Id"


def resolve_current_user(user_id: str | None, db: Session) -> User:
    """Resolve the account forwarded by the identity gateway."""

    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )
    try:
        identifier = int(user_id)
    except (TypeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identity",
        ) from exc

    user = UserRepository(db).get(identifier)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )
    return user


def get_current_user(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
    db: Session = Depends(get_db),
) -> User:
    """Return the user identified by the ``X-User-Id`` header."""

    return resolve_current_user(x_user_id, db)


def get_push_client_dependency() -> PushClient | None:
    """Return the configured push client; overridden in tests."""

    return get_push_client()


__all__ = [
    "USER_ID_HEADER",
    "get_current_user",
    "get_push_client_dependency",
    "resolve_current_user",
]
