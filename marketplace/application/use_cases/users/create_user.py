"""Use case for registering users."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from marketplace.domain.entities import ROLE_CUSTOMER, USER_ROLES, User
from marketplace.domain.errors import ValidationError
from marketplace.infrastructure.repositories import UserRepository
from marketplace.utils import utc_now


def normalize_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not normalized or "@" not in normalized:
        raise ValidationError("A valid email address is required")
    return normalized


def validate_roles(roles: Sequence[str], active_role: str) -> list[str]:
    """Return the de-duplicated roles, raising when ``active_role`` is not among them."""

    cleaned = list(dict.fromkeys(roles))
    if not cleaned:
        raise ValidationError("At least one role is required")
    unknown = [role for role in cleaned if role not in USER_ROLES]
    if unknown:
        raise ValidationError(f"Unknown role(s): {', '.join(unknown)}")
    if active_role not in cleaned:
        raise ValidationError("The active role must be one of the user's roles")
    return cleaned


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    roles: Sequence[str] = (ROLE_CUSTOMER,),
    active_role: str | None = None,
    phone: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    if not name or not name.strip():
        raise ValidationError("Name is required")

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if repository.get_by_email(normalized_email):
        raise ValidationError("The email address is already registered")

    role_list = list(roles)
    selected_role = active_role or (role_list[0] if role_list else "")
    role_list = validate_roles(role_list, selected_role)

    now = utc_now()
    user = User(
        id=None,
        name=name.strip(),
        email=normalized_email,
        phone=phone.strip() if phone else None,
        roles=role_list,
        active_role=selected_role,
        created_at=now,
        updated_at=now,
    )
    return repository.create(user)


__all__ = ["create_user", "normalize_email", "validate_roles"]
