"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from marketplace.domain.entities import User, UserLocation
from marketplace.domain.geo import BoundingBox
from marketplace.infrastructure.models import UserModel
from marketplace.utils import ensure_utc, to_storage_datetime


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email)
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def list_with_location(
        self,
        box: BoundingBox | None = None,
        *,
        require_push: bool = False,
        updated_after: datetime | None = None,
    ) -> Sequence[User]:
        """Return users with a known location, optionally inside ``box``.

        The box is only a coarse pre-filter; callers must still apply the
        exact distance check.
        """

        query = (
            self.session.query(UserModel)
            .filter(UserModel.location_lat.is_not(None))
            .filter(UserModel.location_lng.is_not(None))
        )
        if box is not None:
            query = query.filter(UserModel.location_lat.between(box.min_lat, box.max_lat))
            if box.bounds_longitude:
                query = query.filter(
                    UserModel.location_lng.between(box.min_lng, box.max_lng)
                )
        if require_push:
            query = (
                query.filter(UserModel.push_enabled.is_(True))
                .filter(UserModel.subscriber_id.is_not(None))
                .filter(UserModel.subscriber_id != "")
            )
        if updated_after is not None:
            query = query.filter(
                UserModel.location_updated_at >= to_storage_datetime(updated_after)
            )
        return [self._to_entity(model) for model in query.order_by(UserModel.id).all()]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if model is None:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int, *, commit: bool = True) -> None:
        self.session.query(UserModel).filter(UserModel.id == user_id).delete(
            synchronize_session=False
        )
        if commit:
            self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        location = None
        if model.location_lat is not None and model.location_lng is not None:
            location = UserLocation(
                lat=model.location_lat,
                lng=model.location_lng,
                address=model.location_address,
                last_updated=ensure_utc(model.location_updated_at),
            )
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            roles=list(model.roles or []),
            active_role=model.active_role,
            location=location,
            subscriber_id=model.subscriber_id,
            push_enabled=bool(model.push_enabled),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.created_at = to_storage_datetime(user.created_at)
        model.name = user.name
        model.email = user.email
        model.phone = user.phone
        model.roles = list(user.roles)
        model.active_role = user.active_role
        if user.location is None:
            model.location_lat = None
            model.location_lng = None
            model.location_address = None
            model.location_updated_at = None
        else:
            model.location_lat = user.location.lat
            model.location_lng = user.location.lng
            model.location_address = user.location.address
            model.location_updated_at = to_storage_datetime(user.location.last_updated)
        model.subscriber_id = user.subscriber_id
        model.push_enabled = user.push_enabled
        model.updated_at = to_storage_datetime(user.updated_at)


__all__ = ["UserRepository"]
