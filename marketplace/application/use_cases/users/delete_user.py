"""Use case for deleting a user and everything that depends on the account."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.infrastructure.repositories import (
    AdvertisementRepository,
    ItemRepository,
    NotificationRepository,
    OrderRepository,
    ShopRepository,
    UserRepository,
)

from .get_user import get_user

logger = logging.getLogger(__name__)


def purge_shop(session: Session, shop_id: int) -> None:
    """Stage the deletion of ``shop_id`` and its dependents without committing."""

    notifications = NotificationRepository(session)
    advertisements = AdvertisementRepository(session)
    for advertisement_id in advertisements.list_ids_by_shop(shop_id):
        notifications.delete_by_advertisement(advertisement_id, commit=False)
    notifications.delete_by_shop(shop_id, commit=False)
    advertisements.delete_by_shop(shop_id, commit=False)
    OrderRepository(session).delete_by_shop(shop_id, commit=False)
    ItemRepository(session).delete_by_shop(shop_id, commit=False)
    ShopRepository(session).delete(shop_id, commit=False)


def delete_user(session: Session, user_id: int) -> None:
    """Delete the specified user, owned shops, orders and notifications in one transaction."""

    get_user(session, user_id)

    try:
        for shop in ShopRepository(session).list_by_owner(user_id):
            purge_shop(session, shop.id)
        NotificationRepository(session).delete_by_recipient(user_id, commit=False)
        OrderRepository(session).delete_by_customer(user_id, commit=False)
        UserRepository(session).delete(user_id, commit=False)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to delete user %s", user_id)
        raise
    logger.info("Deleted user %s and dependent records", user_id)


__all__ = ["delete_user", "purge_shop"]
