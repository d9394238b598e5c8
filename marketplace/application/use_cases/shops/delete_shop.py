"""Use case for removing a shop."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.domain.errors import ValidationError
from marketplace.infrastructure.repositories import OrderRepository

from ..users.delete_user import purge_shop
from .queries import get_shop

logger = logging.getLogger(__name__)


def delete_shop(session: Session, shop_id: int) -> None:
    """Delete the shop with its items and advertisements.

    Orders are independent ledger entries, so a shop that has any is kept.
    """

    get_shop(session, shop_id)
    if OrderRepository(session).exists_for_shop(shop_id):
        raise ValidationError("Shops with orders cannot be deleted")

    try:
        purge_shop(session, shop_id)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to delete shop %s", shop_id)
        raise
    logger.info("Deleted shop %s", shop_id)


__all__ = ["delete_shop"]
