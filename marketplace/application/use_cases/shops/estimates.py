"""Expire opening/closing estimates whose time has passed."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from sqlalchemy.orm import Session

from marketplace.infrastructure.repositories import ShopRepository
from marketplace.utils import minutes_between, utc_now

logger = logging.getLogger(__name__)


def clear_expired_estimates(session: Session, *, now: datetime | None = None) -> int:
    """Drop every estimate older than its own duration and return how many were cleared."""

    current = now or utc_now()
    repository = ShopRepository(session)
    cleared = 0
    for shop in repository.list_with_estimate():
        if shop.estimate is None or shop.last_updated is None:
            continue
        if minutes_between(shop.last_updated, current) >= shop.estimate.minutes:
            repository.update(replace(shop, estimate=None), commit=False)
            cleared += 1
    if cleared:
        session.commit()
        logger.info("Cleared %s expired shop estimates", cleared)
    return cleared


__all__ = ["clear_expired_estimates"]
