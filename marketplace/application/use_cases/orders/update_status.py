"""Use cases that move an order through its lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.domain.entities import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_REJECTED,
    DispatchResult,
    Order,
)
from marketplace.domain.errors import InvalidTransition, NotFound
from marketplace.domain.order_status import ensure_known_status, validate_transition
from marketplace.infrastructure.push import PushClient
from marketplace.infrastructure.repositories import OrderRepository, ShopRepository
from marketplace.utils import utc_now

from ..notifications.events import notify_order_status_changed, publish_order_event

logger = logging.getLogger(__name__)

# Attempts at the conditional update before a concurrent writer wins.
MAX_TRANSITION_ATTEMPTS = 3


@dataclass
class OrderTransitionResult:
    """The order after the change and the outcome of notifying the other party."""

    order: Order
    notification: DispatchResult | None = None


def _apply(
    repository: OrderRepository,
    *,
    order_id: int,
    status: str,
    estimate_minutes: int | None,
    rejection_reason: str | None,
) -> str:
    """Apply the transition and return the status it was applied from."""

    for _ in range(MAX_TRANSITION_ATTEMPTS):
        order = repository.get(order_id)
        if order is None:
            raise NotFound("Order", order_id)
        validate_transition(order.status, status, estimate_minutes=estimate_minutes)
        applied = repository.apply_transition(
            order_id,
            expected_status=order.status,
            new_status=status,
            updated_at=utc_now(),
            estimate_minutes=estimate_minutes if status == ORDER_STATUS_CONFIRMED else None,
            rejection_reason=rejection_reason if status == ORDER_STATUS_REJECTED else None,
        )
        if applied:
            return order.status
        logger.info("Order %s changed while moving to '%s'; re-checking", order_id, status)
    raise InvalidTransition(order.status, status)


def update_order_status(
    session: Session,
    *,
    order_id: int,
    status: str,
    estimate_minutes: int | None = None,
    rejection_reason: str | None = None,
    actor_id: int | None = None,
    push_client: PushClient | None = None,
) -> OrderTransitionResult:
    """Move ``order_id`` to ``status`` and notify the counter-party.

    The status change is committed before any notification is attempted and
    a failing notification never undoes it. ``actor_id`` is the user who
    asked for the change and decides who is told about it.
    """

    ensure_known_status(status)
    reason = rejection_reason.strip() if rejection_reason and rejection_reason.strip() else None
    repository = OrderRepository(session)
    previous_status = _apply(
        repository,
        order_id=order_id,
        status=status,
        estimate_minutes=estimate_minutes,
        rejection_reason=reason,
    )
    order = repository.get(order_id)
    logger.info("Order %s moved from '%s' to '%s'", order_id, previous_status, status)

    shop = ShopRepository(session).get(order.shop_id)
    if shop is None:
        return OrderTransitionResult(order=order)

    publish_order_event(order, shop)
    try:
        notification = notify_order_status_changed(
            session,
            order=order,
            shop=shop,
            previous_status=previous_status,
            actor_id=actor_id,
            push_client=push_client,
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to record the notification for order %s", order_id)
        notification = None
    return OrderTransitionResult(order=order, notification=notification)


def cancel_order(
    session: Session,
    *,
    order_id: int,
    actor_id: int | None = None,
    push_client: PushClient | None = None,
) -> OrderTransitionResult:
    """Cancel an order on behalf of its customer."""

    return update_order_status(
        session,
        order_id=order_id,
        status=ORDER_STATUS_CANCELLED,
        actor_id=actor_id,
        push_client=push_client,
    )


__all__ = [
    "MAX_TRANSITION_ATTEMPTS",
    "OrderTransitionResult",
    "cancel_order",
    "update_order_status",
]
