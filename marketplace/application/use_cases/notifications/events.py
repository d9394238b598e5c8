"""Notifications emitted when an order changes status."""

from __future__ import annotations

from sqlalchemy.orm import Session

from marketplace.domain.entities import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_REJECTED,
    DispatchResult,
    Order,
    Shop,
)
from marketplace.infrastructure.notifications import dispatch_realtime_event
from marketplace.infrastructure.push import PushClient

from .dispatcher import NotificationDispatcher

EVENT_ORDER_STATUS = "order.status_changed"
EVENT_ORDER_UPDATED = "order.updated"


def _customer_message(order: Order, shop: Shop, previous_status: str) -> tuple[str, str] | None:
    if order.status == ORDER_STATUS_CONFIRMED:
        if previous_status == ORDER_STATUS_CONFIRMED:
            return (
                "Delivery time updated",
                f"{shop.name} now expects your order in {order.estimate_minutes} minutes.",
            )
        return (
            "Order confirmed",
            f"{shop.name} accepted your order. Estimated time: {order.estimate_minutes} minutes.",
        )
    if order.status == ORDER_STATUS_REJECTED:
        body = f"{shop.name} could not accept your order."
        if order.rejection_reason:
            body = f"{body} Reason: {order.rejection_reason}"
        return "Order rejected", body
    if order.status == ORDER_STATUS_COMPLETED:
        return "Order completed", f"Your order from {shop.name} is complete. Thank you!"
    return None


def publish_order_event(order: Order, shop: Shop) -> None:
    """Send the current state of ``order`` to both parties' realtime channels."""

    dispatch_realtime_event(
        [order.customer_id, shop.owner_id],
        event_type=EVENT_ORDER_UPDATED,
        payload={
            "order_id": order.id,
            "shop_id": order.shop_id,
            "status": order.status,
            "estimate_minutes": order.estimate_minutes,
            "updated_at": order.updated_at.isoformat() if order.updated_at else None,
        },
    )


def notify_order_status_changed(
    session: Session,
    *,
    order: Order,
    shop: Shop,
    previous_status: str,
    actor_id: int | None = None,
    push_client: PushClient | None = None,
) -> DispatchResult | None:
    """Tell the other party about ``order``'s new status.

    Shop decisions go to the customer. A cancellation, or a customer
    confirming receipt, goes to the shop owner.
    """

    data = {
        "type": "order",
        "order_id": order.id,
        "shop_id": order.shop_id,
        "status": order.status,
    }

    if order.status == ORDER_STATUS_CANCELLED:
        recipient_id = shop.owner_id
        title = "Order cancelled"
        body = f"{order.customer_name} cancelled order #{order.id}."
    elif order.status == ORDER_STATUS_COMPLETED and actor_id == order.customer_id:
        recipient_id = shop.owner_id
        title = "Order received"
        body = f"{order.customer_name} confirmed receipt of order #{order.id}."
    else:
        message = _customer_message(order, shop, previous_status)
        if message is None:
            return None
        recipient_id = order.customer_id
        title, body = message

    dispatcher = NotificationDispatcher(session, push_client)
    return dispatcher.dispatch(
        [recipient_id],
        title,
        body,
        data,
        event_type=EVENT_ORDER_STATUS,
        shop_id=order.shop_id,
    )


__all__ = [
    "EVENT_ORDER_STATUS",
    "EVENT_ORDER_UPDATED",
    "notify_order_status_changed",
    "publish_order_event",
]
