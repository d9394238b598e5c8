"""Order lifecycle: legal status transitions and the views built on them."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from .entities import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_PENDING,
    ORDER_STATUS_REJECTED,
    Order,
)
from .errors import InvalidTransition, ValidationError

ORDER_STATUSES: Final[tuple[str, ...]] = (
    ORDER_STATUS_PENDING,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_REJECTED,
    ORDER_STATUS_CANCELLED,
)
TERMINAL_STATUSES: Final[frozenset[str]] = frozenset(
    {ORDER_STATUS_COMPLETED, ORDER_STATUS_REJECTED, ORDER_STATUS_CANCELLED}
)

# requested status -> statuses it may be reached from. ``pending`` is only
# ever set when the order is created.
LEGAL_TRANSITIONS: Final[dict[str, frozenset[str]]] = {
    ORDER_STATUS_CONFIRMED: frozenset({ORDER_STATUS_PENDING, ORDER_STATUS_CONFIRMED}),
    ORDER_STATUS_REJECTED: frozenset({ORDER_STATUS_PENDING, ORDER_STATUS_CONFIRMED}),
    ORDER_STATUS_COMPLETED: frozenset({ORDER_STATUS_CONFIRMED}),
    ORDER_STATUS_CANCELLED: frozenset({ORDER_STATUS_PENDING, ORDER_STATUS_CONFIRMED}),
}

# Display policy for "active" lists.
SHOP_HIDDEN_STATUSES: Final[frozenset[str]] = TERMINAL_STATUSES
CUSTOMER_HIDDEN_STATUSES: Final[frozenset[str]] = frozenset({ORDER_STATUS_CANCELLED})
SHOP_HISTORY_STATUSES: Final[frozenset[str]] = frozenset(
    {ORDER_STATUS_COMPLETED, ORDER_STATUS_REJECTED}
)
OWNER_HISTORY_STATUSES: Final[frozenset[str]] = TERMINAL_STATUSES


def ensure_known_status(status: str) -> str:
    """Return ``status`` unchanged or raise :class:`ValidationError`."""

    if status not in ORDER_STATUSES:
        allowed = ", ".join(ORDER_STATUSES)
        raise ValidationError(f"Unknown order status '{status}'. Expected one of: {allowed}")
    return status


def can_transition(current: str, requested: str) -> bool:
    """Return ``True`` when ``current -> requested`` is a legal edge."""

    return current in LEGAL_TRANSITIONS.get(requested, frozenset())


def validate_transition(
    current: str,
    requested: str,
    *,
    estimate_minutes: int | None = None,
) -> None:
    """Raise unless ``current -> requested`` may be applied with the given arguments."""

    ensure_known_status(requested)
    if not can_transition(current, requested):
        raise InvalidTransition(current, requested)

    if requested == ORDER_STATUS_CONFIRMED:
        if estimate_minutes is None:
            raise ValidationError("A delivery time estimate is required to confirm an order")
        if isinstance(estimate_minutes, bool) or not isinstance(estimate_minutes, int):
            raise ValidationError("The delivery time estimate must be a whole number of minutes")
        if estimate_minutes < 0:
            raise ValidationError("The delivery time estimate cannot be negative")


def active_for_shop(orders: Iterable[Order]) -> list[Order]:
    """Orders a shop dashboard still has to act on."""

    return [order for order in orders if order.status not in SHOP_HIDDEN_STATUSES]


def active_for_customer(orders: Iterable[Order]) -> list[Order]:
    """Orders shown in the customer's order list."""

    return [order for order in orders if order.status not in CUSTOMER_HIDDEN_STATUSES]


__all__ = [
    "CUSTOMER_HIDDEN_STATUSES",
    "LEGAL_TRANSITIONS",
    "ORDER_STATUSES",
    "OWNER_HISTORY_STATUSES",
    "SHOP_HIDDEN_STATUSES",
    "SHOP_HISTORY_STATUSES",
    "TERMINAL_STATUSES",
    "active_for_customer",
    "active_for_shop",
    "can_transition",
    "ensure_known_status",
    "validate_transition",
]
