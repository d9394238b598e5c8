"""Typed errors raised by the marketplace domain and use cases."""

from __future__ import annotations

from typing import Any


class MarketplaceError(Exception):
    """Base class for every error raised by the domain layer."""


class ValidationError(MarketplaceError, ValueError):
    """Raised when an input is malformed or violates an entity invariant."""


class NotFound(MarketplaceError, ValueError):
    """Raised when a referenced shop, user, item, order or advertisement is missing."""

    def __init__(self, entity: str, identifier: Any) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")


class InvalidTransition(MarketplaceError):
    """Raised when an order status change is not an edge of the state machine."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move order from '{current}' to '{requested}'"
        )


class DeliveryIneligible(MarketplaceError):
    """Raised when a shop cannot deliver to the customer's location."""

    def __init__(self, evaluation: Any, message: str | None = None) -> None:
        self.evaluation = evaluation
        super().__init__(message or "The shop cannot deliver to this location")


class DispatchFailed(MarketplaceError):
    """Raised when the push provider rejects a request or does not answer."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


__all__ = [
    "DeliveryIneligible",
    "DispatchFailed",
    "InvalidTransition",
    "MarketplaceError",
    "NotFound",
    "ValidationError",
]
