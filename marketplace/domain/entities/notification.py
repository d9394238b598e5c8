"""Domain entities describing in-app notifications and dispatch outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Information message recorded for a specific user."""

    id: int | None
    recipient_id: int
    event_type: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    shop_id: int | None = None
    advertisement_id: int | None = None
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


@dataclass
class DispatchFailure:
    """One problem reported while handing a notification to the push provider."""

    reason: str
    recipient_id: int | None = None
    details: Any = None


@dataclass
class DispatchResult:
    """Outcome of a fan-out: push deliveries plus persisted in-app records."""

    dispatched: int = 0
    failures: list[DispatchFailure] = field(default_factory=list)
    recorded: int = 0
    skipped: int = 0

    @property
    def succeeded(self) -> bool:
        return not self.failures


__all__ = ["DispatchFailure", "DispatchResult", "Notification"]
