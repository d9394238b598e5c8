"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1)

    def unique_ids(self) -> list[int]:
        return list(dict.fromkeys(self.ids))


class NotificationMarkReadResult(BaseModel):
    updated: int


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    event_type: str
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)
    shop_id: int | None = None
    advertisement_id: int | None = None
    created_at: datetime
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["NotificationMarkReadRequest", "NotificationMarkReadResult", "NotificationRead"]
