"""Domain entity representing a promotion broadcast by a shop."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Advertisement:
    """Promotional message that can be sent to nearby users."""

    id: int | None
    shop_id: int
    owner_id: int
    message: str
    is_active: bool = True
    notifications_sent: int = 0
    has_discount: bool = False
    discount_percentage: float | None = None
    discount_text: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
