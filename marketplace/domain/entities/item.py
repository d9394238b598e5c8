"""Domain entity representing an inventory item of a shop."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Item:
    """A product listed in a shop's inventory."""

    id: int | None
    shop_id: int
    name: str
    price: float | None
    in_stock: bool
    price_description: str | None = None
    description: str | None = None
    category: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
