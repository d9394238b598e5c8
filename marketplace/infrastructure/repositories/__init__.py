"""Repository implementations for persistence."""

from .advertisement_repository import AdvertisementRepository
from .item_repository import ItemRepository
from .notification_repository import NotificationRepository
from .order_repository import OrderRepository
from .shop_repository import ShopRepository
from .user_repository import UserRepository

__all__ = [
    "AdvertisementRepository",
    "ItemRepository",
    "NotificationRepository",
    "OrderRepository",
    "ShopRepository",
    "UserRepository",
]
