"""ORM models used by the application infrastructure."""

from .user import UserModel
from .shop import ShopModel
from .item import ItemModel
from .order import OrderModel
from .advertisement import AdvertisementModel
from .notification import NotificationModel

__all__ = [
    "AdvertisementModel",
    "ItemModel",
    "NotificationModel",
    "OrderModel",
    "ShopModel",
    "UserModel",
]
