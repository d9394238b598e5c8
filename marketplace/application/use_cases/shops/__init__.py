"""Use cases for managing shops."""

from .create_shop import create_shop
from .delete_shop import delete_shop
from .delivery import evaluate_shop_delivery
from .estimates import clear_expired_estimates
from .queries import get_shop, list_shops_by_owner, search_shops
from .update_shop import update_shop, update_shop_status

__all__ = [
    "clear_expired_estimates",
    "create_shop",
    "delete_shop",
    "evaluate_shop_delivery",
    "get_shop",
    "list_shops_by_owner",
    "search_shops",
    "update_shop",
    "update_shop_status",
]
