"""Use cases for shop inventory."""

from .manage_items import (
    create_item,
    delete_item,
    get_item,
    list_items,
    search_items,
    update_item,
)

__all__ = [
    "create_item",
    "delete_item",
    "get_item",
    "list_items",
    "search_items",
    "update_item",
]
