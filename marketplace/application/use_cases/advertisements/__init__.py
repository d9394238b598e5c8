"""Use cases for shop advertisements."""

from .manage_advertisements import (
    create_advertisement,
    delete_advertisement,
    get_advertisement,
    list_advertisements,
    update_advertisement,
)
from .send_advertisement import send_advertisement

__all__ = [
    "create_advertisement",
    "delete_advertisement",
    "get_advertisement",
    "list_advertisements",
    "send_advertisement",
    "update_advertisement",
]
