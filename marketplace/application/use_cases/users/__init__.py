"""Use cases for managing users."""

from .create_user import create_user
from .delete_user import delete_user
from .get_user import get_user
from .roles import enable_role, switch_active_role
from .update_location import update_user_location
from .update_push_subscription import update_push_subscription

__all__ = [
    "create_user",
    "delete_user",
    "enable_role",
    "get_user",
    "switch_active_role",
    "update_push_subscription",
    "update_user_location",
]
