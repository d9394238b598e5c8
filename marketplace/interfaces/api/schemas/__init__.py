from .advertisement import (
    AdvertisementCreate,
    AdvertisementDeleteResult,
    AdvertisementRead,
    AdvertisementSendRequest,
    AdvertisementUpdate,
)
from .common import DispatchFailureRead, DispatchResultRead, LocationPayload, LocationRead
from .item import ItemCreate, ItemRead, ItemUpdate
from .notification import NotificationMarkReadRequest, NotificationMarkReadResult, NotificationRead
from .order import (
    OrderCreate,
    OrderItemRead,
    OrderLinePayload,
    OrderRead,
    OrderStatusUpdate,
    OrderTransitionRead,
)
from .shop import (
    BroadcastRequest,
    DeliveryEligibilityRead,
    PendingCountRead,
    ShopCreate,
    ShopRead,
    ShopStatusUpdate,
    ShopUpdate,
    StatusEstimateRead,
)
from .user import (
    PushSubscriptionUpdate,
    RoleRequest,
    UserCreate,
    UserLocationRead,
    UserLocationUpdate,
    UserRead,
)

__all__ = [
    "AdvertisementCreate",
    "AdvertisementDeleteResult",
    "AdvertisementRead",
    "AdvertisementSendRequest",
    "AdvertisementUpdate",
    "BroadcastRequest",
    "DeliveryEligibilityRead",
    "DispatchFailureRead",
    "DispatchResultRead",
    "ItemCreate",
    "ItemRead",
    "ItemUpdate",
    "LocationPayload",
    "LocationRead",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResult",
    "NotificationRead",
    "OrderCreate",
    "OrderItemRead",
    "OrderLinePayload",
    "OrderRead",
    "OrderStatusUpdate",
    "OrderTransitionRead",
    "PendingCountRead",
    "PushSubscriptionUpdate",
    "RoleRequest",
    "ShopCreate",
    "ShopRead",
    "ShopStatusUpdate",
    "ShopUpdate",
    "StatusEstimateRead",
    "UserCreate",
    "UserLocationRead",
    "UserLocationUpdate",
    "UserRead",
]
