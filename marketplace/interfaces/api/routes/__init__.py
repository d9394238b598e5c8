from fastapi import FastAPI

from .advertisements import router as advertisements_router
from .items import router as items_router
from .notifications import router as notifications_router
from .orders import router as orders_router
from .shops import router as shops_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(users_router)
    app.include_router(shops_router)
    app.include_router(items_router)
    app.include_router(orders_router)
    app.include_router(advertisements_router)
    app.include_router(notifications_router)
