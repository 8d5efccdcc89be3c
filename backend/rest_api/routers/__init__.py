"""
HTTP routers. Each module exposes a single `router`.
"""

from rest_api.routers.auth import router as auth_router
from rest_api.routers.catalog import router as catalog_router
from rest_api.routers.menus import router as menus_router
from rest_api.routers.orders import router as orders_router
from rest_api.routers.public import router as public_router
from rest_api.routers.tables import router as tables_router

__all__ = [
    "auth_router",
    "catalog_router",
    "menus_router",
    "orders_router",
    "public_router",
    "tables_router",
]
