"""
Domain services: business logic between thin routers and repositories.
"""

from .menu_service import MenuService
from .order_service import OrderService
from .table_service import TableService

__all__ = [
    "MenuService",
    "OrderService",
    "TableService",
]
