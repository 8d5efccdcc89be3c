"""
Services module for business logic.

- domain/: Application services (menus, orders, tables)
- events/: Post-commit realtime notifications

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model
    Router -> events.publish_* (after commit) -> realtime.EventEmitter
"""

from .domain import MenuService, OrderService, TableService
from .events import (
    publish_menu_updated,
    publish_new_order,
    publish_order_status_changed,
    publish_table_occupied,
)

__all__ = [
    "MenuService",
    "OrderService",
    "TableService",
    "publish_menu_updated",
    "publish_new_order",
    "publish_order_status_changed",
    "publish_table_occupied",
]
