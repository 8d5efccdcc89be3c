"""
Post-commit realtime notifications.
"""

from .notifications import (
    publish_menu_updated,
    publish_new_order,
    publish_order_status_changed,
    publish_table_occupied,
)

__all__ = [
    "publish_menu_updated",
    "publish_new_order",
    "publish_order_status_changed",
    "publish_table_occupied",
]
