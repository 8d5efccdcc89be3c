"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import OrderStatus, TableStatus

    if table.status == TableStatus.AVAILABLE:
        ...
"""

from typing import Final


# =============================================================================
# Entity Status Constants
# =============================================================================


class OrderStatus:
    """Order status constants - matches schemas.py Literal types."""

    PENDING: Final[str] = "pending"
    PREPARING: Final[str] = "preparing"
    READY: Final[str] = "ready"
    SERVED: Final[str] = "served"
    CANCELLED: Final[str] = "cancelled"

    ALL: Final[list[str]] = [PENDING, PREPARING, READY, SERVED, CANCELLED]
    ACTIVE: Final[list[str]] = [PENDING, PREPARING, READY]


class TableStatus:
    """Table status constants."""

    AVAILABLE: Final[str] = "available"
    OCCUPIED: Final[str] = "occupied"
    RESERVED: Final[str] = "reserved"
    CLEANING: Final[str] = "cleaning"

    ALL: Final[list[str]] = [AVAILABLE, OCCUPIED, RESERVED, CLEANING]


class OrderType:
    """How the customer receives the order."""

    DINE_IN: Final[str] = "dine_in"
    TAKE_AWAY: Final[str] = "take_away"

    ALL: Final[list[str]] = [DINE_IN, TAKE_AWAY]


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Field length and quantity limits shared by schemas and models."""

    NAME_MAX: Final[int] = 255
    TABLE_CODE_MAX: Final[int] = 32
    NOTE_MAX: Final[int] = 500
    ORDER_ITEMS_MAX: Final[int] = 100
    ITEM_QUANTITY_MAX: Final[int] = 99
