"""
Room naming.

A room name is "{family}_{scopeId}". Tenant-scoped families (admin, menu)
use the admin id as-is; the order family uses the order id.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any

from realtime.constants import MAX_SCOPE_ID_LENGTH


class RoomFamily(str, Enum):
    """The three broadcast group families."""

    ADMIN = "admin"  # one per tenant dashboard
    MENU = "menu"  # one per tenant live menu-editing session
    ORDER = "order"  # one per customer tracking an order

    def room(self, scope_id: Any) -> str:
        return room_name(self, scope_id)


# Client join request -> room family
JOIN_EVENTS: MappingProxyType[str, RoomFamily] = MappingProxyType({
    "join-admin": RoomFamily.ADMIN,
    "join-menu": RoomFamily.MENU,
    "join-order": RoomFamily.ORDER,
})


def normalize_scope_id(scope_id: Any) -> str:
    """
    Render a scope id for use in a room name.

    Accepts non-empty strings and integers. Raises ValueError otherwise.
    """
    if isinstance(scope_id, bool) or not isinstance(scope_id, (str, int)):
        raise ValueError(f"Invalid scope id type: {type(scope_id).__name__}")

    rendered = str(scope_id).strip()
    if not rendered:
        raise ValueError("Scope id must not be empty")
    if len(rendered) > MAX_SCOPE_ID_LENGTH:
        raise ValueError(f"Scope id longer than {MAX_SCOPE_ID_LENGTH} characters")
    return rendered


def room_name(family: RoomFamily | str, scope_id: Any) -> str:
    """
    Compute the room name for a family and scope id.

    >>> room_name(RoomFamily.ADMIN, "42")
    'admin_42'
    >>> room_name(RoomFamily.ORDER, 17)
    'order_17'
    """
    return f"{RoomFamily(family).value}_{normalize_scope_id(scope_id)}"


def parse_room_name(name: str) -> tuple[RoomFamily, str]:
    """Split a room name into its family and scope id."""
    prefix, sep, scope_id = name.partition("_")
    if not sep or not scope_id:
        raise ValueError(f"Malformed room name: {name!r}")
    try:
        family = RoomFamily(prefix)
    except ValueError:
        raise ValueError(f"Unknown room family in {name!r}") from None
    return family, scope_id
